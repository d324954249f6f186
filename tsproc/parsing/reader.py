#! /usr/bin/env python
# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
# SPDX-License-Identifier: GPL-3.0-or-later
# -*- coding: utf-8 -*-

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, List, Sequence

from tsproc.core.config import Config, parseConfig
from tsproc.core.core import TsProc
from tsproc.exceptions import InvalidInput
from tsproc.lib.types import Records


def readJson(fname: str | Path) -> Any:
    try:
        with open(fname, "r", encoding="utf-8") as fh:
            return json.load(fh)
    except (OSError, ValueError) as e:
        raise InvalidInput(f"{fname}: failed to read json: {e}") from e


def readData(fname: str | Path) -> List[Records]:
    """
    Read the timeseries of a JSON file.

    The file holds either a list of records (a single series) or a list of
    record lists. Always returns a list of series.
    """
    d = readJson(fname)
    if not isinstance(d, list):
        raise InvalidInput(
            f"{fname}: expected a list of records or a list of record lists, "
            f"got {type(d).__name__}"
        )
    if d and all(isinstance(r, Mapping) for r in d):
        return [d]
    return d


def fromConfig(fname, data: Sequence[str | Path], seed=None) -> TsProc:
    return _ConfigReader(seed=seed).readData(data).readJson(fname).build()


class _ConfigReader:
    logger: logging.Logger
    file: str | None
    config: Config | None
    timeseries: List[Records]

    def __init__(self, seed=None):
        self.logger = logging.getLogger("tsproc")
        self.seed = seed
        self.file = None
        self.config = None
        self.timeseries = []

    def readData(self, files: Sequence[str | Path]):
        for f in files:
            self.logger.debug(f"opening data file: {f}")
            self.timeseries.extend(readData(f))
        return self

    def readRecords(self, records: Sequence[Records] | Records):
        self.logger.debug(f"read {len(records)} records")
        records = list(records)
        if records and all(isinstance(r, Mapping) for r in records):
            records = [records]
        self.timeseries.extend(records)
        return self

    def _readConfig(self, d: Dict[str, Any]):
        if not isinstance(d, dict):
            raise InvalidInput("parsed json resulted in a list, but an object is needed")
        self.config = parseConfig(d)
        return self

    def readJson(self, file: str | Path):
        self.logger.debug(f"opening json file: {file}")
        d = readJson(file)
        self.file = str(file)
        return self._readConfig(d)

    def readJsonString(self, jn: str):
        self.logger.debug(f"read json string: {jn}")
        try:
            d = json.loads(jn)
        except ValueError as e:
            raise InvalidInput(f"failed to parse json: {e}") from e
        return self._readConfig(d)

    def build(self) -> TsProc:
        if self.config is None:
            raise InvalidInput("no configuration was read")
        return TsProc(self.timeseries, self.config, seed=self.seed)
