#! /usr/bin/env python
# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
# SPDX-License-Identifier: GPL-3.0-or-later
# -*- coding: utf-8 -*-
from __future__ import annotations

from collections.abc import Mapping
from typing import Iterator, List, Sequence

import numpy as np
import pandas as pd

from tsproc.core.config import SeriesSchema
from tsproc.exceptions import InvalidInput
from tsproc.lib.tools import isNominal, parseTimestamp, parseTimestamps
from tsproc.lib.types import Record, Records


class Series:
    """
    A single timeseries: an ordered list of records and its schema.

    The records are plain dictionaries, expected to be sorted ascending by
    their timestamp field.
    """

    def __init__(self, records: Records, schema: SeriesSchema):
        self.records: Records = list(records)
        self.schema: SeriesSchema = schema

    def __len__(self) -> int:
        return len(self.records)

    def __getitem__(self, index: int) -> Record:
        return self.records[index]

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def __repr__(self) -> str:
        return f"Series(fields={self.fields}, timestamp={self.timestampField!r}, length={len(self)})"

    @property
    def timestampField(self) -> str:
        return self.schema.timestamp.name

    @property
    def timestampFormat(self) -> str:
        return self.schema.timestamp.format

    @property
    def fields(self) -> List[str]:
        return self.schema.fieldNames

    def rawTimestamps(self) -> list:
        field = self.timestampField
        return [r.get(field) for r in self.records]

    def timestamp(self, index: int) -> pd.Timestamp:
        return parseTimestamp(self.records[index].get(self.timestampField), self.timestampFormat)

    def timestamps(self) -> pd.DatetimeIndex:
        return parseTimestamps(self.rawTimestamps(), self.timestampFormat)

    def values(self, field: str) -> list:
        return [r.get(field) for r in self.records]

    def valueMatrix(self, fields: Sequence[str] | None = None) -> np.ndarray:
        """Values of ``fields`` as a float array of shape ``(len(self), len(fields))``."""
        fields = self.fields if fields is None else list(fields)
        return np.array(
            [[r[f] for f in fields] for r in self.records], dtype=float
        ).reshape(len(self), len(fields))

    def nominalFields(self) -> List[str]:
        """Declared fields holding at least one non-numeric value."""
        return [f for f in self.fields if isNominal(self.values(f))]

    def copy(self) -> Series:
        return Series([dict(r) for r in self.records], self.schema.model_copy(deep=True))


class SeriesSet:
    """
    The ordered collection of all series processed together.
    """

    def __init__(self, series: Sequence[Series] = ()):
        self._series: List[Series] = list(series)

    @classmethod
    def fromInput(cls, timeseries, schemas: Sequence[SeriesSchema]) -> SeriesSet:
        """
        Build a set from raw input.

        ``timeseries`` is either a list of record lists or a single flat list
        of records, which is treated as a set holding one series. Every
        series is paired with a private copy of its schema.

        Raises
        ------
        InvalidInput
            If the input is empty, malformed or does not match the number
            of schemas.
        """
        if not timeseries:
            raise InvalidInput("timeseries are not set")
        if isinstance(timeseries, Mapping) or isinstance(timeseries, (str, bytes)):
            raise InvalidInput(
                f"expected a list of records or a list of record lists, got {type(timeseries).__name__}"
            )

        timeseries = list(timeseries)
        if all(isinstance(r, Mapping) for r in timeseries):
            timeseries = [timeseries]

        for i, records in enumerate(timeseries):
            if isinstance(records, (Mapping, str, bytes)) or not all(
                isinstance(r, Mapping) for r in records
            ):
                raise InvalidInput(f"timeseries {i} is not a list of records")

        if len(timeseries) != len(schemas):
            raise InvalidInput(
                f"got {len(timeseries)} timeseries, but {len(schemas)} descriptions in the config"
            )

        return cls(
            Series([dict(r) for r in records], schema.model_copy(deep=True))
            for records, schema in zip(timeseries, schemas)
        )

    def __len__(self) -> int:
        return len(self._series)

    def __getitem__(self, index: int) -> Series:
        return self._series[index]

    def __iter__(self) -> Iterator[Series]:
        return iter(self._series)

    def __repr__(self) -> str:
        return f"SeriesSet({self._series!r})"

    @property
    def schemas(self) -> List[SeriesSchema]:
        return [s.schema for s in self._series]

    @property
    def records(self) -> List[Records]:
        return [s.records for s in self._series]

    @property
    def sizes(self) -> List[int]:
        return [len(s) for s in self._series]

    def nominalFields(self) -> List[str]:
        return [f for s in self._series for f in s.nominalFields()]
