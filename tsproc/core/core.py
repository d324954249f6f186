#! /usr/bin/env python

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
from typing import Callable, List, Tuple

import numpy as np
import pandas as pd

from tsproc.constants import HOMOGENEITY_SAMPLES
from tsproc.core.config import Config, parseConfig
from tsproc.core.register import FUNC_MAP, StepStatus
from tsproc.core.series import SeriesSet
from tsproc.exceptions import TsprocError
from tsproc.funcs import FunctionsMixin
from tsproc.lib.tools import isISOFormat, isNumeric, parseTimestamp
from tsproc.lib.types import Record, Records

logger = logging.getLogger("tsproc")

ErrorSink = Callable[[TsprocError], None]


class TsProc(FunctionsMixin):
    """
    Process a set of timeseries into a single, regularized series.

    Parameters
    ----------
    timeseries :
        A list of record lists, one per series, or a single flat list of
        records. Records are dictionaries sorted ascending by their
        timestamp field. The records are copied, the input is never modified.

    config :
        The processing configuration, a :py:class:`~tsproc.core.config.Config`
        or a mapping validating against it.

    seed :
        Seed (or ``numpy.random.Generator``) of the random positions drawn by
        :py:meth:`isHomogeneous`.

    Raises
    ------
    InvalidInput
        If the config does not validate or the timeseries do not match it.

    Examples
    --------
    >>> config = {
    ...     "timeseries": [
    ...         {"timestamp": {"name": "year", "format": "YYYY"}, "fields": [{"name": "a"}]}
    ...     ],
    ...     "reduction": {"type": "skip", "size": 2},
    ... }
    >>> data = [
    ...     {"a": 21.07, "year": "2012"},
    ...     {"a": 23.23, "year": "2013"},
    ...     {"a": 24.24, "year": "2014"},
    ... ]
    >>> TsProc(data, config).process()
    [{'a': 21.07, 'time': '2012-01-01T00:00:00.000Z'}, {'a': 24.24, 'time': '2014-01-01T00:00:00.000Z'}]
    """

    def __init__(self, timeseries, config: Config | dict, seed=None):
        self._config: Config = parseConfig(config)
        self._data: SeriesSet = SeriesSet.fromInput(timeseries, self._config.timeseries)
        self._rng: np.random.Generator = np.random.default_rng(seed)
        self._error_sink: ErrorSink | None = None
        self.errors: List[TsprocError] = []
        self.trace: List[Tuple[str, StepStatus]] = []

    def __repr__(self) -> str:
        return f"TsProc(sizes={self._data.sizes})"

    # ------------------------------------------------------------------
    # accessors
    # ------------------------------------------------------------------

    def getData(self) -> List[Records]:
        return self._data.records

    def getConfig(self) -> Config:
        """A copy of the configuration, reflecting the current series descriptions."""
        return self._config.model_copy(
            deep=True,
            update={"timeseries": [s.model_copy(deep=True) for s in self._data.schemas]},
        )

    def getNbTS(self) -> int:
        return len(self._data)

    def getTSSize(self, index: int = 0) -> int:
        return len(self._data[index])

    def getTimestamp(self, index: int, doc: int) -> pd.Timestamp:
        return self._data[index].timestamp(doc)

    def getTimestampField(self, index: int) -> str:
        return self._data[index].timestampField

    def getTimestampFormat(self, index: int) -> str:
        return self._data[index].timestampFormat

    def getDoc(self, index: int, doc: int) -> Record:
        return self._data[index][doc]

    def getEmptyDoc(self, index: int, doc: int) -> Record:
        """A copy of a record with all numeric values of the declared fields set to zero."""
        fields = set(self.getFields(index))
        return {
            k: (0 if k in fields and isNumeric(v) else v)
            for k, v in self.getDoc(index, doc).items()
        }

    def getDocByDate(self, index: int, date) -> Record | None:
        """The first record of series ``index`` with the given (ISO) timestamp, if any."""
        target = parseTimestamp(date)
        series = self._data[index]
        found = np.flatnonzero(series.timestamps() == target)
        return series[int(found[0])] if len(found) else None

    def getFields(self, index: int) -> List[str]:
        return self._data[index].fields

    def isISO(self) -> bool:
        return all(isISOFormat(s.timestampFormat) for s in self._data)

    def getMinDate(self) -> pd.Timestamp | None:
        stamps = [s.timestamps().min() for s in self._data if len(s)]
        return min(stamps) if stamps else None

    def getMaxDate(self) -> pd.Timestamp | None:
        stamps = [s.timestamps().max() for s in self._data if len(s)]
        return max(stamps) if stamps else None

    # ------------------------------------------------------------------
    # processing
    # ------------------------------------------------------------------

    def isHomogeneous(self, rng: np.random.Generator | None = None) -> bool:
        """
        Check whether all series share the same timestamps.

        All series need to have the same length, in addition the timestamps
        at a few randomly drawn positions have to be equal across all series.
        The check does not compare all timestamps, so series differing only
        at unsampled positions are wrongly considered homogeneous.

        Parameters
        ----------
        rng : numpy.random.Generator, optional
            Source of the sampled positions, defaults to the generator
            seeded at construction.

        Raises
        ------
        InvalidTimestamp
            If a sampled timestamp can not be parsed.
        """
        if len(self._data) <= 1:
            return True

        sizes = set(self._data.sizes)
        if len(sizes) != 1:
            return False
        size = sizes.pop()
        if size == 0:
            return True

        rng = self._rng if rng is None else rng
        for pos in rng.integers(0, size, size=HOMOGENEITY_SAMPLES):
            if len({s.timestamp(int(pos)) for s in self._data}) != 1:
                return False
        return True

    def _reportError(self, error: TsprocError, context: str):
        logger.error(f"{context}: {error}")
        self.errors.append(error)
        if self._error_sink is not None:
            self._error_sink(error)

    def _runStep(self, name: str, **kwargs) -> StepStatus:
        try:
            status = FUNC_MAP[name](self, **kwargs)
        except TsprocError as e:
            self._reportError(e, f"step {name!r} failed")
            status = StepStatus.FAILED
        self.trace.append((name, status))
        return status

    def _needsReconciliation(self) -> bool:
        if self.getNbTS() <= 1:
            return False
        try:
            return not self.isHomogeneous()
        except TsprocError as e:
            self._reportError(e, "homogeneity check failed")
            return True

    def process(self, error_sink: ErrorSink | None = None) -> Records | List[Records]:
        """
        Run the processing pipeline.

        The steps run in the order ``cut``, ``toUTC``, ``interpolate`` or
        ``intersect`` (only for multiple, inhomogeneous series),
        ``renameTimestampField`` or ``merge``, ``undersample``,
        ``detectCorrelation`` and ``quantize``.

        A failing step does not stop the pipeline: its error is logged,
        collected in :py:attr:`errors` and passed to ``error_sink``, then
        the next step runs on the data as it is. The outcome of every step
        is recorded in :py:attr:`trace`.

        Parameters
        ----------
        error_sink : callable, optional
            Called with every error raised by a step.

        Returns
        -------
        list
            The records of the single remaining series, or the list of all
            series if they could not be merged.
        """
        self._error_sink = error_sink
        try:
            self._runStep("cut")
            self._runStep("toUTC")

            if self._needsReconciliation():
                if self._config.transform.type == "interp":
                    self._runStep("interpolate")
                else:
                    self._runStep("intersect")

            if self.getNbTS() == 1:
                self._runStep("renameTimestampField")
            else:
                self._runStep("merge")

            self._runStep("undersample")
            self._runStep("detectCorrelation")
            self._runStep("quantize")
        finally:
            self._error_sink = None

        data = self.getData()
        return data[0] if len(data) == 1 else data
