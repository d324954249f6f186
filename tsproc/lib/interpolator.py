#! /usr/bin/env python

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
import typing
from typing import Any, Sequence

import numpy as np

from tsproc.constants import ISO
from tsproc.exceptions import InvalidInput, InvalidTimestamp, LearnError, NotLearned
from tsproc.lib.tools import parseTimestamp, parseTimestamps
from tsproc.lib.ts_operators import positionInterpolant
from tsproc.lib.types import INTERP_LITERALS, Record, Records

logger = logging.getLogger("tsproc")

INTERP_METHODS = list(typing.get_args(INTERP_LITERALS))


class Interpolator:
    """
    Interpolate the missing documents of a timeseries.

    The interpolator learns a curve over the values of the series indexed by
    position. Timestamps passed to :py:meth:`smooth` are mapped to a
    fractional position proportionally to the elapsed time between the two
    neighboring samples, so irregularly spaced series are still interpolated
    with respect to time, independently of the curve type.

    Parameters
    ----------
    records :
        The timeseries to learn, at least two records sorted by timestamp.

    timestamp_field :
        Name of the timestamp field of the records.

    fields :
        Names of the (numeric) value fields to interpolate.

    method :
        The curve type, one of ``'linear'``, ``'cubic'``, ``'lanczos'``,
        ``'nearest'``. Unknown methods fall back to ``'linear'``.

    timestamp_format :
        Format of the record timestamps.

    strict :
        If ``True`` a failing curve fit raises a :py:class:`LearnError`,
        otherwise the error is kept in :py:attr:`learn_error` and every
        call to :py:meth:`smooth` raises :py:class:`NotLearned`.

    Examples
    --------
    >>> ts = [
    ...     {"year": "1919-01-01T00:00:00.000Z", "flows": 1},
    ...     {"year": "1921-01-01T00:00:00.000Z", "flows": 3},
    ... ]
    >>> smoother = Interpolator(ts, "year", ["flows"])
    >>> smoother.smooth("1923-01-01T00:00:00.000Z")
    {'year': '1923-01-01T00:00:00.000Z', 'flows': 0.0}
    """

    def __init__(
        self,
        records: Records,
        timestamp_field: str,
        fields: Sequence[str],
        method: str = "linear",
        timestamp_format: str = ISO,
        strict: bool = True,
    ):
        if records is None:
            raise InvalidInput("timeseries and it's description should be defined")
        if len(records) < 2:
            raise InvalidInput("timeseries should have multiple documents")
        if not timestamp_field or not fields:
            raise InvalidInput("description is invalid")

        if method not in INTERP_METHODS:
            logger.warning(f"unknown interpolation method {method!r}, using 'linear'")
            method = "linear"

        self._timestamp_field = timestamp_field
        self._fields = list(fields)
        self._method = method

        # int64 nanoseconds, totally ordered
        try:
            self._dates = parseTimestamps(
                (r.get(timestamp_field) for r in records), timestamp_format
            ).asi8
        except InvalidTimestamp as e:
            raise InvalidInput(f"timeseries has invalid timestamps: {e}") from e
        self._values = [[r.get(f) for f in self._fields] for r in records]

        self._curve = None
        self.learn_error: LearnError | None = None
        self._learn(strict)

    @property
    def learned(self) -> bool:
        return self._curve is not None

    @property
    def method(self) -> str:
        return self._method

    def _learn(self, strict: bool):
        try:
            self._curve = positionInterpolant(self._values, method=self._method)
        except (ValueError, TypeError, ArithmeticError, np.linalg.LinAlgError) as e:
            self.learn_error = LearnError(f"learning the datapoints failed: {e}")
            self.learn_error.__cause__ = e
            if strict:
                raise self.learn_error

    def _createDoc(self, time: Any, values: np.ndarray) -> Record:
        doc = {self._timestamp_field: time}
        for field, value in zip(self._fields, values):
            doc[field] = float(value)
        return doc

    def position(self, date) -> float:
        """
        Map an ISO timestamp to a (fractional) sample position.

        Timestamps before the first sample map to ``-1``, timestamps after
        the last sample to the number of samples.
        """
        target = parseTimestamp(date, ISO).value
        dates = self._dates
        n = len(dates)

        if target < dates[0]:
            return -1
        if target > dates[-1]:
            return n

        # first sample not before the target
        i = int(np.searchsorted(dates, target, side="left"))
        diff = int(dates[i] - target)
        if diff == 0:
            return i

        delta = int(dates[i] - dates[i - 1])
        return (i - 1) + (delta - diff) / delta

    def smooth(self, date) -> Record:
        """
        Interpolate a document at the given date.

        Parameters
        ----------
        date : str
            An ISO timestamp. It is copied literally into the returned
            document.

        Returns
        -------
        dict
            A document holding the timestamp field and all interpolated
            fields. Dates outside of the learned range yield zeros.

        Raises
        ------
        InvalidTimestamp
            If ``date`` is unset or not a valid ISO timestamp.
        NotLearned
            If learning the curve failed.
        """
        if not date:
            raise InvalidTimestamp("date is unset")
        # validate before checking the learning state
        parseTimestamp(date, ISO)
        if not self.learned:
            raise NotLearned("datapoints are not learned") from self.learn_error

        return self._createDoc(date, self._curve(self.position(date)))
