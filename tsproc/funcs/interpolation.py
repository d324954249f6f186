#! /usr/bin/env python

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- coding: utf-8 -*-
from __future__ import annotations

from typing import TYPE_CHECKING, List

import pandas as pd

from tsproc.constants import ISO
from tsproc.core.register import StepStatus, register
from tsproc.core.series import Series
from tsproc.exceptions import InvalidTimestamp, TsprocError, UnsupportedForNominal
from tsproc.lib.interpolator import Interpolator
from tsproc.lib.tools import parseTimestamps

if TYPE_CHECKING:
    from tsproc.core.core import TsProc


def _learn(series: Series, method: str) -> Interpolator:
    return Interpolator(
        series.records,
        series.timestampField,
        series.fields,
        method=method,
        timestamp_format=series.timestampFormat,
        strict=False,
    )


def _allDates(data) -> pd.Index:
    """The union of the (ISO) timestamps of all series, sorted by date."""
    dates = pd.Index([], dtype=object)
    for series in data:
        dates = dates.union(pd.Index(series.rawTimestamps(), dtype=object), sort=False)
    order = parseTimestamps(dates, ISO).argsort(kind="stable")
    return dates[order]


class InterpolationMixin:
    @register()
    def interpolate(self: TsProc, method: str | None = None) -> StepStatus:
        """
        Regenerate every series at the union of the timestamps of all series.

        A curve is learned per series (see :py:class:`~tsproc.lib.interpolator.Interpolator`)
        and evaluated at every timestamp found in any of the series.
        Timestamps outside of the range of a series yield zero values.

        Series that can not be learned (too few records, non-finite values)
        or that hold nominal fields are left as they are. Their errors are
        reported and the remaining series are interpolated anyway.

        Parameters
        ----------
        method : {'linear', 'cubic', 'lanczos', 'nearest'}, optional
            The curve type. Defaults to ``transform.interp_type`` of the config.

        Raises
        ------
        InvalidTimestamp
            If the timestamps are not in ISO format, see :py:meth:`toUTC`.
        """
        if not self.isISO():
            raise InvalidTimestamp("dates should have iso format")

        method = method or self._config.transform.interp_type

        smoothers: List[Interpolator | None] = []
        for i, series in enumerate(self._data):
            nominal = series.nominalFields()
            if nominal:
                self._reportError(
                    UnsupportedForNominal(nominal, "interpolation"),
                    f"learning timeseries {i}",
                )
                smoothers.append(None)
                continue
            try:
                smoother = _learn(series, method)
            except TsprocError as e:
                self._reportError(e, f"learning timeseries {i}")
                smoother = None
            else:
                if not smoother.learned:
                    self._reportError(smoother.learn_error, f"learning timeseries {i}")
                    smoother = None
            smoothers.append(smoother)

        dates = _allDates(self._data)
        for series, smoother in zip(self._data, smoothers):
            if smoother is not None:
                series.records = [smoother.smooth(date) for date in dates]

        return StepStatus.APPLIED

    @register()
    def intersect(self: TsProc) -> StepStatus:
        """
        Keep only the records with timestamps present in every series.
        """
        stamps = [series.timestamps() for series in self._data]

        shared = stamps[0]
        for other in stamps[1:]:
            shared = shared.intersection(other)

        for series, index in zip(self._data, stamps):
            keep = index.isin(shared)
            series.records = [r for r, k in zip(series.records, keep) if k]

        return StepStatus.APPLIED
