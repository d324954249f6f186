#! /usr/bin/env python

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- coding: utf-8 -*-
from __future__ import annotations

from typing import TYPE_CHECKING, List

from tsproc.constants import CORRELATION_FIELD, CORRELATION_THRESHOLD
from tsproc.core.register import StepStatus, register
from tsproc.exceptions import UnsupportedForNominal
from tsproc.lib.ts_operators import RunningSums

if TYPE_CHECKING:
    from tsproc.core.core import TsProc


def _correlationRuns(
    x, y, count_negative: bool = False, max_coef: bool = True
) -> List[float | bool]:
    """
    Annotate every position of two aligned samples with the correlation
    coefficient of the run it belongs to, or ``False``.

    Runs are searched greedily from the left: for every start position the
    widest range (of at least three points) with a coefficient above
    :py:const:`~tsproc.constants.CORRELATION_THRESHOLD` is taken. With
    ``max_coef``, the range is shrunk from the right as long as the
    coefficient strictly increases. Runs do not overlap.
    """
    n = len(x)
    sums = RunningSums(x, y)
    marks: List[float | bool] = [False] * n

    def coef(start, stop):
        c = sums.coefficient(start, stop)
        return abs(c) if count_negative else c

    i = 0
    while i <= n - 3:
        found = None
        for k in range(n - 1, i + 1, -1):
            c = coef(i, k)
            # NaN compares False
            if c > CORRELATION_THRESHOLD:
                found = (k, c)
                break

        if found is None:
            i += 1
            continue

        k, c = found
        if max_coef:
            while k - 1 - i >= 2:
                shrunk = coef(i, k - 1)
                if not shrunk > c:
                    break
                k, c = k - 1, shrunk

        for j in range(i, k + 1):
            marks[j] = c
        i = k + 1

    return marks


class CorrelationMixin:
    @register()
    def detectCorrelation(
        self: TsProc, count_negative: bool | None = None, max_coef: bool | None = None
    ) -> StepStatus:
        """
        Mark runs of locally correlated values.

        The step needs exactly one series with exactly two value fields. Every
        record gets a field ``'correlation'`` holding the Pearson coefficient
        of the run it belongs to, or ``False``.

        Parameters
        ----------
        count_negative : bool, optional
            Compare the absolute coefficient to the threshold, so negative
            correlations count as well. Defaults to ``correlation.count_negative``.

        max_coef : bool, optional
            Shrink every run to the range of the maximal coefficient.
            Defaults to ``correlation.max_coef``.

        Raises
        ------
        UnsupportedForNominal
            If either field holds non-numeric values.
        """
        if not self._config.correlationEnabled:
            return StepStatus.SKIPPED
        if self.getNbTS() != 1 or len(self.getFields(0)) != 2:
            return StepStatus.SKIPPED

        options = self._config.correlation
        if count_negative is None:
            count_negative = options.count_negative
        if max_coef is None:
            max_coef = options.max_coef

        series = self._data[0]
        nominal = series.nominalFields()
        if nominal:
            raise UnsupportedForNominal(nominal, "correlation detection")

        x, y = (series.values(f) for f in series.fields)
        marks = _correlationRuns(x, y, count_negative=count_negative, max_coef=max_coef)
        for record, mark in zip(series.records, marks):
            record[CORRELATION_FIELD] = mark

        return StepStatus.APPLIED
