#! /usr/bin/env python

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- coding: utf-8 -*-
from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict

import numpy as np

from tsproc.core.register import StepStatus, register
from tsproc.core.series import Series
from tsproc.exceptions import MissingTargetField, UnsupportedForNominal
from tsproc.lib.ts_operators import windowStarts
from tsproc.lib.types import REDUCTION_LITERALS, Records

if TYPE_CHECKING:
    from tsproc.core.core import TsProc


def _reduceSkip(series: Series, size: int, target_field: str | None = None) -> Records:
    return [dict(series[j]) for j in windowStarts(len(series), size)]


def _windowSums(series: Series, size: int) -> np.ndarray:
    starts = windowStarts(len(series), size)
    return np.add.reduceat(series.valueMatrix(), starts, axis=0)


def _withValues(series: Series, size: int, values: np.ndarray) -> Records:
    out = []
    for start, row in zip(windowStarts(len(series), size), values):
        doc = dict(series[start])
        doc.update(zip(series.fields, (float(v) for v in row)))
        out.append(doc)
    return out


def _reduceSum(series: Series, size: int, target_field: str | None = None) -> Records:
    """
    Field-wise sums of the windows, all other fields are taken from the
    first record of the window.
    """
    if not series.fields or not len(series):
        return _reduceSkip(series, size)
    return _withValues(series, size, _windowSums(series, size))


def _reduceAvg(series: Series, size: int, target_field: str | None = None) -> Records:
    if not series.fields or not len(series):
        return _reduceSkip(series, size)
    starts = windowStarts(len(series), size)
    # the trailing window might be shorter
    counts = np.diff(np.append(starts, len(series)))
    return _withValues(series, size, _windowSums(series, size) / counts[:, None])


def _reduceExtreme(series: Series, size: int, target_field: str, pick: Callable) -> Records:
    if target_field not in series.fields:
        return _reduceSkip(series, size)
    values = np.asarray(series.values(target_field), dtype=float)
    out = []
    for start in windowStarts(len(series), size):
        # argmax/argmin return the first occurrence
        offset = int(pick(values[start : start + size]))
        out.append(dict(series[start + offset]))
    return out


def _reduceMax(series: Series, size: int, target_field: str | None = None) -> Records:
    return _reduceExtreme(series, size, target_field, np.argmax)


def _reduceMin(series: Series, size: int, target_field: str | None = None) -> Records:
    return _reduceExtreme(series, size, target_field, np.argmin)


REDUCERS: Dict[str, Callable[..., Records]] = {
    "skip": _reduceSkip,
    "sum": _reduceSum,
    "avg": _reduceAvg,
    "max": _reduceMax,
    "min": _reduceMin,
}


class ResamplingMixin:
    @register()
    def undersample(
        self: TsProc,
        method: REDUCTION_LITERALS | None = None,
        size: int | None = None,
        target_field: str | None = None,
    ) -> StepStatus:
        """
        Reduce the length of all series by aggregating consecutive windows.

        The series are split into consecutive windows of ``size`` records,
        the last window might be shorter. Every window is reduced to a single
        record.

        Parameters
        ----------
        method : {'skip', 'sum', 'avg', 'max', 'min'}, optional
            The reduction policy. Defaults to ``reduction.type`` of the config.

            * ``'skip'``: keep the first record of every window
            * ``'sum'``: sum up the value fields of every window
            * ``'avg'``: average the value fields of every window
            * ``'max'``: keep the record with the largest ``target_field``
            * ``'min'``: keep the record with the smallest ``target_field``

        size : int, optional
            Number of records per window. Defaults to ``reduction.size``.
            Sizes smaller than 2 leave the data untouched.

        target_field : str, optional
            The field compared by the ``'max'`` and ``'min'`` policies.
            Defaults to ``reduction.target_field``. Series lacking the field
            keep the first record of every window.

        Raises
        ------
        UnsupportedForNominal
            If any value field holds non-numeric values and ``method``
            is not ``'skip'``.
        MissingTargetField
            If ``method`` is ``'max'`` or ``'min'`` and no ``target_field``
            is given.
        """
        reduction = self._config.reduction
        method = method or reduction.type
        size = size if size is not None else reduction.size
        target_field = target_field or reduction.target_field

        if size is None or size <= 1:
            return StepStatus.SKIPPED
        if not self.isHomogeneous():
            return StepStatus.SKIPPED

        if method != "skip":
            nominal = self._data.nominalFields()
            if nominal:
                raise UnsupportedForNominal(nominal, f"{method!r} reduction")
        if method in ("max", "min") and not target_field:
            raise MissingTargetField(f"the {method!r} reduction needs a target field")

        reducer = REDUCERS[method]
        for series in self._data:
            series.records = reducer(series, size, target_field)

        return StepStatus.APPLIED
