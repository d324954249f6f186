#! /usr/bin/env python

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- coding: utf-8 -*-
from __future__ import annotations

from typing import TYPE_CHECKING

from tsproc.core.register import StepStatus, register
from tsproc.lib.tools import floorTimestamp, formatTimestamp, isNumeric
from tsproc.lib.ts_operators import quantizeValue

if TYPE_CHECKING:
    from tsproc.core.core import TsProc


class TransformationMixin:
    @register()
    def quantize(self: TsProc) -> StepStatus:
        """
        Coarsen values and timestamps to the quanta of the series descriptions.

        Numeric values of a field with a ``quantum`` are rounded down to a
        multiple of it, nominal values are left as they are. Timestamps of a
        series with a timestamp quantum of ``'day'``, ``'month'`` or
        ``'year'`` are floored to the start of that period and written back
        in the timestamp format of the series.

        Examples
        --------
        A value of ``21.07`` quantized by ``2`` becomes ``20.0``.
        """
        applied = False
        for series in self._data:
            schema = series.schema
            quanta = {f.name: f.quantum for f in schema.fields if f.quantum is not None}
            ts_quantum = schema.timestamp.quantum

            if quanta:
                applied = True
                for record in series.records:
                    for field, quantum in quanta.items():
                        value = record.get(field)
                        if isNumeric(value):
                            record[field] = quantizeValue(value, quantum)

            if ts_quantum != "none":
                applied = True
                stamps = series.timestamps()
                field, fmt = series.timestampField, series.timestampFormat
                for record, ts in zip(series.records, stamps):
                    record[field] = formatTimestamp(floorTimestamp(ts, ts_quantum), fmt)

        return StepStatus.APPLIED if applied else StepStatus.SKIPPED
