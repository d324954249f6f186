#! /usr/bin/env python

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- coding: utf-8 -*-
from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

from tsproc.constants import ISO, TIMESTAMP_FIELD
from tsproc.core.config import SeriesSchema
from tsproc.core.register import StepStatus, register
from tsproc.core.series import Series, SeriesSet
from tsproc.exceptions import InvalidDateRange, InvalidTimestamp
from tsproc.lib.tools import formatTimestamp, parseTimestamp

if TYPE_CHECKING:
    from tsproc.core.core import TsProc


def _parseBorder(value, name):
    try:
        return parseTimestamp(value, ISO)
    except InvalidTimestamp as e:
        raise InvalidDateRange(f"invalid {name} border: {value!r}") from e


def _renameKey(record: dict, old: str, new: str) -> dict:
    # keeps the field order of the record
    return {(new if k == old else k): v for k, v in record.items()}


class ToolsMixin:
    @register()
    def cut(
        self: TsProc, date_borders: Tuple[str | None, str | None] | None = None
    ) -> StepStatus:
        """
        Drop all records outside of the given date borders.

        Parameters
        ----------
        date_borders :
            Pair of ISO timestamps ``(from, to)``, both inclusive. Defaults
            to the ``date_borders`` of the config. An unset border is
            replaced by the earliest (latest) timestamp of all series.

        Raises
        ------
        InvalidDateRange
            If a border can not be parsed or ``from`` is after ``to``.
        """
        lower, upper = date_borders if date_borders is not None else self._config.borders
        if lower is None and upper is None:
            return StepStatus.SKIPPED

        lower = _parseBorder(lower, "lower") if lower is not None else self.getMinDate()
        upper = _parseBorder(upper, "upper") if upper is not None else self.getMaxDate()
        if lower is None or upper is None:
            # all series are empty
            return StepStatus.SKIPPED
        if lower > upper:
            raise InvalidDateRange(f"lower border {lower} is after upper border {upper}")

        for series in self._data:
            stamps = series.timestamps()
            mask = (stamps >= lower) & (stamps <= upper)
            series.records = [r for r, keep in zip(series.records, mask) if keep]

        return StepStatus.APPLIED

    @register()
    def toUTC(self: TsProc) -> StepStatus:
        """
        Rewrite all timestamps to canonical UTC ISO strings.

        All timestamps are parsed before the first one is written, so a
        failing series leaves the whole set untouched.

        Raises
        ------
        InvalidTimestamp
            If any timestamp does not match the format of its series.
        """
        parsed = [series.timestamps() for series in self._data]

        for series, stamps in zip(self._data, parsed):
            field = series.timestampField
            for record, ts in zip(series.records, stamps):
                record[field] = formatTimestamp(ts, ISO)
            series.schema.timestamp.format = ISO

        return StepStatus.APPLIED

    @register()
    def renameTimestampField(self: TsProc, new_name: str = TIMESTAMP_FIELD) -> StepStatus:
        """
        Rename the timestamp field of a single series.

        Parameters
        ----------
        new_name : str
            New name for the timestamp field.
        """
        if self.getNbTS() != 1:
            return StepStatus.SKIPPED

        series = self._data[0]
        old_name = series.timestampField
        series.records = [_renameKey(r, old_name, new_name) for r in series.records]
        series.schema = series.schema.model_copy(
            update={
                "timestamp": series.schema.timestamp.model_copy(
                    update={"name": new_name}
                )
            }
        )
        return StepStatus.APPLIED

    @register()
    def merge(self: TsProc) -> StepStatus:
        """
        Fuse all series into a single one.

        The records are merged position by position, the timestamp fields of
        the individual series are replaced by a single field named ``'time'``.
        The set has to be homogeneous, otherwise nothing happens.
        """
        n = self.getNbTS()
        if n == 1 or not self.isHomogeneous():
            return StepStatus.SKIPPED

        merged = []
        for j in range(self.getTSSize(0)):
            # save date before deleting
            time = self.getDoc(0, j)[self.getTimestampField(0)]
            doc = {}
            for i in range(n):
                doc.update(self.getDoc(i, j))
                doc.pop(self.getTimestampField(i), None)
            doc[TIMESTAMP_FIELD] = time
            merged.append(doc)

        first = self._data[0].schema.timestamp
        schema = SeriesSchema(
            timestamp=first.model_copy(update={"name": TIMESTAMP_FIELD}),
            fields=[f.model_copy() for s in self._data for f in s.schema.fields],
        )
        self._data = SeriesSet([Series(merged, schema)])
        return StepStatus.APPLIED
