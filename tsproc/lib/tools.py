#! /usr/bin/env python

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- coding: utf-8 -*-
from __future__ import annotations

import datetime
import numbers
import re
from typing import Any, Iterable

import numpy as np
import pandas as pd

from tsproc.constants import ISO, UNIX
from tsproc.exceptions import InvalidTimestamp

# moment.js style tokens and their strftime counterparts,
# longest tokens first, the regex alternation is greedy from left to right
_MOMENT_TOKENS = {
    "YYYY": "%Y",
    "YY": "%y",
    "MM": "%m",
    "DD": "%d",
    "HH": "%H",
    "mm": "%M",
    "ss": "%S",
    "SSSS": "%f",
    "SSS": "%f",
    "Z": "%z",
}
_MOMENT_PATTERN = re.compile("|".join(_MOMENT_TOKENS))


def isNumeric(value: Any) -> bool:
    """True for real numbers, but not for booleans, strings or ``None``."""
    return isinstance(value, numbers.Real) and not isinstance(value, (bool, np.bool_))


def isNominal(values: Iterable[Any]) -> bool:
    """True if any of the passed values is not numeric."""
    return not all(isNumeric(v) for v in values)


def isISOFormat(fmt: str | None) -> bool:
    return fmt is None or str(fmt).upper() == ISO


def toStrftime(fmt: str) -> str:
    """
    Translate a timestamp pattern to a ``strftime`` pattern.

    Patterns already containing ``%``-directives are returned as they are,
    everything else is treated as a moment.js style pattern, e.g.
    ``"YYYY-MM-DD"`` becomes ``"%Y-%m-%d"``.
    """
    if "%" in fmt:
        return fmt
    return _MOMENT_PATTERN.sub(lambda m: _MOMENT_TOKENS[m.group(0)], fmt)


def _toUTC(ts: pd.Timestamp) -> pd.Timestamp:
    if ts.tzinfo is None:
        return ts.tz_localize("UTC")
    return ts.tz_convert("UTC")


def parseTimestamp(value: Any, fmt: str | None = ISO) -> pd.Timestamp:
    """
    Parse a single timestamp to a timezone aware (UTC) ``pd.Timestamp``.

    Parameters
    ----------
    value :
        The raw timestamp. Strings are parsed according to ``fmt``,
        ``datetime`` objects are taken as they are.

    fmt :
        * ``"ISO"`` (or ``None``): strict ISO-8601
        * ``"UNIX"``: seconds since the epoch
        * any other string: a ``strftime`` or moment.js style pattern

    Raises
    ------
    InvalidTimestamp
        If ``value`` is missing or does not match ``fmt``.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidTimestamp("timestamp is unset")

    try:
        if isinstance(value, (pd.Timestamp, datetime.datetime, np.datetime64)):
            ts = pd.Timestamp(value)
        elif isISOFormat(fmt):
            if not isinstance(value, str):
                raise TypeError(f"expected an ISO string, got {type(value).__name__}")
            ts = pd.to_datetime(value, format="ISO8601")
        elif str(fmt).upper() == UNIX:
            ts = pd.to_datetime(float(value), unit="s")
        else:
            ts = pd.to_datetime(str(value), format=toStrftime(fmt))
    except (ValueError, TypeError, OverflowError) as e:
        raise InvalidTimestamp(
            f"timestamp {value!r} does not match the format {fmt!r}"
        ) from e

    if pd.isna(ts):
        raise InvalidTimestamp(f"timestamp {value!r} is not a valid date")
    return _toUTC(ts).as_unit("ns")


def parseTimestamps(values: Iterable[Any], fmt: str | None = ISO) -> pd.DatetimeIndex:
    """Parse all ``values`` with :py:func:`parseTimestamp`."""
    return pd.DatetimeIndex(
        [parseTimestamp(v, fmt) for v in values], tz="UTC"
    ).as_unit("ns")


def formatTimestamp(ts: pd.Timestamp, fmt: str | None = ISO) -> str | float:
    """
    Inverse of :py:func:`parseTimestamp`.

    ISO timestamps are rendered with millisecond precision and a ``Z`` suffix,
    e.g. ``"2012-01-01T00:00:00.000Z"``.
    """
    ts = _toUTC(pd.Timestamp(ts))
    if isISOFormat(fmt):
        return ts.strftime("%Y-%m-%dT%H:%M:%S.") + f"{ts.microsecond // 1000:03d}Z"
    if str(fmt).upper() == UNIX:
        seconds = ts.timestamp()
        return int(seconds) if float(seconds).is_integer() else seconds
    return ts.strftime(toStrftime(fmt))


def floorTimestamp(ts: pd.Timestamp, quantum: str) -> pd.Timestamp:
    """Floor ``ts`` to the start of its ``day``, ``month`` or ``year``."""
    if quantum == "none":
        return ts
    reset = dict(hour=0, minute=0, second=0, microsecond=0, nanosecond=0)
    if quantum == "day":
        return ts.replace(**reset)
    if quantum == "month":
        return ts.replace(day=1, **reset)
    if quantum == "year":
        return ts.replace(month=1, day=1, **reset)
    raise ValueError(f"unknown timestamp quantum: {quantum!r}")
