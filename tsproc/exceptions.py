#! /usr/bin/env python

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- coding: utf-8 -*-
from __future__ import annotations

__all__ = [
    "TsprocError",
    "InvalidInput",
    "InvalidTimestamp",
    "InvalidDateRange",
    "NotLearned",
    "UnsupportedForNominal",
    "MissingTargetField",
    "LearnError",
]


class TsprocError(Exception):
    """Base class of all errors raised by tsproc."""


class InvalidInput(TsprocError, ValueError):
    """Malformed construction arguments (series, config or description)."""


class InvalidTimestamp(TsprocError, ValueError):
    """A timestamp is missing or can not be parsed with its declared format."""


class InvalidDateRange(TsprocError, ValueError):
    """The date borders of a cut are malformed."""


class NotLearned(TsprocError, RuntimeError):
    """An interpolator was used, although fitting its curve failed."""


class UnsupportedForNominal(TsprocError, TypeError):
    def __init__(self, fields, operation: str):
        self.fields = list(fields)
        self.operation = operation
        super().__init__(
            f"{operation} is not supported for nominal fields, got: {self.fields}"
        )


class MissingTargetField(TsprocError, ValueError):
    """A max/min reduction was requested without a (known) target field."""


class LearnError(TsprocError, RuntimeError):
    """
    Fitting the interpolation curve failed.

    The numeric error that caused the failure is available as ``__cause__``.
    """
