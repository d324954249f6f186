#! /usr/bin/env python
# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
# SPDX-License-Identifier: GPL-3.0-or-later
# -*- coding: utf-8 -*-

# isort: skip_file

"""Processing of discrete, timestamped series of records."""

__all__ = [
    "ISO",
    "UNIX",
    "TIMESTAMP_FIELD",
    "CORRELATION_FIELD",
    "Config",
    "StepStatus",
    "TsProc",
    "fromConfig",
]

from tsproc.constants import CORRELATION_FIELD, ISO, TIMESTAMP_FIELD, UNIX
from tsproc.core import Config, StepStatus, TsProc
from tsproc.parsing.reader import fromConfig
from tsproc.version import __version__
