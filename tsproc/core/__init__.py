#! /usr/bin/env python
# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
# SPDX-License-Identifier: GPL-3.0-or-later
# -*- coding: utf-8 -*-

# isort: skip_file

__all__ = [
    "Config",
    "Series",
    "SeriesSet",
    "StepStatus",
    "TsProc",
    "parseConfig",
    "register",
]

from tsproc.core.config import Config, parseConfig
from tsproc.core.series import Series, SeriesSet
from tsproc.core.register import StepStatus, register
from tsproc.core.core import TsProc
