#! /usr/bin/env python

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- coding: utf-8 -*-

from tsproc.funcs.correlation import CorrelationMixin
from tsproc.funcs.interpolation import InterpolationMixin
from tsproc.funcs.resampling import ResamplingMixin
from tsproc.funcs.tools import ToolsMixin
from tsproc.funcs.transformation import TransformationMixin


class FunctionsMixin(
    CorrelationMixin,
    InterpolationMixin,
    ResamplingMixin,
    ToolsMixin,
    TransformationMixin,
):
    pass
