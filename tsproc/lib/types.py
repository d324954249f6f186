#! /usr/bin/env python

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- coding: utf-8 -*-
from __future__ import annotations

from typing import Any, Dict, List

from typing_extensions import Literal

Record = Dict[str, Any]
Records = List[Record]

TRANSFORM_LITERALS = Literal["interp", "inters"]

INTERP_LITERALS = Literal["linear", "cubic", "lanczos", "nearest"]

REDUCTION_LITERALS = Literal["skip", "sum", "avg", "max", "min"]

TIMESTAMP_QUANTUM_LITERALS = Literal["none", "day", "month", "year"]
