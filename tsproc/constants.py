#!/usr/bin/env python

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""
The module comprises constants in use throughout tsproc.

Timestamp Constants
-------------------
* :py:const:`~tsproc.constants.TIMESTAMP_FIELD`: name of the timestamp field of a
  renamed or merged series
* :py:const:`~tsproc.constants.ISO`: format keyword of canonical ISO-8601 timestamps
* :py:const:`~tsproc.constants.UNIX`: format keyword of unix timestamps (seconds)

Correlation Constants
---------------------
* :py:const:`~tsproc.constants.CORRELATION_FIELD`: record field holding the
  detected correlation coefficient (or ``False``)
* :py:const:`~tsproc.constants.CORRELATION_THRESHOLD`: coefficients have to exceed
  this value to mark a run as correlated
"""

__all__ = [
    "TIMESTAMP_FIELD",
    "ISO",
    "UNIX",
    "CORRELATION_FIELD",
    "CORRELATION_THRESHOLD",
    "CORRELATION_DECIMALS",
    "LANCZOS_FILTER_SIZE",
    "HOMOGENEITY_SAMPLES",
]

# ----------------------------------------------------------------------
# timestamp constants
# ----------------------------------------------------------------------

TIMESTAMP_FIELD = "time"
ISO = "ISO"
UNIX = "UNIX"

# ----------------------------------------------------------------------
# algorithm constants
# ----------------------------------------------------------------------

CORRELATION_FIELD = "correlation"
CORRELATION_THRESHOLD = 0.6
CORRELATION_DECIMALS = 4

LANCZOS_FILTER_SIZE = 4

HOMOGENEITY_SAMPLES = 3
