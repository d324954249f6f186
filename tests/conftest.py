#! /usr/bin/env python

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- coding: utf-8 -*-

import pandas as pd
import pytest


@pytest.fixture
def days():
    """ISO timestamps of consecutive days, starting at 2012-01-01."""
    return [
        d.strftime("%Y-%m-%dT%H:%M:%S.000Z")
        for d in pd.date_range("2012-01-01", periods=10, freq="1D")
    ]


@pytest.fixture
def describe():
    """Build the description of a single series."""

    def fix_funk(fields=("a",), timestamp="time", fmt="ISO", ts_quantum="none", quanta=None):
        quanta = quanta or {}
        return {
            "timestamp": {"name": timestamp, "format": fmt, "quantum": ts_quantum},
            "fields": [{"name": f, "quantum": quanta.get(f)} for f in fields],
        }

    return fix_funk


@pytest.fixture
def years():
    """The yearly series, timestamps given as plain years."""
    data = [
        {"a": 21.07, "year": "2012"},
        {"a": 23.23, "year": "2013"},
        {"a": 24.24, "year": "2014"},
        {"a": 25.25, "year": "2015"},
    ]
    config = {
        "timeseries": [
            {"timestamp": {"name": "year", "format": "YYYY"}, "fields": [{"name": "a"}]}
        ]
    }
    return data, config


@pytest.fixture
def pair(days, describe):
    """Two homogeneous single field series with different timestamp fields."""
    s1 = [{"t1": d, "a": i} for i, d in enumerate(days[:4])]
    s2 = [{"t2": d, "b": 10 * i} for i, d in enumerate(days[:4])]
    config = {
        "timeseries": [
            describe(fields=["a"], timestamp="t1"),
            describe(fields=["b"], timestamp="t2"),
        ]
    }
    return [s1, s2], config
