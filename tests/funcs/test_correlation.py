#! /usr/bin/env python

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- coding: utf-8 -*-

import numpy as np
import pytest

from tsproc import CORRELATION_FIELD, StepStatus, TsProc
from tsproc.exceptions import UnsupportedForNominal
from tsproc.funcs.correlation import _correlationRuns
from tsproc.lib.ts_operators import pearson

F = False


def _naiveRuns(x, y, count_negative, max_coef):
    """Direct rendition of the greedy search, computing every coefficient from scratch."""

    def coef(i, k):
        c = pearson(x[i : k + 1], y[i : k + 1])
        return abs(c) if count_negative else c

    n = len(x)
    marks = [False] * n
    i = 0
    while i <= n - 3:
        k = n - 1
        while k >= i + 2 and not coef(i, k) > 0.6:
            k -= 1
        if k < i + 2:
            i += 1
            continue
        c = coef(i, k)
        while max_coef and k - i >= 3 and coef(i, k - 1) > c:
            k -= 1
            c = coef(i, k)
        marks[i : k + 1] = [c] * (k - i + 1)
        i = k + 1
    return marks


@pytest.mark.parametrize(
    "x, y, kwargs, expected",
    [
        ([1, 2, 3, 4], [1, 2, 3, 4], {}, [1.0] * 4),
        ([1, 2], [1, 2], {}, [F, F]),
        ([], [], {}, []),
        ([1, 2, 3, 4], [1, 2, 3, 0], {}, [1.0, 1.0, 1.0, F]),
        ([1, 2, 3, 4, 5], [1, 2, 3, 4, 1], {}, [1.0, 1.0, 1.0, 1.0, F]),
        ([1, 2, 3, 4, 5, 6], [1, 2, 3, 4, 5, 3], {}, [1.0] * 5 + [F]),
        ([1, 2, 3, 4, 5, 6], [1, 2, 3, 4, 5, 3], {"max_coef": False}, [0.7559] * 6),
        ([1, 2, 3, 4], [4, 3, 2, 1], {}, [F] * 4),
        ([1, 2, 3, 4], [4, 3, 2, 1], {"count_negative": True}, [1.0] * 4),
        ([1, 2, 3, 4], [5, 5, 5, 5], {}, [F] * 4),
    ],
)
def test_correlationRuns(x, y, kwargs, expected):
    assert _correlationRuns(x, y, **kwargs) == expected


@pytest.mark.parametrize("seed", range(5))
@pytest.mark.parametrize("count_negative", [True, False])
@pytest.mark.parametrize("max_coef", [True, False])
def test_correlationRunsNaive(seed, count_negative, max_coef):
    rng = np.random.default_rng(seed)
    x = rng.integers(0, 10, size=25)
    y = rng.integers(0, 10, size=25)
    assert _correlationRuns(x, y, count_negative, max_coef) == _naiveRuns(
        x, y, count_negative, max_coef
    )


def test_correlationRunsLargeValues():
    y = np.array([1, 3, 2, 5, 4, 6])
    assert _correlationRuns(1e9 + y, y) == [1.0] * 6

    rng = np.random.default_rng(2)
    x = 1e9 + rng.integers(0, 10, size=25)
    y = rng.integers(0, 10, size=25)
    assert _correlationRuns(x, y) == _naiveRuns(x, y, False, True)


def test_correlationRunsDoNotOverlap():
    x = [1, 2, 3, 1, 2, 3]
    y = [1, 2, 3, 3, 2, 1]
    assert _correlationRuns(x, y) == [1.0, 1.0, 1.0, F, F, F]
    # two separate runs
    assert _correlationRuns(x, y, count_negative=True) == [1.0] * 6


@pytest.fixture
def correlated(days, describe):
    def fix_funk(
        x=(1, 2, 3, 4, 5, 6), y=(1, 2, 3, 4, 5, 3), fields=("x", "y"), **kwargs
    ):
        data = [{"time": d, "x": a, "y": b, "z": 0} for d, a, b in zip(days, x, y)]
        return TsProc(data, {"timeseries": [describe(fields=fields)], **kwargs})

    return fix_funk


def test_detectCorrelation(correlated):
    tsp = correlated(correlation={})
    assert tsp.detectCorrelation() is StepStatus.APPLIED
    assert [r[CORRELATION_FIELD] for r in tsp.getData()[0]] == [1.0] * 5 + [False]


def test_detectCorrelationOptions(correlated):
    tsp = correlated(correlation={"max_coef": False})
    tsp.detectCorrelation()
    assert [r[CORRELATION_FIELD] for r in tsp.getData()[0]] == [0.7559] * 6

    tsp = correlated(correlation={})
    tsp.detectCorrelation(max_coef=False)
    assert [r[CORRELATION_FIELD] for r in tsp.getData()[0]] == [0.7559] * 6


def test_detectCorrelationNegative(correlated):
    y = (6, 5, 4, 3, 2, 1)
    tsp = correlated(y=y, correlation={"count_negative": True})
    tsp.detectCorrelation()
    assert [r[CORRELATION_FIELD] for r in tsp.getData()[0]] == [1.0] * 6

    tsp = correlated(y=y, correlation={})
    tsp.detectCorrelation()
    assert [r[CORRELATION_FIELD] for r in tsp.getData()[0]] == [False] * 6


@pytest.mark.parametrize(
    "kwargs",
    [
        {},
        {"correlation": {"enabled": False}},
        {"fields": ("x",), "correlation": {}},
        {"fields": ("x", "y", "z"), "correlation": {}},
    ],
)
def test_detectCorrelationSkipped(correlated, kwargs):
    tsp = correlated(**kwargs)
    assert tsp.detectCorrelation() is StepStatus.SKIPPED
    assert CORRELATION_FIELD not in tsp.getDoc(0, 0)


def test_detectCorrelationMultiple(pair):
    data, config = pair
    tsp = TsProc(data, dict(config, correlation={}))
    assert tsp.detectCorrelation() is StepStatus.SKIPPED


def test_detectCorrelationNominal(correlated):
    tsp = correlated(y=(1, 2, "3", 4, 5, 6), correlation={})
    with pytest.raises(UnsupportedForNominal):
        tsp.detectCorrelation()
