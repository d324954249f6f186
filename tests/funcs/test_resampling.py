#! /usr/bin/env python

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- coding: utf-8 -*-

import math
import typing

import numpy as np
import pytest

from tsproc import StepStatus, TsProc
from tsproc.exceptions import MissingTargetField, UnsupportedForNominal
from tsproc.funcs.resampling import REDUCERS
from tsproc.lib.types import REDUCTION_LITERALS


@pytest.fixture
def fives(days, describe):
    def fix_funk(a=(1, 2, 3, 4, 5), b=(10, 20, 30, 40, 50), **kwargs):
        data = [{"time": d, "a": x, "b": y} for d, x, y in zip(days, a, b)]
        return TsProc(data, {"timeseries": [describe(fields=["a", "b"])], **kwargs})

    return fix_funk


def _field(tsp, field, index=0):
    return [r[field] for r in tsp.getData()[index]]


def test_reducers():
    assert set(REDUCERS) == set(typing.get_args(REDUCTION_LITERALS))


@pytest.mark.parametrize("method", ["skip", "sum", "avg", "max", "min"])
@pytest.mark.parametrize("size", [None, 1, 0, -1])
def test_undersampleNoop(fives, method, size):
    tsp = fives()
    before = tsp.getData()[0].copy()
    assert tsp.undersample(method, size, "a") is StepStatus.SKIPPED
    assert tsp.getData()[0] == before


@pytest.mark.parametrize("size", [2, 3, 4, 5, 6, 10])
def test_reduceSkip(fives, days, size):
    tsp = fives()
    before = [dict(r) for r in tsp.getData()[0]]
    assert tsp.undersample("skip", size) is StepStatus.APPLIED
    result = tsp.getData()[0]
    assert len(result) == math.ceil(5 / size)
    assert result == before[::size]


def test_reduceSkipYears(years):
    tsp = TsProc(*years)
    tsp.undersample("skip", 2)
    assert tsp.getData()[0] == [
        {"a": 21.07, "year": "2012"},
        {"a": 24.24, "year": "2014"},
    ]


def test_reduceSum(fives, days):
    tsp = fives()
    tsp.undersample("sum", 2)
    assert tsp.getData()[0] == [
        {"time": days[0], "a": 3.0, "b": 30.0},
        {"time": days[2], "a": 7.0, "b": 70.0},
        {"time": days[4], "a": 5.0, "b": 50.0},
    ]


def test_reduceAvg(fives, days):
    tsp = fives()
    tsp.undersample("avg", 2)
    assert _field(tsp, "a") == [1.5, 3.5, 5.0]
    assert _field(tsp, "b") == [15.0, 35.0, 50.0]
    assert _field(tsp, "time") == [days[0], days[2], days[4]]


@pytest.mark.parametrize("size", [2, 3])
def test_reduceAvgIsSumPerWindow(fives, size):
    summed, averaged = fives(), fives()
    summed.undersample("sum", size)
    averaged.undersample("avg", size)
    full = 5 // size
    np.testing.assert_allclose(
        np.array(_field(averaged, "b")[:full]),
        np.array(_field(summed, "b")[:full]) / size,
    )


def test_reduceSumKeepsOtherFields(days, describe):
    data = [{"time": d, "a": i, "note": f"n{i}"} for i, d in enumerate(days[:4])]
    tsp = TsProc(data, {"timeseries": [describe(fields=["a"])]})
    tsp.undersample("sum", 3)
    assert tsp.getData()[0] == [
        {"time": days[0], "a": 3.0, "note": "n0"},
        {"time": days[3], "a": 3.0, "note": "n3"},
    ]


@pytest.mark.parametrize(
    "method, a, expected",
    [
        ("max", (1, 5, 3, 4, 2), [1, 3, 4]),
        ("min", (1, 5, 3, 4, 2), [0, 2, 4]),
        ("max", (3, 3, 1, 1, 1), [0, 2, 4]),
        ("min", (3, 3, 1, 1, 1), [0, 2, 4]),
        ("max", (1, 2, 2, 1, 1), [1, 2, 4]),
    ],
)
def test_reduceExtreme(fives, days, method, a, expected):
    tsp = fives(a=a)
    tsp.undersample(method, 2, "a")
    assert _field(tsp, "time") == [days[i] for i in expected]


def test_reduceMaxConfig(fives, days):
    tsp = fives(
        b=(10, 50, 20, 40, 30),
        reduction={"type": "max", "size": 3, "target_field": "b"},
    )
    assert tsp.undersample() is StepStatus.APPLIED
    assert _field(tsp, "b") == [50, 40]
    # whole records are kept
    assert _field(tsp, "a") == [2, 4]


@pytest.mark.parametrize("method", ["max", "min"])
def test_reduceExtremeMissingTarget(fives, method):
    with pytest.raises(MissingTargetField):
        fives().undersample(method, 2)


def test_reduceExtremeUnknownTarget(fives, days):
    tsp = fives()
    tsp.undersample("max", 2, "c")
    assert _field(tsp, "time") == [days[0], days[2], days[4]]


@pytest.mark.parametrize("method", ["sum", "avg", "max", "min"])
def test_undersampleNominal(days, describe, method):
    data = [{"time": d, "a": i, "b": "x"} for i, d in enumerate(days[:4])]
    tsp = TsProc(data, {"timeseries": [describe(fields=["a", "b"])]})
    with pytest.raises(UnsupportedForNominal):
        tsp.undersample(method, 2, "a")
    assert tsp.getTSSize() == 4


def test_undersampleNominalSkip(days, describe):
    data = [{"time": d, "a": i, "b": "x"} for i, d in enumerate(days[:4])]
    tsp = TsProc(data, {"timeseries": [describe(fields=["a", "b"])]})
    assert tsp.undersample("skip", 2) is StepStatus.APPLIED
    assert tsp.getTSSize() == 2


def test_undersampleMultiple(pair, days):
    tsp = TsProc(*pair)
    tsp.undersample("avg", 2)
    assert tsp.getData() == [
        [{"t1": days[0], "a": 0.5}, {"t1": days[2], "a": 2.5}],
        [{"t2": days[0], "b": 5.0}, {"t2": days[2], "b": 25.0}],
    ]


def test_undersampleMultipleTarget(pair, days):
    # the second series lacks the target field
    tsp = TsProc(*pair)
    tsp.undersample("min", 2, "a")
    assert tsp.getData()[1] == [{"t2": days[0], "b": 0}, {"t2": days[2], "b": 20}]


def test_undersampleNotHomogeneous(days, describe):
    data = [
        [{"time": d, "a": 1} for d in days[:4]],
        [{"time": d, "a": 1} for d in days[4:8]],
    ]
    tsp = TsProc(data, {"timeseries": [describe(), describe()]})
    assert tsp.undersample("skip", 2) is StepStatus.SKIPPED
    assert tsp.getData()[0][1]["time"] == days[1]
