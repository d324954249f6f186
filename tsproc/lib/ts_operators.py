#! /usr/bin/env python

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- coding: utf-8 -*-

"""
The module gathers the numerical building blocks of the timeseries processing.
"""
from __future__ import annotations

import math
from typing import Callable

import numpy as np
from scipy.interpolate import CubicSpline, make_interp_spline

from tsproc.constants import CORRELATION_DECIMALS, LANCZOS_FILTER_SIZE

Interpolant = Callable[[float], np.ndarray]


def _linear(values: np.ndarray) -> Interpolant:
    return make_interp_spline(np.arange(len(values)), values, k=1, axis=0)


def _cubic(values: np.ndarray) -> Interpolant:
    return CubicSpline(np.arange(len(values)), values, axis=0)


def _nearest(values: np.ndarray) -> Interpolant:
    def interpolate(x):
        # round half up
        return values[int(math.floor(x + 0.5))]

    return interpolate


def _lanczos(values: np.ndarray, size: int = LANCZOS_FILTER_SIZE) -> Interpolant:
    n = len(values)

    def kernel(t):
        return np.where(np.abs(t) < size, np.sinc(t) * np.sinc(t / size), 0.0)

    def interpolate(x):
        base = int(math.floor(x))
        support = np.arange(base - size + 1, base + size + 1)
        inside = (support >= 0) & (support < n)
        # samples outside of the series are zero
        weights = kernel(x - support[inside])
        return weights @ values[support[inside]]

    return interpolate


INTERPOLANTS = {
    "linear": _linear,
    "cubic": _cubic,
    "lanczos": _lanczos,
    "nearest": _nearest,
}


def positionInterpolant(values, method: str = "linear") -> Interpolant:
    """
    Learn a curve over evenly indexed samples.

    The returned function maps a (possibly fractional) position to an array
    holding one interpolated value per column of ``values``. Positions outside
    of ``[0, len(values) - 1]`` evaluate to zeros (``clip='zero'``), integer
    positions evaluate to the stored sample itself.

    Parameters
    ----------
    values : array-like of shape (n_samples, n_fields)
        The samples to interpolate, at least two rows of finite numbers.

    method : {'linear', 'cubic', 'lanczos', 'nearest'}
        The curve type. ``'lanczos'`` uses a filter size of 4, samples
        outside of the series count as zero. ``'cubic'`` is a not-a-knot
        cubic spline through all samples, it reproduces cubic polynomials up
        to the edges. Close to the edges its values differ from a cubic
        convolution kernel that pads the series with zeros.

    Raises
    ------
    ValueError, TypeError
        If ``values`` can not be interpreted as a finite numeric matrix.
    """
    values = np.asarray(values, dtype=float)
    if values.ndim != 2:
        raise ValueError(f"expected a 2-dimensional array, got {values.ndim} dimensions")
    if values.shape[0] < 2:
        raise ValueError("at least two samples are needed to learn a curve")
    if not np.isfinite(values).all():
        raise ValueError("samples contain non-finite values")

    n, width = values.shape
    curve = INTERPOLANTS[method](values)

    def evaluate(x: float) -> np.ndarray:
        if x < 0 or x > n - 1:
            return np.zeros(width)
        if float(x).is_integer():
            return values[int(x)].copy()
        return np.asarray(curve(x), dtype=float).reshape(width)

    return evaluate


def pearsonFromSums(n, sx, sy, sxy, sxx, syy) -> float:
    """
    Pearson correlation coefficient from the raw sums of two samples of size ``n``,
    rounded to four decimals. Returns NaN for samples without variance.
    """
    denominator = (n * sxx - sx**2) * (n * syy - sy**2)
    if not denominator > 0:
        return np.nan
    coef = (n * sxy - sx * sy) / math.sqrt(denominator)
    return round(float(coef), CORRELATION_DECIMALS)


def _shifted(values) -> np.ndarray:
    """
    Shift ``values`` by their rounded mean.

    The coefficient does not depend on a shift. Integer shifts keep the sums
    of integer samples exact.
    """
    values = np.asarray(values, dtype=float)
    if not len(values) or not np.isfinite(values).all():
        return values
    return values - np.round(values.mean())


def pearson(x, y) -> float:
    x = _shifted(x)
    y = _shifted(y)
    return pearsonFromSums(
        len(x), x.sum(), y.sum(), (x * y).sum(), (x * x).sum(), (y * y).sum()
    )


class RunningSums:
    """
    Prefix sums of two samples, allowing O(1) correlation coefficients over
    arbitrary closed index ranges.

    Both samples are shifted by their rounded global means first, the sums
    of a window of large values stay precise.
    """

    def __init__(self, x, y):
        x = _shifted(x)
        y = _shifted(y)
        self._sums = [
            np.concatenate([[0.0], np.cumsum(arr)]) for arr in (x, y, x * y, x * x, y * y)
        ]

    def coefficient(self, start: int, stop: int) -> float:
        """Correlation coefficient over the closed index range ``[start, stop]``."""
        sums = [s[stop + 1] - s[start] for s in self._sums]
        return pearsonFromSums(stop - start + 1, *sums)


def windowStarts(n: int, size: int) -> np.ndarray:
    """Start positions of the consecutive windows of ``size`` elements."""
    return np.arange(0, n, size)


def quantizeValue(value, quantum):
    """Round ``value`` down to a multiple of ``quantum``."""
    return float(np.floor(value / quantum) * quantum)
