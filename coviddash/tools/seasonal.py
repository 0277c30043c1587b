"""Seasonality helpers."""

import numpy as np


def seasonal_period(n: int, max_period: int = 30):
    """Period of the repeating pattern looked for in a series of n values.

    At most max_period, and never longer than a third of the series so that
    every position has at least three samples.
    """
    return int(min(max_period, int(n) // 3))


def seasonal_factors(data, period: int):
    """Multiplicative factor for each position within a repeating period.

    The factor of position p is the mean of all values at indices congruent to p
    (mod period) divided by the overall mean. A position with no samples or a
    zero mean gets a factor of 1, as does every position when the period is
    below 2, data is short or the overall mean is 0.

    Args:
        data (np.array): 1d series, usually already normalized
        period (int): length of the repeating pattern

    Returns:
        np.array of length max(period, 1)
    """
    arr = np.asarray(data, dtype=float)
    period = int(period)
    if period < 2 or arr.size < period * 2:
        return np.ones(max(period, 1))
    overall_mean = arr.mean()
    if overall_mean == 0 or not np.isfinite(overall_mean):
        return np.ones(period)
    position = np.arange(arr.size) % period
    sums = np.bincount(position, weights=arr, minlength=period)
    counts = np.bincount(position, minlength=period)
    factors = np.ones(period)
    sampled = counts > 0
    factors[sampled] = (sums[sampled] / counts[sampled]) / overall_mean
    factors[(factors == 0) | ~np.isfinite(factors)] = 1.0
    return factors


def annual_sine(day_index, amplitude: float = 0.3, period: float = 365):
    """Smooth yearly multiplier, 1 + amplitude * sin(2 pi t / period)."""
    return 1 + amplitude * np.sin((2 * np.pi * np.asarray(day_index)) / period)
