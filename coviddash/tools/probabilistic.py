"""
Point to Probabilistic
"""
import numpy as np
import pandas as pd


def relative_returns(sequence):
    """Period over period relative change, (x[i] - x[i-1]) / x[i-1].

    A step from a zero (or NaN) value has no defined return and counts as 0.
    """
    arr = np.nan_to_num(np.asarray(sequence, dtype=float), nan=0.0)
    if arr.size < 2:
        return np.array([], dtype=float)
    prev = arr[:-1]
    diff = np.diff(arr)
    safe_prev = np.where(prev != 0, prev, 1.0)
    return np.where(prev != 0, diff / safe_prev, 0.0)


def calculate_volatility(sequence):
    """Population standard deviation of relative returns, 0 for fewer than 2 values."""
    returns = relative_returns(sequence)
    if returns.size == 0:
        return 0.0
    volatility = float(np.std(returns))
    if not np.isfinite(volatility):
        return 0.0
    return volatility


def volatility_bounds(forecast, volatility, interval_scale: float = 0.3):
    """Upper and lower forecast bounds from a fixed volatility band.

    lower = floor(p * (1 - scale * v)), at least 0 and at most p
    upper = floor(p * (1 + scale * v)), at least p

    Args:
        forecast (pd.DataFrame or np.array): point forecast
        volatility (float or array): volatility, per column if an array
        interval_scale (float): share of volatility used as the band half width

    Returns:
        upper, lower (same type as forecast)
    """
    values = np.asarray(forecast, dtype=float)
    vol = np.nan_to_num(np.asarray(volatility, dtype=float), nan=0.0)
    lower = np.floor(values * (1 - interval_scale * vol))
    upper = np.floor(values * (1 + interval_scale * vol))
    lower = np.clip(lower, 0, None)
    lower = np.minimum(lower, values)
    upper = np.maximum(upper, values)
    if isinstance(forecast, pd.DataFrame):
        upper = pd.DataFrame(upper, index=forecast.index, columns=forecast.columns)
        lower = pd.DataFrame(lower, index=forecast.index, columns=forecast.columns)
    return upper, lower
