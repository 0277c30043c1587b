"""Fill NA."""

import numpy as np
import pandas as pd


def fill_zero(df):
    """Fill NaN with zero."""
    df = df.fillna(0)
    return df


def fill_forward(df):
    """Fill NaN with previous values."""
    df = df.ffill()
    return df.bfill().fillna(0)


def fill_mean(df):
    arr = np.array(df, dtype=float)
    arr = np.nan_to_num(arr) + np.isnan(arr) * np.nan_to_num(np.nanmean(arr, axis=0))
    return pd.DataFrame(arr, index=df.index, columns=df.columns)


def neighbor_mean_np(arr):
    """Fill NaN in a 1d array with the mean of the nearest value on each side.

    Gaps are filled left to right, so a filled value serves as the left neighbor
    of the next missing value. Where only one side has a value, it is copied.
    An array with no valid values is filled with 0.
    """
    arr = np.array(arr, dtype=float)
    missing = np.isnan(arr)
    if not missing.any():
        return arr
    valid_idx = np.flatnonzero(~missing)
    for i in np.flatnonzero(missing):
        right_pos = np.searchsorted(valid_idx, i)
        has_right = right_pos < valid_idx.size
        if i > 0:
            left = arr[i - 1]
            arr[i] = (left + arr[valid_idx[right_pos]]) / 2 if has_right else left
        elif has_right:
            arr[i] = arr[valid_idx[right_pos]]
        else:
            arr[i] = 0.0
    return arr


def fill_neighbor_mean(df):
    """Fill NaN with the average of the closest non-NaN values before and after."""
    arr = np.array(df, dtype=float)
    if arr.ndim == 1:
        return pd.Series(neighbor_mean_np(arr), index=df.index, name=df.name)
    result = arr.copy()
    for i in range(arr.shape[1]):
        result[:, i] = neighbor_mean_np(arr[:, i])
    return pd.DataFrame(result, index=df.index, columns=df.columns)


def FillNA(df, method: str = 'neighbor_mean', window: int = 10):
    """Fill NA values using different methods.

    Args:
        method (str):
            'neighbor_mean' - average of the nearest valid values on either side, edges copy their one neighbor
            'ffill' - fill most recent non-na value forward until another non-na value is reached
            'zero' - fill with zero. Useful for case counts where NA does usually mean 0.
            'mean' - fill all missing values with the series' overall average value
            also a float or int, used as the fill value
        window (int): unused, kept for a common signature across fill methods
    """
    if isinstance(method, (int, float)):
        return df.fillna(method)

    method = str(method).replace(" ", "_")

    if method == 'neighbor_mean':
        return fill_neighbor_mean(df)

    elif method == 'zero':
        return fill_zero(df)

    elif method == 'ffill':
        return fill_forward(df)

    elif method == 'mean':
        return fill_mean(df)

    else:
        raise ValueError(f"FillNA method {method} not recognized")
