"""Preprocessing data methods."""

import numpy as np
import pandas as pd
from coviddash.tools.impute import FillNA, neighbor_mean_np


class EmptyTransformer(object):
    """Base transformer returning raw data."""

    def __init__(self, name: str = "EmptyTransformer", **kwargs):
        self.name = name

    def _fit(self, df):
        """Learn behavior of data to change.

        Args:
            df (pandas.DataFrame): input dataframe
        """
        return df

    def fit(self, df):
        """Learn behavior of data to change.

        Args:
            df (pandas.DataFrame): input dataframe
        """
        self._fit(df)
        return self

    def transform(self, df):
        """Return changed data.

        Args:
            df (pandas.DataFrame): input dataframe
        """
        return df

    def inverse_transform(self, df, trans_method: str = "forecast"):
        """Return data to original *or* forecast form.

        Args:
            df (pandas.DataFrame): input dataframe
        """
        return df

    def fit_transform(self, df):
        """Fits and Returns *Magical* DataFrame.

        Args:
            df (pandas.DataFrame): input dataframe
        """
        return self._fit(df)

    def __repr__(self):
        """Print."""
        return "Transformer " + str(self.name) + ", uses standard .fit/.transform"


def iqr_bounds(sequence, iqr_multiplier: float = 1.5):
    """Lower and upper limits of the IQR rule.

    Q1 and Q3 are the sorted values at index floor(0.25 n) and floor(0.75 n),
    n counting only the non-NaN values.

    Returns:
        lower, upper (float), both NaN when there are no values
    """
    arr = np.asarray(sequence, dtype=float)
    arr = np.sort(arr[~np.isnan(arr)])
    n = arr.size
    if n == 0:
        return np.nan, np.nan
    q1 = arr[int(np.floor(n * 0.25))]
    q3 = arr[int(np.floor(n * 0.75))]
    iqr = q3 - q1
    return q1 - iqr_multiplier * iqr, q3 + iqr_multiplier * iqr


def preprocess_series(sequence, iqr_multiplier: float = 1.5):
    """Clip outliers to the IQR limits and fill missing values.

    NaN and negative values count as missing and are filled from their neighbors.
    Output has the same length as the input.

    Args:
        sequence (array-like): 1d numeric sequence
        iqr_multiplier (float): width of the valid range in IQRs beyond Q1 and Q3
    """
    arr = np.asarray(sequence, dtype=float)
    if arr.size == 0:
        return arr.copy()
    lower, upper = iqr_bounds(arr, iqr_multiplier=iqr_multiplier)
    missing = np.isnan(arr) | (arr < 0)
    processed = np.where(missing, np.nan, arr)
    if np.isfinite(lower):
        processed = np.where(~missing & (processed < lower), lower, processed)
    if np.isfinite(upper):
        processed = np.where(~missing & (processed > upper), upper, processed)
    return neighbor_mean_np(processed)


def normalize_series(sequence):
    """Min-max scale to [0, 1].

    Returns:
        normalized (np.array), min (float), max (float)
        a constant sequence normalizes to 0.5 everywhere
    """
    arr = np.asarray(sequence, dtype=float)
    if arr.size == 0:
        return arr.copy(), 0.0, 0.0
    min_value = float(arr.min())
    max_value = float(arr.max())
    value_range = max_value - min_value
    if value_range == 0:
        return np.full(arr.shape, 0.5), min_value, max_value
    return (arr - min_value) / value_range, min_value, max_value


def denormalize_series(values, min_value, max_value):
    """Inverse of normalize_series."""
    arr = np.asarray(values, dtype=float)
    value_range = max_value - min_value
    if value_range == 0:
        return np.full(arr.shape, float(min_value))
    return arr * value_range + min_value


class IQRClipper(EmptyTransformer):
    """Clamp outliers to IQR limits learned per column and fill missing values.

    Args:
        iqr_multiplier (float): width of the valid range in IQRs beyond Q1 and Q3
        fillna (str): fillna method to use per tools.impute.FillNA
    """

    def __init__(
        self,
        iqr_multiplier: float = 1.5,
        fillna: str = "neighbor_mean",
        **kwargs,
    ):
        super().__init__(name="IQRClipper")
        self.iqr_multiplier = iqr_multiplier
        self.fillna = fillna

    def fit(self, df):
        """Learn behavior of data to change.

        Args:
            df (pandas.DataFrame): input dataframe
        """
        bounds = [
            iqr_bounds(df[col].to_numpy(dtype=float), self.iqr_multiplier)
            for col in df.columns
        ]
        self.lower = pd.Series([b[0] for b in bounds], index=df.columns)
        self.upper = pd.Series([b[1] for b in bounds], index=df.columns)
        return self

    def transform(self, df):
        """Return changed data.

        Args:
            df (pandas.DataFrame): input dataframe
        """
        df2 = df.astype(float)
        df2 = df2.where(df2 >= 0)
        df2 = df2.clip(lower=self.lower, upper=self.upper, axis=1)
        return FillNA(df2, method=self.fillna)

    def fit_transform(self, df):
        """Fits and Returns *Magical* DataFrame.

        Args:
            df (pandas.DataFrame): input dataframe
        """
        self.fit(df)
        return self.transform(df)


class MinMaxScaler(EmptyTransformer):
    """Scale each column to [0, 1], constant columns become 0.5."""

    def __init__(self, **kwargs):
        super().__init__(name="MinMaxScaler")

    def fit(self, df: pd.DataFrame):
        """Capture the min and max of each column."""
        self.min = df.min(axis=0)
        self.max = df.max(axis=0)
        self.range = self.max - self.min
        self.constant_columns = self.range == 0
        return self

    def transform(self, df: pd.DataFrame) -> pd.DataFrame:
        """Scale the dataset using the stored min and max."""
        X_scaled = (df - self.min) / self.range.replace(0, 1)
        values = np.where(
            self.constant_columns.to_numpy(), 0.5, X_scaled.to_numpy(dtype=float)
        )
        return pd.DataFrame(values, index=df.index, columns=df.columns)

    def inverse_transform(self, df: pd.DataFrame, trans_method: str = "forecast"):
        """Revert the scaled data back to the original scale."""
        # a zero range maps every value back to the column min
        return df * self.range + self.min

    def fit_transform(self, df: pd.DataFrame) -> pd.DataFrame:
        """Fit the scaler and transform the dataset."""
        self.fit(df)
        return self.transform(df)
