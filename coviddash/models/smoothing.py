"""
Trend and seasonal exponential smoothing.

An adaptive Holt (double exponential smoothing) model with a multiplicative
seasonal table, used for the dashboard's short range case forecasts.
"""
import math
import datetime
import numpy as np
import pandas as pd
from coviddash.models.base import ModelObject, PredictionObject
from coviddash.tools.transform import (
    IQRClipper,
    MinMaxScaler,
    preprocess_series,
    normalize_series,
    denormalize_series,
)
from coviddash.tools.probabilistic import calculate_volatility, volatility_bounds
from coviddash.tools.seasonal import seasonal_period, seasonal_factors


def smoothing_parameters(volatility: float):
    """Level (alpha) and trend (beta) smoothing constants, larger for more volatile data."""
    alpha = max(0.05, min(0.3, 0.1 + volatility * 0.5))
    beta = max(0.02, min(0.15, 0.05 + volatility * 0.3))
    return alpha, beta


def double_exponential_smoothing(values, alpha: float, beta: float):
    """Run Holt's linear smoothing over values.

    Returns:
        level, trend (float) at the final observation
    """
    level = float(values[0])
    trend = 0.0
    for value in values[1:]:
        new_level = alpha * value + (1 - alpha) * level
        trend = beta * (new_level - level) + (1 - beta) * trend
        level = new_level
    return level, trend


def smoothed_projection(
    normalized, forecast_length: int, volatility: float, max_period: int = 30
):
    """Forecast a normalized series forward.

    Each step is the smoothed level plus trend times the seasonal factor for that
    step. A step may not move more than 2 * volatility + 0.1 relative to the step
    before it, and is floored at 0. The clamped value then updates the level, and
    the trend moves toward the gap between that value and the new level, so every
    step depends on all earlier predicted steps.

    Args:
        normalized (np.array): 1d series scaled to [0, 1]
        forecast_length (int): number of steps to produce
        volatility (float): volatility of the unscaled series
        max_period (int): longest seasonal period considered

    Returns:
        np.array of length forecast_length, still normalized
    """
    alpha, beta = smoothing_parameters(volatility)
    level, trend = double_exponential_smoothing(normalized, alpha, beta)
    factors = seasonal_factors(
        normalized, seasonal_period(len(normalized), max_period=max_period)
    )
    max_change = volatility * 2 + 0.1

    predictions = np.zeros(int(forecast_length))
    for i in range(int(forecast_length)):
        prediction = (level + trend) * factors[i % factors.size]
        if i > 0:
            previous = predictions[i - 1]
            if previous != 0:
                change = (prediction - previous) / previous
            elif prediction != 0:
                change = math.copysign(math.inf, prediction)
            else:
                change = 0.0
            if abs(change) > max_change:
                prediction = previous * (1 + math.copysign(max_change, change))
        prediction = max(prediction, 0.0)
        predictions[i] = prediction

        level = alpha * prediction + (1 - alpha) * level
        trend = beta * (prediction - level) + (1 - beta) * trend
    return predictions


def trend_seasonal_forecast(sequence, forecast_length: int, max_period: int = 30):
    """Forecast a 1d sequence forward by forecast_length steps.

    The sequence is cleaned (tools.transform.preprocess_series) and min-max
    normalized, projected by smoothed_projection, then returned to its original
    scale. With fewer than 3 values the last value (or 0) is repeated.

    Args:
        sequence (array-like): historical values, oldest first
        forecast_length (int): number of future values to produce
        max_period (int): longest seasonal period considered

    Returns:
        np.array of length forecast_length
    """
    arr = np.asarray(sequence, dtype=float)
    forecast_length = int(forecast_length)
    if arr.size < 3:
        last_value = float(np.nan_to_num(arr[-1])) if arr.size > 0 else 0.0
        return np.full(forecast_length, last_value)

    processed = preprocess_series(arr)
    normalized, min_value, max_value = normalize_series(processed)
    volatility = calculate_volatility(processed)
    predictions = smoothed_projection(
        normalized, forecast_length, volatility, max_period=max_period
    )
    return denormalize_series(predictions, min_value, max_value)


class TrendSeasonalSmoothing(ModelObject):
    """Adaptive double exponential smoothing with a seasonal multiplier table.

    Each column is forecast independently from its trailing history_window rows.
    Bounds are a volatility band around the point forecast.

    Args:
        name (str): String to identify class
        frequency (str): String alias of datetime index frequency or else 'infer'
        history_window (int): number of most recent rows used for fitting
        interval_scale (float): share of volatility used as the bound half width
        max_period (int): longest seasonal period considered
    """

    def __init__(
        self,
        name: str = "TrendSeasonalSmoothing",
        frequency: str = 'D',
        history_window: int = 60,
        interval_scale: float = 0.3,
        max_period: int = 30,
        verbose: int = 0,
        **kwargs,
    ):
        ModelObject.__init__(
            self,
            name,
            frequency,
            verbose=verbose,
        )
        if int(history_window) < 1:
            raise ValueError(f"history_window must be at least 1, not {history_window}")
        self.history_window = int(history_window)
        self.interval_scale = interval_scale
        self.max_period = int(max_period)

    def fit(self, df, future_regressor=None):
        """Train algorithm given data supplied.

        Args:
            df (pandas.DataFrame): Datetime Indexed
        """
        df = self.basic_profile(df)
        df = df.astype(float).tail(self.history_window)
        self.df_train = df
        self.volatility = df.apply(calculate_volatility, axis=0)
        self.flat = df.shape[0] < 3
        if not self.flat:
            processed = IQRClipper().fit_transform(df)
            self.scaler = MinMaxScaler().fit(processed)
            self.normalized = self.scaler.transform(processed)
            self.processed_volatility = processed.apply(calculate_volatility, axis=0)
        self.fit_runtime = datetime.datetime.now() - self.startTime
        return self

    def predict(
        self,
        forecast_length: int,
        future_regressor=None,
        just_point_forecast: bool = False,
    ):
        """Generate forecast data immediately following dates of .fit().

        Args:
            forecast_length (int): Number of periods of data to forecast ahead
            just_point_forecast (bool): If True, return a pandas.DataFrame of just point forecasts

        Returns:
            Either a PredictionObject of forecasts and metadata, or
            if just_point_forecast == True, a dataframe of point forecasts
        """
        predictStartTime = datetime.datetime.now()
        index = self.create_forecast_index(forecast_length=forecast_length)
        if self.flat:
            last_values = np.nan_to_num(self.df_train.tail(1).to_numpy())
            forecast = pd.DataFrame(
                np.tile(last_values, (forecast_length, 1)),
                columns=self.column_names,
                index=index,
            )
        else:
            normalized = pd.DataFrame(
                {
                    col: smoothed_projection(
                        self.normalized[col].to_numpy(),
                        forecast_length,
                        self.processed_volatility[col],
                        max_period=self.max_period,
                    )
                    for col in self.column_names
                },
                index=index,
            )
            forecast = self.scaler.inverse_transform(normalized)
        if self.verbose > 1:
            print(f"{self.name} forecast {forecast.shape[1]} series {forecast_length} steps")
        if just_point_forecast:
            return forecast

        upper_forecast, lower_forecast = volatility_bounds(
            forecast, self.volatility.to_numpy(), interval_scale=self.interval_scale
        )
        predict_runtime = datetime.datetime.now() - predictStartTime
        return PredictionObject(
            model_name=self.name,
            forecast_length=forecast_length,
            forecast_index=forecast.index,
            forecast_columns=forecast.columns,
            lower_forecast=lower_forecast,
            forecast=forecast,
            upper_forecast=upper_forecast,
            volatility=self.volatility,
            predict_runtime=predict_runtime,
            fit_runtime=self.fit_runtime,
            model_parameters=self.get_params(),
        )

    def get_params(self):
        """Return dict of current parameters."""
        return {
            'history_window': self.history_window,
            'interval_scale': self.interval_scale,
            'max_period': self.max_period,
        }
