# -*- coding: utf-8 -*-
"""
Base model information
"""
import copy
import datetime
import numpy as np
import pandas as pd
from coviddash.tools.shaping import infer_frequency


def create_forecast_index(frequency, forecast_length, train_last_date, last_date=None):
    if frequency in ['infer', None]:
        raise ValueError(
            "create_forecast_index run without specific frequency, run basic_profile first or pass proper frequency to model init"
        )
    return pd.date_range(
        freq=frequency,
        start=train_last_date if last_date is None else last_date,
        periods=int(forecast_length + 1),
        name='date',
    )[
        1:
    ]  # note the disposal of the first (already extant) date


class ModelObject(object):
    """Generic class for holding forecasting models.

    Models should all have methods:
        .fit(df) (taking a DataFrame with DatetimeIndex and n columns of n timeseries)
        .predict(forecast_length = int, just_point_forecast = False)
        .get_params() - return a dictionary of current parameters

    Args:
        name (str): Model Name
        frequency (str): String alias of datetime index frequency or else 'infer'
        verbose (int): 0 for silence, higher values for more noise
    """

    def __init__(
        self,
        name: str = "Uninitiated Model Name",
        frequency: str = 'infer',
        fit_runtime=datetime.timedelta(0),
        verbose: int = 0,
    ):
        self.name = name
        self.frequency = frequency
        self.fit_runtime = fit_runtime
        self.verbose = verbose

    def __repr__(self):
        """Print."""
        return 'ModelObject of ' + self.name + ' uses standard .fit/.predict'

    def basic_profile(self, df):
        """Capture basic training details."""
        if 0 in df.shape:
            raise ValueError(f"{self.name} training dataframe has no data: {df.shape}")
        self.startTime = datetime.datetime.now()
        self.train_shape = df.shape
        self.column_names = df.columns
        self.train_last_date = df.index[-1]
        if self.frequency == 'infer':
            self.frequency = infer_frequency(df.index)
            if self.frequency is None:
                # irregular or very short history, assume daily observations
                self.frequency = 'D'

        return df

    def create_forecast_index(self, forecast_length: int, last_date=None):
        """Generate a pd.DatetimeIndex appropriate for a new forecast.

        Warnings:
            Requires ModelObject.basic_profile() being called as part of .fit()
        """

        return create_forecast_index(
            self.frequency, forecast_length, self.train_last_date, last_date
        )

    def get_params(self):
        """Return dict of current parameters."""
        return {}


class PredictionObject(object):
    """Generic class for holding forecast information.

    Attributes:
        model_name
        model_parameters
        forecast
        upper_forecast
        lower_forecast
        volatility

    Methods:
        copy: return a deep copy with separate memory for all key elements
        long_form_results: return complete results in long form
        total_runtime: return runtime for all model components in seconds
    """

    def __init__(
        self,
        model_name: str = 'Uninitiated',
        forecast_length: int = 0,
        forecast_index=np.nan,
        forecast_columns=np.nan,
        lower_forecast=np.nan,
        forecast=np.nan,
        upper_forecast=np.nan,
        volatility=np.nan,
        predict_runtime=datetime.timedelta(0),
        fit_runtime=datetime.timedelta(0),
        model_parameters={},
    ):
        self.model_name = self.name = model_name
        self.model_parameters = model_parameters
        self.forecast_length = forecast_length
        self.forecast_index = forecast_index
        self.forecast_columns = forecast_columns
        self.lower_forecast = lower_forecast
        self.forecast = forecast
        self.upper_forecast = upper_forecast
        self.volatility = volatility
        self.predict_runtime = predict_runtime
        self.fit_runtime = fit_runtime

    def __repr__(self):
        """Print."""
        if isinstance(self.forecast, pd.DataFrame):
            return "Prediction object: \nReturn .forecast, \n .upper_forecast, \n .lower_forecast \n .model_parameters"
        else:
            return "Empty prediction object."

    def __bool__(self):
        """bool version of class."""
        if isinstance(self.forecast, pd.DataFrame):
            return True
        else:
            return False

    def copy(self):
        """Create a deep copy of the PredictionObject with separate memory for all key elements.

        Returns:
            PredictionObject: A new PredictionObject with deep copies of all attributes
        """
        return PredictionObject(
            model_name=self.model_name,
            forecast_length=self.forecast_length,
            forecast_index=self.forecast_index.copy() if isinstance(self.forecast_index, pd.Index) else self.forecast_index,
            forecast_columns=self.forecast_columns.copy() if isinstance(self.forecast_columns, pd.Index) else self.forecast_columns,
            lower_forecast=self.lower_forecast.copy() if isinstance(self.lower_forecast, pd.DataFrame) else self.lower_forecast,
            forecast=self.forecast.copy() if isinstance(self.forecast, pd.DataFrame) else self.forecast,
            upper_forecast=self.upper_forecast.copy() if isinstance(self.upper_forecast, pd.DataFrame) else self.upper_forecast,
            volatility=self.volatility.copy() if isinstance(self.volatility, pd.Series) else self.volatility,
            predict_runtime=self.predict_runtime,
            fit_runtime=self.fit_runtime,
            model_parameters=copy.deepcopy(self.model_parameters),
        )

    def long_form_results(
        self,
        id_name="SeriesID",
        value_name="Value",
        interval_name='PredictionInterval',
        datetime_column=None,
    ):
        """Export forecasts (including upper and lower) as single 'long' format output

        Args:
            id_name (str): name of column containing ids
            value_name (str): name of column containing numeric values
            interval_name (str): name of column telling you what is upper/lower
            datetime_column (str): if None, is index, otherwise, name of column for datetime

        Returns:
            pd.DataFrame
        """
        frames = []
        for label, frame in [
            ("point", self.forecast),
            ("upper", self.upper_forecast),
            ("lower", self.lower_forecast),
        ]:
            upload = pd.melt(
                frame.rename_axis(index='datetime').reset_index(),
                var_name=id_name,
                value_name=value_name,
                id_vars="datetime",
            ).set_index("datetime")
            upload[interval_name] = label
            frames.append(upload)

        upload = pd.concat(frames, axis=0)
        if datetime_column is not None:
            upload.index.name = str(datetime_column)
            upload = upload.reset_index(drop=False)
        return upload

    def total_runtime(self):
        """Combine runtimes."""
        return self.fit_runtime + self.predict_runtime
