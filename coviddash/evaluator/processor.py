"""
Full data pass for the dashboard: summaries, daily series and forecasts.
"""
import copy
import datetime
import numpy as np
import pandas as pd
from coviddash.tools.shaping import records_to_df, entity_time_series, SERIES_COLUMNS
from coviddash.evaluator.aggregate import aggregate_frame
from coviddash.models.smoothing import TrendSeasonalSmoothing
from coviddash.tools.probabilistic import volatility_bounds
from coviddash.datasets.synthetic import SyntheticHistoryGenerator

PREDICTION_COLUMNS = [
    'predicted_cases',
    'predicted_deaths',
    'predicted_vaccinated',
    'lower_bound',
    'upper_bound',
]
# series forecast, and the prediction column each one fills
FORECAST_TARGETS = {
    'cases': 'predicted_cases',
    'deaths': 'predicted_deaths',
    'vaccinated': 'predicted_vaccinated',
}


def state_key(country, state):
    """Lookup key of a state's predictions."""
    return f"{country}-{state}"


def empty_predictions():
    return pd.DataFrame(
        columns=PREDICTION_COLUMNS,
        index=pd.DatetimeIndex([], name='date'),
        dtype=np.int64,
    )


def frame_to_points(df):
    """List of dicts, one per row, with the date as an ISO string."""
    points = df.rename_axis("date").reset_index()
    points["date"] = points["date"].dt.strftime("%Y-%m-%d")
    return points.to_dict(orient="records")


class ProcessedData(object):
    """Everything the dashboard renders, from one pass over the records.

    Attributes:
        global_summary (EntitySummary): world totals
        countries (list): EntitySummary per country, first-seen order
        time_series (pd.DataFrame): global daily series
        predictions (pd.DataFrame): global forecast, PREDICTION_COLUMNS
        country_predictions (dict): country name to forecast
        state_predictions (dict): "country-state" to forecast
    """

    def __init__(
        self,
        global_summary,
        countries,
        time_series,
        predictions,
        country_predictions=None,
        state_predictions=None,
        process_runtime=datetime.timedelta(0),
    ):
        self.global_summary = global_summary
        self.countries = countries
        self.time_series = time_series
        self.predictions = predictions
        self.country_predictions = (
            country_predictions if country_predictions is not None else {}
        )
        self.state_predictions = (
            state_predictions if state_predictions is not None else {}
        )
        self.process_runtime = process_runtime

    def __repr__(self):
        """Print."""
        return (
            f"ProcessedData of {len(self.countries)} countries, "
            f"{self.time_series.shape[0]} days of history, "
            f"{self.predictions.shape[0]} days of forecast"
        )

    def __bool__(self):
        return bool(self.countries)

    def get_country(self, country):
        """EntitySummary of a country, None if absent."""
        for summary in self.countries:
            if summary.name == country:
                return summary
        return None

    def country_frame(self):
        """One row per country of counts, vaccination rate and trend."""
        rows = []
        for summary in self.countries:
            row = {'country': summary.name}
            row.update(summary.counts())
            row['vaccination_rate'] = summary.vaccination_rate
            row['trend'] = summary.trend.direction if summary.trend else 'stable'
            row['trend_value'] = summary.trend.magnitude if summary.trend else 0.0
            row['latitude'] = summary.latitude
            row['longitude'] = summary.longitude
            row['n_states'] = len(summary.states)
            rows.append(row)
        return pd.DataFrame(rows)

    def copy(self):
        """Deep copy, for consumers that want to annotate the result."""
        return ProcessedData(
            global_summary=copy.deepcopy(self.global_summary),
            countries=copy.deepcopy(self.countries),
            time_series=self.time_series.copy(),
            predictions=self.predictions.copy(),
            country_predictions={k: v.copy() for k, v in self.country_predictions.items()},
            state_predictions={k: v.copy() for k, v in self.state_predictions.items()},
            process_runtime=self.process_runtime,
        )

    def to_dict(self):
        """JSON ready representation, dates as YYYY-MM-DD strings."""
        return {
            'global': self.global_summary.to_dict(),
            'countries': [summary.to_dict() for summary in self.countries],
            'time_series': frame_to_points(self.time_series),
            'predictions': frame_to_points(self.predictions),
            'country_predictions': {
                k: frame_to_points(v) for k, v in self.country_predictions.items()
            },
            'state_predictions': {
                k: frame_to_points(v) for k, v in self.state_predictions.items()
            },
        }


class CovidDataProcessor(object):
    """Aggregate records and forecast every entity.

    Args:
        forecast_length (int): days to forecast
        history_window (int): trailing days of history each forecast uses
        interval_scale (float): share of case volatility used as the bound half width
        synthetic_days (int): days of history synthesized for entities without dated records
        start_date (str): first day of synthesized histories
        random_seed (int): seed for synthesized histories, forecasts are deterministic
        verbose (int): 0 for silence, higher values for more noise
    """

    def __init__(
        self,
        forecast_length: int = 90,
        history_window: int = 60,
        interval_scale: float = 0.3,
        synthetic_days: int = 365,
        start_date: str = '2023-01-01',
        random_seed: int = 2023,
        verbose: int = 0,
    ):
        if int(forecast_length) < 1:
            raise ValueError(f"forecast_length must be greater than 0, not {forecast_length}")
        if int(history_window) < 1:
            raise ValueError(f"history_window must be at least 1, not {history_window}")
        self.forecast_length = int(forecast_length)
        self.history_window = int(history_window)
        self.interval_scale = interval_scale
        self.synthetic_days = int(synthetic_days)
        self.start_date = start_date
        self.random_seed = random_seed
        self.verbose = verbose

    def __repr__(self):
        """Print."""
        return f"CovidDataProcessor forecasting {self.forecast_length} days"

    def get_params(self):
        """Return dict of current parameters."""
        return {
            'forecast_length': self.forecast_length,
            'history_window': self.history_window,
            'interval_scale': self.interval_scale,
            'synthetic_days': self.synthetic_days,
            'start_date': self.start_date,
            'random_seed': self.random_seed,
        }

    def generate_predictions(self, time_series):
        """Forecast one daily series.

        Point forecasts are floored to integers and never fall below the last
        observed value. Bounds are a band of interval_scale times the case
        volatility of the trailing window around the predicted cases.

        Args:
            time_series (pd.DataFrame): date indexed with SERIES_COLUMNS

        Returns:
            pd.DataFrame of PREDICTION_COLUMNS, empty for an empty series
        """
        if time_series is None or time_series.empty:
            return empty_predictions()
        history = time_series[list(FORECAST_TARGETS)].astype(float).fillna(0)
        model = TrendSeasonalSmoothing(
            frequency='D',
            history_window=self.history_window,
            interval_scale=self.interval_scale,
            verbose=self.verbose,
        )
        prediction = model.fit(history).predict(self.forecast_length)

        last_values = history.iloc[-1]
        predictions = pd.DataFrame(index=prediction.forecast.index)
        for col, target in FORECAST_TARGETS.items():
            floored = np.floor(prediction.forecast[col].to_numpy())
            predictions[target] = np.maximum(floored, np.ceil(last_values[col]))
        upper, lower = volatility_bounds(
            predictions['predicted_cases'].to_numpy(),
            prediction.volatility['cases'],
            interval_scale=self.interval_scale,
        )
        predictions['lower_bound'] = lower
        predictions['upper_bound'] = upper
        return predictions[PREDICTION_COLUMNS].astype(np.int64)

    def process(self, records):
        """Compute the full ProcessedData for a set of raw records.

        Args:
            records (list of dict or pd.DataFrame): raw records

        Returns:
            ProcessedData
        """
        start_time = datetime.datetime.now()
        df = records_to_df(records, verbose=self.verbose)
        global_summary, countries = aggregate_frame(df, verbose=self.verbose)
        # one random state per pass so synthesized entities differ from each other
        generator = SyntheticHistoryGenerator(
            start_date=self.start_date,
            n_days=self.synthetic_days,
            random_seed=self.random_seed,
        )

        time_series = entity_time_series(df)
        if time_series.empty:
            time_series = generator.global_history()
        predictions = self.generate_predictions(time_series)

        country_predictions = {}
        state_predictions = {}
        for summary in countries:
            country_series = entity_time_series(df, country=summary.name)
            if country_series.empty:
                if self.verbose > 1:
                    print(f"No dated records for {summary.name}, synthesizing history")
                country_series = generator.country_history(summary.name)
            country_predictions[summary.name] = self.generate_predictions(country_series)
            for state in summary.states:
                state_series = entity_time_series(
                    df, country=summary.name, state=state.name
                )
                if state_series.empty:
                    state_series = generator.state_history(state.name)
                state_predictions[state_key(summary.name, state.name)] = (
                    self.generate_predictions(state_series)
                )

        process_runtime = datetime.datetime.now() - start_time
        if self.verbose > 0:
            print(
                f"Processed {df.shape[0]} records, {len(countries)} countries and "
                f"{len(state_predictions)} states in {process_runtime.total_seconds():.2f}s"
            )
        return ProcessedData(
            global_summary=global_summary,
            countries=countries,
            time_series=time_series[SERIES_COLUMNS],
            predictions=predictions,
            country_predictions=country_predictions,
            state_predictions=state_predictions,
            process_runtime=process_runtime,
        )


def process_covid_data(records, **kwargs):
    """Process records with a CovidDataProcessor built from kwargs."""
    return CovidDataProcessor(**kwargs).process(records)
