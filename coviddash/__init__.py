"""
Aggregation and Forecasting Core for COVID-19 Dashboards
"""

from coviddash.datasets import (
    load_csv,
    load_demo,
    records_from_df,
)

from coviddash.evaluator.processor import (
    CovidDataProcessor,
    ProcessedData,
    process_covid_data,
)
from coviddash.evaluator.aggregate import aggregate_records
from coviddash.models.smoothing import TrendSeasonalSmoothing, trend_seasonal_forecast
from coviddash.datasets.synthetic import SyntheticHistoryGenerator


__version__ = '0.1.0'

__all__ = [
    'load_csv',
    'load_demo',
    'records_from_df',
    'CovidDataProcessor',
    'ProcessedData',
    'process_covid_data',
    'aggregate_records',
    'TrendSeasonalSmoothing',
    'trend_seasonal_forecast',
    'SyntheticHistoryGenerator',
]
