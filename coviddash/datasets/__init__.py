"""
Tools for Importing Uploaded and Sample Data
"""

from coviddash.datasets._base import (
    FIELD_ALIASES,
    records_from_df,
    load_csv,
    load_demo,
)
from coviddash.datasets.synthetic import (
    SyntheticHistoryGenerator,
    generate_synthetic_history,
)

__all__ = [
    'FIELD_ALIASES',
    'records_from_df',
    'load_csv',
    'load_demo',
    'SyntheticHistoryGenerator',
    'generate_synthetic_history',
]
