# -*- coding: utf-8 -*-
"""
Synthetic daily case history for entities without reported series.

Matching test file in tests/test_synthetic_data.py
"""

from types import MappingProxyType
import numpy as np
import pandas as pd
from coviddash.tools.seasonal import annual_sine
from coviddash.tools.shaping import SERIES_COLUMNS


# relative size of each country's outbreak, unlisted countries use the default
COUNTRY_MULTIPLIERS = MappingProxyType(
    {
        'United States': 1.0,
        'India': 0.8,
        'Brazil': 0.6,
        'United Kingdom': 0.4,
        'Russia': 0.5,
        'France': 0.3,
        'Germany': 0.35,
        'Italy': 0.25,
        'Spain': 0.3,
        'Canada': 0.2,
    }
)
DEFAULT_COUNTRY_MULTIPLIER = 0.1

# relative to the state's country
STATE_MULTIPLIERS = MappingProxyType(
    {
        'California': 0.15,
        'Texas': 0.12,
        'Florida': 0.08,
        'New York': 0.10,
        'Pennsylvania': 0.06,
        'Illinois': 0.05,
        'Ohio': 0.04,
        'Georgia': 0.04,
        'Maharashtra': 0.20,
        'Kerala': 0.08,
        'Karnataka': 0.10,
        'Tamil Nadu': 0.08,
        'Uttar Pradesh': 0.15,
        'Delhi': 0.05,
        'West Bengal': 0.08,
    }
)
DEFAULT_STATE_MULTIPLIER = 0.05

# starting counts (scaled by the multiplier) and daily vaccination increments (not scaled)
LEVEL_PARAMS = MappingProxyType(
    {
        'global': MappingProxyType(
            {
                'cases': 500000,
                'deaths': 10000,
                'recovered': 400000,
                'vaccinated': 1000000,
                'vaccination_base': 50000,
                'vaccination_jitter': 10000,
            }
        ),
        'country': MappingProxyType(
            {
                'cases': 50000,
                'deaths': 1000,
                'recovered': 40000,
                'vaccinated': 100000,
                'vaccination_base': 5000,
                'vaccination_jitter': 1000,
            }
        ),
        'state': MappingProxyType(
            {
                'cases': 10000,
                'deaths': 200,
                'recovered': 8000,
                'vaccinated': 20000,
                'vaccination_base': 1000,
                'vaccination_jitter': 500,
            }
        ),
    }
)


class SyntheticHistoryGenerator:
    """
    Generate a plausible daily history of cumulative counts.

    Cases grow each day by a random rate of 0.2% to 0.3%, modulated by a yearly
    sine (+/- 30%) and the entity multiplier. Deaths accrue 2% and recoveries
    85% of the day's base case growth. Vaccinations grow by a random daily
    increment independent of cases.

    Parameters
    ----------
    start_date : str or pd.Timestamp
        First date of every generated history
    n_days : int
        Number of days to generate
    random_seed : int or np.random.RandomState
        Seed, or an existing random state to draw from
    """

    def __init__(
        self,
        start_date='2023-01-01',
        n_days=365,
        random_seed=2023,
    ):
        self.start_date = pd.Timestamp(start_date)
        self.n_days = int(n_days)
        if self.n_days < 1:
            raise ValueError(f"n_days must be at least 1, not {n_days}")
        if isinstance(random_seed, np.random.RandomState):
            self.rng = random_seed
        else:
            self.rng = np.random.RandomState(random_seed)
        self.date_index = pd.date_range(
            start=self.start_date, periods=self.n_days, freq='D', name='date'
        )

    def generate(self, level='global', multiplier=1.0):
        """Generate one history.

        Args:
            level (str): 'global', 'country' or 'state', selects LEVEL_PARAMS
            multiplier (float): scales starting counts and case growth

        Returns:
            pd.DataFrame indexed by date with SERIES_COLUMNS
        """
        if level not in LEVEL_PARAMS:
            raise ValueError(
                f"level {level} not recognized, use one of {list(LEVEL_PARAMS)}"
            )
        params = LEVEL_PARAMS[level]
        cases = int(np.floor(params['cases'] * multiplier))
        deaths = int(np.floor(params['deaths'] * multiplier))
        recovered = int(np.floor(params['recovered'] * multiplier))
        vaccinated = int(np.floor(params['vaccinated'] * multiplier))

        seasonal = annual_sine(np.arange(self.n_days))
        values = np.zeros((self.n_days, len(SERIES_COLUMNS)), dtype=np.int64)
        for i in range(self.n_days):
            growth_rate = 0.002 + self.rng.random_sample() * 0.001
            cases += int(np.floor(cases * growth_rate * seasonal[i] * multiplier))
            deaths += int(np.floor(cases * 0.02 * growth_rate))
            recovered += int(np.floor(cases * 0.85 * growth_rate))
            vaccinated += int(
                np.floor(
                    params['vaccination_base']
                    + self.rng.random_sample() * params['vaccination_jitter']
                )
            )
            values[i] = (cases, deaths, recovered, vaccinated)
        return pd.DataFrame(
            values.astype(float), index=self.date_index, columns=SERIES_COLUMNS
        )

    def global_history(self):
        """History for the whole world."""
        return self.generate('global', 1.0)

    def country_history(self, country):
        """History for one country, scaled by COUNTRY_MULTIPLIERS."""
        multiplier = COUNTRY_MULTIPLIERS.get(country, DEFAULT_COUNTRY_MULTIPLIER)
        return self.generate('country', multiplier)

    def state_history(self, state):
        """History for one state, scaled by STATE_MULTIPLIERS."""
        multiplier = STATE_MULTIPLIERS.get(state, DEFAULT_STATE_MULTIPLIER)
        return self.generate('state', multiplier)


def generate_synthetic_history(
    level='global',
    name=None,
    start_date='2023-01-01',
    n_days=365,
    random_seed=2023,
):
    """Functional wrapper around SyntheticHistoryGenerator.

    Args:
        level (str): 'global', 'country' or 'state'
        name (str): country name for level 'country', state name for level 'state'
    """
    gen = SyntheticHistoryGenerator(
        start_date=start_date, n_days=n_days, random_seed=random_seed
    )
    if level == 'country':
        return gen.country_history(name)
    elif level == 'state':
        return gen.state_history(name)
    return gen.generate(level)
