"""Loading uploaded and example datasets."""

from types import MappingProxyType
import numpy as np
import pandas as pd
from coviddash.tools.shaping import records_to_df


# candidate column names for each record field, tried in order
FIELD_ALIASES = MappingProxyType(
    {
        'country': ('country', 'Country', 'location'),
        'state': ('state', 'State', 'region'),
        'date': ('date', 'Date'),
        'total_cases': ('totalCases', 'total_cases', 'cases'),
        'active_cases': ('activeCases', 'active_cases', 'active'),
        'recovered': ('recovered', 'Recovered'),
        'deaths': ('deaths', 'Deaths'),
        'vaccinated': ('vaccinated', 'Vaccinated', 'people_vaccinated'),
        'population': ('population', 'Population'),
        'latitude': ('latitude', 'lat'),
        'longitude': ('longitude', 'lng', 'lon'),
    }
)
TEXT_FIELDS = ('country', 'state', 'date')

DEMO_COUNTRIES = MappingProxyType(
    {
        'United States': 331000000,
        'India': 1380000000,
        'Brazil': 212000000,
        'United Kingdom': 67000000,
        'Russia': 145000000,
        'France': 65000000,
        'Germany': 83000000,
        'Italy': 60000000,
        'Spain': 47000000,
        'Canada': 38000000,
    }
)
DEMO_STATES = MappingProxyType(
    {
        'United States': (
            'California',
            'Texas',
            'Florida',
            'New York',
            'Pennsylvania',
            'Illinois',
            'Ohio',
            'Georgia',
        ),
        'India': (
            'Maharashtra',
            'Kerala',
            'Karnataka',
            'Tamil Nadu',
            'Uttar Pradesh',
            'Delhi',
            'West Bengal',
        ),
    }
)


def resolve_field(df, candidates, numeric: bool = False):
    """Per row, the value of the first candidate column holding a usable value.

    Empty strings and nulls are never usable, nor are zeros for numeric fields.

    Returns:
        pd.Series, NaN where no candidate is usable
    """
    result = pd.Series(np.nan, index=df.index, dtype=object)
    present = [col for col in candidates if col in df.columns]
    # later candidates are applied first so earlier ones overwrite them
    for col in reversed(present):
        values = df[col]
        usable = values.notna() & (values.astype(str).str.strip() != '')
        if numeric:
            usable &= ~(pd.to_numeric(values, errors='coerce') == 0)
        result = result.where(~usable, values)
    return result


def records_from_df(df, verbose: int = 0):
    """Map an uploaded table with any of the FIELD_ALIASES column names to records.

    Rows without a country are discarded. Rows without a date are dated today.

    Args:
        df (pd.DataFrame): uploaded table, one row per observation
        verbose (int): 0 for silence, higher values for more noise

    Returns:
        pd.DataFrame of canonical records, see tools.shaping.records_to_df
    """
    resolved = pd.DataFrame(index=df.index)
    for field, candidates in FIELD_ALIASES.items():
        resolved[field] = resolve_field(
            df, candidates, numeric=field not in TEXT_FIELDS
        )
    resolved['date'] = resolved['date'].fillna(
        pd.Timestamp.today().strftime('%Y-%m-%d')
    )
    return records_to_df(resolved, verbose=verbose)


def load_csv(filepath_or_buffer, verbose: int = 0, **kwargs):
    """Read an uploaded CSV into canonical records.

    Args:
        filepath_or_buffer (str or file-like): passed to pd.read_csv
        verbose (int): 0 for silence, higher values for more noise
        **kwargs: passed to pd.read_csv

    Raises:
        ValueError: if no row has a country
    """
    df = pd.read_csv(filepath_or_buffer, skip_blank_lines=True, **kwargs)
    records = records_from_df(df, verbose=verbose)
    if records.empty:
        raise ValueError("No valid data found in CSV")
    if verbose > 0:
        print(f"Loaded {records.shape[0]} records for {records['country'].nunique()} countries")
    return records


def load_demo(n_days: int = 28, start_date: str = '2023-01-01', random_seed: int = 2023):
    """Demo records for ten countries, the United States and India reported by state.

    Each country starts between 1 and 11 million total cases and drifts by a random
    daily rate, deaths at 2% and recoveries at 85% of total cases.

    Args:
        n_days (int): days of records per country
        start_date (str): first record date
        random_seed (int): random seed

    Returns:
        pd.DataFrame of canonical records
    """
    rng = np.random.RandomState(random_seed)
    dates = pd.date_range(start_date, periods=int(n_days), freq='D')
    day = np.arange(len(dates))
    rows = []
    for country, population in DEMO_COUNTRIES.items():
        base_cases = rng.randint(1000000, 11000000)
        daily_rate = rng.uniform(-0.003, 0.006)
        vaccinated_share = 0.6 + rng.random_sample() * 0.3
        total_cases = np.floor(base_cases * (1 + daily_rate) ** day)
        vaccinated = np.floor(
            population * vaccinated_share * (1 + 0.001 * day)
        )
        states = DEMO_STATES.get(country, (None,))
        weights = rng.dirichlet(np.ones(len(states)))
        for state, weight in zip(states, weights):
            state_cases = np.floor(total_cases * weight)
            deaths = np.floor(state_cases * 0.02)
            recovered = np.floor(state_cases * 0.85)
            for i, date in enumerate(dates):
                rows.append(
                    {
                        'country': country,
                        'state': state,
                        'date': date,
                        'total_cases': state_cases[i],
                        'active_cases': state_cases[i] - deaths[i] - recovered[i],
                        'recovered': recovered[i],
                        'deaths': deaths[i],
                        'vaccinated': np.floor(vaccinated[i] * weight),
                        'population': np.floor(population * weight),
                    }
                )
    return records_to_df(rows)
