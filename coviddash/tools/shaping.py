"""Reshape data."""

import warnings
import numpy as np
import pandas as pd


RECORD_COLUMNS = [
    'country',
    'state',
    'date',
    'total_cases',
    'active_cases',
    'recovered',
    'deaths',
    'vaccinated',
    'population',
    'latitude',
    'longitude',
]
COUNT_COLUMNS = [
    'total_cases',
    'active_cases',
    'recovered',
    'deaths',
    'vaccinated',
    'population',
]
SERIES_COLUMNS = ['cases', 'deaths', 'recovered', 'vaccinated']
# record column feeding each time series column
SERIES_SOURCE = {
    'cases': 'total_cases',
    'deaths': 'deaths',
    'recovered': 'recovered',
    'vaccinated': 'vaccinated',
}


def infer_frequency(df_wide, warn=True, **kwargs):
    """Infer the frequency in a slightly more robust way.

    Args:
        df_wide (pd.Dataframe or pd.DatetimeIndex): input to pull frequency from
        warn (bool): unused, here to make swappable with pd.infer_freq
    """
    if isinstance(df_wide, pd.DataFrame):
        DTindex = df_wide.index
    elif isinstance(df_wide, pd.DatetimeIndex):
        DTindex = df_wide
    else:
        raise ValueError(
            "infer_frequency failed due to input not being pandas DF or DT index"
        )
    if len(DTindex) < 3:
        return None
    frequency = pd.infer_freq(DTindex)
    if frequency is None and len(DTindex) >= 10:
        # hack to get around data which has a few oddities
        frequency = pd.infer_freq(DTindex[-10:])
    return frequency


def coerce_numeric(series):
    """Numeric version of a column, non-numeric, NaN and negative values become 0."""
    values = pd.to_numeric(series, errors='coerce').astype(float)
    values = values.replace([np.inf, -np.inf], np.nan).fillna(0)
    return values.clip(lower=0)


def records_to_df(records, verbose: int = 0):
    """Convert raw records into the canonical long format dataframe.

    Args:
        records (list of dict or pd.DataFrame): raw records with keys of RECORD_COLUMNS
            missing keys are filled with defaults
        verbose (int): 0 for silence, higher values for more noise

    Returns:
        pd.DataFrame with RECORD_COLUMNS, original row order preserved
    """
    if isinstance(records, pd.DataFrame):
        df = records.copy()
    else:
        df = pd.DataFrame(list(records) if records is not None else [])
    for col in RECORD_COLUMNS:
        if col not in df.columns:
            df[col] = np.nan
    df = df[RECORD_COLUMNS].reset_index(drop=True)

    df['country'] = df['country'].where(df['country'].notna(), '').astype(str)
    df['country'] = df['country'].str.strip()
    state = df['state'].where(df['state'].notna(), '').astype(str).str.strip()
    df['state'] = state.where(state != '', None)
    df['date'] = pd.to_datetime(df['date'], errors='coerce')
    for col in COUNT_COLUMNS:
        df[col] = coerce_numeric(df[col])
    for col in ['latitude', 'longitude']:
        df[col] = pd.to_numeric(df[col], errors='coerce').fillna(0.0)

    missing_country = df['country'] == ''
    if missing_country.any():
        warnings.warn(
            f"{int(missing_country.sum())} records without a country were discarded."
        )
        df = df[~missing_country].reset_index(drop=True)
    if verbose > 1:
        print(f"records_to_df: {df.shape[0]} records retained")
    return df


def entity_time_series(df, country: str = None, state: str = None):
    """Daily series for one entity, summing that entity's dated records per day.

    Args:
        df (pd.DataFrame): canonical records from records_to_df
        country (str): restrict to this country, None for all records (global)
        state (str): restrict to this state of `country`

    Returns:
        pd.DataFrame indexed by date with SERIES_COLUMNS, empty if no dated records
    """
    mask = df['date'].notna()
    if country is not None:
        mask &= df['country'] == country
    if state is not None:
        mask &= df['state'] == state
    subset = df.loc[mask]
    if subset.empty:
        return pd.DataFrame(
            columns=SERIES_COLUMNS,
            index=pd.DatetimeIndex([], name='date'),
            dtype=float,
        )
    days = subset['date'].dt.normalize().rename('date')
    series = (
        subset[list(SERIES_SOURCE.values())]
        .groupby(days, sort=True)
        .sum()
        .rename(columns={v: k for k, v in SERIES_SOURCE.items()})
    )
    return series[SERIES_COLUMNS].astype(float)
