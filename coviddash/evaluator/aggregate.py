"""Roll up raw records into global, country and state summaries."""

import numpy as np
import pandas as pd
from coviddash.tools.shaping import records_to_df, COUNT_COLUMNS
from coviddash.tools.geography import get_country_coordinates

MIN_STATE_POPULATION = 1000
TREND_WINDOW = 7
# percent change treated as no change
STABLE_THRESHOLD = 2


class Trend(object):
    """Direction ('up', 'down', 'stable') and magnitude (absolute percent change)."""

    def __init__(self, direction: str = 'stable', magnitude: float = 0.0):
        self.direction = direction
        self.magnitude = magnitude

    def __repr__(self):
        return f"Trend({self.direction}, {self.magnitude:.2f}%)"

    def __eq__(self, other):
        if not isinstance(other, Trend):
            return NotImplemented
        return (self.direction, self.magnitude) == (other.direction, other.magnitude)

    def to_dict(self):
        return {'direction': self.direction, 'magnitude': float(self.magnitude)}


class EntitySummary(object):
    """Aggregated counts for the globe, a country or a state.

    Args:
        name (str): entity name, 'Global' for the world
        counts (dict): values for COUNT_COLUMNS, missing keys are 0
        trend (Trend): recent change in total cases, None for states
        latitude (float): centroid latitude, 0 when unknown
        longitude (float): centroid longitude, 0 when unknown
        states (list): EntitySummary of each state of a country
    """

    def __init__(
        self,
        name: str,
        counts: dict = None,
        trend: Trend = None,
        latitude: float = 0.0,
        longitude: float = 0.0,
        states: list = None,
    ):
        counts = counts if counts is not None else {}
        self.name = name
        self.total_cases = float(counts.get('total_cases', 0))
        self.active_cases = float(counts.get('active_cases', 0))
        self.recovered = float(counts.get('recovered', 0))
        self.deaths = float(counts.get('deaths', 0))
        self.vaccinated = float(counts.get('vaccinated', 0))
        self.population = float(counts.get('population', 0))
        self.vaccination_rate = vaccination_rate(self.vaccinated, self.population)
        self.trend = trend
        self.latitude = latitude
        self.longitude = longitude
        self.states = states if states is not None else []

    def __repr__(self):
        return f"EntitySummary of {self.name}: {self.total_cases:,.0f} total cases"

    def counts(self):
        """Dict of COUNT_COLUMNS values."""
        return {col: getattr(self, col) for col in COUNT_COLUMNS}

    def to_dict(self):
        """JSON ready dict, states nested."""
        result = {'name': self.name}
        result.update(self.counts())
        result['vaccination_rate'] = self.vaccination_rate
        result['trend'] = self.trend.to_dict() if self.trend is not None else None
        result['latitude'] = self.latitude
        result['longitude'] = self.longitude
        result['states'] = [state.to_dict() for state in self.states]
        return result


def vaccination_rate(vaccinated, population):
    """Percent of population vaccinated, 0 when the population is 0."""
    if population > 0:
        return vaccinated / population * 100
    return 0.0


def sum_counts(df):
    """Sum COUNT_COLUMNS across records into a dict."""
    return {col: float(df[col].sum()) for col in COUNT_COLUMNS}


def calculate_trend(df, window: int = TREND_WINDOW):
    """Classify the recent change in total cases.

    Records are sorted by date (stable, undated first) and the mean total_cases of
    the last `window` records is compared with the mean of the `window` before.
    A change within STABLE_THRESHOLD percent, a zero previous mean or too few
    records gives 'stable'.

    Args:
        df (pd.DataFrame): canonical records of one entity
        window (int): records per comparison window

    Returns:
        Trend
    """
    if df.shape[0] < 2:
        return Trend('stable', 0.0)
    ordered = df.sort_values('date', kind='mergesort', na_position='first')
    cases = ordered['total_cases'].to_numpy(dtype=float)
    recent = cases[-window:]
    previous = cases[-2 * window : -window]
    if previous.size == 0:
        return Trend('stable', 0.0)
    recent_avg = recent.mean()
    previous_avg = previous.mean()
    change = (recent_avg - previous_avg) / previous_avg * 100 if previous_avg > 0 else 0.0
    if change > STABLE_THRESHOLD:
        direction = 'up'
    elif change < -STABLE_THRESHOLD:
        direction = 'down'
    else:
        direction = 'stable'
    return Trend(direction, abs(change))


def latest_state_records(df):
    """One record per state: the most recently dated, later input rows winning ties.

    Args:
        df (pd.DataFrame): canonical records of one country

    Returns:
        pd.DataFrame, one row per state in first-seen order, population floored at MIN_STATE_POPULATION
    """
    states = df[df['state'].notna()]
    if states.empty:
        return states
    first_seen = pd.unique(states['state'])
    # undated rows rank below any dated one, the stable sort keeps input order among ties
    ranked = states.assign(
        _rank=states['date'].fillna(pd.Timestamp.min)
    ).sort_values('_rank', kind='mergesort')
    latest = ranked.groupby('state', sort=False).tail(1).drop(columns='_rank')
    latest = latest.set_index('state').loc[first_seen].reset_index()
    latest['population'] = np.maximum(latest['population'], MIN_STATE_POPULATION)
    return latest


def summarize_country(country, df):
    """EntitySummary of one country with its states."""
    states = [
        EntitySummary(row['state'], counts=row)
        for _, row in latest_state_records(df).iterrows()
    ]
    latitude, longitude = get_country_coordinates(country)
    return EntitySummary(
        country,
        counts=sum_counts(df),
        trend=calculate_trend(df),
        latitude=latitude,
        longitude=longitude,
        states=states,
    )


def aggregate_frame(df, verbose: int = 0):
    """Aggregate canonical records (from records_to_df) into global and per country summaries.

    Returns:
        global EntitySummary, list of country EntitySummary in first-seen order
    """
    global_summary = EntitySummary(
        'Global', counts=sum_counts(df), trend=calculate_trend(df)
    )
    countries = [
        summarize_country(country, group)
        for country, group in df.groupby('country', sort=False)
    ]
    if verbose > 1:
        print(f"aggregate_frame: {len(countries)} countries from {df.shape[0]} records")
    return global_summary, countries


def aggregate_records(records, verbose: int = 0):
    """Aggregate raw records into global and per country summaries.

    Args:
        records (list of dict or pd.DataFrame): raw records
        verbose (int): 0 for silence, higher values for more noise

    Returns:
        global EntitySummary, list of country EntitySummary in first-seen order
    """
    return aggregate_frame(records_to_df(records, verbose=verbose), verbose=verbose)
