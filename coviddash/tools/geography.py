"""Country reference coordinates."""

from types import MappingProxyType


COUNTRY_COORDINATES = MappingProxyType(
    {
        'United States': (37.0902, -95.7129),
        'India': (20.5937, 78.9629),
        'Brazil': (-14.2350, -51.9253),
        'United Kingdom': (55.3781, -3.4360),
        'Russia': (61.5240, 105.3188),
        'France': (46.2276, 2.2137),
        'Germany': (51.1657, 10.4515),
        'Italy': (41.8719, 12.5674),
        'Spain': (40.4637, -3.7492),
        'Canada': (56.1304, -106.3468),
    }
)


def get_country_coordinates(country: str):
    """Return (latitude, longitude) of a country's centroid, (0.0, 0.0) if unknown."""
    return COUNTRY_COORDINATES.get(country, (0.0, 0.0))
