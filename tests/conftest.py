"""
pytest configuration and shared fixtures for the CoolBlocks tests.

No test reaches the network: source clients get a MagicMock session and the
orchestrator is wired to the small fake clients below.
"""

from unittest.mock import MagicMock

import pytest

from coolblocks.errors import DataSourceError, LocationNotFound
from coolblocks.models import LocationResult, WeatherReading

BERLIN = LocationResult(latitude=52.52, longitude=13.405, display_name="Berlin, Land Berlin, Germany")


def square_ring(lon, lat, half_deg):
    """Open square ring (lon, lat) around a point, as Overpass geometry"""
    return [
        {"lat": lat - half_deg, "lon": lon - half_deg},
        {"lat": lat - half_deg, "lon": lon + half_deg},
        {"lat": lat + half_deg, "lon": lon + half_deg},
        {"lat": lat + half_deg, "lon": lon - half_deg},
    ]


class FakeGeocoder:
    def __init__(self, result=BERLIN, error=None):
        self.result = result
        self.error = error
        self.queries = []

    def geocode(self, query):
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return self.result


class FakeWeather:
    def __init__(self, reading=None, error=None):
        self.reading = reading or WeatherReading(temperature_c=32.0, relative_humidity_pct=50.0)
        self.error = error
        self.calls = []

    def current(self, latitude, longitude):
        self.calls.append((latitude, longitude))
        if self.error is not None:
            raise self.error
        return self.reading


class FakeOverpass:
    def __init__(self, elements=None, error=None):
        self.elements = elements if elements is not None else []
        self.error = error
        self.calls = []

    def greenspace_elements(self, latitude, longitude):
        self.calls.append((latitude, longitude))
        if self.error is not None:
            raise self.error
        return self.elements


@pytest.fixture()
def fake_clients():
    return FakeGeocoder(), FakeWeather(), FakeOverpass()


@pytest.fixture()
def not_found_geocoder():
    return FakeGeocoder(error=LocationNotFound("no candidates"))


@pytest.fixture()
def failing_overpass():
    return FakeOverpass(error=DataSourceError("POST overpass failed: 504"))


@pytest.fixture()
def mock_session():
    """
    requests.Session stand-in; set `.json_payload` via the returned response.

    Usage:
        mock_session.request.return_value.json.return_value = {...}
    """
    session = MagicMock()
    response = MagicMock()
    response.raise_for_status.return_value = None
    response.json.return_value = {}
    session.request.return_value = response
    return session
