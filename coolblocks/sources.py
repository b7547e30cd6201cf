# coolblocks/sources.py
"""
HTTP data sources: Open-Meteo geocoding, Open-Meteo forecast, OSM Overpass

Responses are loosely shaped JSON. Each client validates what it needs into a
typed record here, at the boundary, so nothing downstream reads raw dicts.
"""

import logging
import math
from typing import Any, Dict, List, Optional, Tuple

import requests

from coolblocks import config
from coolblocks.errors import DataSourceError, LocationNotFound
from coolblocks.models import LocationResult, WeatherReading

logger = logging.getLogger(__name__)


def _as_float(value: Any, name: str, required: bool = True) -> Optional[float]:
    """Coerce a JSON number; missing optional fields become None"""
    if value is None:
        if required:
            raise DataSourceError(f"Missing required field: {name}")
        return None
    if isinstance(value, bool):
        raise DataSourceError(f"Field {name} is not numeric: {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise DataSourceError(f"Field {name} is not numeric: {value!r}") from e
    if not math.isfinite(number):
        if required:
            raise DataSourceError(f"Field {name} is not finite: {value!r}")
        return None
    return number


class JsonClient:
    """Thin wrapper around a requests.Session that maps every failure to DataSourceError"""

    def __init__(self, session: requests.Session = None, timeout: Optional[float] = None):
        self.session = session or requests.Session()
        self.timeout = config.HTTP_TIMEOUT if timeout is None else timeout

    def _request(self, method: str, url: str, **kwargs) -> Dict:
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise DataSourceError(f"{method} {url} failed: {e}") from e
        except ValueError as e:
            raise DataSourceError(f"{method} {url} returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise DataSourceError(f"{method} {url} returned {type(data).__name__}, expected an object")
        return data


class OpenMeteoGeocoder(JsonClient):
    """Free-text place search, first candidate only"""

    def __init__(self, url: str = None, **kwargs):
        super().__init__(**kwargs)
        self.url = url or config.GEOCODE_URL

    def geocode(self, query: str) -> LocationResult:
        params = {
            'name': query,
            'count': 1,
            'language': 'en',
            'format': 'json',
        }
        data = self._request('GET', self.url, params=params)
        return parse_geocode_response(data)


def parse_geocode_response(data: Dict) -> LocationResult:
    results = data.get('results') or []
    if not isinstance(results, list) or not results:
        raise LocationNotFound(f"No geocoding candidates (reason: {data.get('reason', 'empty result')})")

    first = results[0]
    if not isinstance(first, dict):
        raise DataSourceError(f"Geocoding candidate is not an object: {first!r}")

    return LocationResult.from_candidate(
        name=str(first.get('name') or ''),
        latitude=_as_float(first.get('latitude'), 'latitude'),
        longitude=_as_float(first.get('longitude'), 'longitude'),
        admin1=first.get('admin1'),
        country=first.get('country'),
    )


class OpenMeteoWeather(JsonClient):
    """Current conditions from the Open-Meteo forecast endpoint"""

    CURRENT_FIELDS = ['temperature_2m', 'relative_humidity_2m', 'apparent_temperature']

    def __init__(self, url: str = None, **kwargs):
        super().__init__(**kwargs)
        self.url = url or config.WEATHER_URL

    def current(self, latitude: float, longitude: float) -> WeatherReading:
        params = {
            'latitude': latitude,
            'longitude': longitude,
            'current': ','.join(self.CURRENT_FIELDS),
        }
        data = self._request('GET', self.url, params=params)
        return parse_weather_response(data)


def parse_weather_response(data: Dict) -> WeatherReading:
    current = data.get('current')
    if not isinstance(current, dict):
        raise DataSourceError("Weather response has no 'current' block")

    return WeatherReading(
        temperature_c=_as_float(current.get('temperature_2m'), 'temperature_2m'),
        relative_humidity_pct=_as_float(current.get('relative_humidity_2m'), 'relative_humidity_2m', required=False),
        apparent_temperature_c=_as_float(current.get('apparent_temperature'), 'apparent_temperature', required=False),
    )


def build_greenspace_query(latitude: float, longitude: float,
                           radius_m: int = None,
                           tags: List[Tuple[str, str]] = None) -> str:
    """Overpass QL for greenspace ways around a point, with full geometry"""
    radius_m = radius_m or int(config.GREENSPACE_RADIUS_KM * 1000)
    tags = tags or config.GREENSPACE_TAGS
    around = f"(around:{radius_m},{latitude},{longitude})"
    clauses = '\n'.join(f' way["{key}"="{value}"]{around};' for key, value in tags)
    return (
        f"[out:json][timeout:{config.OVERPASS_SERVER_TIMEOUT_S}];\n"
        f"(\n{clauses}\n);\n"
        "out geom;"
    )


class OverpassClient(JsonClient):
    """OSM Overpass interpreter, POSTed as the `data` form field"""

    def __init__(self, url: str = None, **kwargs):
        super().__init__(**kwargs)
        self.url = url or config.OVERPASS_URL

    def greenspace_elements(self, latitude: float, longitude: float) -> List[Dict]:
        query = build_greenspace_query(latitude, longitude)
        data = self._request('POST', self.url, data={'data': query})
        elements = data.get('elements', [])
        if not isinstance(elements, list):
            raise DataSourceError("Overpass 'elements' is not a list")
        logger.info(f"Overpass returned {len(elements)} greenspace elements")
        return elements
