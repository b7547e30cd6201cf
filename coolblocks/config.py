# coolblocks/config.py
"""
CoolBlocks configuration
Endpoints and fixed model constants, overridable through COOLBLOCKS_* environment variables
"""

import os

# Data sources (Open-Meteo + OpenStreetMap, no keys)
GEOCODE_URL = os.environ.get('COOLBLOCKS_GEOCODE_URL', 'https://geocoding-api.open-meteo.com/v1/search')
WEATHER_URL = os.environ.get('COOLBLOCKS_WEATHER_URL', 'https://api.open-meteo.com/v1/forecast')
OVERPASS_URL = os.environ.get('COOLBLOCKS_OVERPASS_URL', 'https://overpass-api.de/api/interpreter')

# Unset means requests waits indefinitely
_timeout = os.environ.get('COOLBLOCKS_HTTP_TIMEOUT')
HTTP_TIMEOUT = float(_timeout) if _timeout else None

LOG_LEVEL = os.environ.get('COOLBLOCKS_LOG_LEVEL', 'INFO').upper()

# Greenspace estimation
GREENSPACE_RADIUS_KM = 1.5
CIRCLE_STEPS = 48
DEFAULT_GREENSPACE_PCT = 30.0
OVERPASS_SERVER_TIMEOUT_S = 25
GREENSPACE_TAGS = [
    ('leisure', 'park'),
    ('landuse', 'forest'),
    ('natural', 'wood'),
    ('landuse', 'grass'),
    ('leisure', 'garden'),
]

# Heat index
DEFAULT_HUMIDITY_PCT = 50.0

# Plan aggregation
CAR_KG_PER_MILE = 0.404

# Map
MAP_ZOOM = 12
MAP_HEIGHT = 420
MAP_TILES = 'OpenStreetMap'
