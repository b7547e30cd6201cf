# coolblocks/errors.py
"""Exceptions raised by the lookup pipeline."""

NOT_FOUND_MESSAGE = "Location not found. Try 'ZIP, Country' or a city name."
SEARCH_FAILED_MESSAGE = "Search failed."


class CoolBlocksError(Exception):
    """Base class for all CoolBlocks errors"""


class LookupFailed(CoolBlocksError):
    """A lookup step failed; `user_message` is safe to show in the UI."""

    user_message = SEARCH_FAILED_MESSAGE

    def __init__(self, detail: str = None, user_message: str = None):
        if user_message is not None:
            self.user_message = user_message
        super().__init__(detail or self.user_message)


class LocationNotFound(LookupFailed):
    """Geocoding returned no candidates"""

    user_message = NOT_FOUND_MESSAGE


class DataSourceError(LookupFailed):
    """Transport error, HTTP error status, invalid JSON or missing required fields"""


class MalformedGeometry(CoolBlocksError):
    """A single Overpass element could not be turned into a polygon"""


class LookupInProgress(CoolBlocksError):
    """A lookup was requested while another one is still searching"""
