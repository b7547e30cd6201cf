# coolblocks/lookup.py
"""
Lookup orchestration
geocode -> weather -> heat index -> greenspace (never fails) -> risk score
"""

import logging

from coolblocks.greenspace import estimate_greenspace
from coolblocks.heat_index import heat_index_c
from coolblocks.models import LookupOutcome
from coolblocks.risk import assess
from coolblocks.sources import OpenMeteoGeocoder, OpenMeteoWeather, OverpassClient

logger = logging.getLogger(__name__)


class LookupOrchestrator:
    """
    Runs one location lookup end to end, each step after the previous one

    Geocoding and weather failures propagate as LookupFailed subclasses;
    the greenspace step substitutes its default instead.
    """

    def __init__(self, geocoder=None, weather=None, greenspace=None):
        self.geocoder = geocoder or OpenMeteoGeocoder()
        self.weather = weather or OpenMeteoWeather()
        self.greenspace = greenspace or OverpassClient()

    def run(self, query: str) -> LookupOutcome:
        """
        Look up a free-text place

        Args:
            query: ZIP, city or "ZIP, Country"

        Returns:
            LookupOutcome with location, raw readings and assessment

        Raises:
            LocationNotFound: geocoding found nothing
            DataSourceError: geocoding or weather request/parse failed
        """
        query = query.strip()

        location = self.geocoder.geocode(query)
        logger.info(f"Geocoded {query!r} to {location.display_name} "
                    f"({location.latitude:.4f}, {location.longitude:.4f})")

        reading = self.weather.current(location.latitude, location.longitude)
        hi_c = heat_index_c(reading.temperature_c, reading.relative_humidity_pct)
        logger.info(f"Weather: {reading.temperature_c:.1f} C, RH {reading.relative_humidity_pct}, "
                    f"heat index {hi_c:.1f} C")

        greenspace = estimate_greenspace(self.greenspace, location.latitude, location.longitude)

        assessment = assess(hi_c, greenspace.percent)
        logger.info(f"Heat risk for {location.display_name}: {assessment.score} ({assessment.label.value})")

        return LookupOutcome(
            location=location,
            weather=reading,
            greenspace=greenspace,
            assessment=assessment,
        )
