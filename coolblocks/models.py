# coolblocks/models.py
"""
Typed records for CoolBlocks
Everything crossing a module boundary is one of these frozen dataclasses
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

from coolblocks import config


@dataclass(frozen=True)
class LocationResult:
    """First geocoding candidate for a free-text query."""

    latitude: float
    longitude: float
    display_name: str

    @classmethod
    def from_candidate(cls, name: str, latitude: float, longitude: float,
                       admin1: Optional[str] = None, country: Optional[str] = None) -> 'LocationResult':
        parts = [name] + [p for p in (admin1, country) if p]
        return cls(latitude=latitude, longitude=longitude, display_name=', '.join(parts))


@dataclass(frozen=True)
class WeatherReading:
    """Current conditions at a coordinate. Humidity may be missing upstream."""

    temperature_c: float
    relative_humidity_pct: Optional[float] = None
    apparent_temperature_c: Optional[float] = None


@dataclass(frozen=True)
class GreenspacePolygon:
    """Closed (lon, lat) ring of one OSM park/forest/garden way."""

    ring: Tuple[Tuple[float, float], ...]
    osm_id: Optional[int] = None
    tags: Dict[str, str] = field(default_factory=dict, compare=False)

    def to_feature(self) -> dict:
        """GeoJSON Feature (used by the map layer)"""
        return {
            'type': 'Feature',
            'geometry': {'type': 'Polygon', 'coordinates': [[list(p) for p in self.ring]]},
            'properties': {'osm_id': self.osm_id, 'name': self.tags.get('name', '')},
        }


@dataclass(frozen=True)
class GreenspaceEstimate:
    """
    Share of the reference circle covered by greenspace, or the default.

    `is_fallback` is True when the estimate could not be computed; `reason`
    then says why. Callers never have to catch anything from the estimator.
    """

    percent: float
    polygons: Tuple[GreenspacePolygon, ...] = ()
    is_fallback: bool = False
    reason: Optional[str] = None

    @classmethod
    def fallback(cls, reason: str) -> 'GreenspaceEstimate':
        return cls(percent=config.DEFAULT_GREENSPACE_PCT, is_fallback=True, reason=reason)


class RiskLevel(str, Enum):
    LOW = 'Low'
    MODERATE = 'Moderate'
    ELEVATED = 'Elevated'
    HIGH = 'High'


@dataclass(frozen=True)
class RiskAssessment:
    heat_index_c: float
    greenspace_pct: float
    score: int
    label: RiskLevel


@dataclass(frozen=True)
class LookupOutcome:
    """Everything a successful lookup produced."""

    location: LocationResult
    weather: WeatherReading
    greenspace: GreenspaceEstimate
    assessment: RiskAssessment


class LookupStatus(str, Enum):
    IDLE = 'idle'
    SEARCHING = 'searching'
    SUCCESS = 'success'
    FAILED = 'failed'


@dataclass(frozen=True)
class MitigationAction:
    id: str
    label: str
    heat_drop: int
    co2_saved_kg: float
    # Display order, primary goal first
    sdg_tags: Tuple[int, ...] = ()


@dataclass(frozen=True)
class Plan:
    """Append-only sequence of chosen actions; duplicates are allowed."""

    actions: Tuple[MitigationAction, ...] = ()

    def add(self, action: MitigationAction) -> 'Plan':
        return Plan(actions=self.actions + (action,))

    def __len__(self) -> int:
        return len(self.actions)

    def __iter__(self):
        return iter(self.actions)


@dataclass(frozen=True)
class PlanSummary:
    total_heat_drop: int
    total_co2_kg: float
    car_miles_equiv: float
    action_count: int

    def to_dict(self) -> Dict[str, float]:
        return {
            'total_heat_drop': self.total_heat_drop,
            'total_co2_kg': round(self.total_co2_kg, 1),
            'car_miles_equiv': round(self.car_miles_equiv, 1),
            'action_count': self.action_count,
        }
