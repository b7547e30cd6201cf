# coolblocks/greenspace.py
"""
Greenspace estimation
Share of a 1.5 km circle around a point covered by OSM park/forest/wood/grass/garden ways

A way counts with its full area whenever its centroid falls inside the circle.
Ways are not clipped to the circle, so the share is a proxy, not an exact
intersection. The result is always clamped to [0, 100].
"""

import logging
import math
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np
from pyproj import Geod
from pyproj.exceptions import GeodError
from shapely.geometry import Point, Polygon

from coolblocks import config
from coolblocks.errors import DataSourceError, MalformedGeometry
from coolblocks.models import GreenspaceEstimate, GreenspacePolygon
from coolblocks.risk import clamp

logger = logging.getLogger(__name__)

GEOD = Geod(ellps='WGS84')

Ring = Tuple[Tuple[float, float], ...]


def reference_circle(latitude: float, longitude: float,
                     radius_km: float = None, steps: int = None) -> Polygon:
    """
    Geodesic circle approximation around a center

    Args:
        latitude: Center latitude
        longitude: Center longitude
        radius_km: Circle radius, defaults to the greenspace radius
        steps: Number of vertices before closing the ring

    Returns:
        Shapely polygon in (lon, lat)
    """
    radius_km = config.GREENSPACE_RADIUS_KM if radius_km is None else radius_km
    steps = steps or config.CIRCLE_STEPS

    # Bearings step counter-clockwise from north
    azimuths = np.arange(steps) * (-360.0 / steps)
    lons, lats, _ = GEOD.fwd(
        np.full(steps, longitude),
        np.full(steps, latitude),
        azimuths,
        np.full(steps, radius_km * 1000.0),
    )
    ring = list(zip(lons, lats))
    ring.append(ring[0])
    return Polygon(ring)


def geodesic_area_km2(ring: Iterable[Tuple[float, float]]) -> float:
    """Unsigned area of a (lon, lat) ring on the WGS84 ellipsoid"""
    lons, lats = zip(*ring)
    area_m2, _ = GEOD.polygon_area_perimeter(list(lons), list(lats))
    return abs(area_m2) / 1e6


def ring_centroid(ring: Ring) -> Point:
    """Mean of the distinct vertices (closing vertex left out)"""
    vertices = ring[:-1] if len(ring) > 1 and ring[0] == ring[-1] else ring
    lons, lats = zip(*vertices)
    return Point(sum(lons) / len(lons), sum(lats) / len(lats))


def polygon_from_element(element: Dict) -> Optional[GreenspacePolygon]:
    """
    Build a closed ring from one Overpass way with `out geom`

    Returns None for rings with fewer than 3 vertices; raises
    MalformedGeometry for anything that cannot become a polygon.
    """
    if not isinstance(element, dict):
        raise MalformedGeometry(f"Element is not an object: {element!r}")

    geometry = element.get('geometry') or []
    try:
        coords = [(float(p['lon']), float(p['lat'])) for p in geometry]
    except (KeyError, TypeError, ValueError, OverflowError) as e:
        raise MalformedGeometry(f"Bad vertex in way {element.get('id')}: {e}") from e

    if len(coords) < 3:
        return None
    if not all(math.isfinite(lon) and math.isfinite(lat) and -90 <= lat <= 90 for lon, lat in coords):
        raise MalformedGeometry(f"Vertex out of range in way {element.get('id')}")
    if coords[0] != coords[-1]:
        coords.append(coords[0])
    # A closed ring needs at least four positions
    if len(coords) < 4:
        raise MalformedGeometry(f"Way {element.get('id')} collapses to fewer than 4 ring positions")

    tags = element.get('tags') or {}
    return GreenspacePolygon(
        ring=tuple(coords),
        osm_id=element.get('id'),
        tags=dict(tags) if isinstance(tags, dict) else {},
    )


def greenspace_percent(circle: Polygon, polygons: Iterable[GreenspacePolygon]) -> Tuple[float, List[GreenspacePolygon]]:
    """
    Percent of the circle covered, and the polygons that were counted

    Boundary points count as inside the circle.
    """
    circle_area = geodesic_area_km2(circle.exterior.coords)
    green_area = 0.0
    counted = []
    for poly in polygons:
        if not circle.covers(ring_centroid(poly.ring)):
            continue
        area = geodesic_area_km2(poly.ring)
        if math.isfinite(area):
            green_area += area
            counted.append(poly)
    return clamp(green_area / circle_area * 100, 0, 100), counted


def polygons_from_elements(elements: Iterable[Dict]) -> List[GreenspacePolygon]:
    polygons = []
    for element in elements:
        try:
            poly = polygon_from_element(element)
        except MalformedGeometry as e:
            logger.debug(f"Skipping malformed greenspace element: {e}")
            continue
        if poly is not None:
            polygons.append(poly)
    return polygons


def estimate_greenspace(client, latitude: float, longitude: float) -> GreenspaceEstimate:
    """
    Best-effort greenspace share around a point

    Args:
        client: Object with greenspace_elements(lat, lon), e.g. OverpassClient
        latitude: Center latitude
        longitude: Center longitude

    Returns:
        GreenspaceEstimate; the default share when the source fails
    """
    try:
        elements = client.greenspace_elements(latitude, longitude)
    except DataSourceError as e:
        logger.warning(f"Greenspace lookup failed, using {config.DEFAULT_GREENSPACE_PCT:.0f}% default: {e}")
        return GreenspaceEstimate.fallback(str(e))

    polygons = polygons_from_elements(elements)
    try:
        circle = reference_circle(latitude, longitude)
        percent, counted = greenspace_percent(circle, polygons)
    except (ValueError, GeodError) as e:
        logger.warning(f"Greenspace geometry failed, using default: {e}")
        return GreenspaceEstimate.fallback(str(e))
    logger.info(f"Greenspace: {len(counted)}/{len(polygons)} polygons counted, {percent:.1f}% of circle")
    return GreenspaceEstimate(percent=percent, polygons=tuple(counted))
