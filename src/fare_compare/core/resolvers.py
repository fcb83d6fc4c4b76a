"""Location and route resolution with layered fallbacks.

Primary paths talk to live services; every upstream failure is caught here
and demoted to the static fallback, so no network exception leaves this module.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from fare_compare.contracts.geo_contract import Coordinate, Location, RouteResult
from fare_compare.core.geo import haversine_km, straight_line
from fare_compare.core.models import Suggestion
from fare_compare.errors import LocationNotFound, TransientUpstreamFailure
from fare_compare.providers.base import Geocoder, Router
from fare_compare.providers.gazetteer import Gazetteer

log = logging.getLogger(__name__)

# Floors against near-zero fares when both ends land on the same centroid
MIN_DISTANCE_KM = 0.5
FLOOR_DISTANCE_KM = 5.0
MIN_DURATION_MIN = 5.0
FLOOR_DURATION_MIN = 15.0

# Haversine fallback: ~24 km/h average, never under 10 minutes
FALLBACK_MIN_PER_KM = 2.5
FALLBACK_MIN_DURATION = 10.0


class GeoResolver:
    def __init__(self, geocoder: Optional[Geocoder], gazetteer: Gazetteer):
        self.geocoder = geocoder
        self.gazetteer = gazetteer

    def _primary(self, query: str) -> Optional[Coordinate]:
        if self.geocoder is None:
            return None
        try:
            return self.geocoder.geocode(query)
        except TransientUpstreamFailure as e:
            log.warning("Geocoder failed for %r: %s", query, e)
        except Exception as e:
            log.warning("Geocoder raised %s for %r: %s", type(e).__name__, query, e)
        return None

    def locate(self, query: str) -> Location:
        """Resolve *query*, recording which path produced the coordinate."""
        q = query.strip()
        coord = self._primary(q)
        if coord is not None:
            log.info("Geocoded %r -> %.5f, %.5f", q, coord.latitude, coord.longitude)
            return Location(query=q, coordinate=coord, source="live")

        coord = self.gazetteer.lookup(q)
        if coord is not None:
            log.warning("Using gazetteer for %r -> %.5f, %.5f", q, coord.latitude, coord.longitude)
            return Location(query=q, coordinate=coord, source="gazetteer")

        log.warning("Could not resolve %r by any means", q)
        raise LocationNotFound(q)

    def resolve(self, query: str) -> Coordinate:
        return self.locate(query).coordinate

    def locate_offline(self, query: str) -> Location:
        """Gazetteer only; no external calls."""
        q = query.strip()
        coord = self.gazetteer.lookup(q)
        if coord is None:
            raise LocationNotFound(q)
        return Location(query=q, coordinate=coord, source="gazetteer")

    def suggest(self, query: str, limit: int = 8) -> List[Suggestion]:
        """Best-effort autocomplete: any failure yields an empty list."""
        if self.geocoder is None:
            return []
        try:
            return self.geocoder.search(query, limit)
        except Exception as e:
            log.warning("Suggest failed for %r: %s", query, e)
            return []


def _apply_floors(route: RouteResult) -> RouteResult:
    distance_km = route.distance_km
    duration_min = route.duration_min
    if distance_km < MIN_DISTANCE_KM:
        distance_km = FLOOR_DISTANCE_KM
    if duration_min < MIN_DURATION_MIN:
        duration_min = FLOOR_DURATION_MIN
    if distance_km == route.distance_km and duration_min == route.duration_min:
        return route
    return RouteResult(
        distance_km=distance_km,
        duration_min=duration_min,
        geometry=route.geometry,
        source=route.source,
    )


class RouteResolver:
    def __init__(self, router: Optional[Router]):
        self.router = router

    def estimate(self, pickup: Coordinate, drop: Coordinate) -> RouteResult:
        """Great-circle estimate with floors applied; never touches the network."""
        distance_km = haversine_km(pickup, drop)
        raw = RouteResult(
            distance_km=distance_km,
            duration_min=max(FALLBACK_MIN_DURATION, distance_km * FALLBACK_MIN_PER_KM),
            geometry=straight_line(pickup, drop),
            source="haversine",
        )
        return _apply_floors(raw)

    def resolve(self, pickup: Coordinate, drop: Coordinate) -> RouteResult:
        if self.router is not None:
            try:
                return _apply_floors(self.router.route(pickup, drop))
            except TransientUpstreamFailure as e:
                log.warning("Router failed, estimating by haversine: %s", e)
            except Exception as e:
                log.warning("Router raised %s, estimating by haversine: %s", type(e).__name__, e)
        return self.estimate(pickup, drop)
