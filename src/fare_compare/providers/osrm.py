from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from requests.exceptions import RequestException

from fare_compare.contracts.geo_contract import Coordinate, RouteResult
from fare_compare.core.geo import straight_line
from fare_compare.errors import TransientUpstreamFailure
from fare_compare.providers.base import Router
from fare_compare.providers.http import HTTPClient


def _format_coordinates(*coords: Coordinate) -> str:
    """OSRM wants 'lon,lat;lon,lat'."""
    return ";".join(f"{c.longitude},{c.latitude}" for c in coords)


def _parse_geometry(geometry: Any) -> Tuple[Coordinate, ...]:
    if not isinstance(geometry, dict):
        return ()
    pts = geometry.get("coordinates") or []
    try:
        line = tuple(Coordinate(float(lat), float(lon)) for lon, lat in pts)
    except (TypeError, ValueError):
        return ()
    return line if len(line) >= 2 else ()


@dataclass
class OSRMRouter(Router):
    """OSRM /route/v1/driving with full GeoJSON geometry."""

    base_url: str = "https://router.project-osrm.org"
    user_agent: str = "CabCompareFareApp/1.0 (educational/portfolio project)"
    timeout_s: float = 10.0
    profile: str = "driving"

    name = "osrm"

    def __post_init__(self) -> None:
        self.http = HTTPClient(user_agent=self.user_agent, timeout_s=self.timeout_s)

    def route(self, pickup: Coordinate, drop: Coordinate) -> RouteResult:
        url = (
            f"{self.base_url.rstrip('/')}/route/v1/{self.profile}/"
            f"{_format_coordinates(pickup, drop)}"
        )
        params = {"overview": "full", "geometries": "geojson"}
        try:
            data: Dict[str, Any] = self.http.get_json(url, params=params)
        except (RequestException, ValueError) as e:
            raise TransientUpstreamFailure(self.name, f"{type(e).__name__}: {e}") from e

        routes = data.get("routes") if isinstance(data, dict) else None
        if not routes:
            raise TransientUpstreamFailure(self.name, "No routes")

        r = routes[0]
        try:
            distance_km = float(r.get("distance") or 0) / 1000.0
            duration_min = float(r.get("duration") or 0) / 60.0
        except (AttributeError, TypeError, ValueError) as e:
            raise TransientUpstreamFailure(self.name, f"malformed route: {e}") from e

        # A route without geometry is still authoritative; draw it straight
        geometry = _parse_geometry(r.get("geometry")) or straight_line(pickup, drop)
        return RouteResult(
            distance_km=max(0.0, distance_km),
            duration_min=max(0.0, duration_min),
            geometry=geometry,
            source="osrm",
        )
