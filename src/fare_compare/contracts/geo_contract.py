# path: fare-compare/src/fare_compare/contracts/geo_contract.py

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Literal, Tuple


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"longitude out of range: {self.longitude}")

    def lon_lat(self) -> List[float]:
        """GeoJSON / OSRM ordering."""
        return [self.longitude, self.latitude]


@dataclass(frozen=True)
class Location:
    query: str
    coordinate: Coordinate
    source: Literal["live", "gazetteer"]

    @property
    def is_fallback(self) -> bool:
        return self.source == "gazetteer"


@dataclass(frozen=True)
class RouteResult:
    distance_km: float
    duration_min: float
    geometry: Tuple[Coordinate, ...]  # polyline, >= 2 points
    source: Literal["osrm", "haversine"] = "osrm"

    def __post_init__(self) -> None:
        if self.distance_km < 0 or self.duration_min < 0:
            raise ValueError("distance and duration must be non-negative")
        if len(self.geometry) < 2:
            raise ValueError("route geometry needs at least two points")

    @property
    def is_fallback(self) -> bool:
        return self.source == "haversine"

    def to_geojson(self) -> dict:
        return {
            "type": "LineString",
            "coordinates": [c.lon_lat() for c in self.geometry],
        }
