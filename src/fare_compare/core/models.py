from __future__ import annotations

from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from fare_compare.contracts.geo_contract import Coordinate, RouteResult


class Provider(str, Enum):
    RED_TAXI = "redTaxi"
    OLA = "ola"
    UBER = "uber"


class FareQuote(BaseModel):
    model_config = ConfigDict(frozen=True)

    provider: Provider
    vehicle_class: str
    price: float = Field(..., ge=0)


class Suggestion(BaseModel):
    """One autocomplete candidate from the geocoder."""

    id: str
    label: str
    lat: float
    lon: float


class EstimationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    pickup: Coordinate
    drop: Coordinate
    route: RouteResult
    surge_multiplier: float = Field(..., ge=1.0, le=2.0)
    is_outstation: bool
    fares: List[FareQuote]
    # True iff any fallback (gazetteer, haversine, recovery) fed this result
    is_estimated: bool

    @property
    def distance_km(self) -> float:
        return self.route.distance_km

    @property
    def duration_min(self) -> float:
        return self.route.duration_min

    def fare_table(self) -> Dict[str, Dict[str, float]]:
        table: Dict[str, Dict[str, float]] = {}
        for q in self.fares:
            table.setdefault(q.provider.value, {})[q.vehicle_class] = q.price
        return table

    def to_response(self) -> dict:
        """Wire shape consumed by the presentation layer."""
        return {
            "pickup": {"lat": self.pickup.latitude, "lon": self.pickup.longitude},
            "drop": {"lat": self.drop.latitude, "lon": self.drop.longitude},
            "routeGeoJson": self.route.to_geojson(),
            "distanceKm": round(self.route.distance_km, 2),
            "durationMin": round(self.route.duration_min, 2),
            "surgeMultiplier": self.surge_multiplier,
            "isOutstation": self.is_outstation,
            "fares": self.fare_table(),
            "estimated": self.is_estimated,
        }
