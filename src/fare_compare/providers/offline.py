from __future__ import annotations

from typing import List, Optional

from fare_compare.contracts.geo_contract import Coordinate, RouteResult
from fare_compare.core.models import Suggestion
from fare_compare.errors import TransientUpstreamFailure
from fare_compare.providers.base import Geocoder, Router


class OfflineGeocoder(Geocoder):
    """
    Behaves like an unreachable geocoder so every lookup goes to the
    gazetteer. Lets the pipeline run end-to-end without network access.
    """

    name = "offline"

    def geocode(self, query: str) -> Optional[Coordinate]:
        raise TransientUpstreamFailure(self.name, "network disabled")

    def search(self, query: str, limit: int = 8) -> List[Suggestion]:
        raise TransientUpstreamFailure(self.name, "network disabled")


class OfflineRouter(Router):
    """Unreachable router: every route is estimated by haversine."""

    name = "offline"

    def route(self, pickup: Coordinate, drop: Coordinate) -> RouteResult:
        raise TransientUpstreamFailure(self.name, "network disabled")
