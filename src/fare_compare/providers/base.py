from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from fare_compare.contracts.geo_contract import Coordinate, RouteResult
from fare_compare.core.models import Suggestion


class Geocoder(ABC):
    """Turn free text into a coordinate using a live service."""

    name: str = "geocoder"

    @abstractmethod
    def geocode(self, query: str) -> Optional[Coordinate]:
        """Best match, or None when the service answered with no usable result.

        Raises TransientUpstreamFailure when the service could not be reached.
        """
        raise NotImplementedError

    @abstractmethod
    def search(self, query: str, limit: int) -> List[Suggestion]:
        raise NotImplementedError


class Router(ABC):
    """Driving route between two coordinates using a live service."""

    name: str = "router"

    @abstractmethod
    def route(self, pickup: Coordinate, drop: Coordinate) -> RouteResult:
        """Raises TransientUpstreamFailure on any failure, including no route."""
        raise NotImplementedError
