from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

import pytest

from fare_compare.contracts.geo_contract import Coordinate, RouteResult
from fare_compare.core.engine import EstimationPipeline
from fare_compare.core.fares import FareEngine
from fare_compare.core.models import Suggestion
from fare_compare.core.resolvers import GeoResolver, RouteResolver
from fare_compare.core.surge import SurgePolicy
from fare_compare.errors import TransientUpstreamFailure
from fare_compare.providers.base import Geocoder, Router
from fare_compare.providers.gazetteer import Gazetteer


class FakeGeocoder(Geocoder):
    """Answers from a dict; unknown queries return None, ``down`` raises."""

    name = "fake"

    def __init__(self, known: Optional[Dict[str, Coordinate]] = None, down: bool = False):
        self.known = {k.lower(): v for k, v in (known or {}).items()}
        self.down = down
        self.calls: List[str] = []

    def geocode(self, query: str) -> Optional[Coordinate]:
        self.calls.append(query)
        if self.down:
            raise TransientUpstreamFailure(self.name, "timeout")
        return self.known.get(query.lower())

    def search(self, query: str, limit: int = 8) -> List[Suggestion]:
        self.calls.append(query)
        if self.down:
            raise TransientUpstreamFailure(self.name, "timeout")
        return [
            Suggestion(id=str(i), label=k, lat=v.latitude, lon=v.longitude)
            for i, (k, v) in enumerate(self.known.items())
            if query.lower() in k
        ][:limit]


class FakeRouter(Router):
    name = "fake"

    def __init__(self, result: Optional[RouteResult] = None, down: bool = False):
        self.result = result
        self.down = down
        self.calls = 0

    def route(self, pickup: Coordinate, drop: Coordinate) -> RouteResult:
        self.calls += 1
        if self.down or self.result is None:
            raise TransientUpstreamFailure(self.name, "No routes")
        return self.result


def noon_clock(tz=None) -> datetime:
    return datetime(2026, 3, 4, 12, 0)


@pytest.fixture
def fake_geocoder_cls():
    return FakeGeocoder


@pytest.fixture
def fake_router_cls():
    return FakeRouter


@pytest.fixture
def sleeps() -> List[float]:
    return []


@pytest.fixture
def make_pipeline(sleeps):
    """Factory: make_pipeline(geocoder=..., router=...) with a noon clock and recorded sleeps."""

    def _make(geocoder: Optional[Geocoder] = None, router: Optional[Router] = None, **kw):
        return EstimationPipeline(
            geo=GeoResolver(geocoder or FakeGeocoder(down=True), Gazetteer()),
            routes=RouteResolver(router or FakeRouter(down=True)),
            surge=kw.pop("surge", SurgePolicy(clock=noon_clock)),
            fares=kw.pop("fares", FareEngine()),
            geocode_spacing_s=kw.pop("geocode_spacing_s", 1.1),
            sleep=sleeps.append,
        )

    return _make
