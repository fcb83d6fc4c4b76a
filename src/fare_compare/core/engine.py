"""Estimation pipeline.

States: VALIDATING -> RESOLVING_PICKUP -> RESOLVING_DROP -> ROUTING -> COMPUTING -> DONE.
Modeled failures (blank input, unresolvable location) end in FAILED with
InvalidLocation. Any other exception after validation moves to RECOVERING,
which retries with the gazetteer and a haversine route only.
"""
from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Any, Callable, List, Optional

from fare_compare.contracts.geo_contract import Location, RouteResult
from fare_compare.core.fares import FareEngine, is_outstation
from fare_compare.core.models import EstimationResult, Suggestion
from fare_compare.core.resolvers import GeoResolver, RouteResolver
from fare_compare.core.surge import SurgePolicy
from fare_compare.errors import InternalRecoveryFailure, InvalidLocation, LocationNotFound
from fare_compare.providers.base import Geocoder, Router
from fare_compare.providers.gazetteer import Gazetteer

log = logging.getLogger(__name__)


class PipelineState(str, Enum):
    VALIDATING = "validating"
    RESOLVING_PICKUP = "resolving_pickup"
    RESOLVING_DROP = "resolving_drop"
    ROUTING = "routing"
    COMPUTING = "computing"
    RECOVERING = "recovering"
    DONE = "done"
    FAILED = "failed"


def _clean(text: Any) -> str:
    return text.strip() if isinstance(text, str) else ""


class EstimationPipeline:
    def __init__(
        self,
        geo: GeoResolver,
        routes: RouteResolver,
        surge: SurgePolicy,
        fares: FareEngine,
        geocode_spacing_s: float = 1.1,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.geo = geo
        self.routes = routes
        self.surge = surge
        self.fares = fares
        self.geocode_spacing_s = geocode_spacing_s
        self._sleep = sleep

    def _enter(self, trace: List[PipelineState], state: PipelineState) -> None:
        trace.append(state)
        log.debug("pipeline -> %s", state.value)

    def _locate(self, query: str) -> Location:
        try:
            return self.geo.locate(query)
        except LocationNotFound as e:
            raise InvalidLocation.not_found(query) from e

    def _build(
        self,
        pickup: Location,
        drop: Location,
        route: RouteResult,
        estimated: bool,
    ) -> EstimationResult:
        surge = self.surge.current_multiplier()
        quotes = self.fares.compute_fares(route.distance_km, route.duration_min, surge)
        return EstimationResult(
            pickup=pickup.coordinate,
            drop=drop.coordinate,
            route=route,
            surge_multiplier=surge,
            is_outstation=is_outstation(route.distance_km),
            fares=quotes,
            is_estimated=estimated,
        )

    def estimate(
        self,
        pickup_text: Any,
        drop_text: Any,
        trace: Optional[List[PipelineState]] = None,
    ) -> EstimationResult:
        """Pass *trace* to observe the states this request went through."""
        if trace is None:
            trace = []

        self._enter(trace, PipelineState.VALIDATING)
        pickup_q, drop_q = _clean(pickup_text), _clean(drop_text)
        if not pickup_q or not drop_q:
            self._enter(trace, PipelineState.FAILED)
            raise InvalidLocation.blank()

        try:
            self._enter(trace, PipelineState.RESOLVING_PICKUP)
            pickup = self._locate(pickup_q)

            # Geocoder usage policy: space consecutive lookups
            self._sleep(self.geocode_spacing_s)

            self._enter(trace, PipelineState.RESOLVING_DROP)
            drop = self._locate(drop_q)

            self._enter(trace, PipelineState.ROUTING)
            route = self.routes.resolve(pickup.coordinate, drop.coordinate)

            self._enter(trace, PipelineState.COMPUTING)
            estimated = pickup.is_fallback or drop.is_fallback or route.is_fallback
            result = self._build(pickup, drop, route, estimated)
        except InvalidLocation:
            self._enter(trace, PipelineState.FAILED)
            raise
        except Exception as e:
            log.error("Estimate failed unexpectedly (%s: %s); recovering offline", type(e).__name__, e)
            self._enter(trace, PipelineState.RECOVERING)
            try:
                result = self.recover(pickup_q, drop_q)
            except InternalRecoveryFailure:
                self._enter(trace, PipelineState.FAILED)
                raise
            except Exception as rec_err:
                log.error("Offline recovery failed: %s", rec_err)
                self._enter(trace, PipelineState.FAILED)
                raise InternalRecoveryFailure() from rec_err

        self._enter(trace, PipelineState.DONE)
        return result

    def recover(self, pickup_text: str, drop_text: str) -> EstimationResult:
        """Last resort: gazetteer for both ends, haversine route, always estimated."""
        try:
            pickup = self.geo.locate_offline(pickup_text)
            drop = self.geo.locate_offline(drop_text)
        except LocationNotFound as e:
            raise InternalRecoveryFailure() from e
        route = self.routes.estimate(pickup.coordinate, drop.coordinate)
        return self._build(pickup, drop, route, estimated=True)

    def suggest(self, query: Any, limit: int = 8, min_chars: int = 2) -> List[Suggestion]:
        q = _clean(query)
        if len(q) < min_chars:
            return []
        return self.geo.suggest(q, limit)


def build_pipeline(
    geocoder: str = "nominatim",
    router: str = "osrm",
    cfg: Optional[Any] = None,
    gazetteer: Optional[Gazetteer] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> EstimationPipeline:
    """
    Wire a pipeline from backend names:
      geocoder: "nominatim" | "offline"
      router:   "osrm" | "offline"
    """
    if cfg is None:
        from fare_compare.config import settings as cfg

    # Local imports to keep provider modules out of the core import path
    from fare_compare.providers.nominatim import NominatimGeocoder
    from fare_compare.providers.offline import OfflineGeocoder, OfflineRouter
    from fare_compare.providers.osrm import OSRMRouter

    g = geocoder.strip().lower()
    if g == "nominatim":
        geo_backend: Geocoder = NominatimGeocoder(
            base_url=cfg.nominatim_url,
            user_agent=cfg.user_agent,
            timeout_s=cfg.geocode_timeout_s,
            suggest_timeout_s=cfg.suggest_timeout_s,
        )
    elif g == "offline":
        geo_backend = OfflineGeocoder()
    else:
        raise ValueError(f"Unknown geocoder: '{geocoder}' (supported: nominatim, offline)")

    r = router.strip().lower()
    if r == "osrm":
        route_backend: Router = OSRMRouter(
            base_url=cfg.osrm_url,
            user_agent=cfg.user_agent,
            timeout_s=cfg.route_timeout_s,
        )
    elif r == "offline":
        route_backend = OfflineRouter()
    else:
        raise ValueError(f"Unknown router: '{router}' (supported: osrm, offline)")

    return EstimationPipeline(
        geo=GeoResolver(geo_backend, gazetteer or Gazetteer()),
        routes=RouteResolver(route_backend),
        surge=SurgePolicy(cfg.timezone or None),
        fares=FareEngine(),
        geocode_spacing_s=cfg.geocode_spacing_s,
        sleep=sleep,
    )
