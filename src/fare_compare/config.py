"""Centralized settings for the fare-compare backend."""
from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings

# Nominatim usage policy: at most ~1 request per second per client
MIN_GEOCODE_SPACING_S = 1.1


class Settings(BaseSettings):
    model_config = {"env_prefix": "FARE_COMPARE_"}

    # Upstream services
    nominatim_url: str = "https://nominatim.openstreetmap.org"
    osrm_url: str = "https://router.project-osrm.org"
    user_agent: str = "CabCompareFareApp/1.0 (educational/portfolio project)"

    # Backend selection — "offline" forces the fallback paths
    geocoder: str = "nominatim"
    router: str = "osrm"

    # Timeouts in seconds
    geocode_timeout_s: float = 10.0
    route_timeout_s: float = 10.0
    suggest_timeout_s: float = 8.0

    # Pause between the pickup and drop geocoder lookups
    geocode_spacing_s: float = MIN_GEOCODE_SPACING_S

    # Autocomplete
    suggest_limit: int = 8
    suggest_min_chars: int = 2

    # IANA zone for the surge hour; empty string means server local time
    timezone: str = ""

    @field_validator("geocode_spacing_s")
    @classmethod
    def _respect_geocoder_policy(cls, v: float) -> float:
        if v < MIN_GEOCODE_SPACING_S:
            raise ValueError(
                f"geocode_spacing_s must be >= {MIN_GEOCODE_SPACING_S} (geocoder usage policy)"
            )
        return v


settings = Settings()
