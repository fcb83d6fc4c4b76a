from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from requests.exceptions import RequestException

from fare_compare.contracts.geo_contract import Coordinate
from fare_compare.core.models import Suggestion
from fare_compare.errors import TransientUpstreamFailure
from fare_compare.providers.base import Geocoder
from fare_compare.providers.http import HTTPClient


def _parse_coordinate(candidate: Dict[str, Any]) -> Optional[Coordinate]:
    """Nominatim returns lat/lon as text; None if missing or unparseable."""
    try:
        return Coordinate(float(candidate["lat"]), float(candidate["lon"]))
    except (KeyError, TypeError, ValueError):
        return None


@dataclass
class NominatimGeocoder(Geocoder):
    """
    OpenStreetMap Nominatim /search.

    Usage policy: identifiable User-Agent, at most ~1 request/second.
    Spacing between calls is the pipeline's job; this class issues exactly
    one request per call and never retries.
    """

    base_url: str = "https://nominatim.openstreetmap.org"
    user_agent: str = "CabCompareFareApp/1.0 (educational/portfolio project)"
    timeout_s: float = 10.0
    suggest_timeout_s: float = 8.0

    name = "nominatim"

    def __post_init__(self) -> None:
        self.http = HTTPClient(
            user_agent=self.user_agent,
            timeout_s=self.timeout_s,
            extra_headers={"Accept-Language": "en"},
        )

    def _search(self, query: str, limit: int, timeout_s: float) -> List[Dict[str, Any]]:
        url = f"{self.base_url.rstrip('/')}/search"
        params = {"q": query, "format": "json", "addressdetails": 1, "limit": limit}
        try:
            data = self.http.get_json(url, params=params, timeout_s=timeout_s)
        except (RequestException, ValueError) as e:
            raise TransientUpstreamFailure(self.name, f"{type(e).__name__}: {e}") from e
        if not isinstance(data, list):
            raise TransientUpstreamFailure(self.name, "unexpected payload")
        return [c for c in data if isinstance(c, dict)]

    def geocode(self, query: str) -> Optional[Coordinate]:
        candidates = self._search(query, limit=1, timeout_s=self.timeout_s)
        if not candidates:
            return None
        return _parse_coordinate(candidates[0])

    def search(self, query: str, limit: int = 8) -> List[Suggestion]:
        out: List[Suggestion] = []
        for c in self._search(query, limit=limit, timeout_s=self.suggest_timeout_s):
            label = c.get("display_name") or ""
            coord = _parse_coordinate(c)
            if not label or coord is None:
                continue
            ident = c.get("place_id") or c.get("osm_id") or uuid.uuid4().hex
            out.append(
                Suggestion(
                    id=str(ident),
                    label=label,
                    lat=coord.latitude,
                    lon=coord.longitude,
                )
            )
        return out
