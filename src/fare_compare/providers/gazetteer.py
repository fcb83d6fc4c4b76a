"""Static fallback gazetteer used when the live geocoder fails.

Entries are evaluated in order and the first match wins, so compound
landmarks ("coimbatore airport") must stay ahead of the bare city names.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional, Pattern, Tuple

from fare_compare.contracts.geo_contract import Coordinate


@dataclass(frozen=True)
class GazetteerEntry:
    pattern: Pattern[str]
    coordinate: Coordinate

    def matches(self, query: str) -> bool:
        return self.pattern.search(query) is not None


def _entry(regex: str, lat: float, lon: float) -> GazetteerEntry:
    return GazetteerEntry(re.compile(regex, re.IGNORECASE), Coordinate(lat, lon))


DEFAULT_ENTRIES: Tuple[GazetteerEntry, ...] = (
    # Landmarks first
    _entry(r"coimbatore.*airport|airport.*coimbatore", 11.0308, 77.0432),
    _entry(r"chennai.*airport|airport.*chennai|madras.*airport", 12.9944, 80.1807),
    _entry(r"bangalore.*airport|airport.*bangalore|bengaluru.*airport", 13.1986, 77.7066),
    _entry(r"psg.*institute|psg.*technology", 11.0168, 76.9558),
    # Cities
    _entry(r"coimbatore|kovai", 11.0168, 76.9558),
    _entry(r"chennai|madras", 13.0827, 80.2707),
    _entry(r"salem", 11.6643, 78.146),
    _entry(r"bangalore|bengaluru", 12.9716, 77.5946),
    _entry(r"mumbai|bombay", 19.076, 72.8777),
    _entry(r"delhi|new delhi", 28.6139, 77.209),
    _entry(r"hyderabad", 17.385, 78.4867),
)


class Gazetteer:
    """Read-only, process-wide; safe to share across concurrent requests."""

    def __init__(self, entries: Iterable[GazetteerEntry] = DEFAULT_ENTRIES):
        self._entries: Tuple[GazetteerEntry, ...] = tuple(entries)

    @property
    def entries(self) -> Tuple[GazetteerEntry, ...]:
        return self._entries

    def lookup(self, query: str) -> Optional[Coordinate]:
        q = (query or "").strip()
        if not q:
            return None
        for entry in self._entries:
            if entry.matches(q):
                return entry.coordinate
        return None

    def __len__(self) -> int:
        return len(self._entries)
