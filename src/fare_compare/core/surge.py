from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional
from zoneinfo import ZoneInfo

SURGE_CAP = 2.0
PEAK_SURGE = 1.3
NIGHT_SURGE = 1.2


def multiplier_for_hour(hour: int) -> float:
    """
    Time-of-day demand bands (inclusive):
      08-10, 17-20 -> 1.3 (commute peaks)
      22-05        -> 1.2 (night)
      otherwise    -> 1.0
    """
    if 8 <= hour <= 10 or 17 <= hour <= 20:
        surge = PEAK_SURGE
    elif hour >= 22 or hour <= 5:
        surge = NIGHT_SURGE
    else:
        surge = 1.0
    return min(surge, SURGE_CAP)


class SurgePolicy:
    def __init__(
        self,
        tz_name: Optional[str] = None,
        clock: Optional[Callable[[Optional[ZoneInfo]], datetime]] = None,
    ):
        self.tz = ZoneInfo(tz_name) if tz_name else None
        self._clock = clock or datetime.now

    def current_hour(self) -> int:
        return self._clock(self.tz).hour

    def current_multiplier(self) -> float:
        return multiplier_for_hour(self.current_hour())
