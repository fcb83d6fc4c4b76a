"""Fare table: linear per-class pricing with surge, outstation markup and minimums."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping

from fare_compare.core.models import FareQuote, Provider

OUTSTATION_KM = 40.0
OUTSTATION_FACTOR = 1.15
DEFAULT_MIN_FARE = 40.0


@dataclass(frozen=True)
class Rate:
    base: float
    per_km: float
    per_min: float

    def raw_fare(self, distance_km: float, duration_min: float) -> float:
        return self.base + distance_km * self.per_km + duration_min * self.per_min


RATE_CARD: Mapping[Provider, Mapping[str, Rate]] = {
    Provider.RED_TAXI: {
        "micro": Rate(60, 11, 1),
        "sedan": Rate(80, 14, 1.5),
        "suv": Rate(100, 18, 2),
    },
    Provider.OLA: {
        "mini": Rate(50, 12, 1),
        "primeSedan": Rate(75, 15, 1.5),
        "primeSUV": Rate(95, 20, 2),
        "auto": Rate(30, 9, 0.8),
    },
    Provider.UBER: {
        "uberGo": Rate(55, 13, 1),
        "premier": Rate(85, 16, 1.5),
        "uberXL": Rate(100, 19, 2),
        "auto": Rate(35, 10, 0.8),
    },
}

# Keyed by class name only; Ola and Uber "auto" share a floor
MIN_FARE: Mapping[str, float] = {
    "micro": 60,
    "sedan": 80,
    "suv": 100,
    "mini": 50,
    "primeSedan": 75,
    "primeSUV": 95,
    "auto": 30,
    "uberGo": 55,
    "premier": 85,
    "uberXL": 100,
}


def is_outstation(distance_km: float) -> bool:
    return distance_km > OUTSTATION_KM


def min_fare(vehicle_class: str) -> float:
    return MIN_FARE.get(vehicle_class, DEFAULT_MIN_FARE)


class FareEngine:
    def __init__(self, rate_card: Mapping[Provider, Mapping[str, Rate]] = RATE_CARD):
        self.rate_card = rate_card

    def compute_fares(
        self, distance_km: float, duration_min: float, surge: float
    ) -> List[FareQuote]:
        """
        price = round(max(raw * surge * outstation, min_fare[class]), 2)

        Inputs are validated upstream (finite, non-negative).
        """
        outstation = OUTSTATION_FACTOR if is_outstation(distance_km) else 1.0
        quotes: List[FareQuote] = []
        for provider, classes in self.rate_card.items():
            for vehicle_class, rate in classes.items():
                after_surge = rate.raw_fare(distance_km, duration_min) * surge * outstation
                price = max(after_surge, min_fare(vehicle_class))
                quotes.append(
                    FareQuote(provider=provider, vehicle_class=vehicle_class, price=round(price, 2))
                )
        return quotes
