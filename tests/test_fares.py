import pytest

from fare_compare.core.fares import (
    DEFAULT_MIN_FARE,
    MIN_FARE,
    OUTSTATION_FACTOR,
    RATE_CARD,
    FareEngine,
    is_outstation,
    min_fare,
)
from fare_compare.core.models import Provider


def _price(quotes, provider, vehicle_class):
    for q in quotes:
        if q.provider == provider and q.vehicle_class == vehicle_class:
            return q.price
    raise KeyError((provider, vehicle_class))


def test_city_trip_red_taxi_micro():
    # 60 + 5*11 + 15*1 = 130, floor of 60 not binding
    quotes = FareEngine().compute_fares(5, 15, 1.0)
    assert _price(quotes, Provider.RED_TAXI, "micro") == pytest.approx(130.0, abs=0.01)


def test_one_quote_per_provider_class():
    quotes = FareEngine().compute_fares(10, 20, 1.0)
    keys = [(q.provider, q.vehicle_class) for q in quotes]
    assert len(keys) == len(set(keys)) == 11
    assert {q.vehicle_class for q in quotes if q.provider == Provider.OLA} == {
        "mini", "primeSedan", "primeSUV", "auto",
    }


def test_rate_card_constants():
    uber_auto = RATE_CARD[Provider.UBER]["auto"]
    assert (uber_auto.base, uber_auto.per_km, uber_auto.per_min) == (35, 10, 0.8)
    sedan = RATE_CARD[Provider.RED_TAXI]["sedan"]
    assert (sedan.base, sedan.per_km, sedan.per_min) == (80, 14, 1.5)


def test_surge_applies_multiplicatively():
    quotes = FareEngine().compute_fares(5, 15, 1.3)
    assert _price(quotes, Provider.RED_TAXI, "micro") == pytest.approx(169.0, abs=0.01)


def test_outstation_markup_applied_once():
    quotes = FareEngine().compute_fares(50, 100, 1.2)
    raw = 50 + 50 * 12 + 100 * 1  # ola mini
    assert _price(quotes, Provider.OLA, "mini") == pytest.approx(raw * 1.2 * OUTSTATION_FACTOR, abs=0.01)


@pytest.mark.parametrize("distance,expected", [(40, False), (40.01, True), (0, False), (260, True)])
def test_outstation_boundary(distance, expected):
    assert is_outstation(distance) is expected


def test_outstation_boundary_changes_price():
    at_40 = _price(FareEngine().compute_fares(40, 60, 1.0), Provider.UBER, "uberGo")
    past_40 = _price(FareEngine().compute_fares(40.01, 60, 1.0), Provider.UBER, "uberGo")
    assert at_40 == pytest.approx(55 + 40 * 13 + 60, abs=0.01)
    assert past_40 == pytest.approx((55 + 40.01 * 13 + 60) * 1.15, abs=0.01)


@pytest.mark.parametrize("distance,duration", [(0, 0), (0.5, 5), (3, 7), (120, 300)])
def test_prices_never_below_minimum(distance, duration):
    for q in FareEngine().compute_fares(distance, duration, 1.0):
        assert q.price >= min_fare(q.vehicle_class) - 0.01


def test_minimum_fare_binds_on_zero_trip():
    quotes = FareEngine().compute_fares(0, 0, 1.0)
    # raw micro = 60 = floor; raw ola auto = 30 = floor
    assert _price(quotes, Provider.RED_TAXI, "micro") == 60
    assert _price(quotes, Provider.OLA, "auto") == 30


def test_unknown_class_defaults_to_forty():
    assert "rickshaw" not in MIN_FARE
    assert min_fare("rickshaw") == DEFAULT_MIN_FARE == 40


def test_deterministic():
    a = FareEngine().compute_fares(12.34, 27.5, 1.2)
    b = FareEngine().compute_fares(12.34, 27.5, 1.2)
    assert [q.model_dump() for q in a] == [q.model_dump() for q in b]


def test_prices_rounded_to_cents():
    for q in FareEngine().compute_fares(7.777, 13.333, 1.3):
        assert round(q.price, 2) == q.price
