import pytest
from fastapi.testclient import TestClient

from fare_compare import api
from fare_compare.contracts.geo_contract import Coordinate


@pytest.fixture
def client(make_pipeline, fake_geocoder_cls):
    geocoder = fake_geocoder_cls({"salem junction": Coordinate(11.67, 78.11)})
    api.set_pipeline(make_pipeline(geocoder))
    yield TestClient(api.app)
    api.set_pipeline(None)


def test_calculate_response_shape(client):
    resp = client.post("/calculate", json={"pickup": "Chennai", "drop": "Salem"})
    assert resp.status_code == 200
    body = resp.json()

    assert body["pickup"] == {"lat": 13.0827, "lon": 80.2707}
    assert body["drop"] == {"lat": 11.6643, "lon": 78.146}
    assert body["routeGeoJson"]["type"] == "LineString"
    assert body["routeGeoJson"]["coordinates"] == [[80.2707, 13.0827], [78.146, 11.6643]]
    assert body["isOutstation"] is True
    assert body["estimated"] is True
    assert body["surgeMultiplier"] == 1.0
    assert round(body["distanceKm"], 2) == body["distanceKm"]
    assert set(body["fares"]) == {"redTaxi", "ola", "uber"}
    assert set(body["fares"]["uber"]) == {"uberGo", "premier", "uberXL", "auto"}


def test_calculate_blank_input_is_client_error(client):
    resp = client.post("/calculate", json={"pickup": "  ", "drop": "Salem"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Please select valid pickup/drop location."}


def test_calculate_non_string_input_is_blank(client):
    resp = client.post("/calculate", json={"pickup": 12, "drop": "Salem"})
    assert resp.status_code == 400


def test_calculate_unknown_location_names_it(client):
    resp = client.post("/calculate", json={"pickup": "Chennai", "drop": "Atlantis"})
    assert resp.status_code == 400
    assert "Atlantis" in resp.json()["error"]


def test_suggest(client):
    resp = client.get("/suggest", params={"q": "salem"})
    assert resp.status_code == 200
    assert [s["label"] for s in resp.json()["suggestions"]] == ["salem junction"]


def test_suggest_short_query(client):
    assert client.get("/suggest", params={"q": "s"}).json() == {"suggestions": []}
    assert client.get("/suggest").json() == {"suggestions": []}


def test_suggest_upstream_down_is_empty_200(make_pipeline, fake_geocoder_cls):
    api.set_pipeline(make_pipeline(fake_geocoder_cls(down=True)))
    try:
        resp = TestClient(api.app).get("/suggest", params={"q": "chennai"})
    finally:
        api.set_pipeline(None)
    assert resp.status_code == 200
    assert resp.json() == {"suggestions": []}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok", "geocoder": "fake", "router": "fake"}
