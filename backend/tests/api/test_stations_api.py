"""API tests: station CRUD endpoints (client fixture overrides get_db)."""
from datetime import datetime, timedelta

import pytest

from repositories.station_repository import count_stations, create_station
from utils.security import create_access_token

pytestmark = pytest.mark.api


def _seed(db_session, name, status="active", connector_type="CCS", power_output=50.0):
    return create_station(
        db_session,
        name=name,
        latitude=10.0,
        longitude=20.0,
        power_output=power_output,
        connector_type=connector_type,
        status=status,
    )


def test_station_lifecycle(client, auth_headers, station_body):
    """Create -> list -> update powerOutput -> get -> delete -> get 404."""
    r = client.post("/api/stations", json=station_body, headers=auth_headers)
    assert r.status_code == 201
    created = r.json()
    station_id = created["id"]
    assert station_id
    assert created["location"] == {"latitude": 40.0, "longitude": -73.0, "address": None}
    assert created["powerOutput"] == 50
    assert "createdAt" in created and "updatedAt" in created

    ids = [s["id"] for s in client.get("/api/stations").json()]
    assert station_id in ids

    r = client.put(f"/api/stations/{station_id}", json={"powerOutput": 75}, headers=auth_headers)
    assert r.status_code == 200
    assert client.get(f"/api/stations/{station_id}").json()["powerOutput"] == 75

    r = client.delete(f"/api/stations/{station_id}", headers=auth_headers)
    assert r.status_code == 204
    r = client.get(f"/api/stations/{station_id}")
    assert r.status_code == 404
    assert r.json() == {"message": "Station not found"}


def test_create_then_get_returns_equal_record(client, auth_headers):
    """GET after create returns the same record, including the address."""
    body = {
        "name": "Harbor Lot",
        "location": {"latitude": -33.86, "longitude": 151.21, "address": "1 Harbor Rd"},
        "status": "maintenance",
        "powerOutput": 22.5,
        "connectorType": "Type2",
    }
    created = client.post("/api/stations", json=body, headers=auth_headers).json()
    fetched = client.get(f"/api/stations/{created['id']}").json()
    assert fetched == created
    assert fetched["location"]["address"] == "1 Harbor Rd"
    assert fetched["status"] == "maintenance"


def test_create_defaults_status_to_active(client, auth_headers, station_body):
    """Omitted status defaults to active."""
    del station_body["status"]
    r = client.post("/api/stations", json=station_body, headers=auth_headers)
    assert r.status_code == 201
    assert r.json()["status"] == "active"


@pytest.mark.parametrize(
    "mutate, field",
    [
        (lambda b: b.update(location={"latitude": 91, "longitude": -73.0}), "location.latitude"),
        (lambda b: b.update(location={"latitude": -90.5, "longitude": -73.0}), "location.latitude"),
        (lambda b: b.update(location={"latitude": 40.0, "longitude": 181}), "location.longitude"),
        (lambda b: b.update(powerOutput=0), "powerOutput"),
        (lambda b: b.update(powerOutput=-5), "powerOutput"),
        (lambda b: b.update(name=""), "name"),
        (lambda b: b.update(name="   "), "name"),
        (lambda b: b.update(connectorType="Schuko"), "connectorType"),
        (lambda b: b.update(status="broken"), "status"),
        (lambda b: b.pop("location"), "location"),
    ],
)
def test_create_invalid_input_400(client, db_session, auth_headers, station_body, mutate, field):
    """Invalid input returns 400 listing the offending field and persists nothing."""
    mutate(station_body)
    r = client.post("/api/stations", json=station_body, headers=auth_headers)
    assert r.status_code == 400
    data = r.json()
    assert data["message"] == "Validation failed"
    assert field in [e["field"] for e in data["errors"]]
    assert count_stations(db_session) == 0


def test_create_without_token_401(client, db_session, station_body):
    """POST /api/stations without a token returns 401 and creates nothing."""
    r = client.post("/api/stations", json=station_body)
    assert r.status_code == 401
    assert count_stations(db_session) == 0


def test_create_with_expired_token_401(client, db_session, user, station_body):
    """POST /api/stations with an expired token returns 401 and creates nothing."""
    token = create_access_token(user.id, user.role, expires_delta=timedelta(minutes=-1))
    r = client.post("/api/stations", json=station_body, headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401
    assert count_stations(db_session) == 0


def test_create_with_malformed_token_401(client, db_session, station_body):
    """POST /api/stations with a garbage token returns 401 and creates nothing."""
    r = client.post("/api/stations", json=station_body, headers={"Authorization": "Bearer abc.def.ghi"})
    assert r.status_code == 401
    assert count_stations(db_session) == 0


def test_get_station_404(client):
    """GET /api/stations/{id} returns 404 for unknown id."""
    r = client.get("/api/stations/unknown-station")
    assert r.status_code == 404


def test_list_stations_insertion_order(client, db_session):
    """GET /api/stations returns stations in insertion order."""
    for name in ("First", "Second", "Third"):
        _seed(db_session, name)
    names = [s["name"] for s in client.get("/api/stations").json()]
    assert names == ["First", "Second", "Third"]


def test_list_stations_filters(client, db_session):
    """status and connectorType query params filter the list, alone and combined."""
    _seed(db_session, "A", status="active", connector_type="CCS")
    _seed(db_session, "B", status="inactive", connector_type="CCS")
    _seed(db_session, "C", status="active", connector_type="CHAdeMO")

    def names(params):
        return sorted(s["name"] for s in client.get("/api/stations", params=params).json())

    assert names({"status": "active"}) == ["A", "C"]
    assert names({"connectorType": "CCS"}) == ["A", "B"]
    assert names({"status": "active", "connectorType": "CHAdeMO"}) == ["C"]
    assert names({"status": "maintenance"}) == []


def test_list_stations_unknown_filter_value_400(client):
    """An unknown status filter is a validation error."""
    r = client.get("/api/stations", params={"status": "exploded"})
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "status"


def test_update_keeps_omitted_fields(client, db_session, auth_headers):
    """PUT with some fields replaces only those; others keep their stored values."""
    station = _seed(db_session, "Keep Me", connector_type="Tesla")
    r = client.put(
        f"/api/stations/{station.id}",
        json={"status": "maintenance", "name": "Renamed"},
        headers=auth_headers,
    )
    assert r.status_code == 200
    data = r.json()
    assert data["name"] == "Renamed"
    assert data["status"] == "maintenance"
    assert data["connectorType"] == "Tesla"
    assert data["powerOutput"] == 50.0


def test_update_replaces_location_as_a_whole(client, auth_headers, station_body):
    """A provided location replaces the stored one; its omitted address becomes null."""
    station_body["location"]["address"] = "Old Address"
    station_id = client.post("/api/stations", json=station_body, headers=auth_headers).json()["id"]
    r = client.put(
        f"/api/stations/{station_id}",
        json={"location": {"latitude": 41.5, "longitude": -72.0}},
        headers=auth_headers,
    )
    assert r.status_code == 200
    assert r.json()["location"] == {"latitude": 41.5, "longitude": -72.0, "address": None}


def test_update_invalid_value_400_and_unchanged(client, db_session, auth_headers):
    """PUT re-validates: bad power output is rejected and the station is untouched."""
    station = _seed(db_session, "Stable", power_output=11.0)
    r = client.put(f"/api/stations/{station.id}", json={"powerOutput": 0}, headers=auth_headers)
    assert r.status_code == 400
    assert client.get(f"/api/stations/{station.id}").json()["powerOutput"] == 11.0


def test_update_null_required_field_400(client, db_session, auth_headers):
    """Explicit null for a required field is rejected."""
    station = _seed(db_session, "No Nulls")
    r = client.put(f"/api/stations/{station.id}", json={"name": None}, headers=auth_headers)
    assert r.status_code == 400


def test_update_unknown_station_404(client, auth_headers):
    """PUT /api/stations/{id} returns 404 for unknown id."""
    r = client.put("/api/stations/missing", json={"powerOutput": 10}, headers=auth_headers)
    assert r.status_code == 404


def test_update_without_token_401(client, db_session):
    """PUT without a token returns 401 and leaves the station unchanged."""
    station = _seed(db_session, "Guarded")
    r = client.put(f"/api/stations/{station.id}", json={"name": "Hacked"})
    assert r.status_code == 401
    assert client.get(f"/api/stations/{station.id}").json()["name"] == "Guarded"


def test_delete_unknown_station_404(client, auth_headers):
    """DELETE /api/stations/{id} returns 404 for unknown id."""
    r = client.delete("/api/stations/missing", headers=auth_headers)
    assert r.status_code == 404


def test_delete_without_token_401(client, db_session):
    """DELETE without a token returns 401 and the station still exists."""
    station = _seed(db_session, "Still Here")
    r = client.delete(f"/api/stations/{station.id}")
    assert r.status_code == 401
    assert client.get(f"/api/stations/{station.id}").status_code == 200


def _parse_ts(value):
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def test_timestamps_serialized_with_utc_offset(client, auth_headers, station_body):
    """createdAt and updatedAt carry an explicit UTC offset."""
    created = client.post("/api/stations", json=station_body, headers=auth_headers).json()
    fetched = client.get(f"/api/stations/{created['id']}").json()
    for body in (created, fetched):
        assert body["createdAt"].endswith(("Z", "+00:00"))
        assert body["updatedAt"].endswith(("Z", "+00:00"))


def test_put_with_same_values_bumps_updated_at(client, auth_headers, station_body):
    """A PUT that repeats the stored values still advances updatedAt."""
    created = client.post("/api/stations", json=station_body, headers=auth_headers).json()
    r = client.put(
        f"/api/stations/{created['id']}",
        json={"powerOutput": station_body["powerOutput"]},
        headers=auth_headers,
    )
    assert r.status_code == 200
    assert _parse_ts(r.json()["updatedAt"]) > _parse_ts(created["updatedAt"])
    assert r.json()["createdAt"] == created["createdAt"]


@pytest.mark.parametrize(
    "patch",
    [
        {"powerOutput": True},
        {"location": {"latitude": True, "longitude": 10.0}},
        {"location": {"latitude": 10.0, "longitude": False}},
    ],
)
def test_create_rejects_booleans_for_numbers(client, db_session, auth_headers, station_body, patch):
    """Booleans are not accepted where a number is required."""
    r = client.post("/api/stations", json={**station_body, **patch}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["message"] == "Validation failed"
    assert count_stations(db_session) == 0
