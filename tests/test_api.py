from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from brewhouse.api import create_app
from tests.conftest import run


@pytest.fixture
def client(config):
    app = create_app(config)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def orchestrator(client):
    return client.app.state.orchestrator


def test_health(client):
    body = client.get("/api/health").json()
    assert body["status"] == "healthy"
    assert body["sampler"]["state"] == "idle"


@pytest.mark.parametrize("process", ["gaerung", "maischen", "hopfenkochen"])
def test_sensor_data_current_reading(client, process):
    resp = client.get(f"/api/sensor-data/{process}")
    assert resp.status_code == 200
    body = resp.json()
    assert body["process"] == process
    assert isinstance(body["data"]["temperatur"], float)
    assert "timestamp" in body


def test_sensor_data_unknown_process(client):
    resp = client.get("/api/sensor-data/lagering")
    assert resp.status_code == 404
    assert resp.json()["error"] == "UnknownProcess"


def test_sensor_data_is_not_persisted(client):
    client.get("/api/sensor-data/gaerung")
    assert client.get("/api/live/gaerung").json() == []


def test_live_returns_ascending_tail(client, orchestrator):
    t0 = datetime(2024, 5, 17, 8, 0, tzinfo=timezone.utc)
    for i in range(55):
        run(orchestrator.timeseries.append("maischen", {"temperatur": float(i)}, t0 + timedelta(seconds=5 * i)))

    body = client.get("/api/live/maischen").json()
    assert len(body) == 50
    assert body[0]["values"]["temperatur"] == 5.0
    assert body[-1]["values"]["temperatur"] == 54.0
    stamps = [datetime.fromisoformat(m["timestamp"]) for m in body]
    assert stamps == sorted(stamps)
    assert set(body[0]) == {"id", "process", "values", "timestamp"}


def test_live_unknown_process(client):
    assert client.get("/api/live/lagering").status_code == 404


def test_history_for_one_day(client, orchestrator):
    day = datetime(2024, 5, 17, tzinfo=timezone.utc)
    for at in (day - timedelta(minutes=1), day, day + timedelta(hours=12), day + timedelta(days=1)):
        run(orchestrator.timeseries.append("hopfenkochen", {"temperatur": 99.0}, at))

    body = client.get("/api/history/hopfenkochen/2024-05-17").json()
    assert [datetime.fromisoformat(m["timestamp"]) for m in body] == [day, day + timedelta(hours=12)]


def test_history_empty_day(client):
    resp = client.get("/api/history/gaerung/2020-01-01")
    assert resp.status_code == 200
    assert resp.json() == []


def test_history_invalid_date(client):
    resp = client.get("/api/history/gaerung/not-a-date")
    assert resp.status_code == 400
    assert resp.json()["error"] == "InvalidDate"


def test_history_unknown_process(client):
    assert client.get("/api/history/lagering/2024-05-17").status_code == 404


def test_storage_failure_maps_to_500(client, orchestrator, monkeypatch):
    from brewhouse.core.exceptions import StorageUnavailable

    async def broken(process, limit):
        raise StorageUnavailable("database is gone")

    monkeypatch.setattr(orchestrator.timeseries, "tail", broken)
    resp = client.get("/api/live/gaerung")
    assert resp.status_code == 500
    assert resp.json()["error"] == "StorageUnavailable"


def test_active_beer_is_seeded(client):
    body = client.get("/api/beer/active").json()
    assert body["name"] == "Weisse Bier"
    assert body["isActive"] is True


def test_beer_crud(client):
    created = client.post("/api/beer", json={"name": "Märzen", "type": "Lager", "isActive": False})
    assert created.status_code == 201
    beer_id = created.json()["id"]

    assert client.get(f"/api/beer/{beer_id}").json()["name"] == "Märzen"
    assert len(client.get("/api/beers").json()) == 3

    updated = client.put(f"/api/beer/{beer_id}", json={"description": "malzig"})
    assert updated.json()["description"] == "malzig"
    assert updated.json()["name"] == "Märzen"

    assert client.delete(f"/api/beer/{beer_id}").json() == {"message": "Beer deleted successfully"}
    assert client.get(f"/api/beer/{beer_id}").status_code == 404


@pytest.mark.parametrize("changes", [{"name": None}, {"type": None}, {"isActive": None}])
def test_beer_update_rejects_null_required_fields(client, changes):
    beer_id = client.get("/api/beer/active").json()["id"]
    resp = client.put(f"/api/beer/{beer_id}", json=changes)
    assert resp.status_code == 400
    assert resp.json()["error"] == "ValidationError"
    assert client.get(f"/api/beer/{beer_id}").json()["name"] == "Weisse Bier"


def test_history_last_representable_day(client):
    resp = client.get("/api/history/gaerung/9999-12-31")
    assert resp.status_code == 400
    assert resp.json()["error"] == "InvalidDate"


def test_no_active_beer(client):
    for beer in client.get("/api/beers").json():
        client.put(f"/api/beer/{beer['id']}", json={"isActive": False})
    assert client.get("/api/beer/active").status_code == 404


def test_review_flow(client):
    for stars in (5, 4):
        resp = client.post("/api/review/Weisse Bier", json={"sterne": stars})
        assert resp.status_code == 201
        assert resp.json() == {"message": "Review submitted"}

    assert client.get("/api/review/Weisse Bier").json() == {"anzahl": 2, "durchschnitt": 4.5}
    assert client.get("/api/review/Pilsner").json() == {"anzahl": 0, "durchschnitt": 0}


@pytest.mark.parametrize("payload", [{"sterne": 0}, {"sterne": 6}, {}, {"sterne": "five"}])
def test_review_invalid_rating(client, payload):
    resp = client.post("/api/review/Weisse Bier", json=payload)
    assert resp.status_code == 400
    assert resp.json()["error"] == "ValidationError"


def test_review_unknown_beer(client):
    assert client.post("/api/review/Kölsch", json={"sterne": 3}).status_code == 404
    assert client.get("/api/review/Kölsch").status_code == 404


def test_sampler_runs_when_enabled(config):
    app = create_app(replace(config, sampler_enabled=True))
    with TestClient(app) as c:
        orchestrator = c.app.state.orchestrator
        assert orchestrator.sampler.running
    assert not orchestrator.sampler.running


def test_frontend_fallback_serves_index(config, tmp_path):
    dist = tmp_path / "dist"
    dist.mkdir()
    (dist / "index.html").write_text("<html>brewhouse</html>")
    (dist / "app.js").write_text("console.log('hi')")

    with TestClient(create_app(replace(config, static_dir=str(dist)))) as c:
        assert "brewhouse" in c.get("/dashboard").text
        assert "console.log" in c.get("/app.js").text
        assert c.get("/api/unknown").status_code == 404
        assert c.get("/api/sensor-data/gaerung").status_code == 200
