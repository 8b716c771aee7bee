import asyncio
from datetime import timedelta

from fastapi.testclient import TestClient

from app.utils.timeutils import utcnow


def test_log_fitness(auth_client: TestClient):
    assert auth_client.get("/api/fitness/today").json() is None

    r = auth_client.post(
        "/api/fitness",
        json={"steps": 10432, "distance": 7800, "calories": 420, "activeMinutes": 65, "heartRate": 72, "weight": 70500},
    )
    assert r.status_code == 200
    entry = r.json()
    assert entry["steps"] == 10432
    assert entry["distance"] == 7800
    assert entry["activeMinutes"] == 65
    assert entry["weight"] == 70500

    today = auth_client.get("/api/fitness/today").json()
    assert today["id"] == entry["id"]


def test_second_entry_same_day_conflicts(auth_client: TestClient):
    auth_client.post("/api/fitness", json={"steps": 100})
    r = auth_client.post("/api/fitness", json={"steps": 200})
    assert r.status_code == 409
    assert auth_client.get("/api/fitness/today").json()["steps"] == 100


def test_fitness_validation(auth_client: TestClient):
    assert auth_client.post("/api/fitness", json={"steps": -1}).status_code == 400
    assert auth_client.post("/api/fitness", json={"heartRate": 0}).status_code == 400


def test_update_fitness(auth_client: TestClient, login_as):
    entry = auth_client.post("/api/fitness", json={"steps": 100, "notes": "Morning walk"}).json()

    r = auth_client.put(f"/api/fitness/{entry['id']}", json={"steps": 6000, "notes": None})
    assert r.status_code == 200
    assert r.json()["steps"] == 6000
    assert r.json()["notes"] is None

    stranger = login_as("stranger")
    assert stranger.put(f"/api/fitness/{entry['id']}", json={"steps": 1}).status_code == 404


def test_weekly_window(auth_client: TestClient, storage):
    entry = auth_client.post("/api/fitness", json={"steps": 100}).json()

    async def add_old():
        old = await storage.create_fitness_entry("demo-user", {"steps": 50})
        storage.fitness[old.id] = old.model_copy(update={"date": utcnow() - timedelta(days=10)})

    asyncio.run(add_old())

    week = auth_client.get("/api/fitness/weekly").json()
    assert [e["id"] for e in week] == [entry["id"]]
    assert len(auth_client.get("/api/fitness/weekly?days=30").json()) == 2


def test_weekly_days_bounds(auth_client: TestClient):
    assert auth_client.get("/api/fitness/weekly?days=0").status_code == 400
    assert auth_client.get("/api/fitness/weekly?days=366").status_code == 400
