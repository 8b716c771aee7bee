from fastapi.testclient import TestClient


def test_no_checkin_yet(auth_client: TestClient):
    r = auth_client.get("/api/checkin/today")
    assert r.status_code == 200
    assert r.json() is None


def test_checkin_once_per_day(auth_client: TestClient):
    r = auth_client.post("/api/checkin", json={"mood": "great", "notes": "Slept well"})
    assert r.status_code == 200
    first = r.json()
    assert first["mood"] == "great"

    r = auth_client.post("/api/checkin", json={"mood": "okay"})
    assert r.status_code == 409
    assert r.json()["error"] == "conflict"

    today = auth_client.get("/api/checkin/today").json()
    assert today["id"] == first["id"]
    assert today["mood"] == "great"


def test_checkin_records_activity(auth_client: TestClient):
    auth_client.post("/api/checkin", json={"mood": "good"})
    feed = auth_client.get("/api/activities").json()
    assert feed[0]["type"] == "daily_checkin"
    assert feed[0]["data"] == {"mood": "good"}
    assert feed[0]["user"]["id"] == "demo-user"


def test_invalid_mood(auth_client: TestClient):
    r = auth_client.post("/api/checkin", json={"mood": "ecstatic"})
    assert r.status_code == 400
