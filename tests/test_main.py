from fastapi.testclient import TestClient


def test_health(client: TestClient):
    r = client.get("/api/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    assert "timestamp" in body


def test_unknown_route_is_404(client: TestClient):
    r = client.get("/api/nothing-here")
    assert r.status_code == 404
