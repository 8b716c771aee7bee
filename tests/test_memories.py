import os

from fastapi.testclient import TestClient

from app.config import settings

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def _upload(client: TestClient, content=PNG, content_type="image/png", **fields):
    return client.post(
        "/api/memories/upload",
        files={"photo": ("finish-line.png", content, content_type)},
        data=fields,
    )


def test_upload_memory(auth_client: TestClient, make_goal):
    goal = make_goal()
    r = _upload(auth_client, caption="Finish line", goalId=goal["id"], tags="race, park ,")
    assert r.status_code == 200, r.text
    memory = r.json()
    assert memory["caption"] == "Finish line"
    assert memory["goalId"] == goal["id"]
    assert memory["tags"] == ["race", "park"]
    assert memory["photoUrl"].startswith(settings.UPLOAD_URL_PREFIX + "/")
    assert memory["photoUrl"].endswith(".png")

    stored = os.path.join(settings.UPLOAD_DIR, memory["photoUrl"].rsplit("/", 1)[1])
    with open(stored, "rb") as f:
        assert f.read() == PNG

    feed = auth_client.get("/api/activities").json()
    assert feed[0]["type"] == "photo_uploaded"
    assert feed[0]["data"]["goalTitle"] == "Run 5k"


def test_upload_rejects_non_images(auth_client: TestClient):
    r = _upload(auth_client, content=b"hello", content_type="text/plain")
    assert r.status_code == 400
    assert r.json()["error"] == "upload"


def test_upload_rejects_large_files(auth_client: TestClient, monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", 32)
    r = _upload(auth_client)
    assert r.status_code == 400
    assert r.json() == {"message": "File too large", "error": "upload"}


def test_upload_requires_photo(auth_client: TestClient):
    r = auth_client.post("/api/memories/upload", data={"caption": "No file"})
    assert r.status_code == 400
    assert r.json()["error"] == "validation"


def test_upload_to_foreign_goal(make_goal, login_as):
    goal = make_goal()
    stranger = login_as("stranger")
    assert _upload(stranger, goalId=goal["id"]).status_code == 404


def test_list_memories_by_goal(auth_client: TestClient, make_goal):
    goal = make_goal()
    _upload(auth_client, caption="With goal", goalId=goal["id"])
    _upload(auth_client, caption="Loose")

    everything = auth_client.get("/api/memories").json()
    assert [m["caption"] for m in everything] == ["Loose", "With goal"]

    scoped = auth_client.get(f"/api/memories?goalId={goal['id']}").json()
    assert [m["caption"] for m in scoped] == ["With goal"]


def test_delete_memory(auth_client: TestClient, login_as):
    memory = _upload(auth_client).json()
    stranger = login_as("stranger")
    assert stranger.delete(f"/api/memories/{memory['id']}").status_code == 404

    r = auth_client.delete(f"/api/memories/{memory['id']}")
    assert r.status_code == 200
    assert r.json() == {"success": True}
    assert auth_client.get("/api/memories").json() == []
    assert auth_client.delete(f"/api/memories/{memory['id']}").status_code == 404


def test_deleting_goal_keeps_memory(auth_client: TestClient, make_goal):
    goal = make_goal()
    _upload(auth_client, goalId=goal["id"])
    auth_client.delete(f"/api/goals/{goal['id']}")

    memories = auth_client.get("/api/memories").json()
    assert len(memories) == 1
    assert memories[0]["goalId"] is None
