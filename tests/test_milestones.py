from fastapi.testclient import TestClient


def _completed_events(client: TestClient):
    return [a for a in client.get("/api/activities?limit=100").json() if a["type"] == "milestone_completed"]


def test_complete_milestone_once(auth_client: TestClient, make_goal):
    goal = make_goal(milestones=["Run 1k"])
    milestone = goal["milestones"][0]

    r = auth_client.put(f"/api/milestones/{milestone['id']}", json={"isCompleted": True})
    assert r.status_code == 200
    body = r.json()
    assert body["isCompleted"] is True
    assert body["completedAt"] is not None

    events = _completed_events(auth_client)
    assert len(events) == 1
    assert events[0]["milestoneId"] == milestone["id"]
    assert events[0]["data"]["milestoneTitle"] == "Run 1k"

    # Re-sending the same value is a no-op
    auth_client.put(f"/api/milestones/{milestone['id']}", json={"isCompleted": True})
    assert len(_completed_events(auth_client)) == 1


def test_reopen_and_complete_again(auth_client: TestClient, make_goal):
    goal = make_goal(milestones=["Run 1k"])
    mid = goal["milestones"][0]["id"]

    auth_client.put(f"/api/milestones/{mid}", json={"isCompleted": True})
    r = auth_client.put(f"/api/milestones/{mid}", json={"isCompleted": False})
    assert r.json()["isCompleted"] is False
    assert r.json()["completedAt"] is None

    auth_client.put(f"/api/milestones/{mid}", json={"isCompleted": True})
    assert len(_completed_events(auth_client)) == 2


def test_rename_milestone(auth_client: TestClient, make_goal):
    goal = make_goal(milestones=["Run 1k"])
    mid = goal["milestones"][0]["id"]
    r = auth_client.put(f"/api/milestones/{mid}", json={"title": "Run 2k", "order": 3})
    assert r.status_code == 200
    assert r.json()["title"] == "Run 2k"
    assert r.json()["order"] == 3
    assert _completed_events(auth_client) == []


def test_milestone_of_foreign_goal(make_goal, login_as):
    goal = make_goal(milestones=["Run 1k"])
    stranger = login_as("stranger")
    r = stranger.put(f"/api/milestones/{goal['milestones'][0]['id']}", json={"isCompleted": True})
    assert r.status_code == 404


def test_unknown_milestone(auth_client: TestClient):
    assert auth_client.put("/api/milestones/nope", json={"isCompleted": True}).status_code == 404
