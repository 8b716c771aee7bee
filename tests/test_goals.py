from fastapi.testclient import TestClient


def test_create_goal_with_milestones(auth_client: TestClient):
    r = auth_client.post(
        "/api/goals",
        json={
            "title": "Run 5k",
            "category": "health",
            "progress": 0,
            "milestones": ["Buy shoes", "Run 1k", "Run 3k"],
        },
    )
    assert r.status_code == 200
    goal = r.json()
    assert goal["title"] == "Run 5k"
    assert goal["userId"] == "demo-user"
    assert goal["isCompleted"] is False
    assert [m["title"] for m in goal["milestones"]] == ["Buy shoes", "Run 1k", "Run 3k"]
    assert [m["order"] for m in goal["milestones"]] == [0, 1, 2]
    assert goal["collaborators"] == []


def test_create_goal_records_activity(auth_client: TestClient, make_goal):
    goal = make_goal()
    feed = auth_client.get("/api/activities").json()
    assert len(feed) == 1
    assert feed[0]["type"] == "goal_created"
    assert feed[0]["goalId"] == goal["id"]
    assert feed[0]["data"] == {"goalTitle": "Run 5k"}


def test_create_goal_validation(auth_client: TestClient):
    r = auth_client.post("/api/goals", json={"title": "", "category": "health"})
    assert r.status_code == 400
    assert r.json()["error"] == "validation"

    r = auth_client.post("/api/goals", json={"title": "Run", "progress": 101})
    assert r.status_code == 400

    r = auth_client.post("/api/goals", json={"title": "Run", "bogus": True})
    assert r.status_code == 400


def test_list_goals_only_owned(auth_client: TestClient, make_goal, login_as):
    make_goal(title="Mine")
    other = login_as("other-user")
    other.post("/api/goals", json={"title": "Theirs"})

    titles = [g["title"] for g in auth_client.get("/api/goals").json()]
    assert titles == ["Mine"]


def test_get_goal_detail(auth_client: TestClient, make_goal):
    goal = make_goal(milestones=["Step one"])
    auth_client.put(f"/api/goals/{goal['id']}", json={"progress": 25})

    r = auth_client.get(f"/api/goals/{goal['id']}")
    assert r.status_code == 200
    detail = r.json()
    assert detail["progress"] == 25
    assert len(detail["milestones"]) == 1
    assert len(detail["progressEntries"]) == 1
    assert detail["progressEntries"][0]["previousProgress"] == 0
    assert detail["progressEntries"][0]["newProgress"] == 25


def test_get_missing_goal_is_404(auth_client: TestClient):
    r = auth_client.get("/api/goals/does-not-exist")
    assert r.status_code == 404
    assert r.json() == {"message": "Goal not found", "error": "not_found"}


def test_update_goal_fields(auth_client: TestClient, make_goal):
    goal = make_goal()
    r = auth_client.put(
        f"/api/goals/{goal['id']}",
        json={"title": "Run 10k", "isCompleted": True, "targetDate": "2030-01-01T00:00:00Z"},
    )
    assert r.status_code == 200
    updated = r.json()
    assert updated["title"] == "Run 10k"
    assert updated["isCompleted"] is True
    assert updated["targetDate"].startswith("2030-01-01")
    assert updated["category"] == "health"


def test_update_progress_writes_history(auth_client: TestClient, storage, make_goal):
    goal = make_goal()
    r = auth_client.put(f"/api/goals/{goal['id']}", json={"progress": 40})
    assert r.status_code == 200
    assert r.json()["progress"] == 40

    assert len(storage.progress_entries) == 1
    types = [a.type for a in storage.activities.values()]
    assert types.count("progress_updated") == 1


def test_update_progress_out_of_range(auth_client: TestClient, make_goal):
    goal = make_goal()
    assert auth_client.put(f"/api/goals/{goal['id']}", json={"progress": 150}).status_code == 400
    assert auth_client.put(f"/api/goals/{goal['id']}", json={"progress": -1}).status_code == 400


def test_other_user_cannot_touch_goal(make_goal, login_as):
    goal = make_goal()
    other = login_as("stranger")
    assert other.get(f"/api/goals/{goal['id']}").status_code == 404
    assert other.put(f"/api/goals/{goal['id']}", json={"title": "Hijack"}).status_code == 404
    assert other.delete(f"/api/goals/{goal['id']}").status_code == 404


def test_delete_goal_cascades(auth_client: TestClient, storage, make_goal, login_as):
    login_as("friend")
    goal = make_goal(milestones=["a", "b"])
    auth_client.post(f"/api/goals/{goal['id']}/collaborators", json={"userId": "friend"})
    auth_client.put(f"/api/goals/{goal['id']}", json={"progress": 10})

    r = auth_client.delete(f"/api/goals/{goal['id']}")
    assert r.status_code == 200
    assert r.json() == {"success": True}

    assert auth_client.get(f"/api/goals/{goal['id']}").status_code == 404
    assert storage.milestones == {}
    assert storage.collaborators == {}
    assert storage.progress_entries == {}
    # Feed history survives without the reference
    assert storage.activities
    assert all(a.goal_id is None for a in storage.activities.values())


def test_add_collaborator(auth_client: TestClient, make_goal, login_as):
    friend = login_as("friend", first_name="Friend")
    goal = make_goal(isTeamGoal=True)

    r = auth_client.post(f"/api/goals/{goal['id']}/collaborators", json={"userId": "friend"})
    assert r.status_code == 200
    collaborator = r.json()
    assert collaborator["userId"] == "friend"
    assert collaborator["role"] == "collaborator"

    # Collaborators can view and update the goal but not delete it
    assert friend.get(f"/api/goals/{goal['id']}").status_code == 200
    assert friend.put(f"/api/goals/{goal['id']}", json={"progress": 50}).status_code == 200
    assert friend.delete(f"/api/goals/{goal['id']}").status_code == 404

    feed = auth_client.get("/api/activities").json()
    assert "collaborator_added" in [a["type"] for a in feed]


def test_add_collaborator_twice_is_idempotent(auth_client: TestClient, storage, make_goal, login_as):
    login_as("friend")
    goal = make_goal()
    first = auth_client.post(f"/api/goals/{goal['id']}/collaborators", json={"userId": "friend"}).json()
    second = auth_client.post(f"/api/goals/{goal['id']}/collaborators", json={"userId": "friend"}).json()
    assert first["id"] == second["id"]
    assert len(storage.collaborators) == 1


def test_add_unknown_collaborator(auth_client: TestClient, make_goal):
    goal = make_goal()
    r = auth_client.post(f"/api/goals/{goal['id']}/collaborators", json={"userId": "ghost"})
    assert r.status_code == 404


def test_team_goals(auth_client: TestClient, make_goal, login_as):
    friend = login_as("friend")
    team = make_goal(title="Team relay", isTeamGoal=True)
    make_goal(title="Solo")
    auth_client.post(f"/api/goals/{team['id']}/collaborators", json={"userId": "friend"})

    mine = [g["title"] for g in auth_client.get("/api/team-goals").json()]
    assert mine == ["Team relay"]

    theirs = friend.get("/api/team-goals").json()
    assert [g["title"] for g in theirs] == ["Team relay"]
    assert theirs[0]["collaborators"][0]["userId"] == "friend"


def test_resaving_same_progress_writes_nothing(auth_client: TestClient, storage, make_goal):
    goal = make_goal(progress=40)
    r = auth_client.put(f"/api/goals/{goal['id']}", json={"progress": 40, "description": "Saved again"})
    assert r.status_code == 200
    assert r.json()["progress"] == 40
    assert r.json()["description"] == "Saved again"

    assert storage.progress_entries == {}
    assert [a.type for a in storage.activities.values()] == ["goal_created"]

    # Explicit progress records still append every time
    r = auth_client.post("/api/progress", json={"goalId": goal["id"], "newProgress": 40})
    assert r.status_code == 200
    assert len(storage.progress_entries) == 1
