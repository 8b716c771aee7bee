import asyncio
from datetime import timedelta

from fastapi.testclient import TestClient

from app.services.stats import get_user_stats, round_half_up
from app.utils.timeutils import utcnow


def test_stats_without_goals(auth_client: TestClient):
    r = auth_client.get("/api/stats")
    assert r.status_code == 200
    assert r.json() == {
        "activeGoals": 0,
        "completedWeek": 0,
        "teamGoals": 0,
        "avgProgress": 0,
        "totalSteps": 0,
    }


def test_run_5k_scenario(auth_client: TestClient, make_goal):
    goal = make_goal(title="Run 5k", category="health", progress=0)
    r = auth_client.put(f"/api/goals/{goal['id']}", json={"progress": 40})
    assert r.status_code == 200
    assert r.json()["progress"] == 40

    stats = auth_client.get("/api/stats").json()
    assert stats["avgProgress"] == 40
    assert stats["activeGoals"] == 1
    assert stats["completedWeek"] == 0


def test_completed_week_window(auth_client: TestClient, storage, make_goal):
    recent = make_goal(title="Recent")
    old = make_goal(title="Old")
    make_goal(title="Open")
    auth_client.put(f"/api/goals/{recent['id']}", json={"isCompleted": True})
    auth_client.put(f"/api/goals/{old['id']}", json={"isCompleted": True})
    storage.goals[old["id"]] = storage.goals[old["id"]].model_copy(
        update={"updated_at": utcnow() - timedelta(days=10)}
    )

    stats = auth_client.get("/api/stats").json()
    assert stats["activeGoals"] == 1
    assert stats["completedWeek"] == 1


def test_team_goals_and_steps(auth_client: TestClient, make_goal):
    make_goal(isTeamGoal=True)
    make_goal(title="Solo")
    auth_client.post("/api/fitness", json={"steps": 8500})

    stats = auth_client.get("/api/stats").json()
    assert stats["teamGoals"] == 1
    assert stats["totalSteps"] == 8500


def test_avg_progress_rounds_half_up(auth_client: TestClient, make_goal):
    make_goal(progress=25)
    make_goal(progress=50)
    # (25 + 50) / 2 = 37.5
    assert auth_client.get("/api/stats").json()["avgProgress"] == 38


def test_round_half_up():
    assert round_half_up(0, 0) == 0
    assert round_half_up(75, 2) == 38
    assert round_half_up(100, 3) == 33
    assert round_half_up(200, 3) == 67


def test_old_fitness_excluded(storage):
    async def scenario():
        await storage.create_fitness_entry("u1", {"steps": 1000})
        entry = await storage.create_fitness_entry("u1", {"steps": 5000})
        storage.fitness[entry.id] = entry.model_copy(update={"date": utcnow() - timedelta(days=8)})
        return await get_user_stats(storage, "u1")

    stats = asyncio.run(scenario())
    assert stats.total_steps == 1000
