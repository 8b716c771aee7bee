from datetime import datetime
from typing import Optional

from app.schemas.stats import UserStats
from app.storage.base import Storage
from app.utils.timeutils import days_ago, ensure_aware, utcnow


def round_half_up(total: int, count: int) -> int:
    """Integer mean rounded half-up, 0 when there is nothing to average."""
    if count == 0:
        return 0
    return (total * 2 + count) // (2 * count)


async def get_user_stats(storage: Storage, user_id: str, now: Optional[datetime] = None) -> UserStats:
    now = ensure_aware(now or utcnow())
    week_ago = days_ago(7, now)

    goals = await storage.get_goals(user_id)
    active = [g for g in goals if not g.is_completed]
    completed_week = [g for g in goals if g.is_completed and g.updated_at >= week_ago]

    team_goals = await storage.get_team_goals(user_id)
    fitness = await storage.get_fitness_data(user_id, 7, now=now)

    return UserStats(
        active_goals=len(active),
        completed_week=len(completed_week),
        team_goals=len(team_goals),
        avg_progress=round_half_up(sum(g.progress for g in goals), len(goals)),
        total_steps=sum(f.steps or 0 for f in fitness),
    )
