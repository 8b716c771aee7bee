from app.schemas.base import CamelModel

class UserStats(CamelModel):
    active_goals: int
    completed_week: int
    team_goals: int
    avg_progress: int
    total_steps: int
