"""
Data-access interface shared by the relational store and the in-memory
stand-in. Every method returns pydantic records from ``app.schemas`` so the
services never see ORM objects.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

from app.schemas.activity import Activity
from app.schemas.checkin import DailyCheckin
from app.schemas.fitness import FitnessEntry
from app.schemas.goal import Goal, GoalCollaborator, Milestone, ProgressEntry
from app.schemas.memory import PhotoMemory
from app.schemas.user import User, UserUpsert


# Columns each entity accepts on create/update
GOAL_FIELDS = {"title", "description", "category", "target_date", "progress", "is_completed", "is_team_goal"}
MILESTONE_FIELDS = {"title", "is_completed", "order", "completed_at"}
FITNESS_FIELDS = {"steps", "distance", "calories", "active_minutes", "heart_rate", "weight", "notes"}
MEMORY_FIELDS = {"goal_id", "progress_entry_id", "photo_url", "caption", "tags"}


def clamp_progress(value: Optional[int]) -> int:
    return max(0, min(100, value or 0))


class Storage(ABC):
    # Users
    @abstractmethod
    async def get_user(self, user_id: str) -> Optional[User]: ...

    @abstractmethod
    async def upsert_user(self, data: UserUpsert) -> User: ...

    # Goals
    @abstractmethod
    async def get_goals(self, user_id: str) -> List[Goal]: ...

    @abstractmethod
    async def get_goal(self, goal_id: str) -> Optional[Goal]: ...

    @abstractmethod
    async def create_goal(self, user_id: str, data: Dict[str, Any]) -> Goal: ...

    @abstractmethod
    async def update_goal(self, goal_id: str, updates: Dict[str, Any]) -> Goal:
        """Partial update; raises NotFoundError for an unknown id."""

    @abstractmethod
    async def delete_goal(self, goal_id: str) -> None:
        """Deletes the goal with its milestones, collaborators and progress entries."""

    # Milestones
    @abstractmethod
    async def get_milestones(self, goal_id: str) -> List[Milestone]: ...

    @abstractmethod
    async def get_milestone(self, milestone_id: str) -> Optional[Milestone]: ...

    @abstractmethod
    async def create_milestone(self, goal_id: str, title: str, order: int = 0) -> Milestone: ...

    @abstractmethod
    async def update_milestone(self, milestone_id: str, updates: Dict[str, Any]) -> Milestone: ...

    @abstractmethod
    async def delete_milestone(self, milestone_id: str) -> None: ...

    # Progress history
    @abstractmethod
    async def get_progress_entries(self, goal_id: str) -> List[ProgressEntry]: ...

    @abstractmethod
    async def create_progress_entry(
        self,
        goal_id: str,
        user_id: str,
        previous_progress: int,
        new_progress: int,
        notes: Optional[str] = None,
    ) -> ProgressEntry: ...

    # Collaboration
    @abstractmethod
    async def get_goal_collaborators(self, goal_id: str) -> List[GoalCollaborator]: ...

    @abstractmethod
    async def add_collaborator(self, goal_id: str, user_id: str, role: str = "collaborator") -> GoalCollaborator: ...

    @abstractmethod
    async def remove_collaborator(self, goal_id: str, user_id: str) -> None: ...

    @abstractmethod
    async def get_team_goals(self, user_id: str) -> List[Goal]:
        """Team goals the user owns plus goals the user collaborates on, each once."""

    # Daily check-ins
    @abstractmethod
    async def get_today_checkin(self, user_id: str) -> Optional[DailyCheckin]: ...

    @abstractmethod
    async def create_daily_checkin(self, user_id: str, mood: str, notes: Optional[str] = None) -> DailyCheckin: ...

    # Activities
    @abstractmethod
    async def get_recent_activities(self, user_id: str, limit: int = 10) -> List[Activity]: ...

    @abstractmethod
    async def create_activity(
        self,
        activity_type: str,
        user_id: str,
        goal_id: Optional[str] = None,
        milestone_id: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
    ) -> Activity: ...

    # Photo memories
    @abstractmethod
    async def get_photo_memories(self, user_id: str, goal_id: Optional[str] = None) -> List[PhotoMemory]: ...

    @abstractmethod
    async def get_photo_memory(self, memory_id: str) -> Optional[PhotoMemory]: ...

    @abstractmethod
    async def create_photo_memory(self, user_id: str, data: Dict[str, Any]) -> PhotoMemory: ...

    @abstractmethod
    async def delete_photo_memory(self, memory_id: str) -> None: ...

    # Fitness tracking
    @abstractmethod
    async def get_fitness_data(self, user_id: str, days: int = 7, now: Optional[datetime] = None) -> List[FitnessEntry]: ...

    @abstractmethod
    async def get_today_fitness(self, user_id: str) -> Optional[FitnessEntry]: ...

    @abstractmethod
    async def get_fitness_entry(self, entry_id: str) -> Optional[FitnessEntry]: ...

    @abstractmethod
    async def create_fitness_entry(self, user_id: str, data: Dict[str, Any]) -> FitnessEntry: ...

    @abstractmethod
    async def update_fitness_entry(self, entry_id: str, updates: Dict[str, Any]) -> FitnessEntry: ...
