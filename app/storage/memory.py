"""
In-memory stand-in for the relational store.

One instance holds a dict of tables keyed by id. It has no locking and no
persistence: create one per application instance (``STORAGE_BACKEND=memory``)
or per test.
"""
import itertools
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from app.core.errors import ConflictError, NotFoundError
from app.schemas.activity import Activity
from app.schemas.checkin import DailyCheckin
from app.schemas.fitness import FitnessEntry
from app.schemas.goal import Goal, GoalCollaborator, Milestone, ProgressEntry
from app.schemas.memory import PhotoMemory
from app.schemas.user import User, UserUpsert
from app.storage.base import (
    FITNESS_FIELDS,
    GOAL_FIELDS,
    MEMORY_FIELDS,
    MILESTONE_FIELDS,
    Storage,
    clamp_progress,
)
from app.utils.timeutils import days_ago, today_bounds, utcnow


def _new_id() -> str:
    return str(uuid.uuid4())


class MemoryStorage(Storage):
    def __init__(self):
        self.users: Dict[str, User] = {}
        self.goals: Dict[str, Goal] = {}
        self.milestones: Dict[str, Milestone] = {}
        self.collaborators: Dict[str, GoalCollaborator] = {}
        self.progress_entries: Dict[str, ProgressEntry] = {}
        self.checkins: Dict[str, DailyCheckin] = {}
        self.activities: Dict[str, Activity] = {}
        self.photo_memories: Dict[str, PhotoMemory] = {}
        self.fitness: Dict[str, FitnessEntry] = {}
        # Insertion sequence breaks created_at ties
        self._seq = itertools.count()
        self._order: Dict[str, int] = {}

    def _track(self, record_id: str) -> None:
        self._order[record_id] = next(self._seq)

    def _newest_first(self, records):
        return sorted(records, key=lambda r: (r.created_at, self._order.get(r.id, 0)), reverse=True)

    # Users
    async def get_user(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    async def upsert_user(self, data: UserUpsert) -> User:
        if data.email and any(u.email == data.email and u.id != data.id for u in self.users.values()):
            raise ConflictError("Email already in use")
        now = utcnow()
        existing = self.users.get(data.id)
        if existing:
            user = existing.model_copy(update={**data.model_dump(exclude={"id"}), "updated_at": now})
        else:
            user = User(**data.model_dump(), created_at=now, updated_at=now)
        self.users[user.id] = user
        return user

    # Goals
    async def get_goals(self, user_id: str) -> List[Goal]:
        return [g for g in self.goals.values() if g.user_id == user_id]

    async def get_goal(self, goal_id: str) -> Optional[Goal]:
        return self.goals.get(goal_id)

    async def create_goal(self, user_id: str, data: Dict[str, Any]) -> Goal:
        values = {k: v for k, v in data.items() if k in GOAL_FIELDS}
        values["progress"] = clamp_progress(values.get("progress"))
        now = utcnow()
        goal = Goal(id=_new_id(), user_id=user_id, created_at=now, updated_at=now, **values)
        self.goals[goal.id] = goal
        self._track(goal.id)
        return goal

    async def update_goal(self, goal_id: str, updates: Dict[str, Any]) -> Goal:
        goal = self.goals.get(goal_id)
        if goal is None:
            raise NotFoundError("Goal not found")
        changes = {k: v for k, v in updates.items() if k in GOAL_FIELDS}
        if "progress" in changes:
            changes["progress"] = clamp_progress(changes["progress"])
        changes["updated_at"] = utcnow()
        goal = goal.model_copy(update=changes)
        self.goals[goal_id] = goal
        return goal

    async def delete_goal(self, goal_id: str) -> None:
        if self.goals.pop(goal_id, None) is None:
            raise NotFoundError("Goal not found")

        milestone_ids = {m.id for m in self.milestones.values() if m.goal_id == goal_id}
        entry_ids = {p.id for p in self.progress_entries.values() if p.goal_id == goal_id}
        for mid in milestone_ids:
            del self.milestones[mid]
        for pid in entry_ids:
            del self.progress_entries[pid]
        for cid in [c.id for c in self.collaborators.values() if c.goal_id == goal_id]:
            del self.collaborators[cid]

        for aid, activity in self.activities.items():
            if activity.goal_id == goal_id or activity.milestone_id in milestone_ids:
                self.activities[aid] = activity.model_copy(update={"goal_id": None, "milestone_id": None})
        for mid, memory in self.photo_memories.items():
            if memory.goal_id == goal_id or memory.progress_entry_id in entry_ids:
                self.photo_memories[mid] = memory.model_copy(update={"goal_id": None, "progress_entry_id": None})

    # Milestones
    async def get_milestones(self, goal_id: str) -> List[Milestone]:
        found = [m for m in self.milestones.values() if m.goal_id == goal_id]
        return sorted(found, key=lambda m: (m.order, m.created_at, self._order.get(m.id, 0)))

    async def get_milestone(self, milestone_id: str) -> Optional[Milestone]:
        return self.milestones.get(milestone_id)

    async def create_milestone(self, goal_id: str, title: str, order: int = 0) -> Milestone:
        milestone = Milestone(id=_new_id(), goal_id=goal_id, title=title, order=order, created_at=utcnow())
        self.milestones[milestone.id] = milestone
        self._track(milestone.id)
        return milestone

    async def update_milestone(self, milestone_id: str, updates: Dict[str, Any]) -> Milestone:
        milestone = self.milestones.get(milestone_id)
        if milestone is None:
            raise NotFoundError("Milestone not found")
        milestone = milestone.model_copy(update={k: v for k, v in updates.items() if k in MILESTONE_FIELDS})
        self.milestones[milestone_id] = milestone
        return milestone

    async def delete_milestone(self, milestone_id: str) -> None:
        if self.milestones.pop(milestone_id, None) is None:
            raise NotFoundError("Milestone not found")
        for aid, activity in self.activities.items():
            if activity.milestone_id == milestone_id:
                self.activities[aid] = activity.model_copy(update={"milestone_id": None})

    # Progress history
    async def get_progress_entries(self, goal_id: str) -> List[ProgressEntry]:
        return self._newest_first(p for p in self.progress_entries.values() if p.goal_id == goal_id)

    async def create_progress_entry(
        self,
        goal_id: str,
        user_id: str,
        previous_progress: int,
        new_progress: int,
        notes: Optional[str] = None,
    ) -> ProgressEntry:
        entry = ProgressEntry(
            id=_new_id(),
            goal_id=goal_id,
            user_id=user_id,
            previous_progress=clamp_progress(previous_progress),
            new_progress=clamp_progress(new_progress),
            notes=notes,
            created_at=utcnow(),
        )
        self.progress_entries[entry.id] = entry
        self._track(entry.id)
        return entry

    # Collaboration
    async def get_goal_collaborators(self, goal_id: str) -> List[GoalCollaborator]:
        return [c for c in self.collaborators.values() if c.goal_id == goal_id]

    async def add_collaborator(self, goal_id: str, user_id: str, role: str = "collaborator") -> GoalCollaborator:
        for collaborator in self.collaborators.values():
            if collaborator.goal_id == goal_id and collaborator.user_id == user_id:
                return collaborator
        collaborator = GoalCollaborator(id=_new_id(), goal_id=goal_id, user_id=user_id, role=role, created_at=utcnow())
        self.collaborators[collaborator.id] = collaborator
        self._track(collaborator.id)
        return collaborator

    async def remove_collaborator(self, goal_id: str, user_id: str) -> None:
        for cid in [c.id for c in self.collaborators.values() if c.goal_id == goal_id and c.user_id == user_id]:
            del self.collaborators[cid]

    async def get_team_goals(self, user_id: str) -> List[Goal]:
        collaborating = {c.goal_id for c in self.collaborators.values() if c.user_id == user_id}
        return [
            g for g in self.goals.values()
            if (g.is_team_goal and g.user_id == user_id) or g.id in collaborating
        ]

    # Daily check-ins
    async def get_today_checkin(self, user_id: str) -> Optional[DailyCheckin]:
        start, end = today_bounds()
        todays = [c for c in self.checkins.values() if c.user_id == user_id and start <= c.date < end]
        if not todays:
            return None
        return min(todays, key=lambda c: (c.date, self._order.get(c.id, 0)))

    async def create_daily_checkin(self, user_id: str, mood: str, notes: Optional[str] = None) -> DailyCheckin:
        now = utcnow()
        checkin = DailyCheckin(id=_new_id(), user_id=user_id, mood=mood, notes=notes, date=now, created_at=now)
        self.checkins[checkin.id] = checkin
        self._track(checkin.id)
        return checkin

    # Activities
    async def get_recent_activities(self, user_id: str, limit: int = 10) -> List[Activity]:
        team_goal_ids = {g.id for g in await self.get_team_goals(user_id)}
        visible = (
            a for a in self.activities.values()
            if a.user_id == user_id or (a.goal_id is not None and a.goal_id in team_goal_ids)
        )
        # Same tie-break as the SQL store: created_at, then id
        return sorted(visible, key=lambda a: (a.created_at, a.id), reverse=True)[:limit]

    async def create_activity(
        self,
        activity_type: str,
        user_id: str,
        goal_id: Optional[str] = None,
        milestone_id: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
    ) -> Activity:
        activity = Activity(
            id=_new_id(),
            type=activity_type,
            user_id=user_id,
            goal_id=goal_id,
            milestone_id=milestone_id,
            data=dict(data or {}),
            created_at=utcnow(),
        )
        self.activities[activity.id] = activity
        self._track(activity.id)
        return activity

    # Photo memories
    async def get_photo_memories(self, user_id: str, goal_id: Optional[str] = None) -> List[PhotoMemory]:
        return self._newest_first(
            m for m in self.photo_memories.values()
            if m.user_id == user_id and (not goal_id or m.goal_id == goal_id)
        )

    async def get_photo_memory(self, memory_id: str) -> Optional[PhotoMemory]:
        return self.photo_memories.get(memory_id)

    async def create_photo_memory(self, user_id: str, data: Dict[str, Any]) -> PhotoMemory:
        values = {k: v for k, v in data.items() if k in MEMORY_FIELDS}
        values["tags"] = list(values.get("tags") or [])
        memory = PhotoMemory(id=_new_id(), user_id=user_id, created_at=utcnow(), **values)
        self.photo_memories[memory.id] = memory
        self._track(memory.id)
        return memory

    async def delete_photo_memory(self, memory_id: str) -> None:
        if self.photo_memories.pop(memory_id, None) is None:
            raise NotFoundError("Photo memory not found")

    # Fitness tracking
    async def get_fitness_data(self, user_id: str, days: int = 7, now: Optional[datetime] = None) -> List[FitnessEntry]:
        since = days_ago(days, now)
        found = [f for f in self.fitness.values() if f.user_id == user_id and f.date >= since]
        return sorted(found, key=lambda f: (f.date, self._order.get(f.id, 0)), reverse=True)

    async def get_today_fitness(self, user_id: str) -> Optional[FitnessEntry]:
        start, end = today_bounds()
        todays = [f for f in self.fitness.values() if f.user_id == user_id and start <= f.date < end]
        if not todays:
            return None
        return min(todays, key=lambda f: (f.date, self._order.get(f.id, 0)))

    async def get_fitness_entry(self, entry_id: str) -> Optional[FitnessEntry]:
        return self.fitness.get(entry_id)

    async def create_fitness_entry(self, user_id: str, data: Dict[str, Any]) -> FitnessEntry:
        values = {k: v for k, v in data.items() if k in FITNESS_FIELDS}
        now = utcnow()
        entry = FitnessEntry(id=_new_id(), user_id=user_id, date=now, created_at=now, **values)
        self.fitness[entry.id] = entry
        self._track(entry.id)
        return entry

    async def update_fitness_entry(self, entry_id: str, updates: Dict[str, Any]) -> FitnessEntry:
        entry = self.fitness.get(entry_id)
        if entry is None:
            raise NotFoundError("Fitness entry not found")
        entry = entry.model_copy(update={k: v for k, v in updates.items() if k in FITNESS_FIELDS})
        self.fitness[entry_id] = entry
        return entry
