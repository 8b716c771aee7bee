import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import and_, delete, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ConflictError, NotFoundError
from app.models.activity import Activity as ActivityModel
from app.models.checkin import DailyCheckin as DailyCheckinModel
from app.models.fitness import FitnessTracking as FitnessModel
from app.models.goal import (
    Goal as GoalModel,
    GoalCollaborator as GoalCollaboratorModel,
    Milestone as MilestoneModel,
    ProgressEntry as ProgressEntryModel,
)
from app.models.memory import PhotoMemory as PhotoMemoryModel
from app.models.user import User as UserModel
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

logger = logging.getLogger(__name__)


class SqlStorage(Storage):
    """Storage backed by one AsyncSession; every write commits on its own."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _save(self, row):
        self.db.add(row)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        await self.db.refresh(row)
        return row

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

    # Users
    async def get_user(self, user_id: str) -> Optional[User]:
        row = await self.db.get(UserModel, user_id)
        return User.model_validate(row) if row else None

    async def upsert_user(self, data: UserUpsert) -> User:
        row = await self.db.get(UserModel, data.id)
        if row is None:
            row = UserModel(**data.model_dump())
        else:
            for key, value in data.model_dump(exclude={"id"}).items():
                setattr(row, key, value)
            row.updated_at = utcnow()
        try:
            row = await self._save(row)
        except IntegrityError:
            raise ConflictError("Email already in use")
        return User.model_validate(row)

    # Goals
    async def get_goals(self, user_id: str) -> List[Goal]:
        result = await self.db.execute(
            select(GoalModel)
            .where(GoalModel.user_id == user_id)
            .order_by(GoalModel.created_at)
        )
        return [Goal.model_validate(g) for g in result.scalars().all()]

    async def get_goal(self, goal_id: str) -> Optional[Goal]:
        row = await self.db.get(GoalModel, goal_id)
        return Goal.model_validate(row) if row else None

    async def create_goal(self, user_id: str, data: Dict[str, Any]) -> Goal:
        values = {k: v for k, v in data.items() if k in GOAL_FIELDS}
        values["progress"] = clamp_progress(values.get("progress"))
        now = utcnow()
        row = GoalModel(user_id=user_id, created_at=now, updated_at=now, **values)
        return Goal.model_validate(await self._save(row))

    async def update_goal(self, goal_id: str, updates: Dict[str, Any]) -> Goal:
        row = await self.db.get(GoalModel, goal_id)
        if row is None:
            raise NotFoundError("Goal not found")
        for key, value in updates.items():
            if key not in GOAL_FIELDS:
                continue
            if key == "progress":
                value = clamp_progress(value)
            setattr(row, key, value)
        row.updated_at = utcnow()
        return Goal.model_validate(await self._save(row))

    async def delete_goal(self, goal_id: str) -> None:
        row = await self.db.get(GoalModel, goal_id)
        if row is None:
            raise NotFoundError("Goal not found")

        milestone_ids = select(MilestoneModel.id).where(MilestoneModel.goal_id == goal_id)
        entry_ids = select(ProgressEntryModel.id).where(ProgressEntryModel.goal_id == goal_id)

        # History rows keep existing but lose the reference
        await self.db.execute(
            update(ActivityModel)
            .where(or_(ActivityModel.goal_id == goal_id, ActivityModel.milestone_id.in_(milestone_ids)))
            .values(goal_id=None, milestone_id=None)
        )
        await self.db.execute(
            update(PhotoMemoryModel)
            .where(or_(PhotoMemoryModel.goal_id == goal_id, PhotoMemoryModel.progress_entry_id.in_(entry_ids)))
            .values(goal_id=None, progress_entry_id=None)
        )
        await self.db.execute(delete(MilestoneModel).where(MilestoneModel.goal_id == goal_id))
        await self.db.execute(delete(GoalCollaboratorModel).where(GoalCollaboratorModel.goal_id == goal_id))
        await self.db.execute(delete(ProgressEntryModel).where(ProgressEntryModel.goal_id == goal_id))
        await self.db.delete(row)
        await self._commit()

    # Milestones
    async def get_milestones(self, goal_id: str) -> List[Milestone]:
        result = await self.db.execute(
            select(MilestoneModel)
            .where(MilestoneModel.goal_id == goal_id)
            .order_by(MilestoneModel.order, MilestoneModel.created_at)
        )
        return [Milestone.model_validate(m) for m in result.scalars().all()]

    async def get_milestone(self, milestone_id: str) -> Optional[Milestone]:
        row = await self.db.get(MilestoneModel, milestone_id)
        return Milestone.model_validate(row) if row else None

    async def create_milestone(self, goal_id: str, title: str, order: int = 0) -> Milestone:
        row = MilestoneModel(goal_id=goal_id, title=title, order=order, is_completed=False, created_at=utcnow())
        return Milestone.model_validate(await self._save(row))

    async def update_milestone(self, milestone_id: str, updates: Dict[str, Any]) -> Milestone:
        row = await self.db.get(MilestoneModel, milestone_id)
        if row is None:
            raise NotFoundError("Milestone not found")
        for key, value in updates.items():
            if key in MILESTONE_FIELDS:
                setattr(row, key, value)
        return Milestone.model_validate(await self._save(row))

    async def delete_milestone(self, milestone_id: str) -> None:
        row = await self.db.get(MilestoneModel, milestone_id)
        if row is None:
            raise NotFoundError("Milestone not found")
        await self.db.execute(
            update(ActivityModel)
            .where(ActivityModel.milestone_id == milestone_id)
            .values(milestone_id=None)
        )
        await self.db.delete(row)
        await self._commit()

    # Progress history
    async def get_progress_entries(self, goal_id: str) -> List[ProgressEntry]:
        result = await self.db.execute(
            select(ProgressEntryModel)
            .where(ProgressEntryModel.goal_id == goal_id)
            .order_by(ProgressEntryModel.created_at.desc())
        )
        return [ProgressEntry.model_validate(p) for p in result.scalars().all()]

    async def create_progress_entry(
        self,
        goal_id: str,
        user_id: str,
        previous_progress: int,
        new_progress: int,
        notes: Optional[str] = None,
    ) -> ProgressEntry:
        row = ProgressEntryModel(
            goal_id=goal_id,
            user_id=user_id,
            previous_progress=clamp_progress(previous_progress),
            new_progress=clamp_progress(new_progress),
            notes=notes,
            created_at=utcnow(),
        )
        return ProgressEntry.model_validate(await self._save(row))

    # Collaboration
    async def get_goal_collaborators(self, goal_id: str) -> List[GoalCollaborator]:
        result = await self.db.execute(
            select(GoalCollaboratorModel)
            .where(GoalCollaboratorModel.goal_id == goal_id)
            .order_by(GoalCollaboratorModel.created_at)
        )
        return [GoalCollaborator.model_validate(c) for c in result.scalars().all()]

    async def add_collaborator(self, goal_id: str, user_id: str, role: str = "collaborator") -> GoalCollaborator:
        existing = await self.db.execute(
            select(GoalCollaboratorModel)
            .where(GoalCollaboratorModel.goal_id == goal_id)
            .where(GoalCollaboratorModel.user_id == user_id)
        )
        row = existing.scalars().first()
        if row:
            return GoalCollaborator.model_validate(row)
        row = GoalCollaboratorModel(goal_id=goal_id, user_id=user_id, role=role, created_at=utcnow())
        return GoalCollaborator.model_validate(await self._save(row))

    async def remove_collaborator(self, goal_id: str, user_id: str) -> None:
        await self.db.execute(
            delete(GoalCollaboratorModel)
            .where(GoalCollaboratorModel.goal_id == goal_id)
            .where(GoalCollaboratorModel.user_id == user_id)
        )
        await self._commit()

    async def get_team_goals(self, user_id: str) -> List[Goal]:
        collaborating = select(GoalCollaboratorModel.goal_id).where(GoalCollaboratorModel.user_id == user_id)
        result = await self.db.execute(
            select(GoalModel)
            .where(
                or_(
                    and_(GoalModel.is_team_goal.is_(True), GoalModel.user_id == user_id),
                    GoalModel.id.in_(collaborating),
                )
            )
            .order_by(GoalModel.created_at)
        )
        return [Goal.model_validate(g) for g in result.scalars().all()]

    # Daily check-ins
    async def get_today_checkin(self, user_id: str) -> Optional[DailyCheckin]:
        start, end = today_bounds()
        result = await self.db.execute(
            select(DailyCheckinModel)
            .where(DailyCheckinModel.user_id == user_id)
            .where(DailyCheckinModel.date >= start)
            .where(DailyCheckinModel.date < end)
            .order_by(DailyCheckinModel.date, DailyCheckinModel.created_at)
            .limit(1)
        )
        row = result.scalar_one_or_none()
        return DailyCheckin.model_validate(row) if row else None

    async def create_daily_checkin(self, user_id: str, mood: str, notes: Optional[str] = None) -> DailyCheckin:
        now = utcnow()
        row = DailyCheckinModel(user_id=user_id, mood=mood, notes=notes, date=now, created_at=now)
        return DailyCheckin.model_validate(await self._save(row))

    # Activities
    async def get_recent_activities(self, user_id: str, limit: int = 10) -> List[Activity]:
        team_goal_ids = [g.id for g in await self.get_team_goals(user_id)]
        condition = ActivityModel.user_id == user_id
        if team_goal_ids:
            condition = or_(condition, ActivityModel.goal_id.in_(team_goal_ids))

        result = await self.db.execute(
            select(ActivityModel)
            .where(condition)
            .order_by(ActivityModel.created_at.desc(), ActivityModel.id.desc())
            .limit(limit)
        )
        return [Activity.model_validate(a) for a in result.scalars().all()]

    async def create_activity(
        self,
        activity_type: str,
        user_id: str,
        goal_id: Optional[str] = None,
        milestone_id: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
    ) -> Activity:
        row = ActivityModel(
            type=activity_type,
            user_id=user_id,
            goal_id=goal_id,
            milestone_id=milestone_id,
            data=data or {},
            created_at=utcnow(),
        )
        return Activity.model_validate(await self._save(row))

    # Photo memories
    async def get_photo_memories(self, user_id: str, goal_id: Optional[str] = None) -> List[PhotoMemory]:
        stmt = select(PhotoMemoryModel).where(PhotoMemoryModel.user_id == user_id)
        if goal_id:
            stmt = stmt.where(PhotoMemoryModel.goal_id == goal_id)
        result = await self.db.execute(stmt.order_by(PhotoMemoryModel.created_at.desc()))
        return [PhotoMemory.model_validate(m) for m in result.scalars().all()]

    async def get_photo_memory(self, memory_id: str) -> Optional[PhotoMemory]:
        row = await self.db.get(PhotoMemoryModel, memory_id)
        return PhotoMemory.model_validate(row) if row else None

    async def create_photo_memory(self, user_id: str, data: Dict[str, Any]) -> PhotoMemory:
        values = {k: v for k, v in data.items() if k in MEMORY_FIELDS}
        values["tags"] = list(values.get("tags") or [])
        row = PhotoMemoryModel(user_id=user_id, created_at=utcnow(), **values)
        return PhotoMemory.model_validate(await self._save(row))

    async def delete_photo_memory(self, memory_id: str) -> None:
        row = await self.db.get(PhotoMemoryModel, memory_id)
        if row is None:
            raise NotFoundError("Photo memory not found")
        await self.db.delete(row)
        await self._commit()

    # Fitness tracking
    async def get_fitness_data(self, user_id: str, days: int = 7, now: Optional[datetime] = None) -> List[FitnessEntry]:
        result = await self.db.execute(
            select(FitnessModel)
            .where(FitnessModel.user_id == user_id)
            .where(FitnessModel.date >= days_ago(days, now))
            .order_by(FitnessModel.date.desc())
        )
        return [FitnessEntry.model_validate(f) for f in result.scalars().all()]

    async def get_today_fitness(self, user_id: str) -> Optional[FitnessEntry]:
        start, end = today_bounds()
        result = await self.db.execute(
            select(FitnessModel)
            .where(FitnessModel.user_id == user_id)
            .where(FitnessModel.date >= start)
            .where(FitnessModel.date < end)
            .order_by(FitnessModel.date, FitnessModel.created_at)
            .limit(1)
        )
        row = result.scalar_one_or_none()
        return FitnessEntry.model_validate(row) if row else None

    async def get_fitness_entry(self, entry_id: str) -> Optional[FitnessEntry]:
        row = await self.db.get(FitnessModel, entry_id)
        return FitnessEntry.model_validate(row) if row else None

    async def create_fitness_entry(self, user_id: str, data: Dict[str, Any]) -> FitnessEntry:
        values = {k: v for k, v in data.items() if k in FITNESS_FIELDS}
        now = utcnow()
        row = FitnessModel(user_id=user_id, date=now, created_at=now, **values)
        return FitnessEntry.model_validate(await self._save(row))

    async def update_fitness_entry(self, entry_id: str, updates: Dict[str, Any]) -> FitnessEntry:
        row = await self.db.get(FitnessModel, entry_id)
        if row is None:
            raise NotFoundError("Fitness entry not found")
        for key, value in updates.items():
            if key in FITNESS_FIELDS:
                setattr(row, key, value)
        return FitnessEntry.model_validate(await self._save(row))
