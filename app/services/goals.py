import logging
from typing import Any, Dict, List, Optional

from app.core.errors import NotFoundError
from app.schemas.activity import ActivityType
from app.schemas.goal import (
    CollaboratorCreate,
    Goal,
    GoalCollaborator,
    GoalCreate,
    GoalDetailResponse,
    GoalWithDetails,
    Milestone,
    ProgressCreate,
    ProgressEntry,
)
from app.services.activity import record_activity
from app.storage.base import Storage, clamp_progress
from app.utils.timeutils import utcnow

logger = logging.getLogger(__name__)

NULLABLE_GOAL_FIELDS = ("description", "target_date")


async def with_details(storage: Storage, goal: Goal) -> GoalWithDetails:
    milestones = await storage.get_milestones(goal.id)
    collaborators = await storage.get_goal_collaborators(goal.id)
    return GoalWithDetails(**goal.model_dump(), milestones=milestones, collaborators=collaborators)


async def list_goals(storage: Storage, user_id: str) -> List[GoalWithDetails]:
    return [await with_details(storage, g) for g in await storage.get_goals(user_id)]


async def list_team_goals(storage: Storage, user_id: str) -> List[GoalWithDetails]:
    return [await with_details(storage, g) for g in await storage.get_team_goals(user_id)]


async def ensure_goal_access(storage: Storage, goal_id: str, user_id: str, owner_only: bool = False) -> Goal:
    """
    Returns the goal when ``user_id`` owns it or, unless ``owner_only``, is
    one of its collaborators. Anything else looks like a missing goal.
    """
    goal = await storage.get_goal(goal_id)
    if goal is None:
        raise NotFoundError("Goal not found")
    if goal.user_id == user_id:
        return goal
    if not owner_only:
        collaborators = await storage.get_goal_collaborators(goal_id)
        if any(c.user_id == user_id for c in collaborators):
            return goal
    raise NotFoundError("Goal not found")


async def get_goal_detail(storage: Storage, goal_id: str, user_id: str) -> GoalDetailResponse:
    goal = await ensure_goal_access(storage, goal_id, user_id)
    details = await with_details(storage, goal)
    entries = await storage.get_progress_entries(goal.id)
    return GoalDetailResponse(**details.model_dump(), progress_entries=entries)


async def create_goal(storage: Storage, user_id: str, payload: GoalCreate) -> GoalWithDetails:
    goal = await storage.create_goal(user_id, payload.model_dump(exclude={"milestones"}))

    for order, title in enumerate(payload.milestones):
        await storage.create_milestone(goal.id, title, order=order)

    await record_activity(
        storage,
        ActivityType.goal_created,
        user_id,
        goal_id=goal.id,
        data={"goalTitle": goal.title},
    )
    logger.info("Goal %s created by %s", goal.id, user_id)
    return await with_details(storage, goal)


async def change_progress(
    storage: Storage,
    goal: Goal,
    user_id: str,
    new_progress: int,
    notes: Optional[str] = None,
) -> ProgressEntry:
    previous = goal.progress
    new_progress = clamp_progress(new_progress)

    entry = await storage.create_progress_entry(goal.id, user_id, previous, new_progress, notes)
    await storage.update_goal(goal.id, {"progress": new_progress})
    await record_activity(
        storage,
        ActivityType.progress_updated,
        user_id,
        goal_id=goal.id,
        data={"goalTitle": goal.title, "previousProgress": previous, "newProgress": new_progress},
    )
    return entry


async def update_goal(storage: Storage, goal_id: str, user_id: str, updates: Dict[str, Any]) -> Goal:
    goal = await ensure_goal_access(storage, goal_id, user_id)

    updates = {k: v for k, v in updates.items() if v is not None or k in NULLABLE_GOAL_FIELDS}
    progress = updates.pop("progress", None)
    if updates:
        goal = await storage.update_goal(goal.id, updates)
    if progress is not None and progress != goal.progress:
        await change_progress(storage, goal, user_id, progress)
        goal = await storage.get_goal(goal.id)
    return goal


async def record_progress(storage: Storage, user_id: str, payload: ProgressCreate) -> ProgressEntry:
    goal = await ensure_goal_access(storage, payload.goal_id, user_id)
    return await change_progress(storage, goal, user_id, payload.new_progress, payload.notes)


async def update_milestone(storage: Storage, milestone_id: str, user_id: str, updates: Dict[str, Any]) -> Milestone:
    milestone = await storage.get_milestone(milestone_id)
    if milestone is None:
        raise NotFoundError("Milestone not found")
    goal = await ensure_goal_access(storage, milestone.goal_id, user_id)

    updates = {k: v for k, v in updates.items() if v is not None}
    completed = updates.get("is_completed")
    just_completed = completed is True and not milestone.is_completed
    if completed is None or completed == milestone.is_completed:
        updates.pop("is_completed", None)
    elif completed:
        updates["completed_at"] = utcnow()
    else:
        updates["completed_at"] = None

    if updates:
        milestone = await storage.update_milestone(milestone_id, updates)

    if just_completed:
        await record_activity(
            storage,
            ActivityType.milestone_completed,
            user_id,
            goal_id=goal.id,
            milestone_id=milestone.id,
            data={"goalTitle": goal.title, "milestoneTitle": milestone.title},
        )
    return milestone


async def delete_goal(storage: Storage, goal_id: str, user_id: str) -> None:
    await ensure_goal_access(storage, goal_id, user_id, owner_only=True)
    await storage.delete_goal(goal_id)
    logger.info("Goal %s deleted by %s", goal_id, user_id)


async def add_collaborator(
    storage: Storage, goal_id: str, user_id: str, payload: CollaboratorCreate
) -> GoalCollaborator:
    goal = await ensure_goal_access(storage, goal_id, user_id, owner_only=True)
    collaborator_user = await storage.get_user(payload.user_id)
    if collaborator_user is None:
        raise NotFoundError("User not found")

    for existing in await storage.get_goal_collaborators(goal.id):
        if existing.user_id == payload.user_id:
            return existing

    collaborator = await storage.add_collaborator(goal.id, payload.user_id, payload.role)
    await record_activity(
        storage,
        ActivityType.collaborator_added,
        user_id,
        goal_id=goal.id,
        data={"goalTitle": goal.title, "collaboratorId": payload.user_id, "collaboratorName": collaborator_user.display_name},
    )
    return collaborator
