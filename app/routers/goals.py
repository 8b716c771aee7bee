from typing import List

from fastapi import APIRouter, Depends

from app.core.auth import get_current_user
from app.database import get_storage
from app.schemas.goal import (
    CollaboratorCreate,
    DeleteResponse,
    Goal,
    GoalCollaborator,
    GoalCreate,
    GoalDetailResponse,
    GoalUpdate,
    GoalWithDetails,
)
from app.schemas.user import User
from app.services import goals as goal_service
from app.storage.base import Storage

router = APIRouter(prefix="/api", tags=["goals"])


@router.get("/goals", response_model=List[GoalWithDetails])
async def list_goals(
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    return await goal_service.list_goals(storage, current_user.id)


@router.get("/goals/{goal_id}", response_model=GoalDetailResponse)
async def get_goal(
    goal_id: str,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    return await goal_service.get_goal_detail(storage, goal_id, current_user.id)


@router.post("/goals", response_model=GoalWithDetails)
async def create_goal(
    goal_in: GoalCreate,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    return await goal_service.create_goal(storage, current_user.id, goal_in)


@router.put("/goals/{goal_id}", response_model=Goal)
async def update_goal(
    goal_id: str,
    goal_in: GoalUpdate,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    return await goal_service.update_goal(
        storage, goal_id, current_user.id, goal_in.model_dump(exclude_unset=True)
    )


@router.delete("/goals/{goal_id}", response_model=DeleteResponse)
async def delete_goal(
    goal_id: str,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    await goal_service.delete_goal(storage, goal_id, current_user.id)
    return DeleteResponse(success=True)


@router.get("/team-goals", response_model=List[GoalWithDetails])
async def list_team_goals(
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    return await goal_service.list_team_goals(storage, current_user.id)


@router.post("/goals/{goal_id}/collaborators", response_model=GoalCollaborator)
async def add_collaborator(
    goal_id: str,
    collaborator_in: CollaboratorCreate,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    return await goal_service.add_collaborator(storage, goal_id, current_user.id, collaborator_in)
