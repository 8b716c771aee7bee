from fastapi import APIRouter, Depends

from app.core.auth import get_current_user
from app.database import get_storage
from app.schemas.goal import Milestone, MilestoneUpdate
from app.schemas.user import User
from app.services import goals as goal_service
from app.storage.base import Storage

router = APIRouter(prefix="/api/milestones", tags=["milestones"])


@router.put("/{milestone_id}", response_model=Milestone)
async def update_milestone(
    milestone_id: str,
    milestone_in: MilestoneUpdate,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    return await goal_service.update_milestone(
        storage, milestone_id, current_user.id, milestone_in.model_dump(exclude_unset=True)
    )
