from fastapi import APIRouter, Depends

from app.core.auth import get_current_user
from app.database import get_storage
from app.schemas.goal import ProgressCreate, ProgressEntry
from app.schemas.user import User
from app.services import goals as goal_service
from app.storage.base import Storage

router = APIRouter(prefix="/api/progress", tags=["progress"])


@router.post("", response_model=ProgressEntry)
async def record_progress(
    progress_in: ProgressCreate,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    return await goal_service.record_progress(storage, current_user.id, progress_in)
