from typing import List

from fastapi import APIRouter, Depends, Query

from app.core.auth import get_current_user
from app.database import get_storage
from app.schemas.activity import ActivityWithUser
from app.schemas.user import User
from app.services.activity import get_activity_feed
from app.storage.base import Storage

router = APIRouter(prefix="/api/activities", tags=["activities"])


@router.get("", response_model=List[ActivityWithUser])
async def list_activities(
    limit: int = Query(10, ge=1, le=100),
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    return await get_activity_feed(storage, current_user.id, limit)
