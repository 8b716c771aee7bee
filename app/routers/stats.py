from fastapi import APIRouter, Depends

from app.core.auth import get_current_user
from app.database import get_storage
from app.schemas.stats import UserStats
from app.schemas.user import User
from app.services.stats import get_user_stats
from app.storage.base import Storage

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("", response_model=UserStats)
async def read_stats(
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    return await get_user_stats(storage, current_user.id)
