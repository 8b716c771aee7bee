from typing import Optional

from fastapi import APIRouter, Depends

from app.core.auth import get_current_user
from app.database import get_storage
from app.schemas.checkin import CheckinCreate, DailyCheckin
from app.schemas.user import User
from app.services import checkins as checkin_service
from app.storage.base import Storage

router = APIRouter(prefix="/api/checkin", tags=["checkin"])


@router.get("/today", response_model=Optional[DailyCheckin])
async def get_today_checkin(
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    return await checkin_service.get_today_checkin(storage, current_user.id)


@router.post("", response_model=DailyCheckin)
async def create_checkin(
    checkin_in: CheckinCreate,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    return await checkin_service.create_checkin(storage, current_user.id, checkin_in)
