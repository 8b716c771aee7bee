from typing import Optional

from app.core.errors import ConflictError
from app.schemas.activity import ActivityType
from app.schemas.checkin import CheckinCreate, DailyCheckin
from app.services.activity import record_activity
from app.storage.base import Storage


async def get_today_checkin(storage: Storage, user_id: str) -> Optional[DailyCheckin]:
    return await storage.get_today_checkin(user_id)


async def create_checkin(storage: Storage, user_id: str, payload: CheckinCreate) -> DailyCheckin:
    # One check-in per user per calendar day
    if await storage.get_today_checkin(user_id):
        raise ConflictError("Already checked in today")

    checkin = await storage.create_daily_checkin(user_id, payload.mood.value, payload.notes)
    await record_activity(
        storage,
        ActivityType.daily_checkin,
        user_id,
        data={"mood": checkin.mood.value},
    )
    return checkin
