import logging
from typing import Any, Dict, List, Optional

from app.schemas.activity import Activity, ActivityType, ActivityWithUser
from app.storage.base import Storage

logger = logging.getLogger(__name__)


async def record_activity(
    storage: Storage,
    activity_type: ActivityType,
    user_id: str,
    goal_id: Optional[str] = None,
    milestone_id: Optional[str] = None,
    data: Optional[Dict[str, Any]] = None,
) -> Optional[Activity]:
    """Append one feed entry. Failures are logged and never reach the caller."""
    activity_type = ActivityType(activity_type)
    try:
        return await storage.create_activity(
            activity_type.value,
            user_id,
            goal_id=goal_id,
            milestone_id=milestone_id,
            data=data,
        )
    except Exception:
        logger.exception("Failed to record %s activity for user %s", activity_type.value, user_id)
        return None


async def get_activity_feed(storage: Storage, user_id: str, limit: int = 10) -> List[ActivityWithUser]:
    activities = await storage.get_recent_activities(user_id, limit)

    users = {}
    feed = []
    for activity in activities:
        if activity.user_id not in users:
            users[activity.user_id] = await storage.get_user(activity.user_id)
        feed.append(ActivityWithUser(**activity.model_dump(), user=users[activity.user_id]))
    return feed
