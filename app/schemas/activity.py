from enum import Enum
from datetime import datetime
from typing import Any, Dict, Optional

from app.schemas.base import CamelModel
from app.schemas.user import User

class ActivityType(str, Enum):
    goal_created = "goal_created"
    progress_updated = "progress_updated"
    milestone_completed = "milestone_completed"
    daily_checkin = "daily_checkin"
    collaborator_added = "collaborator_added"
    photo_uploaded = "photo_uploaded"

class Activity(CamelModel):
    id: str
    type: str
    user_id: str
    goal_id: Optional[str] = None
    milestone_id: Optional[str] = None
    data: Optional[Dict[str, Any]] = None
    created_at: datetime

class ActivityWithUser(Activity):
    user: Optional[User] = None
