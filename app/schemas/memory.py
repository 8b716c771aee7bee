from pydantic import Field
from datetime import datetime
from typing import List, Optional

from app.schemas.base import CamelModel

class PhotoMemory(CamelModel):
    id: str
    user_id: str
    goal_id: Optional[str] = None
    progress_entry_id: Optional[str] = None
    photo_url: str
    caption: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    created_at: datetime
