from enum import Enum
from pydantic import Field
from datetime import datetime
from typing import Optional

from app.schemas.base import CamelModel, RequestModel

class Mood(str, Enum):
    great = "great"
    good = "good"
    okay = "okay"
    struggling = "struggling"

class CheckinCreate(RequestModel):
    mood: Mood
    notes: Optional[str] = Field(None, max_length=2000)

class DailyCheckin(CamelModel):
    id: str
    user_id: str
    mood: Mood
    notes: Optional[str] = None
    date: datetime
    created_at: datetime
