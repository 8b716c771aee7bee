from pydantic import Field
from datetime import datetime
from typing import Optional

from app.schemas.base import CamelModel, RequestModel

class FitnessCreate(RequestModel):
    steps: int = Field(0, ge=0)
    distance: int = Field(0, ge=0, description="Metres")
    calories: int = Field(0, ge=0)
    active_minutes: int = Field(0, ge=0, le=1440)
    heart_rate: Optional[int] = Field(None, gt=0, le=300)
    weight: Optional[int] = Field(None, gt=0, description="Grams")
    notes: Optional[str] = None

class FitnessUpdate(RequestModel):
    steps: Optional[int] = Field(None, ge=0)
    distance: Optional[int] = Field(None, ge=0)
    calories: Optional[int] = Field(None, ge=0)
    active_minutes: Optional[int] = Field(None, ge=0, le=1440)
    heart_rate: Optional[int] = Field(None, gt=0, le=300)
    weight: Optional[int] = Field(None, gt=0)
    notes: Optional[str] = None

class FitnessEntry(CamelModel):
    id: str
    user_id: str
    steps: int = 0
    distance: int = 0
    calories: int = 0
    active_minutes: int = 0
    heart_rate: Optional[int] = None
    weight: Optional[int] = None
    notes: Optional[str] = None
    date: datetime
    created_at: datetime
