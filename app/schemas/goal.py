from pydantic import Field
from datetime import datetime
from typing import List, Literal, Optional

from app.schemas.base import CamelModel, RequestModel

class GoalCreate(RequestModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    category: str = Field("personal", min_length=1, max_length=50)
    target_date: Optional[datetime] = None
    progress: int = Field(0, ge=0, le=100)
    is_completed: bool = False
    is_team_goal: bool = False
    milestones: List[str] = Field(default_factory=list)

class GoalUpdate(RequestModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[str] = Field(None, min_length=1, max_length=50)
    target_date: Optional[datetime] = None
    progress: Optional[int] = Field(None, ge=0, le=100)
    is_completed: Optional[bool] = None
    is_team_goal: Optional[bool] = None

class Goal(CamelModel):
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    category: str = "personal"
    target_date: Optional[datetime] = None
    progress: int = 0
    is_completed: bool = False
    is_team_goal: bool = False
    created_at: datetime
    updated_at: datetime

class MilestoneUpdate(RequestModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    is_completed: Optional[bool] = None
    order: Optional[int] = Field(None, ge=0)

class Milestone(CamelModel):
    id: str
    goal_id: str
    title: str
    is_completed: bool = False
    order: int = 0
    created_at: datetime
    completed_at: Optional[datetime] = None

class CollaboratorCreate(RequestModel):
    user_id: str = Field(..., min_length=1)
    role: Literal["owner", "collaborator"] = "collaborator"

class GoalCollaborator(CamelModel):
    id: str
    goal_id: str
    user_id: str
    role: str = "collaborator"
    created_at: datetime

class ProgressCreate(RequestModel):
    goal_id: str = Field(..., min_length=1)
    new_progress: int = Field(..., ge=0, le=100)
    notes: Optional[str] = None

class ProgressEntry(CamelModel):
    id: str
    goal_id: str
    user_id: str
    previous_progress: int = 0
    new_progress: int
    notes: Optional[str] = None
    created_at: datetime

class GoalWithDetails(Goal):
    milestones: List[Milestone] = Field(default_factory=list)
    collaborators: List[GoalCollaborator] = Field(default_factory=list)

class GoalDetailResponse(GoalWithDetails):
    progress_entries: List[ProgressEntry] = Field(default_factory=list)

class DeleteResponse(CamelModel):
    success: bool = True
