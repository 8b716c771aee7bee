import uuid
from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey
from app.database import Base, UTCDateTime
from app.utils.timeutils import utcnow

class Goal(Base):
    __tablename__ = "goals"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String, nullable=False, default="personal")  # health, career, personal, ...
    target_date = Column(UTCDateTime, nullable=True)
    progress = Column(Integer, default=0)  # 0–100
    is_completed = Column(Boolean, default=False)
    is_team_goal = Column(Boolean, default=False)
    created_at = Column(UTCDateTime, default=utcnow)
    updated_at = Column(UTCDateTime, default=utcnow, onupdate=utcnow)

class Milestone(Base):
    __tablename__ = "milestones"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    goal_id = Column(String(36), ForeignKey("goals.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(Text, nullable=False)
    is_completed = Column(Boolean, default=False)
    order = Column(Integer, default=0)
    created_at = Column(UTCDateTime, default=utcnow)
    completed_at = Column(UTCDateTime, nullable=True)

class GoalCollaborator(Base):
    __tablename__ = "goal_collaborators"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    goal_id = Column(String(36), ForeignKey("goals.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    role = Column(String, default="collaborator")  # owner, collaborator
    created_at = Column(UTCDateTime, default=utcnow)

class ProgressEntry(Base):
    __tablename__ = "progress_entries"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    goal_id = Column(String(36), ForeignKey("goals.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    previous_progress = Column(Integer, default=0)
    new_progress = Column(Integer, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(UTCDateTime, default=utcnow)
