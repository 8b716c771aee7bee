import uuid
from sqlalchemy import Column, String, ForeignKey, JSON
from app.database import Base, UTCDateTime
from app.utils.timeutils import utcnow

class Activity(Base):
    __tablename__ = "activities"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    type = Column(String, nullable=False)  # goal_created, milestone_completed, progress_updated, ...
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    goal_id = Column(String(36), ForeignKey("goals.id", ondelete="SET NULL"), nullable=True, index=True)
    milestone_id = Column(String(36), ForeignKey("milestones.id", ondelete="SET NULL"), nullable=True)
    data = Column(JSON, nullable=True)
    created_at = Column(UTCDateTime, default=utcnow, index=True)
