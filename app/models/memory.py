import uuid
from sqlalchemy import Column, String, Text, ForeignKey, JSON
from app.database import Base, UTCDateTime
from app.utils.timeutils import utcnow

class PhotoMemory(Base):
    __tablename__ = "photo_memories"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    goal_id = Column(String(36), ForeignKey("goals.id", ondelete="SET NULL"), nullable=True)
    progress_entry_id = Column(String(36), ForeignKey("progress_entries.id", ondelete="SET NULL"), nullable=True)
    photo_url = Column(Text, nullable=False)
    caption = Column(Text, nullable=True)
    tags = Column(JSON, default=list)
    created_at = Column(UTCDateTime, default=utcnow)
