import uuid
from sqlalchemy import Column, String, Text, ForeignKey
from app.database import Base, UTCDateTime
from app.utils.timeutils import utcnow

class DailyCheckin(Base):
    __tablename__ = "daily_checkins"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    mood = Column(String, nullable=False)  # great, good, okay, struggling
    notes = Column(Text, nullable=True)
    date = Column(UTCDateTime, default=utcnow, nullable=False)
    created_at = Column(UTCDateTime, default=utcnow)
