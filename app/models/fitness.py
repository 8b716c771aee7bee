import uuid
from sqlalchemy import Column, Integer, String, Text, ForeignKey
from app.database import Base, UTCDateTime
from app.utils.timeutils import utcnow

class FitnessTracking(Base):
    __tablename__ = "fitness_tracking"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    steps = Column(Integer, default=0)
    distance = Column(Integer, default=0)        # metres
    calories = Column(Integer, default=0)
    active_minutes = Column(Integer, default=0)
    heart_rate = Column(Integer, nullable=True)  # bpm
    weight = Column(Integer, nullable=True)      # grams
    notes = Column(Text, nullable=True)
    date = Column(UTCDateTime, default=utcnow, nullable=False)
    created_at = Column(UTCDateTime, default=utcnow)
