from sqlalchemy import Column, DateTime, Enum, Float, ForeignKey, Integer, String
from sqlalchemy.sql import func
from sqlalchemy.dialects.postgresql import UUID
import uuid
import enum
from app.core.database import Base


class InteractionEventType(str, enum.Enum):
    VIEW = "VIEW"
    PROFILE_OPEN = "PROFILE_OPEN"
    BOOKMARK = "BOOKMARK"
    UNBOOKMARK = "UNBOOKMARK"
    MESSAGE_SENT = "MESSAGE_SENT"
    BOOKING_STARTED = "BOOKING_STARTED"
    BOOKING_COMPLETED = "BOOKING_COMPLETED"
    BOOKING_CANCELLED = "BOOKING_CANCELLED"


class UserInteraction(Base):
    """Append-only log of client actions on companion profiles."""
    __tablename__ = "user_interactions"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # Companion's owning user id (same namespace as favorites and bookings)
    companion_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    event_type = Column(Enum(InteractionEventType), nullable=False)
    event_value = Column(Float, nullable=False, default=0.0)  # Weight at time of tracking

    # Client context
    dwell_time_ms = Column(Integer)
    session_id = Column(String(100))

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    def __repr__(self):
        return f"<UserInteraction(user_id={self.user_id}, companion_id={self.companion_id}, event_type={self.event_type})>"
