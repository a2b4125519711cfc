from sqlalchemy import Column, DateTime, Enum, ForeignKey, String
from sqlalchemy.sql import func
from sqlalchemy.dialects.postgresql import UUID
import uuid
import enum
from app.core.database import Base


class BookingStatus(str, enum.Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class Booking(Base):
    """Subset of the booking record that the recommendation engine reads."""
    __tablename__ = "bookings"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    hirer_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    # Companion's owning user id, not the profile id
    companion_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    occasion_type = Column(String(50))
    status = Column(Enum(BookingStatus), nullable=False, default=BookingStatus.PENDING, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    def __repr__(self):
        return f"<Booking(hirer_id={self.hirer_id}, companion_id={self.companion_id}, status={self.status})>"
