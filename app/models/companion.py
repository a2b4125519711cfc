from sqlalchemy import (
    Boolean, Column, DateTime, Enum, ForeignKey, Integer, JSON, Numeric, String, Text,
)
from sqlalchemy.sql import func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid
import enum
from app.core.database import Base


class VerificationStatus(str, enum.Enum):
    PENDING = "PENDING"
    VERIFIED = "VERIFIED"
    REJECTED = "REJECTED"


class CompanionProfile(Base):
    __tablename__ = "companion_profiles"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    # Owning user account; interactions, favorites and bookings reference this id
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)

    # Public profile
    display_name = Column(String(100))
    bio = Column(Text)
    height_cm = Column(Integer)
    languages = Column(JSON)  # List of language codes
    hourly_rate = Column(Numeric(12, 2), nullable=False, default=0)

    # Aggregates maintained by the booking and review flows
    rating_avg = Column(Numeric(3, 2), nullable=False, default=0)
    rating_count = Column(Integer, nullable=False, default=0)
    completed_bookings = Column(Integer, nullable=False, default=0)
    total_bookings = Column(Integer, nullable=False, default=0)

    # Visibility
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    is_hidden = Column(Boolean, nullable=False, default=False, index=True)
    verification_status = Column(
        Enum(VerificationStatus), nullable=False, default=VerificationStatus.PENDING, index=True
    )

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="companion_profile")
    photos = relationship("CompanionPhoto", back_populates="companion", cascade="all, delete-orphan")
    services = relationship("CompanionService", back_populates="companion", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<CompanionProfile(id={self.id}, user_id={self.user_id}, status={self.verification_status})>"


class CompanionPhoto(Base):
    __tablename__ = "companion_photos"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    companion_id = Column(UUID(as_uuid=True), ForeignKey("companion_profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    url = Column(Text, nullable=False)
    is_primary = Column(Boolean, nullable=False, default=False)
    position = Column(Integer, nullable=False, default=0)
    # Set by moderation once the photo is confirmed to show the companion
    is_verified = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    companion = relationship("CompanionProfile", back_populates="photos")

    def __repr__(self):
        return f"<CompanionPhoto(id={self.id}, companion_id={self.companion_id}, verified={self.is_verified})>"


class CompanionService(Base):
    __tablename__ = "companion_services"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    companion_id = Column(UUID(as_uuid=True), ForeignKey("companion_profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    occasion_type = Column(String(50), nullable=False)  # dinner, event, travel, ...
    is_enabled = Column(Boolean, nullable=False, default=True)

    companion = relationship("CompanionProfile", back_populates="services")

    def __repr__(self):
        return f"<CompanionService(companion_id={self.companion_id}, occasion_type={self.occasion_type})>"
