from sqlalchemy import Column, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.dialects.postgresql import UUID
import uuid
from app.core.database import Base


class FavoriteCompanion(Base):
    __tablename__ = "favorite_companions"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    hirer_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # Companion's owning user id
    companion_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (UniqueConstraint('hirer_id', 'companion_id', name='unique_hirer_companion_favorite'),)

    def __repr__(self):
        return f"<FavoriteCompanion(hirer_id={self.hirer_id}, companion_id={self.companion_id})>"
