"""
Base repository implementing common operations using SQLAlchemy 2.0.

Model-specific repositories extend this with the read queries the
recommendation engine needs. Errors are logged and re-raised; retry policy
belongs to the caller's infrastructure.
"""

from __future__ import annotations
from typing import Generic, TypeVar, Type, Optional
from uuid import UUID
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import logging

logger = logging.getLogger(__name__)

# Generic type variable for the model
T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Generic base repository.

    Type Parameters:
        T: The SQLAlchemy model type this repository manages

    Example:
        class InteractionRepository(BaseRepository[UserInteraction]):
            def __init__(self):
                super().__init__(UserInteraction)
    """

    def __init__(self, model: Type[T]):
        """
        Initialize the repository with a model class.

        Args:
            model: The SQLAlchemy model class to manage
        """
        self.model = model

    async def get(
        self,
        db: AsyncSession,
        id: UUID
    ) -> Optional[T]:
        """
        Retrieve a single record by ID.

        Args:
            db: Active database session
            id: UUID of the record to retrieve

        Returns:
            Model instance if found, None otherwise
        """
        try:
            stmt = select(self.model).where(self.model.id == id)
            result = await db.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching {self.model.__name__} by id {id}: {e}")
            raise

    async def create(
        self,
        db: AsyncSession,
        obj_in: dict
    ) -> T:
        """
        Create a new record and flush it.

        Args:
            db: Active database session
            obj_in: Dictionary of field values for the new record

        Returns:
            Created model instance

        Raises:
            IntegrityError: If constraints are violated (e.g., unknown foreign key)

        Example:
            interaction = await repo.create(db, {"user_id": user_id, ...})
            await db.commit()
        """
        try:
            db_obj = self.model(**obj_in)
            db.add(db_obj)
            await db.flush()
            return db_obj
        except IntegrityError as e:
            logger.warning(f"Integrity error creating {self.model.__name__}: {e}")
            await db.rollback()
            raise
        except SQLAlchemyError as e:
            logger.error(f"Error creating {self.model.__name__}: {e}")
            await db.rollback()
            raise
