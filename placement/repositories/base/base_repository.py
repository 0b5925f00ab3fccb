"""
Base repository with standardized read/write operations, transaction
management, and storage error translation.

Domain repositories derive from this and add the constraint-backed
operations the record store exposes.
"""

from typing import Any, Dict, Generic, Optional, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from placement.core.exceptions import (
    ResourceNotFoundError,
    StoreUnavailable,
    handle_database_exception,
)
from placement.core.logging import get_logger
from placement.models.base import BaseModel

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Base repository providing common database operations.

    Features:
    - Lookup by primary key
    - Create with commit/flush control
    - Rollback on failure
    - Translation of driver/storage failures into StoreUnavailable
    """

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    # ==================== Transaction Helpers ====================

    def rollback(self) -> None:
        """Rollback current transaction."""
        self.db.rollback()

    def _store_error(self, exc: Exception, operation: str) -> StoreUnavailable:
        """Roll back and build the StoreUnavailable error for a failed operation."""
        try:
            self.db.rollback()
        except SQLAlchemyError as rollback_error:
            logger.warning(f"Rollback failed after {operation}: {rollback_error}")

        logger.error(
            f"{self.model.__name__} {operation} failed: {exc}",
            exc_info=True,
            extra={"operation": operation, "exception_type": type(exc).__name__},
        )
        return handle_database_exception(exc, f"{self.model.__name__}.{operation}")

    # ==================== Create Operations ====================

    def create(self, data: Dict[str, Any], commit: bool = True) -> ModelType:
        """
        Create a new entity.

        Args:
            data: Entity column values
            commit: Whether to commit immediately (flush otherwise)

        Returns:
            Created entity

        Raises:
            IntegrityError: If a constraint is violated (left to the caller)
            StoreUnavailable: If any other storage error occurs
        """
        entity = self.model(**data)
        try:
            self.db.add(entity)
            if commit:
                self.db.commit()
                self.db.refresh(entity)
            else:
                self.db.flush()
        except IntegrityError:
            self.rollback()
            raise
        except SQLAlchemyError as e:
            raise self._store_error(e, "create") from e

        logger.info(f"Created {self.model.__name__} with id: {entity.id}")
        return entity

    # ==================== Read Operations ====================

    def find_by_id(self, id: str) -> Optional[ModelType]:
        """
        Find entity by ID.

        Args:
            id: Entity ID

        Returns:
            Entity or None
        """
        try:
            return self.db.get(self.model, id)
        except SQLAlchemyError as e:
            raise self._store_error(e, "find_by_id") from e

    def get_by_id(self, id: str) -> ModelType:
        """
        Get entity by ID or raise exception.

        Raises:
            ResourceNotFoundError: If entity not found
        """
        entity = self.find_by_id(id)
        if entity is None:
            raise ResourceNotFoundError(self.model.__name__, str(id))
        return entity

    def count(self) -> int:
        try:
            return self.db.scalar(select(func.count()).select_from(self.model)) or 0
        except SQLAlchemyError as e:
            raise self._store_error(e, "count") from e


__all__ = ["BaseRepository", "ModelType"]
