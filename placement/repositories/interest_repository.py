"""
Interest repository.

Interest creation is a single INSERT guarded by the partial unique index
on interests(client_uuid) for waiting/offered rows. A violation of that
index is reported as AllocationConflict; the read that precedes the
insert only produces a friendlier error earlier and is never relied on.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from placement.core.exceptions import (
    AllocationConflict,
    InvalidStateError,
)
from placement.core.logging import get_logger
from placement.models import ACTIVE_INTEREST_STATUSES, Interest, InterestStatus
from placement.repositories.base import BaseRepository

logger = get_logger(__name__)

_ACTIVE_VALUES = tuple(sorted(status.value for status in ACTIVE_INTEREST_STATUSES))


class InterestRepository(BaseRepository[Interest]):
    """Interest reads and constraint-backed writes."""

    def __init__(self, db: Session):
        super().__init__(Interest, db)

    # ==================== Read Operations ====================

    def find_active_by_client(self, client_uuid: str) -> Optional[Interest]:
        """
        Return the waiting/offered interest of an identity, if any.
        """
        try:
            stmt = (
                select(Interest)
                .where(
                    Interest.client_uuid == client_uuid,
                    Interest.status.in_(_ACTIVE_VALUES),
                )
                .execution_options(populate_existing=True)
            )
            return self.db.scalars(stmt).first()
        except SQLAlchemyError as e:
            raise self._store_error(e, "find_active_by_client") from e

    # ==================== Write Operations ====================

    def create_for_client(self, client_uuid: str, bed_id: str) -> Interest:
        """
        Insert a waiting interest for an identity.

        Args:
            client_uuid: Client identity token
            bed_id: Bed being claimed

        Returns:
            The new interest

        Raises:
            AllocationConflict: The identity already holds an active interest
        """
        active = self.find_active_by_client(client_uuid)
        if active is not None:
            logger.warning(
                "Interest rejected, active interest exists",
                extra={"client_uuid": client_uuid, "bed_id": bed_id, "interest_id": active.id},
            )
            raise AllocationConflict(client_uuid, bed_id, active.id)

        try:
            interest = self.create(
                {
                    "client_uuid": client_uuid,
                    "bed_id": bed_id,
                    "status": InterestStatus.WAITING.value,
                }
            )
        except IntegrityError as e:
            active = self.find_active_by_client(client_uuid)
            if active is None:
                logger.error(
                    "Interest insert violated a constraint other than the active-interest index",
                    extra={"client_uuid": client_uuid, "bed_id": bed_id},
                )
                raise InvalidStateError(
                    "Interest could not be recorded",
                    details={"client_uuid": client_uuid, "bed_id": bed_id},
                ) from e
            logger.warning(
                "Concurrent interest won the allocation",
                extra={"client_uuid": client_uuid, "bed_id": bed_id, "interest_id": active.id},
            )
            raise AllocationConflict(client_uuid, bed_id, active.id) from e

        logger.info(
            "Interest created",
            extra={"client_uuid": client_uuid, "bed_id": bed_id, "interest_id": interest.id},
        )
        return interest

    def set_status(self, interest_id: str, status: InterestStatus) -> Interest:
        """
        Move an interest to a new status.

        Used by the collaborator that manages interests after creation
        (offers, acceptance, withdrawal). Re-activating an interest while
        another one is active is rejected by the same index.
        """
        status = InterestStatus(status)
        interest = self.get_by_id(interest_id)
        client_uuid = interest.client_uuid
        interest.status = status.value
        try:
            self.db.commit()
        except IntegrityError as e:
            self.rollback()
            active = self.find_active_by_client(client_uuid)
            raise AllocationConflict(
                client_uuid, interest.bed_id, active.id if active else None
            ) from e
        except SQLAlchemyError as e:
            raise self._store_error(e, "set_status") from e

        self.db.refresh(interest)
        logger.info(
            f"Interest moved to {status.value}",
            extra={"client_uuid": client_uuid, "interest_id": interest_id},
        )
        return interest


__all__ = ["InterestRepository"]
