"""
Patient repository.

Owns the identity -> patient uniqueness guarantee: draft creation leans on
the unique key over client_uuid and treats a conflicting insert as
"someone else created it first".
"""

from typing import Any, Dict, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from placement.core.exceptions import (
    ResourceNotFoundError,
    StaleWrite,
    ValidationError,
)
from placement.core.logging import get_logger
from placement.models import PATIENT_STAGE_FIELDS, Patient, PatientStatus
from placement.repositories.base import BaseRepository

logger = get_logger(__name__)

WRITABLE_FIELDS = frozenset(PATIENT_STAGE_FIELDS) | {"status"}


class PatientRepository(BaseRepository[Patient]):
    """Keyed access to patient records by client identity."""

    def __init__(self, db: Session):
        super().__init__(Patient, db)

    # ==================== Read Operations ====================

    def find_by_client_uuid(self, client_uuid: str) -> Optional[Patient]:
        """
        Point read by identity.

        Args:
            client_uuid: Client identity token

        Returns:
            Patient or None
        """
        try:
            stmt = (
                select(Patient)
                .where(Patient.client_uuid == client_uuid)
                .execution_options(populate_existing=True)
            )
            return self.db.scalars(stmt).one_or_none()
        except SQLAlchemyError as e:
            raise self._store_error(e, "find_by_client_uuid") from e

    def get_by_client_uuid(self, client_uuid: str) -> Patient:
        patient = self.find_by_client_uuid(client_uuid)
        if patient is None:
            raise ResourceNotFoundError("Patient", client_uuid)
        return patient

    # ==================== Write Operations ====================

    def create_draft(self, client_uuid: str) -> Patient:
        """
        Create the draft record for an identity, or return the existing one.

        Safe under concurrent first visits: the insert is attempted first
        and a unique-key conflict is resolved by re-reading the row the
        other caller committed.

        Args:
            client_uuid: Client identity token

        Returns:
            The patient record bound to the identity
        """
        existing = self.find_by_client_uuid(client_uuid)
        if existing is not None:
            return existing

        try:
            patient = self.create(
                {
                    "client_uuid": client_uuid,
                    "status": PatientStatus.DRAFT.value,
                    "version": 1,
                }
            )
            logger.info("Created draft patient", extra={"client_uuid": client_uuid})
            return patient
        except IntegrityError as e:
            logger.info(
                "Draft patient already created by a concurrent caller",
                extra={"client_uuid": client_uuid},
            )
            existing = self.find_by_client_uuid(client_uuid)
            if existing is None:
                raise self._store_error(e, "create_draft") from e
            return existing

    def update_fields(
        self,
        client_uuid: str,
        fields: Dict[str, Any],
        expected_version: Optional[int] = None,
    ) -> Patient:
        """
        Apply a partial update as a single statement.

        Every field in ``fields`` is written in the same UPDATE, so a batch
        is either fully visible or not at all. Each write bumps ``version``;
        when ``expected_version`` is given, the write only applies if no
        newer write has landed in between.

        Args:
            client_uuid: Client identity token
            fields: Column values to write
            expected_version: Version the caller last observed

        Returns:
            The refreshed patient record

        Raises:
            ValidationError: Unknown field names
            ResourceNotFoundError: No record for the identity
            StaleWrite: expected_version no longer current
        """
        unknown = sorted(set(fields) - WRITABLE_FIELDS)
        if unknown:
            raise ValidationError(
                f"Unknown patient fields: {', '.join(unknown)}",
                field_errors={name: ["Unknown field"] for name in unknown},
            )

        stmt = (
            update(Patient)
            .where(Patient.client_uuid == client_uuid)
            .values(**fields, version=Patient.version + 1)
            .execution_options(synchronize_session=False)
        )
        if expected_version is not None:
            stmt = stmt.where(Patient.version == expected_version)

        try:
            result = self.db.execute(stmt)
            if result.rowcount == 0:
                self.rollback()
                current = self.find_by_client_uuid(client_uuid)
                if current is None:
                    raise ResourceNotFoundError("Patient", client_uuid)
                logger.warning(
                    "Rejected superseded patient write",
                    extra={
                        "client_uuid": client_uuid,
                        "expected_version": expected_version,
                        "current_version": current.version,
                    },
                )
                raise StaleWrite(client_uuid, expected_version, current.version)
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._store_error(e, "update_fields") from e

        patient = self.get_by_client_uuid(client_uuid)
        logger.info(
            f"Updated patient fields: {', '.join(sorted(fields))}",
            extra={"client_uuid": client_uuid, "version": patient.version},
        )
        return patient


__all__ = ["PatientRepository", "WRITABLE_FIELDS"]
