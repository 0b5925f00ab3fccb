"""
Record store aggregate.

Single entry point over the patient, bed and interest repositories,
sharing one session. Services depend on this rather than on the
individual repositories.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from placement.models import Bed, Interest, InterestStatus, Patient
from placement.repositories.bed_repository import BedRepository
from placement.repositories.interest_repository import InterestRepository
from placement.repositories.patient_repository import PatientRepository


class RecordStore:
    """
    Keyed read/write access to patients, beds and interests.

    Handles:
    - identity -> patient uniqueness (create_draft_patient)
    - identity -> at most one active interest (create_interest)
    - the open-bed catalog (list_open_units)
    """

    def __init__(self, session: Session):
        self.session = session
        self.patients = PatientRepository(session)
        self.beds = BedRepository(session)
        self.interests = InterestRepository(session)

    # ============================================================================
    # PATIENTS
    # ============================================================================

    def get_patient(self, client_uuid: str) -> Optional[Patient]:
        return self.patients.find_by_client_uuid(client_uuid)

    def create_draft_patient(self, client_uuid: str) -> Patient:
        return self.patients.create_draft(client_uuid)

    def update_patient(
        self,
        client_uuid: str,
        fields: Dict[str, Any],
        expected_version: Optional[int] = None,
    ) -> Patient:
        return self.patients.update_fields(client_uuid, fields, expected_version)

    # ============================================================================
    # BEDS
    # ============================================================================

    def list_open_units(self, room_type: Optional[str] = None) -> List[Bed]:
        return self.beds.list_open(room_type)

    def get_unit(self, bed_id: str) -> Optional[Bed]:
        return self.beds.find_by_id(bed_id)

    # ============================================================================
    # INTERESTS
    # ============================================================================

    def get_active_interest(self, client_uuid: str) -> Optional[Interest]:
        return self.interests.find_active_by_client(client_uuid)

    def create_interest(self, client_uuid: str, bed_id: str) -> Interest:
        return self.interests.create_for_client(client_uuid, bed_id)

    def set_interest_status(self, interest_id: str, status: InterestStatus) -> Interest:
        return self.interests.set_status(interest_id, status)


__all__ = ["RecordStore"]
