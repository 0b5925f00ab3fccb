"""
Interest allocator.

Converts an (identity, bed) pair into a waiting interest. The
one-active-interest rule is enforced by the store's unique index; the
checks made here only decide which error the caller sees first.
"""

from typing import Optional, Tuple

from placement.config.settings import settings
from placement.core.exceptions import (
    BaseAppException,
    NotOnboarded,
    ResourceNotFoundError,
)
from placement.models import Interest, Patient
from placement.repositories.record_store import RecordStore
from placement.services.base import BaseService, ServiceResult
from placement.services.onboarding.stages import (
    StageDescriptor,
    get_stage_profile,
    validate_stage_sequence,
)


class InterestAllocator(BaseService):
    """
    Interest creation under the at-most-one-active-interest rule.

    Args:
        store: Record store
        require_onboarded: Gate allocation on status=onboarded
            (defaults to REQUIRE_ONBOARDED_FOR_INTEREST)
        stages: Stages whose fields must be valid when the gate is off
    """

    def __init__(
        self,
        store: RecordStore,
        require_onboarded: Optional[bool] = None,
        stages: Optional[Tuple[StageDescriptor, ...]] = None,
    ):
        super().__init__(store)
        self.require_onboarded = (
            settings.REQUIRE_ONBOARDED_FOR_INTEREST if require_onboarded is None else require_onboarded
        )
        self.stages = validate_stage_sequence(
            stages if stages is not None else get_stage_profile(settings.ONBOARDING_PROFILE)
        )

    def _check_eligibility(self, client_uuid: str, patient: Optional[Patient]) -> None:
        if patient is None:
            raise NotOnboarded(client_uuid, message="No onboarding record exists for this identity")

        if self.require_onboarded:
            if not patient.is_onboarded:
                raise NotOnboarded(client_uuid)
            return

        values = {name: getattr(patient, name) for stage in self.stages for name in stage.field_names}
        missing = sorted(
            name
            for stage in self.stages
            for name in stage.validate(values)
        )
        if missing:
            raise NotOnboarded(
                client_uuid,
                message="Onboarding details are incomplete",
                missing_fields=missing,
            )

    def express_interest(self, client_uuid: str, bed_id: str) -> ServiceResult[Interest]:
        """
        Create a waiting interest for an identity on an open bed.

        Args:
            client_uuid: Resolved client identity
            bed_id: Bed being claimed

        Returns:
            ServiceResult containing the new interest; failures carry
            NOT_ONBOARDED, RESOURCE_NOT_FOUND or ALLOCATION_CONFLICT
        """
        try:
            self._check_eligibility(client_uuid, self.store.get_patient(client_uuid))

            bed = self.store.get_unit(bed_id)
            if bed is None or not bed.is_open:
                raise ResourceNotFoundError("Open bed", bed_id)

            interest = self.store.create_interest(client_uuid, bed_id)
        except BaseAppException as e:
            return self._handle_exception(e, "express interest", client_uuid, {"bed_id": bed_id})

        self._logger.info(
            "Interest expressed",
            extra={"client_uuid": client_uuid, "bed_id": bed_id, "interest_id": interest.id},
        )
        return ServiceResult.success(interest, message="Interest recorded")

    def get_active_interest(self, client_uuid: str) -> ServiceResult[Optional[Interest]]:
        try:
            interest = self.store.get_active_interest(client_uuid)
        except BaseAppException as e:
            return self._handle_exception(e, "load active interest", client_uuid)
        return ServiceResult.success(interest)


__all__ = ["InterestAllocator"]
