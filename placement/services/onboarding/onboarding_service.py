"""
Onboarding state machine.

Drives a patient record through the configured stages:
- load-or-create the record for an identity and resume from its status
- buffer field edits (or persist them eagerly)
- gate every transition on the validation of the whole current stage
- persist the stage in one write, flipping status to onboarded on the last
"""

from typing import Any, Dict, Mapping, Optional, Tuple

from placement.config.settings import settings
from placement.core.exceptions import (
    BaseAppException,
    InvalidStateError,
    ValidationError,
    create_validation_error,
)
from placement.models import PATIENT_STAGE_FIELDS, Patient, PatientStatus
from placement.repositories.record_store import RecordStore
from placement.services.base import BaseService, ServiceResult
from placement.services.onboarding.session import OnboardingSession, PersistenceMode
from placement.services.onboarding.stages import (
    StageDescriptor,
    get_stage_profile,
    validate_stage_sequence,
)


class OnboardingService(BaseService):
    """
    Staged onboarding over a patient record.

    Features:
    - Configurable ordered stages
    - Batch (on transition) or eager (per edit) persistence
    - Resumption keyed on the persisted status only
    """

    def __init__(
        self,
        store: RecordStore,
        stages: Optional[Tuple[StageDescriptor, ...]] = None,
        persistence: Optional[PersistenceMode] = None,
    ):
        super().__init__(store)
        self.stages = validate_stage_sequence(
            stages if stages is not None else get_stage_profile(settings.ONBOARDING_PROFILE)
        )
        self.persistence = PersistenceMode(persistence or settings.ONBOARDING_PERSISTENCE)

    # -------------------------------------------------------------------------
    # Session lifecycle
    # -------------------------------------------------------------------------

    def _session_from_patient(self, patient: Patient) -> OnboardingSession:
        values = {name: getattr(patient, name) for name in PATIENT_STAGE_FIELDS}
        onboarded = patient.status == PatientStatus.ONBOARDED.value
        return OnboardingSession(
            client_uuid=patient.client_uuid,
            stages=self.stages,
            stage_index=len(self.stages) if onboarded else 0,
            status=patient.status,
            version=patient.version,
            values=values,
        )

    def start(self, client_uuid: str) -> ServiceResult[OnboardingSession]:
        """
        Load or create the patient record and open an onboarding session.

        A draft record starts at the first stage with its persisted values
        prefilled; an onboarded record starts at the catalog.

        Args:
            client_uuid: Resolved client identity

        Returns:
            ServiceResult containing the session
        """
        try:
            patient = self.store.get_patient(client_uuid)
            if patient is None:
                patient = self.store.create_draft_patient(client_uuid)
            session = self._session_from_patient(patient)
        except BaseAppException as e:
            return self._handle_exception(e, "start onboarding", client_uuid)

        self._logger.info(
            f"Onboarding session opened at stage {session.stage_name}",
            extra={"client_uuid": client_uuid, "patient_status": session.status},
        )
        return ServiceResult.success(session)

    # -------------------------------------------------------------------------
    # Field edits
    # -------------------------------------------------------------------------

    def _check_stage_fields(self, session: OnboardingSession, values: Mapping[str, Any]) -> StageDescriptor:
        stage = session.current_stage
        if stage is None:
            raise InvalidStateError(
                "Onboarding is already complete",
                details={"client_uuid": session.client_uuid},
            )
        foreign = sorted(set(values) - set(stage.field_names))
        if foreign:
            raise ValidationError(
                f"Fields not part of stage {stage.name}: {', '.join(foreign)}",
                field_errors={name: [f"Not part of stage {stage.name}"] for name in foreign},
            )
        return stage

    def set_fields(
        self,
        session: OnboardingSession,
        values: Mapping[str, Any],
    ) -> ServiceResult[OnboardingSession]:
        """
        Record edits to fields of the current stage.

        In batch mode the edits are only buffered. In eager mode each
        edited field is validated and, if all pass, written immediately.

        Args:
            session: Open onboarding session
            values: Field name -> raw value

        Returns:
            ServiceResult containing the session
        """
        with session.lock:
            try:
                stage = self._check_stage_fields(session, values)

                if self.persistence == PersistenceMode.EAGER and values:
                    edited = StageDescriptor(
                        stage.name,
                        stage.title,
                        tuple(spec for spec in stage.fields if spec.name in values),
                    )
                    errors = edited.validate(values)
                    if errors:
                        raise create_validation_error(errors)
                    patient = self.store.update_patient(
                        session.client_uuid,
                        edited.normalize(values),
                        expected_version=session.version,
                    )
                    session.version = patient.version
                    session.values.update(edited.normalize(values))
                    session.dirty.difference_update(values)
                else:
                    session.values.update(values)
                    session.dirty.update(values)
            except BaseAppException as e:
                return self._handle_exception(e, "set onboarding fields", session.client_uuid)

        return ServiceResult.success(session)

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def advance(self, session: OnboardingSession) -> ServiceResult[OnboardingSession]:
        """
        Validate the current stage and, if it passes, persist it and move on.

        Nothing is written when any field of the stage fails validation;
        the returned error lists every failing field. Accepting the final
        stage sets the record's status to onboarded in the same write.

        Args:
            session: Open onboarding session

        Returns:
            ServiceResult containing the advanced session
        """
        with session.lock:
            try:
                stage = self._check_stage_fields(session, {})
                values = session.stage_values()
                errors = stage.validate(values)
                if errors:
                    raise create_validation_error(errors)

                fields = stage.normalize(values)
                is_final = session.stage_index == len(session.stages) - 1
                if is_final:
                    fields["status"] = PatientStatus.ONBOARDED.value

                patient = self.store.update_patient(
                    session.client_uuid,
                    fields,
                    expected_version=session.version,
                )
            except BaseAppException as e:
                return self._handle_exception(
                    e,
                    "advance onboarding",
                    session.client_uuid,
                    {"stage": session.stage_name},
                )

            fields.pop("status", None)
            session.values.update(fields)
            session.dirty.difference_update(fields)
            session.version = patient.version
            session.status = patient.status
            session.stage_index += 1

        self._logger.info(
            f"Onboarding stage {stage.name} accepted",
            extra={"client_uuid": session.client_uuid, "next_stage": session.stage_name},
        )
        return ServiceResult.success(session, message=f"Stage {stage.name} saved")

    def back(self, session: OnboardingSession) -> ServiceResult[OnboardingSession]:
        """Return to the previous stage without persisting anything."""
        with session.lock:
            try:
                if session.is_complete:
                    raise InvalidStateError(
                        "Onboarding is already complete",
                        details={"client_uuid": session.client_uuid},
                    )
                if session.stage_index == 0:
                    raise InvalidStateError(
                        "Already at the first stage",
                        details={"client_uuid": session.client_uuid},
                    )
            except BaseAppException as e:
                return self._handle_exception(e, "step back onboarding", session.client_uuid)
            session.stage_index -= 1

        return ServiceResult.success(session)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def is_stale(self, session: OnboardingSession) -> bool:
        """
        Whether the persisted record moved on since the session last saw it.

        A write from another process, or a direct store update, changes the
        record's version or status; the session must then be reopened.
        """
        patient = self.store.get_patient(session.client_uuid)
        return (
            patient is None
            or patient.version != session.version
            or patient.status != session.status
        )

    def validate_stage(self, session: OnboardingSession) -> Dict[str, Any]:
        """Field errors of the current stage, without transitioning."""
        stage = session.current_stage
        if stage is None:
            return {}
        return stage.validate(session.stage_values())


__all__ = ["OnboardingService"]
