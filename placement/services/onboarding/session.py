"""
In-progress onboarding state for one identity.
"""

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Set, Tuple

from placement.models import PatientStatus
from placement.services.onboarding.stages import CATALOG_STAGE, StageDescriptor


class PersistenceMode(str, Enum):
    """When buffered field edits reach the record store."""

    BATCH = "batch"  # on stage transition
    EAGER = "eager"  # on every accepted edit


@dataclass
class OnboardingSession:
    """
    Buffered onboarding progress.

    The displayed stage lives only here; the persisted patient ``status``
    is what decides where a new session starts.
    """

    client_uuid: str
    stages: Tuple[StageDescriptor, ...]
    stage_index: int
    status: str
    version: int
    values: Dict[str, Any] = field(default_factory=dict)
    dirty: Set[str] = field(default_factory=set)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    @property
    def is_complete(self) -> bool:
        return self.stage_index >= len(self.stages)

    @property
    def current_stage(self) -> Optional[StageDescriptor]:
        if self.is_complete:
            return None
        return self.stages[self.stage_index]

    @property
    def stage_name(self) -> str:
        stage = self.current_stage
        return stage.name if stage else CATALOG_STAGE

    @property
    def is_onboarded(self) -> bool:
        return self.status == PatientStatus.ONBOARDED.value

    def stage_values(self) -> Dict[str, Any]:
        stage = self.current_stage
        if stage is None:
            return {}
        return {name: self.values.get(name) for name in stage.field_names}


__all__ = ["OnboardingSession", "PersistenceMode"]
