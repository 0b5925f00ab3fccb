"""
Process-local registry of open onboarding sessions.

Keeps the buffered edits of each identity between HTTP requests. Losing
an entry only loses unsaved edits: the next request reopens the session
from the persisted record. Completed sessions are never kept, and a
cached session whose record moved on is replaced by a fresh one.
"""

import threading
from typing import Callable, Dict, Optional

from placement.services.base import ServiceResult
from placement.services.onboarding.session import OnboardingSession

SessionCheck = Callable[[OnboardingSession], bool]


class OnboardingSessionRegistry:
    def __init__(self):
        self._sessions: Dict[str, OnboardingSession] = {}
        self._lock = threading.Lock()

    def get(self, client_uuid: str) -> Optional[OnboardingSession]:
        with self._lock:
            return self._sessions.get(client_uuid)

    def get_or_start(
        self,
        client_uuid: str,
        start: Callable[[str], ServiceResult[OnboardingSession]],
        is_stale: Optional[SessionCheck] = None,
    ) -> ServiceResult[OnboardingSession]:
        """
        Return the cached session, or open one from the store.

        Args:
            client_uuid: Resolved client identity
            start: Opens a session from the persisted record
            is_stale: True when a cached session no longer matches the record

        Returns:
            ServiceResult containing the session
        """
        cached = self.get(client_uuid)
        if cached is not None and not (is_stale and is_stale(cached)):
            return ServiceResult.success(cached)

        result = start(client_uuid)
        if not result.is_success:
            return result

        session = result.data
        with self._lock:
            current = self._sessions.get(client_uuid)
            if session.is_complete:
                if current is cached:
                    self._sessions.pop(client_uuid, None)
                return result
            # Another request may have opened it meanwhile; keep the first.
            if current is None or current is cached:
                self._sessions[client_uuid] = session
                current = session
        return ServiceResult.success(current)

    def release(self, session: OnboardingSession) -> None:
        """Drop the session once it has nothing left to buffer."""
        if session.is_complete:
            self.discard(session.client_uuid)

    def discard(self, client_uuid: str) -> None:
        with self._lock:
            self._sessions.pop(client_uuid, None)

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


session_registry = OnboardingSessionRegistry()
