"""
Session-scoped identity resolution.
"""

from typing import Optional

from placement.config.settings import settings
from placement.core.logging import client_uuid as client_uuid_context
from placement.services.identity.providers import IdentityProvider, LocalFileIdentityProvider


class IdentityResolver:
    """
    Resolves the client identity once per session.

    The token is obtained from the injected provider on first call and
    reused for the rest of the session; it is also bound to the logging
    context so records emitted afterwards carry it.
    """

    def __init__(self, provider: IdentityProvider):
        self.provider = provider
        self._client_uuid: Optional[str] = None

    def resolve(self) -> str:
        if self._client_uuid is None:
            self._client_uuid = self.provider.resolve()
            client_uuid_context.set(self._client_uuid)
        return self._client_uuid


def default_identity_provider() -> IdentityProvider:
    """Local file provider at the configured IDENTITY_STORE_PATH."""
    return LocalFileIdentityProvider(settings.IDENTITY_STORE_PATH)
