from placement.services.identity.providers import (
    CLIENT_UUID_KEY,
    IdentityProvider,
    InMemoryIdentityProvider,
    LocalFileIdentityProvider,
    RequestIdentityProvider,
    generate_client_uuid,
)
from placement.services.identity.resolver import IdentityResolver, default_identity_provider

__all__ = [
    "CLIENT_UUID_KEY",
    "IdentityProvider",
    "IdentityResolver",
    "InMemoryIdentityProvider",
    "LocalFileIdentityProvider",
    "RequestIdentityProvider",
    "default_identity_provider",
    "generate_client_uuid",
]
