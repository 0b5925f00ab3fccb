"""
FastAPI dependencies.

Example usage in a router:
    @router.get("/beds")
    def list_beds(catalog: CatalogService = Depends(deps.get_catalog_service)):
        ...
"""

from fastapi import Depends, Request, Response
from sqlalchemy.orm import Session

from placement.config.settings import settings
from placement.core.logging import client_uuid as client_uuid_context
from placement.db.session import get_db
from placement.repositories.record_store import RecordStore
from placement.services.allocation_service import InterestAllocator
from placement.services.catalog_service import CatalogService
from placement.services.identity import RequestIdentityProvider
from placement.services.onboarding import (
    OnboardingService,
    OnboardingSessionRegistry,
    session_registry,
)

# Long-lived cookie: the identity is meant to outlive the browser session.
IDENTITY_COOKIE_MAX_AGE = 60 * 60 * 24 * 365 * 5


# --- Identity ------------------------------------------------------------------

def get_identity_provider(request: Request) -> RequestIdentityProvider:
    presented = (
        request.cookies.get(settings.IDENTITY_COOKIE_NAME)
        or request.headers.get(settings.IDENTITY_HEADER_NAME)
    )
    return RequestIdentityProvider(presented)


def get_client_uuid(
    response: Response,
    provider: RequestIdentityProvider = Depends(get_identity_provider),
) -> str:
    """Resolve the caller's identity, handing a newly issued one back as a cookie."""
    client_uuid = provider.resolve()
    client_uuid_context.set(client_uuid)
    if provider.issued:
        response.set_cookie(
            settings.IDENTITY_COOKIE_NAME,
            client_uuid,
            max_age=IDENTITY_COOKIE_MAX_AGE,
            httponly=True,
            samesite="lax",
        )
    response.headers[settings.IDENTITY_HEADER_NAME] = client_uuid
    return client_uuid


# --- Record store & services ---------------------------------------------------

def get_store(db: Session = Depends(get_db)) -> RecordStore:
    return RecordStore(db)


def get_onboarding_service(store: RecordStore = Depends(get_store)) -> OnboardingService:
    return OnboardingService(store)


def get_catalog_service(store: RecordStore = Depends(get_store)) -> CatalogService:
    return CatalogService(store)


def get_allocator(store: RecordStore = Depends(get_store)) -> InterestAllocator:
    return InterestAllocator(store)


def get_session_registry() -> OnboardingSessionRegistry:
    return session_registry


__all__ = [
    "get_allocator",
    "get_catalog_service",
    "get_client_uuid",
    "get_db",
    "get_identity_provider",
    "get_onboarding_service",
    "get_session_registry",
    "get_store",
]
