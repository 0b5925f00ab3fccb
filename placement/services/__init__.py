"""
Engine services: identity, onboarding, catalog and allocation.
"""

from placement.services.allocation_service import InterestAllocator
from placement.services.base import BaseService, ServiceError, ServiceResult
from placement.services.catalog_service import CatalogService, UnitCatalog
from placement.services.onboarding import OnboardingService, OnboardingSession

__all__ = [
    "BaseService",
    "CatalogService",
    "InterestAllocator",
    "OnboardingService",
    "OnboardingSession",
    "ServiceError",
    "ServiceResult",
    "UnitCatalog",
]
