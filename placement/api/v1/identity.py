"""
Identity endpoints.
"""

from fastapi import APIRouter, Depends

from placement.api import deps
from placement.schemas.identity import IdentityResponse
from placement.services.identity import RequestIdentityProvider

router = APIRouter(prefix="/identity", tags=["Identity"])


@router.post("", response_model=IdentityResponse)
def resolve_identity(
    provider: RequestIdentityProvider = Depends(deps.get_identity_provider),
    client_uuid: str = Depends(deps.get_client_uuid),
) -> IdentityResponse:
    """
    Resolve the caller's identity.

    Returns the token presented in the identity cookie/header, or issues
    a new one and sets the cookie.
    """
    return IdentityResponse(client_uuid=client_uuid, issued=provider.issued)
