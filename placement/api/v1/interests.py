"""
Interest endpoints.
"""

from fastapi import APIRouter, Depends, status

from placement.api import deps
from placement.schemas.interest import (
    ActiveInterestResponse,
    InterestCreate,
    InterestResponse,
)
from placement.services.allocation_service import InterestAllocator

router = APIRouter(prefix="/interests", tags=["Interests"])


@router.get("/active", response_model=ActiveInterestResponse)
def get_active_interest(
    client_uuid: str = Depends(deps.get_client_uuid),
    allocator: InterestAllocator = Depends(deps.get_allocator),
) -> ActiveInterestResponse:
    interest = allocator.get_active_interest(client_uuid).unwrap()
    if interest is None:
        return ActiveInterestResponse(interest=None)
    return ActiveInterestResponse(interest=InterestResponse.model_validate(interest))


@router.post("", response_model=InterestResponse, status_code=status.HTTP_201_CREATED)
def express_interest(
    payload: InterestCreate,
    client_uuid: str = Depends(deps.get_client_uuid),
    allocator: InterestAllocator = Depends(deps.get_allocator),
) -> InterestResponse:
    """
    Claim a bed for the caller.

    409 ALLOCATION_CONFLICT when an interest is already waiting/offered,
    409 NOT_ONBOARDED when onboarding is incomplete.
    """
    interest = allocator.express_interest(client_uuid, payload.bed_id).unwrap()
    return InterestResponse.model_validate(interest)
