"""
Bed catalog endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from placement.api import deps
from placement.schemas.bed import BedListResponse, BedResponse
from placement.services.catalog_service import CatalogService

router = APIRouter(prefix="/beds", tags=["Beds"])


@router.get("", response_model=BedListResponse)
def list_open_beds(
    room_type: Optional[str] = Query(default=None, description="Filter by room type"),
    catalog: CatalogService = Depends(deps.get_catalog_service),
) -> BedListResponse:
    """Beds open for allocation, earliest availability first."""
    beds = catalog.list_open_units(room_type).unwrap()
    items = [BedResponse.model_validate(bed) for bed in beds]
    return BedListResponse(items=items, count=len(items))
