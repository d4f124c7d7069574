"""Screening detail and occupancy statistics endpoints."""

from fastapi import APIRouter, Depends

from cinereserve.api.deps import get_catalog, require_roles
from cinereserve.schemas import ScreeningDetailResponse, ScreeningStatsResponse, SessionUser
from cinereserve.services.access import STAFF_ROLES
from cinereserve.services.catalog import CatalogService

router = APIRouter()


@router.get("/screenings/{screening_id}", response_model=ScreeningDetailResponse)
async def get_screening(
    screening_id: str,
    catalog: CatalogService = Depends(get_catalog),
) -> ScreeningDetailResponse:
    """Screening with its movie and the seats already reserved."""
    detail = await catalog.get_screening(screening_id)
    return ScreeningDetailResponse(data=detail)


@router.get("/screenings_stats", response_model=ScreeningStatsResponse)
async def screening_stats(
    _: SessionUser = Depends(require_roles(*STAFF_ROLES)),
    catalog: CatalogService = Depends(get_catalog),
) -> ScreeningStatsResponse:
    """Occupancy of every upcoming screening, for staff dashboards."""
    stats = await catalog.upcoming_screening_stats()
    return ScreeningStatsResponse(count=len(stats), data=stats)
