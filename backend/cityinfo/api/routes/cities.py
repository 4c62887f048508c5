"""City Routes — legacy unversioned surface and the versioned, authenticated surface.

Invariants:
    - Both surfaces delegate to CityService (consistent shared logic)
    - /api/v2/cities requires a bearer token; /api/cities does not
    - Paged listings surface PaginationMetadata in the X-Pagination header (JSON)
    - City detail routes declare no response_model: the summary shape must not be
      coerced into CityDto (which would add an empty points list)

Design Decisions:
    - Paging parameters are not range-validated here: CityService clamps them,
      so a list request never fails on paging values
"""

import json

from fastapi import APIRouter, Depends, Query, Response

from cityinfo.api.dependencies import get_city_service, get_current_caller
from cityinfo.config import Settings, get_settings
from cityinfo.schemas.city import CityWithoutPointsOfInterestDto
from cityinfo.services.city_service import CityService

PAGINATION_HEADER = "X-Pagination"

legacy_router = APIRouter(prefix="/api/cities", tags=["cities"])
router = APIRouter(
    prefix="/api/v2/cities", tags=["cities"],
    dependencies=[Depends(get_current_caller)],
)


# ─── Legacy (unversioned, unauthenticated) ──────────────────────

@legacy_router.get("", response_model=list[CityWithoutPointsOfInterestDto])
async def get_cities_legacy(service: CityService = Depends(get_city_service)):
    """All cities, without points of interest."""
    return await service.get_all_cities()


@legacy_router.get("/{city_id}")
async def get_city_legacy(
    city_id: int,
    include_points_of_interest: bool = False,
    service: CityService = Depends(get_city_service),
):
    return await service.get_city(city_id, include_points_of_interest)


# ─── Versioned (v2, authenticated) ──────────────────────────────

@router.get("", response_model=list[CityWithoutPointsOfInterestDto])
async def get_cities(
    response: Response,
    name: str | None = Query(None),
    search_query: str | None = Query(None),
    page_number: int = Query(1),
    page_size: int | None = Query(None),
    service: CityService = Depends(get_city_service),
    settings: Settings = Depends(get_settings),
):
    """Filtered, paged city listing. Pagination metadata goes in X-Pagination."""
    if page_size is None:
        page_size = settings.default_cities_page_size
    cities, metadata = await service.list_cities(
        name=name,
        search_query=search_query,
        page_number=page_number,
        page_size=page_size,
    )
    response.headers[PAGINATION_HEADER] = json.dumps(metadata.to_header())
    return cities


@router.get("/{city_id}")
async def get_city(
    city_id: int,
    include_points_of_interest: bool = False,
    service: CityService = Depends(get_city_service),
):
    """City by id; nested points of interest only when requested."""
    return await service.get_city(city_id, include_points_of_interest)
