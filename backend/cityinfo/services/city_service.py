"""City Service — read-only access to cities, with filtering and pagination.

Invariants:
    - Page size clamped to [1, max_page_size]; page number clamped to >= 1
    - Pagination metadata reflects the filtered total
    - get_city returns nested points of interest only when asked to
"""

from typing import Sequence

from cityinfo.core.errors import ErrorContext, ResourceNotFoundError
from cityinfo.core.pagination import (
    MAX_CITIES_PAGE_SIZE,
    PaginationMetadata,
    clamp_page_number,
    clamp_page_size,
)
from cityinfo.core.repository_protocols import CityInfoRepository
from cityinfo.schemas.city import CityDto, CityWithoutPointsOfInterestDto
from cityinfo.services.mapping import (
    cities_to_summary_dtos,
    city_to_dto,
    city_to_summary_dto,
)


class CityService:
    """City resource handler shared by the legacy and versioned city routes."""

    def __init__(
        self, repository: CityInfoRepository, max_page_size: int = MAX_CITIES_PAGE_SIZE,
    ):
        self.repository = repository
        self.max_page_size = max_page_size

    async def get_all_cities(self) -> list[CityWithoutPointsOfInterestDto]:
        """Every city, ordered by name, without filters or paging."""
        cities = await self.repository.get_cities()
        return cities_to_summary_dtos(cities)

    async def list_cities(
        self,
        name: str | None = None,
        search_query: str | None = None,
        page_number: int = 1,
        page_size: int = 10,
    ) -> tuple[Sequence[CityWithoutPointsOfInterestDto], PaginationMetadata]:
        page_size = clamp_page_size(page_size, self.max_page_size)
        page_number = clamp_page_number(page_number)
        cities, metadata = await self.repository.get_cities_page(
            name, search_query, page_number, page_size,
        )
        return cities_to_summary_dtos(cities), metadata

    async def get_city(
        self, city_id: int, include_points_of_interest: bool = False,
    ) -> CityDto | CityWithoutPointsOfInterestDto:
        city = await self.repository.get_city(city_id, include_points_of_interest)
        if city is None:
            raise ResourceNotFoundError(
                "City", city_id, ErrorContext(city_id=city_id),
            )
        if include_points_of_interest:
            return city_to_dto(city)
        return city_to_summary_dto(city)
