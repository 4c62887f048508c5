"""Boundary Protocols — contracts between the resource handlers and the shell.

Invariants:
    - Services NEVER import infrastructure — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by the shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
    - save_changes() returns False when the store reports a stale write (row already
      gone); services translate that into ResourceNotFoundError
    - Notifier.send is synchronous: it only schedules delivery (fire-and-forget)
"""

from typing import TYPE_CHECKING, Protocol, Sequence

from cityinfo.core.pagination import PaginationMetadata

if TYPE_CHECKING:
    from cityinfo.models.city import City
    from cityinfo.models.point_of_interest import PointOfInterest


class CityInfoRepository(Protocol):
    """Contract for city / point-of-interest persistence — implemented by shell."""
    async def get_cities(self) -> Sequence["City"]: ...
    async def get_cities_page(
        self,
        name: str | None,
        search_query: str | None,
        page_number: int,
        page_size: int,
    ) -> tuple[Sequence["City"], PaginationMetadata]: ...
    async def get_city(
        self, city_id: int, include_points_of_interest: bool,
    ) -> "City | None": ...
    async def city_exists(self, city_id: int) -> bool: ...
    async def city_name_matches_city_id(
        self, city_name: str | None, city_id: int,
    ) -> bool: ...
    async def get_points_of_interest_for_city(
        self, city_id: int,
    ) -> Sequence["PointOfInterest"]: ...
    async def get_point_of_interest_for_city(
        self, city_id: int, point_of_interest_id: int,
    ) -> "PointOfInterest | None": ...
    async def add_point_of_interest_for_city(
        self, city_id: int, point_of_interest: "PointOfInterest",
    ) -> None: ...
    async def delete_point_of_interest(
        self, point_of_interest: "PointOfInterest",
    ) -> None: ...
    async def save_changes(self) -> bool: ...


class MailService(Protocol):
    """Contract for out-of-band message delivery — implemented by shell."""
    async def send(self, subject: str, message: str) -> None: ...


class Notifier(Protocol):
    """Schedules a message without waiting for (or failing on) delivery."""
    def send(self, subject: str, message: str) -> None: ...
