"""City Info Repository — async SQLAlchemy implementation of CityInfoRepository.

Invariants:
    - Sole gateway to persisted cities and points of interest
    - Mutations are staged on the session; nothing is durable until save_changes()
    - City listings are ordered by name, then id (stable pagination)
    - Filtered listings count the filtered set, never the whole table

Design Decisions:
    - Name filter is an exact, case-insensitive match; search is a case-insensitive
      substring match on name or description. Both trimmed, blank means absent
    - Points of interest are attached through city_id, not by loading the
      city's collection (which is lazy="raise")
    - Deletes run as DELETE statements and record a 0 rowcount; save_changes() then
      rolls back and returns False, as it does for StaleDataError on update
    - A page past the filtered total returns no rows without issuing the SELECT
"""

import logging
from typing import Sequence

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.exc import StaleDataError

from cityinfo.core.pagination import PaginationMetadata, page_offset
from cityinfo.models.city import City
from cityinfo.models.point_of_interest import PointOfInterest

logger = logging.getLogger(__name__)


class SqlCityInfoRepository:
    """Persistence for cities and points of interest over one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self._missed_deletes = 0

    async def get_cities(self) -> Sequence[City]:
        result = await self.db.execute(
            select(City).order_by(City.name, City.id),
        )
        return result.scalars().all()

    async def get_cities_page(
        self,
        name: str | None,
        search_query: str | None,
        page_number: int,
        page_size: int,
    ) -> tuple[Sequence[City], PaginationMetadata]:
        """Filter, count, then slice. Expects already-clamped paging values."""
        query = select(City)

        name = (name or "").strip()
        if name:
            query = query.where(func.lower(City.name) == name.lower())

        search_query = (search_query or "").strip()
        if search_query:
            needle = search_query.lower()
            query = query.where(or_(
                func.lower(City.name).contains(needle, autoescape=True),
                func.lower(City.description).contains(needle, autoescape=True),
            ))

        total = await self.db.scalar(
            select(func.count()).select_from(query.subquery()),
        )
        metadata = PaginationMetadata(
            total_item_count=total or 0,
            page_size=page_size,
            current_page=page_number,
        )
        offset = page_offset(page_number, page_size)
        if offset >= metadata.total_item_count:
            return [], metadata

        result = await self.db.execute(
            query.order_by(City.name, City.id)
            .offset(offset)
            .limit(page_size),
        )
        return result.scalars().all(), metadata

    async def get_city(
        self, city_id: int, include_points_of_interest: bool,
    ) -> City | None:
        query = select(City).where(City.id == city_id)
        if include_points_of_interest:
            query = query.options(selectinload(City.points_of_interest))
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def city_exists(self, city_id: int) -> bool:
        result = await self.db.scalar(
            select(City.id).where(City.id == city_id),
        )
        return result is not None

    async def city_name_matches_city_id(
        self, city_name: str | None, city_id: int,
    ) -> bool:
        """True only when city_id exists and carries exactly city_name."""
        if city_name is None:
            return False
        result = await self.db.scalar(
            select(City.id).where(City.id == city_id, City.name == city_name),
        )
        return result is not None

    async def get_points_of_interest_for_city(
        self, city_id: int,
    ) -> Sequence[PointOfInterest]:
        result = await self.db.execute(
            select(PointOfInterest)
            .where(PointOfInterest.city_id == city_id)
            .order_by(PointOfInterest.id),
        )
        return result.scalars().all()

    async def get_point_of_interest_for_city(
        self, city_id: int, point_of_interest_id: int,
    ) -> PointOfInterest | None:
        result = await self.db.execute(
            select(PointOfInterest).where(
                PointOfInterest.city_id == city_id,
                PointOfInterest.id == point_of_interest_id,
            ),
        )
        return result.scalar_one_or_none()

    async def add_point_of_interest_for_city(
        self, city_id: int, point_of_interest: PointOfInterest,
    ) -> None:
        point_of_interest.city_id = city_id
        self.db.add(point_of_interest)

    async def delete_point_of_interest(
        self, point_of_interest: PointOfInterest,
    ) -> None:
        result = await self.db.execute(
            delete(PointOfInterest).where(PointOfInterest.id == point_of_interest.id),
        )
        if result.rowcount == 0:
            self._missed_deletes += 1

    async def save_changes(self) -> bool:
        """Commit staged changes. False when a concurrent write already removed the row."""
        if self._missed_deletes:
            self._missed_deletes = 0
            await self.db.rollback()
            logger.warning("Stale delete discarded: row already removed by another request")
            return False
        try:
            await self.db.commit()
        except StaleDataError as e:
            await self.db.rollback()
            logger.warning(f"Stale write discarded on commit: {e}")
            return False
        return True
