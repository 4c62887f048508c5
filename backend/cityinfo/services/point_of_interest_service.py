"""Point-of-Interest Service — CRUD and partial update for points nested under a city.

Invariants:
    - Every operation resolves city_id first; a missing city is NotFound before any
      point-of-interest lookup (no leaking point existence for unknown cities)
    - list_points_of_interest checks the caller's city claim BEFORE city existence:
      a mismatched caller is Forbidden even for ids that do not exist
    - Patch failures (application or post-patch validation) raise before anything
      is committed
    - Deletion notifies exactly once, and only after save_changes() succeeded
    - save_changes() reporting a stale write surfaces as NotFound

Design Decisions:
    - Forbidden-before-NotFound ordering kept on listing: existence of a city is
      not disclosed to callers whose claim does not match it
    - Notifier is injected; the service never awaits delivery
"""

import logging
from typing import Sequence

from pydantic import ValidationError

from cityinfo.core.errors import (
    ErrorContext,
    ForbiddenError,
    PatchValidationError,
    ResourceNotFoundError,
    validation_details,
)
from cityinfo.core.identity import CallerIdentity
from cityinfo.core.patch import apply_patch
from cityinfo.core.repository_protocols import CityInfoRepository, Notifier
from cityinfo.models.point_of_interest import PointOfInterest
from cityinfo.schemas.point_of_interest import (
    PatchOperation,
    PointOfInterestDto,
    PointOfInterestForCreationDto,
    PointOfInterestForUpdateDto,
)
from cityinfo.services.mapping import (
    apply_update_to_entity,
    creation_dto_to_entity,
    entity_to_patch_target,
    point_of_interest_to_dto,
    points_of_interest_to_dtos,
)

logger = logging.getLogger(__name__)

DELETED_SUBJECT = "Point of interest deleted."


class PointOfInterestService:
    """Point-of-interest resource handler."""

    def __init__(self, repository: CityInfoRepository, notifier: Notifier):
        self.repository = repository
        self.notifier = notifier

    async def list_points_of_interest(
        self, caller: CallerIdentity, city_id: int,
    ) -> list[PointOfInterestDto]:
        if not await self.repository.city_name_matches_city_id(caller.city, city_id):
            logger.warning(
                f"Caller {caller.subject} with city claim {caller.city!r} "
                f"denied access to points of interest of city {city_id}",
                extra={"city_id": city_id},
            )
            raise ForbiddenError(city_id)

        await self._ensure_city_exists(city_id)
        points = await self.repository.get_points_of_interest_for_city(city_id)
        return points_of_interest_to_dtos(points)

    async def get_point_of_interest(
        self, city_id: int, point_of_interest_id: int,
    ) -> PointOfInterestDto:
        await self._ensure_city_exists(city_id)
        entity = await self._get_or_404(city_id, point_of_interest_id)
        return point_of_interest_to_dto(entity)

    async def create_point_of_interest(
        self, city_id: int, data: PointOfInterestForCreationDto,
    ) -> PointOfInterestDto:
        await self._ensure_city_exists(city_id)
        entity = creation_dto_to_entity(data)
        await self.repository.add_point_of_interest_for_city(city_id, entity)
        await self._save_or_404(city_id, None)
        logger.info(
            f"Point of interest {entity.id} created for city {city_id}",
            extra={"city_id": city_id, "point_of_interest_id": entity.id},
        )
        return point_of_interest_to_dto(entity)

    async def update_point_of_interest(
        self, city_id: int, point_of_interest_id: int, data: PointOfInterestForUpdateDto,
    ) -> None:
        await self._ensure_city_exists(city_id)
        entity = await self._get_or_404(city_id, point_of_interest_id)
        apply_update_to_entity(data, entity)
        await self._save_or_404(city_id, point_of_interest_id)
        logger.info(
            f"Point of interest {point_of_interest_id} updated",
            extra={"city_id": city_id, "point_of_interest_id": point_of_interest_id},
        )

    async def partially_update_point_of_interest(
        self,
        city_id: int,
        point_of_interest_id: int,
        operations: Sequence[PatchOperation],
    ) -> None:
        await self._ensure_city_exists(city_id)
        entity = await self._get_or_404(city_id, point_of_interest_id)

        context = ErrorContext(city_id=city_id, point_of_interest_id=point_of_interest_id)
        patched = apply_patch(
            entity_to_patch_target(entity),
            [o.to_operation() for o in operations],
            allowed_fields=("name", "description"),
            context=context,
        )
        try:
            update = PointOfInterestForUpdateDto.model_validate(patched)
        except ValidationError as e:
            raise PatchValidationError(
                "Patched point of interest is invalid",
                details=validation_details(e.errors()),
                context=context,
            ) from e

        apply_update_to_entity(update, entity)
        await self._save_or_404(city_id, point_of_interest_id)
        logger.info(
            f"Point of interest {point_of_interest_id} partially updated",
            extra={"city_id": city_id, "point_of_interest_id": point_of_interest_id},
        )

    async def delete_point_of_interest(
        self, city_id: int, point_of_interest_id: int,
    ) -> None:
        await self._ensure_city_exists(city_id)
        entity = await self._get_or_404(city_id, point_of_interest_id)
        name, entity_id = entity.name, entity.id

        await self.repository.delete_point_of_interest(entity)
        await self._save_or_404(city_id, point_of_interest_id)
        logger.info(
            f"Point of interest {entity_id} deleted",
            extra={"city_id": city_id, "point_of_interest_id": entity_id},
        )

        self.notifier.send(
            DELETED_SUBJECT,
            f"Point of interest {name} with id {entity_id} was deleted.",
        )

    # ─── Helpers ─────────────────────────────────────────────────

    async def _ensure_city_exists(self, city_id: int) -> None:
        if not await self.repository.city_exists(city_id):
            logger.info(
                f"City with id {city_id} wasn't found when accessing points of interest.",
                extra={"city_id": city_id},
            )
            raise ResourceNotFoundError(
                "City", city_id, ErrorContext(city_id=city_id),
            )

    async def _get_or_404(
        self, city_id: int, point_of_interest_id: int,
    ) -> PointOfInterest:
        entity = await self.repository.get_point_of_interest_for_city(
            city_id, point_of_interest_id,
        )
        if entity is None:
            logger.info(
                f"Point of interest with id {point_of_interest_id} wasn't found "
                f"for city {city_id}.",
                extra={"city_id": city_id, "point_of_interest_id": point_of_interest_id},
            )
            raise ResourceNotFoundError(
                "PointOfInterest", point_of_interest_id,
                ErrorContext(city_id=city_id, point_of_interest_id=point_of_interest_id),
            )
        return entity

    async def _save_or_404(self, city_id: int, point_of_interest_id: int | None) -> None:
        if not await self.repository.save_changes():
            raise ResourceNotFoundError(
                "PointOfInterest", point_of_interest_id if point_of_interest_id is not None else "new",
                ErrorContext(city_id=city_id, point_of_interest_id=point_of_interest_id),
            )
