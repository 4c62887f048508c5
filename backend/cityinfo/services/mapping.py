"""Mapping — explicit conversions between ORM entities and DTOs.

Invariants:
    - Pure functions, no IO, no session access
    - city_to_dto touches points_of_interest; callers must have loaded it
    - Mapping onto an entity never changes id or city_id

Design Decisions:
    - One function per direction actually used, instead of a reflection-based mapper
"""

from typing import Any, Iterable

from cityinfo.models.city import City
from cityinfo.models.point_of_interest import PointOfInterest
from cityinfo.schemas.city import CityDto, CityWithoutPointsOfInterestDto
from cityinfo.schemas.point_of_interest import (
    PointOfInterestDto,
    PointOfInterestForCreationDto,
    PointOfInterestForUpdateDto,
)


def city_to_summary_dto(city: City) -> CityWithoutPointsOfInterestDto:
    return CityWithoutPointsOfInterestDto(
        id=city.id, name=city.name, description=city.description,
    )


def cities_to_summary_dtos(cities: Iterable[City]) -> list[CityWithoutPointsOfInterestDto]:
    return [city_to_summary_dto(c) for c in cities]


def city_to_dto(city: City) -> CityDto:
    return CityDto(
        id=city.id,
        name=city.name,
        description=city.description,
        points_of_interest=points_of_interest_to_dtos(city.points_of_interest),
    )


def point_of_interest_to_dto(point_of_interest: PointOfInterest) -> PointOfInterestDto:
    return PointOfInterestDto(
        id=point_of_interest.id,
        name=point_of_interest.name,
        description=point_of_interest.description,
    )


def points_of_interest_to_dtos(
    points_of_interest: Iterable[PointOfInterest],
) -> list[PointOfInterestDto]:
    return [point_of_interest_to_dto(p) for p in points_of_interest]


def creation_dto_to_entity(data: PointOfInterestForCreationDto) -> PointOfInterest:
    """New, unsaved entity; id and city_id are assigned by the repository."""
    return PointOfInterest(name=data.name, description=data.description)


def entity_to_patch_target(point_of_interest: PointOfInterest) -> dict[str, Any]:
    """Editable form of an entity, shaped like PointOfInterestForUpdateDto."""
    return {
        "name": point_of_interest.name,
        "description": point_of_interest.description,
    }


def apply_update_to_entity(
    data: PointOfInterestForUpdateDto, point_of_interest: PointOfInterest,
) -> None:
    """Overwrite every mutable field of the entity (full replace)."""
    point_of_interest.name = data.name
    point_of_interest.description = data.description
