"""PointOfInterestService — check ordering, patch protocol, delete notification."""

import pytest
from sqlalchemy import select

from cityinfo.core.errors import (
    ForbiddenError,
    PatchValidationError,
    ResourceNotFoundError,
)
from cityinfo.core.identity import CallerIdentity
from cityinfo.infrastructure.city_info_repository import SqlCityInfoRepository
from cityinfo.models.point_of_interest import PointOfInterest
from cityinfo.schemas.point_of_interest import (
    PatchOperation,
    PointOfInterestForCreationDto,
    PointOfInterestForUpdateDto,
)
from cityinfo.services.point_of_interest_service import PointOfInterestService


class InterleavedDeleteRepository(SqlCityInfoRepository):
    """Lets another request commit between this one's lookup and its delete."""

    def __init__(self, db, before_delete):
        super().__init__(db)
        self.before_delete = before_delete

    async def delete_point_of_interest(self, point_of_interest) -> None:
        # end the read transaction so the other connection may write
        await self.db.commit()
        await self.before_delete()
        await super().delete_point_of_interest(point_of_interest)


@pytest.fixture
def service(repository, notifier):
    return PointOfInterestService(repository, notifier)


def _patch(*operations: dict) -> list[PatchOperation]:
    return [PatchOperation.model_validate(o) for o in operations]


async def _stored(session_factory, poi_id: int) -> PointOfInterest | None:
    async with session_factory() as fresh:
        return await fresh.scalar(
            select(PointOfInterest).where(PointOfInterest.id == poi_id),
        )


# --- Listing / authorization --------------------------------------------------

async def test_list_with_matching_claim(service, seed_cities):
    caller = CallerIdentity(subject="1", city="Antwerp")
    points = await service.list_points_of_interest(caller, seed_cities["antwerp"].id)
    assert [p.name for p in points] == ["Cathedral", "Antwerp Central Station"]


async def test_list_with_mismatched_claim_is_forbidden(service, seed_cities):
    caller = CallerIdentity(subject="1", city="Paris")
    with pytest.raises(ForbiddenError):
        await service.list_points_of_interest(caller, seed_cities["antwerp"].id)


async def test_list_mismatch_for_missing_city_is_forbidden_not_not_found(service, seed_cities):
    caller = CallerIdentity(subject="1", city="Antwerp")
    with pytest.raises(ForbiddenError):
        await service.list_points_of_interest(caller, 999)


async def test_list_without_city_claim_is_forbidden(service, seed_cities):
    caller = CallerIdentity(subject="1")
    with pytest.raises(ForbiddenError):
        await service.list_points_of_interest(caller, seed_cities["antwerp"].id)


# --- Get ----------------------------------------------------------------------

async def test_get_under_missing_city_is_not_found_for_city(service, seed_cities):
    poi_id = seed_cities["antwerp"].points_of_interest[0].id
    with pytest.raises(ResourceNotFoundError) as exc_info:
        await service.get_point_of_interest(999, poi_id)
    assert exc_info.value.resource_type == "City"


async def test_get_point_of_other_city_is_not_found(service, seed_cities):
    poi_id = seed_cities["antwerp"].points_of_interest[0].id
    with pytest.raises(ResourceNotFoundError) as exc_info:
        await service.get_point_of_interest(seed_cities["paris"].id, poi_id)
    assert exc_info.value.resource_type == "PointOfInterest"


# --- Create / update ----------------------------------------------------------

async def test_created_point_can_be_fetched_back(service, seed_cities):
    paris_id = seed_cities["paris"].id
    created = await service.create_point_of_interest(
        paris_id, PointOfInterestForCreationDto(name="Library", description="Main branch"),
    )
    fetched = await service.get_point_of_interest(paris_id, created.id)
    assert fetched == created
    assert fetched.name == "Library"


async def test_create_under_missing_city_is_not_found(service, seed_cities):
    with pytest.raises(ResourceNotFoundError):
        await service.create_point_of_interest(
            999, PointOfInterestForCreationDto(name="Library"),
        )


async def test_full_update_overwrites_all_fields(service, seed_cities, test_session_factory):
    city_id = seed_cities["antwerp"].id
    poi_id = seed_cities["antwerp"].points_of_interest[0].id
    await service.update_point_of_interest(
        city_id, poi_id, PointOfInterestForUpdateDto(name="Our Lady", description=None),
    )
    stored = await _stored(test_session_factory, poi_id)
    assert (stored.name, stored.description) == ("Our Lady", None)


# --- Partial update -----------------------------------------------------------

async def test_patch_replaces_only_named_field(service, seed_cities, test_session_factory):
    city_id = seed_cities["antwerp"].id
    poi_id = seed_cities["antwerp"].points_of_interest[0].id
    await service.partially_update_point_of_interest(
        city_id, poi_id, _patch({"op": "replace", "path": "/name", "value": "Our Lady"}),
    )
    stored = await _stored(test_session_factory, poi_id)
    assert stored.name == "Our Lady"
    assert stored.description.startswith("A Gothic style cathedral")


async def test_patch_emptying_name_fails_and_leaves_entity_unchanged(
    service, seed_cities, test_session_factory,
):
    city_id = seed_cities["antwerp"].id
    poi_id = seed_cities["antwerp"].points_of_interest[0].id
    with pytest.raises(PatchValidationError) as exc_info:
        await service.partially_update_point_of_interest(
            city_id, poi_id, _patch({"op": "replace", "path": "/name", "value": ""}),
        )
    assert exc_info.value.details[0]["field"] == "name"
    stored = await _stored(test_session_factory, poi_id)
    assert stored.name == "Cathedral"


async def test_patch_removing_name_fails_validation(service, seed_cities):
    with pytest.raises(PatchValidationError):
        await service.partially_update_point_of_interest(
            seed_cities["antwerp"].id,
            seed_cities["antwerp"].points_of_interest[0].id,
            _patch({"op": "remove", "path": "/name"}),
        )


async def test_patch_too_long_description_fails_validation(service, seed_cities):
    with pytest.raises(PatchValidationError):
        await service.partially_update_point_of_interest(
            seed_cities["antwerp"].id,
            seed_cities["antwerp"].points_of_interest[0].id,
            _patch({"op": "replace", "path": "/description", "value": "d" * 201}),
        )


async def test_patch_unknown_path_fails_before_save(service, seed_cities, test_session_factory):
    poi_id = seed_cities["antwerp"].points_of_interest[0].id
    with pytest.raises(PatchValidationError):
        await service.partially_update_point_of_interest(
            seed_cities["antwerp"].id, poi_id, _patch(
                {"op": "replace", "path": "/name", "value": "Changed"},
                {"op": "replace", "path": "/city_id", "value": 1},
            ),
        )
    stored = await _stored(test_session_factory, poi_id)
    assert stored.name == "Cathedral"


# --- Delete -------------------------------------------------------------------

async def test_delete_notifies_once_with_name_and_id(service, notifier, seed_cities):
    city_id = seed_cities["antwerp"].id
    poi_id = seed_cities["antwerp"].points_of_interest[0].id
    await service.delete_point_of_interest(city_id, poi_id)
    assert notifier.sent == [(
        "Point of interest deleted.",
        f"Point of interest Cathedral with id {poi_id} was deleted.",
    )]


async def test_delete_twice_is_not_found_and_notifies_once(service, notifier, seed_cities):
    city_id = seed_cities["antwerp"].id
    poi_id = seed_cities["antwerp"].points_of_interest[0].id
    await service.delete_point_of_interest(city_id, poi_id)
    with pytest.raises(ResourceNotFoundError):
        await service.delete_point_of_interest(city_id, poi_id)
    assert len(notifier.sent) == 1


async def test_delete_racing_another_request_is_not_found_and_does_not_notify(
    file_session_factory, notifier, other_notifier,
):
    async with file_session_factory() as first, file_session_factory() as second:
        competing = PointOfInterestService(
            SqlCityInfoRepository(second), other_notifier,
        )
        repository = InterleavedDeleteRepository(
            first, lambda: competing.delete_point_of_interest(1, 1),
        )
        service = PointOfInterestService(repository, notifier)

        with pytest.raises(ResourceNotFoundError):
            await service.delete_point_of_interest(1, 1)

        assert len(other_notifier.sent) == 1
    assert notifier.sent == []
