"""Point-of-Interest Routes — CRUD + JSON Patch for points nested under a city.

Invariants:
    - Listing requires a bearer token whose "city" claim names the target city
    - POST returns 201 with a Location header pointing at get_point_of_interest
    - PUT/PATCH/DELETE return 204 with an empty body
    - DELETE schedules a notification that runs after the response is sent
"""

from fastapi import APIRouter, Depends, Request, Response, status

from cityinfo.api.dependencies import get_current_caller, get_point_of_interest_service
from cityinfo.core.identity import CallerIdentity
from cityinfo.schemas.point_of_interest import (
    PatchOperation,
    PointOfInterestDto,
    PointOfInterestForCreationDto,
    PointOfInterestForUpdateDto,
)
from cityinfo.services.point_of_interest_service import PointOfInterestService

router = APIRouter(
    prefix="/api/v2/cities/{city_id}/pointsofinterest",
    tags=["points-of-interest"],
)


@router.get("", response_model=list[PointOfInterestDto])
async def get_points_of_interest(
    city_id: int,
    caller: CallerIdentity = Depends(get_current_caller),
    service: PointOfInterestService = Depends(get_point_of_interest_service),
):
    return await service.list_points_of_interest(caller, city_id)


@router.get(
    "/{point_of_interest_id}",
    response_model=PointOfInterestDto,
    name="get_point_of_interest",
)
async def get_point_of_interest(
    city_id: int,
    point_of_interest_id: int,
    service: PointOfInterestService = Depends(get_point_of_interest_service),
):
    return await service.get_point_of_interest(city_id, point_of_interest_id)


@router.post(
    "", response_model=PointOfInterestDto,
    status_code=status.HTTP_201_CREATED,
)
async def create_point_of_interest(
    city_id: int,
    body: PointOfInterestForCreationDto,
    request: Request,
    response: Response,
    service: PointOfInterestService = Depends(get_point_of_interest_service),
):
    created = await service.create_point_of_interest(city_id, body)
    response.headers["Location"] = str(request.url_for(
        "get_point_of_interest",
        city_id=city_id,
        point_of_interest_id=created.id,
    ))
    return created


@router.put("/{point_of_interest_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_point_of_interest(
    city_id: int,
    point_of_interest_id: int,
    body: PointOfInterestForUpdateDto,
    service: PointOfInterestService = Depends(get_point_of_interest_service),
):
    """Full replace of name and description."""
    await service.update_point_of_interest(city_id, point_of_interest_id, body)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{point_of_interest_id}", status_code=status.HTTP_204_NO_CONTENT)
async def partially_update_point_of_interest(
    city_id: int,
    point_of_interest_id: int,
    operations: list[PatchOperation],
    service: PointOfInterestService = Depends(get_point_of_interest_service),
):
    """Apply a JSON Patch document (e.g. [{"op": "replace", "path": "/name", "value": "x"}])."""
    await service.partially_update_point_of_interest(
        city_id, point_of_interest_id, operations,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{point_of_interest_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_point_of_interest(
    city_id: int,
    point_of_interest_id: int,
    service: PointOfInterestService = Depends(get_point_of_interest_service),
):
    await service.delete_point_of_interest(city_id, point_of_interest_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
