"""City Schemas — response DTOs with and without nested points of interest."""

from pydantic import BaseModel, Field, computed_field

from cityinfo.schemas.point_of_interest import PointOfInterestDto


class CityWithoutPointsOfInterestDto(BaseModel):
    """City summary — never carries nested points of interest."""
    id: int
    name: str
    description: str | None = None


class CityDto(CityWithoutPointsOfInterestDto):
    """City with its points of interest."""
    points_of_interest: list[PointOfInterestDto] = Field(default_factory=list)

    @computed_field
    @property
    def number_of_points_of_interest(self) -> int:
        return len(self.points_of_interest)
