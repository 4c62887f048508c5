"""Point-of-Interest Schemas — DTOs with the field constraints for create/update/patch.

Invariants:
    - name: 1-50 chars, stripped, non-empty
    - description: optional, at most 200 chars
    - Creation, full update and post-patch state all validate through the same
      _PointOfInterestFields base, so the constraints cannot drift apart

Design Decisions:
    - Update DTO has no defaults: a full replace must supply both fields
      (description may be null, but the key must be present)
    - PatchOperation mirrors RFC 6902 keys; "from" aliased because it is a keyword
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cityinfo.schemas.constraints import DESCRIPTION_MAX_LENGTH, NAME_MAX_LENGTH


class PointOfInterestDto(BaseModel):
    """Point of interest as returned to callers."""
    id: int
    name: str
    description: str | None = None


class _PointOfInterestFields(BaseModel):
    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    description: str | None = Field(None, max_length=DESCRIPTION_MAX_LENGTH)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("You should provide a name value.")
        return v


class PointOfInterestForCreationDto(_PointOfInterestFields):
    """Payload for creating a point of interest."""


class PointOfInterestForUpdateDto(_PointOfInterestFields):
    """Payload for a full update, and the editable target of a partial update."""
    description: str | None = Field(max_length=DESCRIPTION_MAX_LENGTH)


class PatchOperation(BaseModel):
    """One JSON Patch operation against a PointOfInterestForUpdateDto."""
    model_config = ConfigDict(populate_by_name=True)

    op: Literal["add", "replace", "remove", "copy", "move", "test"]
    path: str
    value: Any = None
    from_: str | None = Field(None, alias="from")

    def to_operation(self) -> dict[str, Any]:
        """Plain dict form consumed by core.patch (unset keys omitted)."""
        return self.model_dump(by_alias=True, exclude_unset=True)
