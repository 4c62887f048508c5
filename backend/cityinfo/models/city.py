"""City ORM — aggregate root owning its points of interest.

Invariants:
    - id is an autoincrement integer primary key, immutable once assigned
    - name is non-nullable, bounded by NAME_MAX_LENGTH
    - deleting a city deletes its points of interest (ORM cascade + FK ON DELETE CASCADE)

Design Decisions:
    - points_of_interest is lazy="raise": async sessions cannot lazy-load, so callers
      must request the collection explicitly (selectinload) or never touch it
    - passive_deletes=True: the FK cascade removes children without loading them
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cityinfo.db.base import Base
from cityinfo.schemas.constraints import DESCRIPTION_MAX_LENGTH, NAME_MAX_LENGTH


class City(Base):
    """City aggregate root."""
    __tablename__ = "cities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    description: Mapped[str | None] = mapped_column(
        String(DESCRIPTION_MAX_LENGTH), nullable=True,
    )

    # Relationships
    points_of_interest: Mapped[list["PointOfInterest"]] = relationship(
        "PointOfInterest",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise",
        order_by="PointOfInterest.id",
    )
