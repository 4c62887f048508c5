"""PointOfInterest ORM — a named place owned by exactly one city.

Invariants:
    - Always belongs to a City (city_id FK, non-nullable)
    - id assigned by the store on insert (available after flush)
    - city_id never changes after creation
"""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from cityinfo.db.base import Base
from cityinfo.schemas.constraints import DESCRIPTION_MAX_LENGTH, NAME_MAX_LENGTH


class PointOfInterest(Base):
    """Point of interest entity."""
    __tablename__ = "points_of_interest"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    city_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("cities.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    description: Mapped[str | None] = mapped_column(
        String(DESCRIPTION_MAX_LENGTH), nullable=True,
    )
