"""ORM Models — SQLAlchemy declarative models for cities and points of interest.

Invariants:
    - All models inherit from Base (db/base.py)
    - City is the aggregate root; every point of interest is scoped by city_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from cityinfo.models.city import City  # noqa: F401
from cityinfo.models.point_of_interest import PointOfInterest  # noqa: F401
