"""Field constraints shared by DTOs and ORM columns."""

NAME_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 200
