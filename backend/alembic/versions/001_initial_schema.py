"""Initial schema — cities, points_of_interest, seed data.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    cities = op.create_table(
        "cities",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("description", sa.String(200), nullable=True),
    )
    points_of_interest = op.create_table(
        "points_of_interest",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "city_id", sa.Integer(),
            sa.ForeignKey("cities.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("description", sa.String(200), nullable=True),
    )
    op.create_index(
        "ix_points_of_interest_city_id", "points_of_interest", ["city_id"],
    )

    op.bulk_insert(cities, [
        {"id": 1, "name": "New York City",
         "description": "The one with that big park."},
        {"id": 2, "name": "Antwerp",
         "description": "The one with the cathedral that was never really finished."},
        {"id": 3, "name": "Paris",
         "description": "The one with that big tower."},
    ])
    op.bulk_insert(points_of_interest, [
        {"id": 1, "city_id": 1, "name": "Central Park",
         "description": "The most visited urban park in the United States."},
        {"id": 2, "city_id": 1, "name": "Empire State Building",
         "description": "A 102-story skyscraper located in Midtown Manhattan."},
        {"id": 3, "city_id": 2, "name": "Cathedral",
         "description": "A Gothic style cathedral, conceived by architects Jan and Pieter Appelmans."},
        {"id": 4, "city_id": 2, "name": "Antwerp Central Station",
         "description": "The the finest example of railway architecture in Belgium."},
        {"id": 5, "city_id": 3, "name": "Eiffel Tower",
         "description": "A wrought iron lattice tower on the Champ de Mars, named after engineer Gustave Eiffel."},
        {"id": 6, "city_id": 3, "name": "The Louvre",
         "description": "The world's largest museum."},
    ])

    # Explicit ids above; move PostgreSQL sequences past them
    if op.get_bind().dialect.name == "postgresql":
        op.execute("SELECT setval('cities_id_seq', (SELECT MAX(id) FROM cities))")
        op.execute(
            "SELECT setval('points_of_interest_id_seq', "
            "(SELECT MAX(id) FROM points_of_interest))",
        )


def downgrade() -> None:
    op.drop_index("ix_points_of_interest_city_id", table_name="points_of_interest")
    op.drop_table("points_of_interest")
    op.drop_table("cities")
