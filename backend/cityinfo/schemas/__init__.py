"""Pydantic Schemas — request/response contracts for API endpoints.

Invariants:
    - Field constraints are declared once (schemas/point_of_interest.py) and reused
      for create, update and post-patch validation

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
