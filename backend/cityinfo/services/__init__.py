"""Services Layer — resource handlers for cities and points of interest.

Invariants:
    - Services depend on repository/notifier protocols, never on FastAPI
    - Existence and authorization checks run before any mutation

Design Decisions:
    - One service per resource for locality
"""
