"""Database Declarations — SQLAlchemy Base shared by all ORM models."""
