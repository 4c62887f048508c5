"""Infrastructure Layer — database, repository, mail and token adapters.

Invariants:
    - Infrastructure implements the protocols declared in core/repository_protocols.py
    - All SQLAlchemy errors are mapped to DatabaseError before leaving this layer
"""
