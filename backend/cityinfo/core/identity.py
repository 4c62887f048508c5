"""Caller Identity — the authenticated caller, passed explicitly into handlers.

Invariants:
    - Built from verified token claims only (never from raw request headers)
    - city is None when the token carries no "city" claim

Design Decisions:
    - Explicit parameter over ambient request context: services stay testable
      without a request object
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CallerIdentity:
    """Authenticated caller and the city they claim to belong to."""
    subject: str
    city: str | None = None
    given_name: str | None = None
    family_name: str | None = None

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "CallerIdentity":
        return cls(
            subject=str(claims.get("sub", "")),
            city=claims.get("city"),
            given_name=claims.get("given_name"),
            family_name=claims.get("family_name"),
        )
