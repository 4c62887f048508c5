"""Bearer Tokens — python-jose helpers for signing and verifying access tokens.

Invariants:
    - Tokens are HS256 (configurable) with issuer, audience and expiry checked on decode
    - decode_access_token raises AuthenticationError, never a jose exception

Design Decisions:
    - No login endpoint: create_access_token exists for tooling and tests only,
      token issuance belongs to the identity provider
"""

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from cityinfo.config import Settings
from cityinfo.core.errors import AuthenticationError


def create_access_token(
    claims: dict[str, Any], settings: Settings, expires_minutes: int | None = None,
) -> str:
    """Sign claims (e.g. {"sub": "1", "city": "Antwerp"}) into an access token."""
    to_encode = claims.copy()
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes or settings.access_token_expire_minutes,
    )
    to_encode.update({
        "exp": expire,
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
    })
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> dict[str, Any]:
    """Verify signature, issuer, audience and expiry; return the claims."""
    try:
        return jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
        )
    except JWTError as exc:
        raise AuthenticationError("Invalid authentication credentials") from exc
