"""Verification of identity-provider access tokens.

Sign-in (emailed magic links) happens at the external identity provider,
which issues HS256 JWTs carrying the user id in ``sub``, the address in
``email`` and ``aud = "authenticated"``. This module only verifies those
tokens; ``create_access_token`` mints tokens in the same format for local
development and the test suite.
"""

from datetime import datetime, timedelta, timezone

from jose import jwt

from housecal.config import settings


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Create an access token shaped like the identity provider's.

    Args:
        data: Payload data. Must include ``sub`` (user UUID as string);
            usually also ``email``.
        expires_delta: Custom expiration duration. Defaults to
            ``settings.jwt_access_token_expire_minutes`` minutes.

    Returns:
        Encoded JWT string.
    """
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.jwt_access_token_expire_minutes))
    to_encode.setdefault("aud", settings.jwt_audience)
    to_encode.setdefault("role", "authenticated")
    to_encode.update({"exp": expire, "iat": now})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict:
    """Decode and verify an access token.

    Args:
        token: Encoded JWT string.

    Returns:
        Decoded payload dictionary.

    Raises:
        jose.JWTError: If the token is invalid, expired, malformed, or issued
            for another audience.
    """
    return jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm],
        audience=settings.jwt_audience,
    )
