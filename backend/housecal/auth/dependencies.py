"""FastAPI authentication dependencies for route protection."""

import uuid
from dataclasses import dataclass

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from housecal.auth.jwt import decode_token
from housecal.database import get_db
from housecal.models.profile import Profile
from housecal.services.profile_service import get_profile

# Strict bearer: a missing token is rejected before the dependency runs
_bearer_scheme = HTTPBearer()


@dataclass(frozen=True)
class Identity:
    """The signed-in user as asserted by the identity provider."""

    user_id: uuid.UUID
    email: str | None = None


async def get_current_identity(
    credentials: HTTPAuthorizationCredentials = Depends(_bearer_scheme),
) -> Identity:
    """Validate the Bearer token and return who is calling.

    Raises:
        HTTPException 401: If the token is invalid, expired, or has no usable subject.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        raise credentials_exception from None

    sub: str | None = payload.get("sub")
    if sub is None:
        raise credentials_exception

    try:
        user_id = uuid.UUID(sub)
    except ValueError:
        raise credentials_exception from None

    return Identity(user_id=user_id, email=payload.get("email"))


async def get_current_profile(
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
) -> Profile:
    """Return the caller's profile, which must carry a display name.

    Raises:
        HTTPException 403: If the user has not set their name yet.
    """
    profile = await get_profile(db, identity.user_id)
    if profile is None or not (profile.name or "").strip():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Profile name required",
        )
    return profile


async def require_admin(
    profile: Profile = Depends(get_current_profile),
) -> Profile:
    """Return the caller's profile only if they are an admin.

    Raises:
        HTTPException 403: If the caller is not an admin.
    """
    if not profile.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden",
        )
    return profile
