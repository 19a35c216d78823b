"""Profiles API router — the caller's own profile.

A first-time user has an identity but no profile; the calendar stays locked
(403 from ``get_current_profile``) until they set a display name here.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from housecal.api.deps import Identity, get_current_identity, get_db
from housecal.schemas.profile import ProfileResponse, ProfileUpdate
from housecal.services.profile_service import ensure_color, get_profile, upsert_profile_name

router = APIRouter(prefix="/api/v1/profiles", tags=["profiles"])


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> ProfileResponse:
    """Return the caller's profile, assigning a calendar colour if it has none.

    404 means the user has never set a name.
    """
    profile = await get_profile(db, identity.user_id)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found",
        )
    if profile.name:
        profile = await ensure_color(db, profile)
    return ProfileResponse.model_validate(profile)


@router.put("/me", response_model=ProfileResponse)
async def update_my_profile(
    body: ProfileUpdate,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> ProfileResponse:
    """Create or update the caller's profile with their display name."""
    profile = await upsert_profile_name(db, identity.user_id, identity.email, body.name)
    return ProfileResponse.model_validate(profile)
