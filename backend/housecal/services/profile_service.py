"""Profile service — lookups, first-login upsert and calendar colours."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from housecal.models.profile import Profile

logger = logging.getLogger(__name__)

USER_COLORS = [
    "#064789", "#427aa1", "#1e40af", "#0f766e", "#047857",
    "#679436", "#4d7c0f", "#a5be00", "#15803d", "#166534",
    "#7c3aed", "#6d28d9", "#9333ea", "#a855f7", "#be185d",
    "#db2777", "#9f1239", "#b91c1c", "#dc2626", "#ea580c",
    "#c2410c", "#d97706", "#f59e0b", "#334155", "#475569",
    "#1f2937", "#0f172a", "#3f3f46", "#525252", "#6b7280",
]  # fmt: skip


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def pick_color_for_user(user_id: str | uuid.UUID) -> str:
    """Stable calendar colour for a user id (``hash * 31 + char``, 32-bit)."""
    value = 0
    for char in str(user_id):
        value = _to_int32(ord(char) + ((value << 5) - value))
    return USER_COLORS[abs(value) % len(USER_COLORS)]


def display_name(profile: Profile | None) -> str:
    """Name shown on calendar entries: name, then email, then ``Unknown``."""
    if profile is None:
        return "Unknown"
    return profile.name or profile.email or "Unknown"


async def get_profile(db: AsyncSession, user_id: uuid.UUID) -> Profile | None:
    result = await db.execute(select(Profile).where(Profile.id == user_id))
    return result.scalar_one_or_none()


async def ensure_color(db: AsyncSession, profile: Profile) -> Profile:
    """Backfill a missing calendar colour."""
    if not profile.color:
        profile.color = pick_color_for_user(profile.id)
        db.add(profile)
        await db.flush()
    return profile


async def upsert_profile_name(
    db: AsyncSession,
    user_id: uuid.UUID,
    email: str | None,
    name: str,
) -> Profile:
    """Create or update the caller's profile with a display name."""
    profile = await get_profile(db, user_id)
    if profile is None:
        logger.info("Creating profile for user %s", user_id)
        profile = Profile(id=user_id, email=email, is_admin=False)

    profile.name = name
    if email and not profile.email:
        profile.email = email
    if not profile.color:
        profile.color = pick_color_for_user(user_id)

    db.add(profile)
    await db.flush()
    await db.refresh(profile)
    return profile


async def list_notification_emails(db: AsyncSession) -> list[str]:
    """Every distinct, non-empty profile email, in a stable order."""
    result = await db.execute(select(Profile.email).where(Profile.email.is_not(None)).order_by(Profile.email))
    emails: list[str] = []
    for email in result.scalars().all():
        email = email.strip()
        if email and email not in emails:
            emails.append(email)
    return emails
