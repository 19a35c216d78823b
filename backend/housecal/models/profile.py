"""Profile model — display name, colour and admin flag for a signed-in user."""

import uuid

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from housecal.database import Base, TimestampMixin


class Profile(TimestampMixin, Base):
    """Per-user profile keyed by the identity provider's user id."""

    __tablename__ = "profiles"

    # Not generated locally: the id is the ``sub`` claim of the identity token.
    id: Mapped[uuid.UUID] = mapped_column(primary_key=True)
    email: Mapped[str | None] = mapped_column(String(255), index=True, nullable=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    color: Mapped[str | None] = mapped_column(String(16), nullable=True)
    is_admin: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    def __repr__(self) -> str:
        return f"<Profile id={self.id} email={self.email!r} is_admin={self.is_admin}>"
