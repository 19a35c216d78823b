"""Pydantic v2 request/response schemas for profile endpoints."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProfileUpdate(BaseModel):
    """Schema for setting the caller's display name."""

    name: str = Field(..., max_length=255)

    @field_validator("name")
    @classmethod
    def name_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Please enter your name to continue.")
        return value


class ProfileResponse(BaseModel):
    """The caller's profile."""

    id: uuid.UUID
    email: str | None = None
    name: str | None = None
    color: str | None = None
    is_admin: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
