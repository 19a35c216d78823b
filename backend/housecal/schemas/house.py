"""Pydantic v2 response schemas for house endpoints."""

from pydantic import BaseModel, ConfigDict


class HouseResponse(BaseModel):
    """A house in the picker."""

    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class HouseDetailResponse(HouseResponse):
    """A house together with its free-text house rules."""

    rules: str | None = None


class HouseListResponse(BaseModel):
    """All houses, ordered by name."""

    items: list[HouseResponse]
    total: int
