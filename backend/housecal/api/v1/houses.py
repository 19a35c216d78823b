"""Houses API router — the house picker and the house rules page."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from housecal.api.deps import get_current_profile, get_db
from housecal.models.house import House
from housecal.models.profile import Profile
from housecal.schemas.house import HouseDetailResponse, HouseListResponse, HouseResponse

router = APIRouter(prefix="/api/v1/houses", tags=["houses"])


@router.get(
    "",
    response_model=HouseListResponse,
    summary="List houses",
)
async def list_houses(
    db: AsyncSession = Depends(get_db),
    current_profile: Profile = Depends(get_current_profile),
) -> HouseListResponse:
    """Return every house ordered by name."""
    result = await db.execute(select(House).order_by(House.name.asc(), House.id.asc()))
    items = list(result.scalars().all())
    return HouseListResponse(
        items=[HouseResponse.model_validate(h) for h in items],
        total=len(items),
    )


@router.get(
    "/{house_id}",
    response_model=HouseDetailResponse,
    summary="Get a house with its rules",
)
async def get_house(
    house_id: int,
    db: AsyncSession = Depends(get_db),
    current_profile: Profile = Depends(get_current_profile),
) -> HouseDetailResponse:
    """Return a single house including its free-text house rules."""
    result = await db.execute(select(House).where(House.id == house_id))
    house = result.scalar_one_or_none()

    if house is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="House not found",
        )
    return HouseDetailResponse.model_validate(house)
