"""
Building endpoints.

Plain data entry; apartment generation only checks that a building exists.
"""
from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_api.lib.database import get_db
from inventory_api.schemas.building import (
    BuildingCreate,
    BuildingListResponse,
    BuildingResponse,
)
from inventory_api.services.building_service import BuildingService

router = APIRouter(tags=["Buildings"])


@router.get(
    "/buildings",
    response_model=BuildingListResponse,
)
async def list_buildings(
    db: AsyncSession = Depends(get_db),
):
    """List all buildings."""
    service = BuildingService(db)
    buildings, total = await service.list_buildings()

    return BuildingListResponse(
        buildings=[BuildingResponse.model_validate(b) for b in buildings],
        total=total,
    )


@router.get(
    "/buildings/{building_id}",
    response_model=BuildingResponse,
)
async def get_building(
    building_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
):
    """Get a specific building by ID."""
    service = BuildingService(db)
    building = await service.get_building(building_id)

    if not building:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Building not found"
        )

    return BuildingResponse.model_validate(building)


@router.post(
    "/buildings",
    response_model=BuildingResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_building(
    data: BuildingCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a new building."""
    service = BuildingService(db)
    building = await service.create_building(data)

    return BuildingResponse.model_validate(building)
