"""
Floor plan endpoints.

Floor plans describe a floor range and a repeating per-floor layout; the
apartment endpoints generate units from them.
"""
from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_api.lib.database import get_db
from inventory_api.schemas.floor_plan import (
    FloorPlanCreate,
    FloorPlanEnvelope,
    FloorPlanListResponse,
    FloorPlanResponse,
)
from inventory_api.services.floor_plan_service import FloorPlanService

router = APIRouter(tags=["Floor Plans"])

FLOOR_PLAN_NOT_FOUND = {
    "error": "FLOOR_PLAN_NOT_FOUND",
    "message": "Floor plan with this ID does not exist.",
}


@router.post(
    "/create-floor-plan",
    response_model=FloorPlanEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def create_floor_plan(
    data: FloorPlanCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a new floor plan for an existing building."""
    service = FloorPlanService(db)
    floor_plan = await service.create_floor_plan(data)

    return FloorPlanEnvelope(
        message="Floor plan created successfully",
        data=FloorPlanResponse.model_validate(floor_plan),
    )


@router.get(
    "/floor-plans",
    response_model=FloorPlanListResponse,
)
async def list_floor_plans(
    db: AsyncSession = Depends(get_db),
):
    """List all floor plans ordered by name."""
    service = FloorPlanService(db)
    floor_plans, total = await service.list_floor_plans()

    return FloorPlanListResponse(
        floor_plans=[FloorPlanResponse.model_validate(fp) for fp in floor_plans],
        total=total,
    )


@router.get(
    "/floor-plans/building/{building_id}",
    response_model=FloorPlanListResponse,
)
async def list_building_floor_plans(
    building_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
):
    """List the floor plans of one building."""
    service = FloorPlanService(db)
    floor_plans, total = await service.list_floor_plans(building_id=building_id)

    if not floor_plans:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No floor plans found for the provided building ID"
        )

    return FloorPlanListResponse(
        floor_plans=[FloorPlanResponse.model_validate(fp) for fp in floor_plans],
        total=total,
    )


@router.put(
    "/floor-plans/{floor_plan_id}",
    response_model=FloorPlanEnvelope,
)
async def update_floor_plan(
    data: FloorPlanCreate,
    floor_plan_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
):
    """
    Replace a floor plan.

    Apartments already generated from it are not regenerated.
    """
    service = FloorPlanService(db)
    floor_plan = await service.update_floor_plan(floor_plan_id, data)

    if not floor_plan:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=FLOOR_PLAN_NOT_FOUND,
        )

    return FloorPlanEnvelope(
        message="Floor plan updated successfully.",
        data=FloorPlanResponse.model_validate(floor_plan),
    )


@router.delete(
    "/floor-plans/{floor_plan_id}",
    response_model=FloorPlanEnvelope,
)
async def delete_floor_plan(
    floor_plan_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
):
    """Delete a floor plan together with its apartments."""
    service = FloorPlanService(db)
    floor_plan = await service.delete_floor_plan(floor_plan_id)

    if not floor_plan:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=FLOOR_PLAN_NOT_FOUND,
        )

    return FloorPlanEnvelope(
        message="Floor plan deleted successfully.",
        data=FloorPlanResponse.model_validate(floor_plan),
    )
