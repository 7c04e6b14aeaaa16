"""
Floor Plan Service

Handles floor plan CRUD. Floor plans feed apartment generation; editing one
later does not regenerate its apartments.
"""
import logging
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_api.lib.errors import ConflictError, NotFoundError
from inventory_api.models.building import Building
from inventory_api.models.floor_plan import FloorPlan
from inventory_api.schemas.floor_plan import FloorPlanCreate

logger = logging.getLogger(__name__)


class FloorPlanService:
    """Service for managing floor plans."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ============================================
    # HELPER METHODS
    # ============================================

    async def get_building(self, building_id: int) -> Optional[Building]:
        result = await self.db.execute(
            select(Building).where(Building.id == building_id)
        )
        return result.scalar_one_or_none()

    async def get_floor_plan_by_name(
        self,
        building_id: int,
        name: str,
    ) -> Optional[FloorPlan]:
        """Get floor plan by building and case-insensitive name."""
        result = await self.db.execute(
            select(FloorPlan).where(
                FloorPlan.building_id == building_id,
                func.lower(FloorPlan.name) == name.lower(),
            )
        )
        return result.scalar_one_or_none()

    async def _check_references(
        self,
        data: FloorPlanCreate,
        floor_plan_id: Optional[int] = None,
    ) -> None:
        if not await self.get_building(data.building_id):
            raise NotFoundError(
                f"Building with ID {data.building_id} does not exist.",
                code="BUILDING_NOT_FOUND",
            )

        existing = await self.get_floor_plan_by_name(data.building_id, data.name)
        if existing and existing.id != floor_plan_id:
            raise ConflictError(
                "A floor plan with this name already exists for this building.",
                code="FLOOR_PLAN_EXIST",
            )

    # ============================================
    # FLOOR PLAN CRUD
    # ============================================

    async def list_floor_plans(
        self,
        building_id: Optional[int] = None,
    ) -> Tuple[List[FloorPlan], int]:
        """List floor plans ordered by name, optionally for one building."""
        query = select(FloorPlan)
        if building_id is not None:
            query = query.where(FloorPlan.building_id == building_id)
        query = query.order_by(FloorPlan.name, FloorPlan.id)

        result = await self.db.execute(query)
        floor_plans = list(result.scalars().all())

        return floor_plans, len(floor_plans)

    async def get_floor_plan(self, floor_plan_id: int) -> Optional[FloorPlan]:
        """Get a specific floor plan by ID."""
        result = await self.db.execute(
            select(FloorPlan).where(FloorPlan.id == floor_plan_id)
        )
        return result.scalar_one_or_none()

    async def create_floor_plan(self, data: FloorPlanCreate) -> FloorPlan:
        """Create a new floor plan."""
        await self._check_references(data)

        floor_plan = FloorPlan(**data.model_dump())

        self.db.add(floor_plan)
        await self.db.commit()
        await self.db.refresh(floor_plan)

        logger.info("Created floor plan %s (%r) in building %s",
                    floor_plan.id, floor_plan.name, floor_plan.building_id)
        return floor_plan

    async def update_floor_plan(
        self,
        floor_plan_id: int,
        data: FloorPlanCreate,
    ) -> Optional[FloorPlan]:
        """Replace a floor plan. Generated apartments are left as they are."""
        floor_plan = await self.get_floor_plan(floor_plan_id)
        if not floor_plan:
            return None

        await self._check_references(data, floor_plan_id=floor_plan.id)

        for field, value in data.model_dump().items():
            setattr(floor_plan, field, value)

        await self.db.commit()
        await self.db.refresh(floor_plan)

        return floor_plan

    async def delete_floor_plan(self, floor_plan_id: int) -> Optional[FloorPlan]:
        """Delete a floor plan (cascades to its apartments)."""
        floor_plan = await self.get_floor_plan(floor_plan_id)
        if not floor_plan:
            return None

        await self.db.delete(floor_plan)
        await self.db.commit()

        logger.info("Deleted floor plan %s", floor_plan_id)
        return floor_plan
