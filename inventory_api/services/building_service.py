"""
Building Service

Minimal building records. The apartment engine only needs to know that a
building exists.
"""
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_api.lib.errors import ConflictError, NotFoundError
from inventory_api.models.building import Building
from inventory_api.models.company import Company
from inventory_api.schemas.building import BuildingCreate


class BuildingService:
    """Service for building records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_buildings(self) -> Tuple[List[Building], int]:
        result = await self.db.execute(select(Building).order_by(Building.name, Building.id))
        buildings = list(result.scalars().all())
        return buildings, len(buildings)

    async def get_building(self, building_id: int) -> Optional[Building]:
        """Get a specific building by ID."""
        result = await self.db.execute(
            select(Building).where(Building.id == building_id)
        )
        return result.scalar_one_or_none()

    async def create_building(self, data: BuildingCreate) -> Building:
        """Create a new building for an existing company."""
        company = await self.db.execute(
            select(Company.id).where(Company.id == data.company_id)
        )
        if company.scalar_one_or_none() is None:
            raise NotFoundError(
                f"Company with ID {data.company_id} does not exist.",
                code="COMPANY_NOT_FOUND",
            )

        existing = await self.db.execute(
            select(Building.id).where(
                Building.company_id == data.company_id,
                func.lower(Building.name) == data.name.lower(),
            )
        )
        if existing.scalar_one_or_none() is not None:
            raise ConflictError(
                "Building with this name already exists for this company.",
                code="BUILDING_EXISTS",
            )

        building = Building(**data.model_dump())

        self.db.add(building)
        await self.db.commit()
        await self.db.refresh(building)

        return building
