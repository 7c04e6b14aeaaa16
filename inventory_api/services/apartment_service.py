"""
Apartment Service

Generates apartments from floor plans and operates on the generated inventory:
- generation with a duplicate guard, in one transaction
- building inventory view (floor plan -> floor -> apartment)
- status changes on a single apartment
- shared properties (area, image) propagated to every floor of a layout slot
"""
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_api.lib.errors import (
    AmbiguousApartmentError,
    BuildingNotFoundError,
    DuplicateApartmentsError,
    FloorPlanNotFoundError,
    NoApartmentsFoundError,
    NotFoundError,
    ValidationError,
)
from inventory_api.models.apartment import Apartment
from inventory_api.models.building import Building
from inventory_api.models.floor_plan import FloorPlan
from inventory_api.schemas.apartment import ApartmentStatus
from inventory_api.services.apartment_layout import (
    build_inventory_view,
    expand_floor_plan,
)
from inventory_api.services.storage_service import StorageService, get_storage

logger = logging.getLogger(__name__)

POSITION_CONSTRAINT = "uq_apartment_position"


def is_position_conflict(exc: IntegrityError) -> bool:
    """Whether an integrity error comes from two apartments sharing a position."""
    message = str(exc.orig)
    # SQLite reports the columns instead of the constraint name
    return POSITION_CONSTRAINT in message or "UNIQUE constraint failed: apartments." in message


class ApartmentService:
    """Service for generating and updating apartment inventory."""

    def __init__(self, db: AsyncSession, storage: Optional[StorageService] = None):
        self.db = db
        self.storage = storage

    # ============================================
    # HELPER METHODS
    # ============================================

    async def building_exists(self, building_id: int) -> bool:
        """Check if a building exists."""
        result = await self.db.execute(
            select(Building.id).where(Building.id == building_id)
        )
        return result.scalar_one_or_none() is not None

    async def get_floor_plan(self, floor_plan_id: int) -> Optional[FloorPlan]:
        """Get floor plan by ID."""
        result = await self.db.execute(
            select(FloorPlan).where(FloorPlan.id == floor_plan_id)
        )
        return result.scalar_one_or_none()

    async def apartments_exist(
        self,
        building_id: int,
        name: str,
        floor_plan_id: int,
    ) -> bool:
        """Check whether apartments were already generated for this combination."""
        result = await self.db.execute(
            select(Apartment.id).where(
                Apartment.building_id == building_id,
                Apartment.name == name,
                Apartment.floor_plan_id == floor_plan_id,
            ).limit(1)
        )
        return result.scalar_one_or_none() is not None

    # ============================================
    # GENERATION
    # ============================================

    async def generate_apartments(
        self,
        floor_plan_id: int,
        building_id: Optional[int] = None,
        name: Optional[str] = None,
    ) -> List[Apartment]:
        """
        Generate every apartment of a floor plan.

        building_id and name default to the floor plan's own values. All rows
        are inserted in one transaction; nothing is kept if any insert fails.

        Raises BuildingNotFoundError, FloorPlanNotFoundError or
        DuplicateApartmentsError.
        """
        if building_id is not None and not await self.building_exists(building_id):
            raise BuildingNotFoundError(f"Building with ID {building_id} does not exist.")

        floor_plan = await self.get_floor_plan(floor_plan_id)
        if not floor_plan:
            raise FloorPlanNotFoundError(f"Floor plan with ID {floor_plan_id} does not exist.")

        if building_id is None:
            building_id = floor_plan.building_id
        if name is None:
            name = floor_plan.name

        if await self.apartments_exist(building_id, name, floor_plan_id):
            logger.info(
                "Rejected duplicate generation for building=%s name=%r floor_plan=%s",
                building_id, name, floor_plan_id,
            )
            raise DuplicateApartmentsError()

        positions = expand_floor_plan(
            floor_range_start=floor_plan.floor_range_start,
            floor_range_end=floor_plan.floor_range_end,
            starting_apartment_number=floor_plan.starting_apartment_number,
            apartments_per_floor=floor_plan.apartments_per_floor,
        )

        apartments = [
            Apartment(
                flat_id=position.flat_id,
                flat_number=position.flat_number,
                floor=position.floor,
                building_id=building_id,
                floor_plan_id=floor_plan_id,
                name=name,
                status=ApartmentStatus.FREE.value,
                image=None,
                square_meters=Decimal("0"),
            )
            for position in positions
        ]

        try:
            self.db.add_all(apartments)
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            if not is_position_conflict(exc):
                raise
            # Lost a race against a concurrent generation for the same tuple
            logger.warning(
                "Unique constraint hit while generating building=%s name=%r floor_plan=%s",
                building_id, name, floor_plan_id,
            )
            raise DuplicateApartmentsError()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            "Generated %d apartments for floor_plan=%s building=%s name=%r",
            len(apartments), floor_plan_id, building_id, name,
        )
        return apartments

    # ============================================
    # INVENTORY VIEW
    # ============================================

    async def list_building_apartments(self, building_id: int) -> List[Apartment]:
        """All apartments of a building ordered by floor plan, floor, flat number."""
        result = await self.db.execute(
            select(Apartment).where(
                Apartment.building_id == building_id
            ).order_by(
                Apartment.floor_plan_id,
                Apartment.floor,
                Apartment.flat_number,
            )
        )
        return list(result.scalars().all())

    async def get_building_inventory(self, building_id: int) -> List[Dict[str, Any]]:
        """
        Floor plan -> floor -> apartment hierarchy for a building.

        Raises NoApartmentsFoundError when nothing was generated yet.
        """
        apartments = await self.list_building_apartments(building_id)
        if not apartments:
            raise NoApartmentsFoundError(
                f"No apartments found for building with ID {building_id}."
            )

        return build_inventory_view(apartments)

    # ============================================
    # STATUS
    # ============================================

    async def update_status(
        self,
        floor_plan_id: int,
        flat_number: int,
        status: ApartmentStatus,
    ) -> Apartment:
        """
        Set the status of one apartment.

        Any status may move to any other, including the same one.
        """
        result = await self.db.execute(
            select(Apartment).where(
                Apartment.floor_plan_id == floor_plan_id,
                Apartment.flat_number == flat_number,
            )
        )
        matches = list(result.scalars().all())

        if not matches:
            raise NotFoundError(
                f"No apartment with flat number {flat_number} in floor plan {floor_plan_id}."
            )
        if len(matches) > 1:
            raise AmbiguousApartmentError()

        apartment = matches[0]
        apartment.status = ApartmentStatus(status).value

        await self.db.commit()
        await self.db.refresh(apartment)

        return apartment

    # ============================================
    # SHARED PROPERTIES
    # ============================================

    async def update_shared_properties(
        self,
        floor_plan_id: Optional[int],
        flat_id: Optional[int],
        square_meters: Optional[Decimal],
        image_path: Optional[str] = None,
    ) -> List[Apartment]:
        """
        Update area (and image) on every floor's apartment in one layout slot.

        image_path is the storage path of an already uploaded image. If the
        update does not take effect the file is deleted before raising.
        Without an explicit storage the application storage is used.
        """
        storage = self.storage or get_storage()
        try:
            apartments = await self._apply_shared_properties(
                floor_plan_id, flat_id, square_meters, image_path, storage
            )
        except Exception:
            if image_path:
                await storage.delete_image(image_path)
            raise

        # Report the values as stored, rounded to the column scale
        for apartment in apartments:
            await self.db.refresh(apartment)

        return apartments

    async def _apply_shared_properties(
        self,
        floor_plan_id: Optional[int],
        flat_id: Optional[int],
        square_meters: Optional[Decimal],
        image_path: Optional[str],
        storage: StorageService,
    ) -> List[Apartment]:
        if floor_plan_id is None or flat_id is None:
            raise ValidationError("floor_plan_id and flat_id are required fields.")
        if square_meters is None:
            raise ValidationError("square_meters is a required field.")

        if not await self.get_floor_plan(floor_plan_id):
            raise NotFoundError(f"Floor plan with ID {floor_plan_id} does not exist.")

        result = await self.db.execute(
            select(Apartment).where(
                Apartment.floor_plan_id == floor_plan_id,
                Apartment.flat_id == flat_id,
            ).order_by(Apartment.floor, Apartment.flat_number)
        )
        apartments = list(result.scalars().all())

        if not apartments:
            raise NotFoundError(
                f"No apartments with flat_id {flat_id} in floor plan {floor_plan_id}."
            )

        image_url = storage.get_public_url(image_path) if image_path else None

        for apartment in apartments:
            apartment.square_meters = square_meters
            if image_url:
                apartment.image = image_url

        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            "Updated shared properties on %d apartments (floor_plan=%s flat_id=%s)",
            len(apartments), floor_plan_id, flat_id,
        )
        return apartments
