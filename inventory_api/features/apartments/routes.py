"""
Apartment endpoints.

Supports:
- Generating apartments from a floor plan
- Building inventory view (floor plan -> floor -> apartment)
- Apartment status changes
- Shared properties (area, image) for one layout slot across all floors
"""
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Path, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_api.lib.database import get_db
from inventory_api.schemas.apartment import (
    ApartmentResponse,
    ApartmentStatusResponse,
    BuildingInventoryResponse,
    GenerateApartmentsRequest,
    GenerateApartmentsResponse,
    SharedPropertiesResponse,
    UpdateApartmentStatusRequest,
)
from inventory_api.services.apartment_layout import group_by_floor
from inventory_api.services.apartment_service import ApartmentService
from inventory_api.services.storage_service import StorageService, get_storage

router = APIRouter(tags=["Apartments"])


@router.post(
    "/create-apartments",
    response_model=GenerateApartmentsResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_apartments(
    data: GenerateApartmentsRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Generate apartments from a floor plan.

    One apartment per slot per floor of the floor plan's range, numbered
    from its starting apartment number. Fails if apartments were already
    generated for the same building, name and floor plan.
    """
    service = ApartmentService(db)
    apartments = await service.generate_apartments(
        floor_plan_id=data.floor_plan_id,
        building_id=data.building_id,
        name=data.name,
    )

    return GenerateApartmentsResponse(
        message="Apartments generated successfully.",
        total=len(apartments),
        apartments=group_by_floor(apartments),
    )


@router.get(
    "/apartments/{building_id}",
    response_model=BuildingInventoryResponse,
)
async def get_apartments(
    building_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
):
    """List a building's apartments grouped by floor plan and floor."""
    service = ApartmentService(db)
    floor_plans = await service.get_building_inventory(building_id)

    return BuildingInventoryResponse(
        building_id=building_id,
        floor_plans=floor_plans,
    )


@router.put(
    "/update-apartment-status",
    response_model=ApartmentStatusResponse,
)
async def update_apartment_status(
    data: UpdateApartmentStatusRequest,
    db: AsyncSession = Depends(get_db),
):
    """Set the status (free, reserved, sold) of one apartment."""
    service = ApartmentService(db)
    apartment = await service.update_status(
        floor_plan_id=data.floor_plan_id,
        flat_number=data.flat_number,
        status=data.status,
    )

    return ApartmentStatusResponse(
        message="Apartment status updated successfully.",
        data=ApartmentResponse.model_validate(apartment),
    )


@router.put(
    "/update-shared-properties",
    response_model=SharedPropertiesResponse,
)
async def update_shared_properties(
    floor_plan_id: Optional[int] = Form(None),
    flat_id: Optional[int] = Form(None),
    square_meters: Optional[Decimal] = Form(None, ge=0, max_digits=10, decimal_places=2),
    image: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_db),
    storage: StorageService = Depends(get_storage),
):
    """
    Update area and image of one layout slot on every floor.

    Multipart form. If an image is uploaded but nothing gets updated, the
    stored file is removed again.
    """
    image_path = None
    if image is not None and image.filename:
        content = await image.read()
        stored = await storage.save_apartment_image(
            filename=image.filename,
            content=content,
            content_type=image.content_type,
        )
        image_path = stored["storage_path"]

    service = ApartmentService(db, storage=storage)
    apartments = await service.update_shared_properties(
        floor_plan_id=floor_plan_id,
        flat_id=flat_id,
        square_meters=square_meters,
        image_path=image_path,
    )

    return SharedPropertiesResponse(
        message="Shared properties updated successfully.",
        updated_count=len(apartments),
        data=[ApartmentResponse.model_validate(a) for a in apartments],
    )
