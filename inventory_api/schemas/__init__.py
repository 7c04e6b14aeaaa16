from inventory_api.schemas.apartment import (
    ApartmentStatus,
    GenerateApartmentsRequest,
    GenerateApartmentsResponse,
    BuildingInventoryResponse,
    UpdateApartmentStatusRequest,
    ApartmentResponse,
    ApartmentStatusResponse,
    SharedPropertiesResponse,
)
from inventory_api.schemas.floor_plan import (
    FloorPlanCreate,
    FloorPlanResponse,
    FloorPlanListResponse,
    FloorPlanEnvelope,
)

__all__ = [
    # Apartment
    "ApartmentStatus",
    "GenerateApartmentsRequest",
    "GenerateApartmentsResponse",
    "BuildingInventoryResponse",
    "UpdateApartmentStatusRequest",
    "ApartmentResponse",
    "ApartmentStatusResponse",
    "SharedPropertiesResponse",
    # Floor plan
    "FloorPlanCreate",
    "FloorPlanResponse",
    "FloorPlanListResponse",
    "FloorPlanEnvelope",
]
