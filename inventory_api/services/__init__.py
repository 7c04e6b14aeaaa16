from inventory_api.services.apartment_service import ApartmentService
from inventory_api.services.building_service import BuildingService
from inventory_api.services.company_service import CompanyService
from inventory_api.services.floor_plan_service import FloorPlanService
from inventory_api.services.storage_service import StorageService, get_storage

__all__ = [
    "ApartmentService",
    "BuildingService",
    "CompanyService",
    "FloorPlanService",
    "StorageService",
    "get_storage",
]
