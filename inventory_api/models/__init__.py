from inventory_api.models.company import Company
from inventory_api.models.building import Building
from inventory_api.models.floor_plan import FloorPlan
from inventory_api.models.apartment import Apartment, APARTMENT_STATUSES

__all__ = [
    "Company",
    "Building",
    "FloorPlan",
    "Apartment",
    "APARTMENT_STATUSES",
]
