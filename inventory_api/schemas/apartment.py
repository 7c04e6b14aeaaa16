"""
Apartment schemas for generation, inventory views and updates.
"""
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class ApartmentStatus(str, Enum):
    """Commercial status of an apartment."""
    FREE = "free"
    RESERVED = "reserved"
    SOLD = "sold"


# ============================================
# GENERATION
# ============================================

class GenerateApartmentsRequest(BaseModel):
    """
    Request to generate apartments from a floor plan.

    building_id and name default to the floor plan's own building and name.
    """
    floor_plan_id: int = Field(..., gt=0)
    building_id: Optional[int] = Field(None, gt=0)
    name: Optional[str] = Field(None, min_length=1, max_length=255)


class ApartmentSummary(BaseModel):
    """One apartment inside a floor group."""
    flat_id: int
    flat_number: int
    status: str
    image: Optional[str] = None
    square_meters: Decimal = Decimal("0")

    class Config:
        from_attributes = True


class FloorGroup(BaseModel):
    """Apartments of one floor, ordered by flat_number."""
    floor: int
    apartments: List[ApartmentSummary]


class GenerateApartmentsResponse(BaseModel):
    """Generated apartments grouped by floor."""
    status: str = "SUCCESS"
    message: str
    total: int
    apartments: List[FloorGroup]


# ============================================
# INVENTORY VIEW
# ============================================

class FloorPlanGroup(BaseModel):
    """Floors of one floor plan within a building."""
    floor_plan_id: int
    name: str
    floors: List[FloorGroup]


class BuildingInventoryResponse(BaseModel):
    """Floor plan -> floor -> apartment hierarchy for a building."""
    status: str = "SUCCESS"
    building_id: int
    floor_plans: List[FloorPlanGroup]


# ============================================
# UPDATES
# ============================================

class UpdateApartmentStatusRequest(BaseModel):
    """Set the status of the apartment with this flat_number in a floor plan."""
    status: ApartmentStatus
    floor_plan_id: int = Field(..., gt=0)
    flat_number: int = Field(..., ge=1)


class ApartmentResponse(BaseModel):
    """Full apartment row."""
    id: int
    flat_id: int
    flat_number: int
    floor: int
    building_id: int
    floor_plan_id: int
    name: str
    status: str
    image: Optional[str] = None
    square_meters: Decimal

    class Config:
        from_attributes = True


class ApartmentStatusResponse(BaseModel):
    """Updated apartment after a status change."""
    status: str = "SUCCESS"
    message: str
    data: ApartmentResponse


class SharedPropertiesResponse(BaseModel):
    """Apartments updated by a shared-property write."""
    status: str = "SUCCESS"
    message: str
    updated_count: int
    data: List[ApartmentResponse]
