"""
Floor plan schemas.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from inventory_api.schemas.paths import parse_paths


class FloorPlanCreate(BaseModel):
    """Schema for creating (or fully replacing) a floor plan."""
    name: str = Field(..., min_length=1, max_length=100)
    building_id: int = Field(..., gt=0)
    desktop_paths: Dict[str, Any]
    mobile_paths: Dict[str, Any]
    desktop_image: Optional[str] = None
    mobile_image: Optional[str] = None
    floor_range_start: int = Field(..., ge=1)
    floor_range_end: int = Field(..., ge=1)
    starting_apartment_number: int = Field(..., ge=1)
    apartments_per_floor: int = Field(..., ge=1)

    @field_validator('name')
    @classmethod
    def strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be empty")
        return v

    @field_validator('desktop_paths', 'mobile_paths', mode='before')
    @classmethod
    def decode_paths(cls, v, info):
        return parse_paths(v, info.field_name)

    @model_validator(mode='after')
    def validate_floor_range(self):
        if self.floor_range_end < self.floor_range_start:
            raise ValueError(
                "Floor range end must be greater than or equal to floor range start"
            )
        return self


class FloorPlanResponse(BaseModel):
    """Floor plan response schema."""
    id: int
    building_id: int
    name: str
    desktop_image: Optional[str] = None
    mobile_image: Optional[str] = None
    desktop_paths: Dict[str, Any]
    mobile_paths: Dict[str, Any]
    floor_range_start: int
    floor_range_end: int
    starting_apartment_number: int
    apartments_per_floor: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class FloorPlanListResponse(BaseModel):
    """List of floor plans response."""
    floor_plans: List[FloorPlanResponse]
    total: int


class FloorPlanEnvelope(BaseModel):
    """Single floor plan wrapped in the success envelope."""
    status: str = "SUCCESS"
    message: str
    data: FloorPlanResponse
