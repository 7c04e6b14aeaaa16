"""
Building schemas.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from inventory_api.schemas.paths import parse_paths


class BuildingCreate(BaseModel):
    """Schema for creating a building."""
    name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1, max_length=255)
    company_id: int = Field(..., gt=0)
    desktop_paths: Dict[str, Any]
    mobile_paths: Dict[str, Any]
    desktop_image: Optional[str] = None
    mobile_image: Optional[str] = None

    @field_validator('desktop_paths', 'mobile_paths', mode='before')
    @classmethod
    def decode_paths(cls, v, info):
        return parse_paths(v, info.field_name)


class BuildingResponse(BaseModel):
    """Building response schema."""
    id: int
    company_id: int
    name: str
    address: str
    desktop_image: Optional[str] = None
    mobile_image: Optional[str] = None
    desktop_paths: Dict[str, Any]
    mobile_paths: Dict[str, Any]
    created_at: datetime

    class Config:
        from_attributes = True


class BuildingListResponse(BaseModel):
    """List of buildings response."""
    buildings: List[BuildingResponse]
    total: int
