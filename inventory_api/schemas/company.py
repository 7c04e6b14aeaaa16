"""
Company schemas.
"""
from datetime import datetime
from typing import List

from pydantic import BaseModel, Field


class CompanyCreate(BaseModel):
    """Schema for creating a company."""
    name: str = Field(..., min_length=1, max_length=100)


class CompanyResponse(BaseModel):
    """Company response schema."""
    id: int
    name: str
    created_at: datetime

    class Config:
        from_attributes = True


class CompanyListResponse(BaseModel):
    """List of companies response."""
    companies: List[CompanyResponse]
    total: int
