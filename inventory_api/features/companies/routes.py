"""
Company endpoints.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_api.lib.database import get_db
from inventory_api.schemas.company import (
    CompanyCreate,
    CompanyListResponse,
    CompanyResponse,
)
from inventory_api.services.company_service import CompanyService

router = APIRouter(tags=["Companies"])


@router.get(
    "/companies",
    response_model=CompanyListResponse,
)
async def list_companies(
    db: AsyncSession = Depends(get_db),
):
    """List all companies."""
    service = CompanyService(db)
    companies, total = await service.list_companies()

    return CompanyListResponse(
        companies=[CompanyResponse.model_validate(c) for c in companies],
        total=total,
    )


@router.post(
    "/create-company",
    response_model=CompanyResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_company(
    data: CompanyCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a new company."""
    service = CompanyService(db)
    company = await service.create_company(data)

    return CompanyResponse.model_validate(company)
