"""
Company Service

Minimal company records; buildings reference them.
"""
from typing import List, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_api.lib.errors import ConflictError
from inventory_api.models.company import Company
from inventory_api.schemas.company import CompanyCreate


class CompanyService:
    """Service for company records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_companies(self) -> Tuple[List[Company], int]:
        result = await self.db.execute(select(Company).order_by(Company.name))
        companies = list(result.scalars().all())
        return companies, len(companies)

    async def create_company(self, data: CompanyCreate) -> Company:
        existing = await self.db.execute(
            select(Company.id).where(func.lower(Company.name) == data.name.lower())
        )
        if existing.scalar_one_or_none() is not None:
            raise ConflictError(
                "Company with this name already exists.",
                code="COMPANY_EXIST",
            )

        company = Company(name=data.name)
        self.db.add(company)
        await self.db.commit()
        await self.db.refresh(company)

        return company
