"""
Franchise repository for data access.

Filters:
- industry: case-insensitive substring ("tech" matches "FinTech")
- location: case-insensitive exact match on country and city
- investment: initial_investment <= ceiling
"""

from decimal import Decimal
from typing import Optional, List
from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from franchisenexus.db.models import FranchiseModel, ApplicationModel
from franchisenexus.core.interfaces import IFranchiseRepository


class FranchiseRepository(IFranchiseRepository):
    """Repository for Franchise entity"""

    def __init__(self, session: AsyncSession):
        self._db = session

    async def add(self, franchise: FranchiseModel) -> FranchiseModel:
        self._db.add(franchise)
        await self._db.flush()
        await self._db.refresh(franchise)
        return franchise

    async def get_by_id(self, franchise_id: int) -> Optional[FranchiseModel]:
        """Get franchise by database ID"""
        result = await self._db.execute(
            select(FranchiseModel).where(FranchiseModel.id == franchise_id)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> List[FranchiseModel]:
        result = await self._db.execute(
            select(FranchiseModel).order_by(FranchiseModel.id)
        )
        return list(result.scalars().all())

    async def list_by_business(self, business_id: int) -> List[FranchiseModel]:
        result = await self._db.execute(
            select(FranchiseModel)
            .where(FranchiseModel.business_id == business_id)
            .order_by(FranchiseModel.id)
        )
        return list(result.scalars().all())

    async def list_by_industry(self, industry: str) -> List[FranchiseModel]:
        result = await self._db.execute(
            select(FranchiseModel)
            .where(func.lower(FranchiseModel.industry).contains(industry.lower(), autoescape=True))
            .order_by(FranchiseModel.id)
        )
        return list(result.scalars().all())

    async def list_by_max_investment(self, max_investment: Decimal) -> List[FranchiseModel]:
        result = await self._db.execute(
            select(FranchiseModel)
            .where(FranchiseModel.initial_investment <= max_investment)
            .order_by(FranchiseModel.id)
        )
        return list(result.scalars().all())

    async def list_by_location(self, country: str, city: str) -> List[FranchiseModel]:
        result = await self._db.execute(
            select(FranchiseModel)
            .where(
                func.lower(FranchiseModel.country) == country.lower(),
                func.lower(FranchiseModel.city) == city.lower(),
            )
            .order_by(FranchiseModel.id)
        )
        return list(result.scalars().all())

    async def save(self, franchise: FranchiseModel) -> FranchiseModel:
        await self._db.flush()
        await self._db.refresh(franchise)
        return franchise

    async def delete(self, franchise_id: int) -> None:
        await self._db.execute(
            delete(ApplicationModel)
            .where(ApplicationModel.franchise_id == franchise_id)
            .execution_options(synchronize_session=False)
        )
        await self._db.execute(
            delete(FranchiseModel)
            .where(FranchiseModel.id == franchise_id)
            .execution_options(synchronize_session=False)
        )
