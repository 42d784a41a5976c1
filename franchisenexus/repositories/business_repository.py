"""
Business repository for data access.
"""

from typing import Optional, List
from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from franchisenexus.db.models import BusinessModel, FranchiseModel, ApplicationModel
from franchisenexus.core.interfaces import IBusinessRepository


class BusinessRepository(IBusinessRepository):
    """Repository for Business entity"""

    def __init__(self, session: AsyncSession):
        self._db = session

    async def add(self, business: BusinessModel) -> BusinessModel:
        self._db.add(business)
        await self._db.flush()
        await self._db.refresh(business)
        return business

    async def get_by_id(self, business_id: int) -> Optional[BusinessModel]:
        """Get business by database ID"""
        result = await self._db.execute(
            select(BusinessModel).where(BusinessModel.id == business_id)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> List[BusinessModel]:
        result = await self._db.execute(
            select(BusinessModel).order_by(BusinessModel.id)
        )
        return list(result.scalars().all())

    async def list_by_owner(self, owner_id: int) -> List[BusinessModel]:
        result = await self._db.execute(
            select(BusinessModel)
            .where(BusinessModel.owner_id == owner_id)
            .order_by(BusinessModel.id)
        )
        return list(result.scalars().all())

    async def list_by_industry(self, industry: str) -> List[BusinessModel]:
        result = await self._db.execute(
            select(BusinessModel)
            .where(func.lower(BusinessModel.industry).contains(industry.lower(), autoescape=True))
            .order_by(BusinessModel.id)
        )
        return list(result.scalars().all())

    async def save(self, business: BusinessModel) -> BusinessModel:
        await self._db.flush()
        await self._db.refresh(business)
        return business

    async def delete(self, business_id: int) -> None:
        franchise_ids = select(FranchiseModel.id).where(FranchiseModel.business_id == business_id)

        await self._db.execute(
            delete(ApplicationModel)
            .where(ApplicationModel.franchise_id.in_(franchise_ids))
            .execution_options(synchronize_session=False)
        )
        await self._db.execute(
            delete(FranchiseModel)
            .where(FranchiseModel.business_id == business_id)
            .execution_options(synchronize_session=False)
        )
        await self._db.execute(
            delete(BusinessModel)
            .where(BusinessModel.id == business_id)
            .execution_options(synchronize_session=False)
        )
