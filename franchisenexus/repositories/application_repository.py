"""
Application repository for data access.
"""

from typing import Optional, List
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from franchisenexus.db.models import ApplicationModel
from franchisenexus.core.interfaces import IApplicationRepository


class ApplicationRepository(IApplicationRepository):
    """Repository for Application entity"""

    def __init__(self, session: AsyncSession):
        self._db = session

    async def add(self, application: ApplicationModel) -> ApplicationModel:
        self._db.add(application)
        await self._db.flush()
        await self._db.refresh(application)
        return application

    async def get_by_id(self, application_id: int) -> Optional[ApplicationModel]:
        """Get application by database ID"""
        result = await self._db.execute(
            select(ApplicationModel).where(ApplicationModel.id == application_id)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> List[ApplicationModel]:
        result = await self._db.execute(
            select(ApplicationModel).order_by(ApplicationModel.id)
        )
        return list(result.scalars().all())

    async def list_by_applicant(self, applicant_id: int) -> List[ApplicationModel]:
        result = await self._db.execute(
            select(ApplicationModel)
            .where(ApplicationModel.applicant_id == applicant_id)
            .order_by(ApplicationModel.id)
        )
        return list(result.scalars().all())

    async def list_by_franchise(self, franchise_id: int) -> List[ApplicationModel]:
        result = await self._db.execute(
            select(ApplicationModel)
            .where(ApplicationModel.franchise_id == franchise_id)
            .order_by(ApplicationModel.id)
        )
        return list(result.scalars().all())

    async def list_by_status(self, status: str) -> List[ApplicationModel]:
        result = await self._db.execute(
            select(ApplicationModel)
            .where(ApplicationModel.status == status)
            .order_by(ApplicationModel.id)
        )
        return list(result.scalars().all())

    async def save(self, application: ApplicationModel) -> ApplicationModel:
        await self._db.flush()
        await self._db.refresh(application)
        return application

    async def delete(self, application_id: int) -> None:
        await self._db.execute(
            delete(ApplicationModel)
            .where(ApplicationModel.id == application_id)
            .execution_options(synchronize_session=False)
        )
