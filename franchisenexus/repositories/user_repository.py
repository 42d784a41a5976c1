"""
User repository for data access.

Deleting a user cascades to the businesses they own (with those businesses'
franchises and applications) and to the applications they submitted.
"""

from typing import Optional, List
from sqlalchemy import select, delete, or_
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from franchisenexus.db.models import UserModel, BusinessModel, FranchiseModel, ApplicationModel
from franchisenexus.core.interfaces import IUserRepository

logger = logging.getLogger(__name__)


class UserRepository(IUserRepository):
    """Repository for User entity"""

    def __init__(self, session: AsyncSession):
        self._db = session

    async def add(self, user: UserModel) -> UserModel:
        self._db.add(user)
        await self._db.flush()
        await self._db.refresh(user)
        return user

    async def get_by_id(self, user_id: int) -> Optional[UserModel]:
        """Get user by database ID"""
        result = await self._db.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[UserModel]:
        """Get user by login email"""
        result = await self._db.execute(
            select(UserModel).where(UserModel.email == email)
        )
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        result = await self._db.execute(
            select(UserModel.id).where(UserModel.email == email).limit(1)
        )
        return result.first() is not None

    async def list_all(self) -> List[UserModel]:
        result = await self._db.execute(
            select(UserModel).order_by(UserModel.id)
        )
        return list(result.scalars().all())

    async def save(self, user: UserModel) -> UserModel:
        await self._db.flush()
        await self._db.refresh(user)
        return user

    async def delete(self, user_id: int) -> None:
        owned_businesses = select(BusinessModel.id).where(BusinessModel.owner_id == user_id)
        owned_franchises = select(FranchiseModel.id).where(FranchiseModel.business_id.in_(owned_businesses))

        await self._db.execute(
            delete(ApplicationModel)
            .where(or_(
                ApplicationModel.applicant_id == user_id,
                ApplicationModel.franchise_id.in_(owned_franchises),
            ))
            .execution_options(synchronize_session=False)
        )
        await self._db.execute(
            delete(FranchiseModel)
            .where(FranchiseModel.business_id.in_(owned_businesses))
            .execution_options(synchronize_session=False)
        )
        await self._db.execute(
            delete(BusinessModel)
            .where(BusinessModel.owner_id == user_id)
            .execution_options(synchronize_session=False)
        )
        await self._db.execute(
            delete(UserModel)
            .where(UserModel.id == user_id)
            .execution_options(synchronize_session=False)
        )
        logger.debug(f"Deleted user {user_id} with owned businesses and applications")
