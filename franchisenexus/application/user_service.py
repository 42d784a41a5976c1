"""
User Service - profile reads, updates and account removal.
"""

from typing import List, Optional
import logging

from franchisenexus.db.models import UserModel
from franchisenexus.domain.errors import NotFoundError
from franchisenexus.domain.roles import Caller
from franchisenexus.domain.unit_of_work import AbstractUnitOfWork
from franchisenexus.schemas import UserUpdateRequest

logger = logging.getLogger(__name__)


class UserService:
    """Application service for users"""

    async def list_users(self, uow: AbstractUnitOfWork, caller: Caller) -> List[UserModel]:
        return await uow.users.list_all()

    async def get_user(
        self,
        uow: AbstractUnitOfWork,
        user_id: int,
        caller: Optional[Caller] = None
    ) -> UserModel:
        """
        Raises:
            NotFoundError: If no user has this id
        """
        user = await uow.users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User", user_id)
        return user

    async def update_user(
        self,
        uow: AbstractUnitOfWork,
        caller: Caller,
        user_id: int,
        request: UserUpdateRequest
    ) -> UserModel:
        """
        Replace the profile fields of a user.

        Email, password and role are never touched here.
        """
        user = await self.get_user(uow, user_id)

        user.first_name = request.first_name
        user.last_name = request.last_name
        user.phone_number = request.phone_number
        user.profile_image = request.profile_image

        user = await uow.users.save(user)
        await uow.commit()

        logger.info(f"Updated profile of user {user.id} by user {caller.user_id}")
        return user

    async def delete_user(self, uow: AbstractUnitOfWork, caller: Caller, user_id: int) -> None:
        """
        Delete a user, their businesses (cascading) and their applications.

        Raises:
            NotFoundError: If no user has this id
        """
        await self.get_user(uow, user_id)
        await uow.users.delete(user_id)
        await uow.commit()

        logger.info(f"Deleted user {user_id} by user {caller.user_id}")
