"""
Business Service - franchisor businesses.

Authorization upstream is role-only: any franchisor may update any business.
"""

from typing import List, Optional
import logging

from franchisenexus.db.models import BusinessModel
from franchisenexus.domain.errors import NotFoundError
from franchisenexus.domain.roles import Caller
from franchisenexus.domain.unit_of_work import AbstractUnitOfWork
from franchisenexus.schemas import BusinessCreateRequest, BusinessFields

logger = logging.getLogger(__name__)

# Fields copied from a request onto the record; never id or owner
MUTABLE_FIELDS = tuple(BusinessFields.model_fields)


class BusinessService:
    """Application service for businesses"""

    async def list_businesses(
        self,
        uow: AbstractUnitOfWork,
        caller: Optional[Caller] = None
    ) -> List[BusinessModel]:
        return await uow.businesses.list_all()

    async def get_business(
        self,
        uow: AbstractUnitOfWork,
        business_id: int,
        caller: Optional[Caller] = None
    ) -> BusinessModel:
        business = await uow.businesses.get_by_id(business_id)
        if not business:
            raise NotFoundError("Business", business_id)
        return business

    async def list_businesses_by_owner(
        self,
        uow: AbstractUnitOfWork,
        owner_id: int,
        caller: Optional[Caller] = None
    ) -> List[BusinessModel]:
        """
        Raises:
            NotFoundError: If the owner does not exist
        """
        if not await uow.users.get_by_id(owner_id):
            raise NotFoundError("User", owner_id)
        return await uow.businesses.list_by_owner(owner_id)

    async def list_businesses_by_industry(
        self,
        uow: AbstractUnitOfWork,
        industry: str,
        caller: Optional[Caller] = None
    ) -> List[BusinessModel]:
        return await uow.businesses.list_by_industry(industry)

    async def create_business(
        self,
        uow: AbstractUnitOfWork,
        caller: Caller,
        request: BusinessCreateRequest
    ) -> BusinessModel:
        """
        Create a business owned by request.owner_id (or the caller).

        Raises:
            NotFoundError: If the owner does not exist
        """
        owner_id = request.owner_id if request.owner_id is not None else caller.user_id
        if not await uow.users.get_by_id(owner_id):
            raise NotFoundError("User", owner_id)

        business = BusinessModel(owner_id=owner_id)
        for field in MUTABLE_FIELDS:
            setattr(business, field, getattr(request, field))

        business = await uow.businesses.add(business)
        await uow.commit()

        logger.info(f"Created business {business.id} (owner={owner_id}) by user {caller.user_id}")
        return business

    async def update_business(
        self,
        uow: AbstractUnitOfWork,
        caller: Caller,
        business_id: int,
        request: BusinessFields
    ) -> BusinessModel:
        business = await self.get_business(uow, business_id)

        for field in MUTABLE_FIELDS:
            setattr(business, field, getattr(request, field))

        business = await uow.businesses.save(business)
        await uow.commit()

        logger.info(f"Updated business {business.id} by user {caller.user_id}")
        return business

    async def delete_business(self, uow: AbstractUnitOfWork, caller: Caller, business_id: int) -> None:
        """Delete a business with its franchises and their applications."""
        await self.get_business(uow, business_id)
        await uow.businesses.delete(business_id)
        await uow.commit()

        logger.info(f"Deleted business {business_id} by user {caller.user_id}")
