"""
Franchise Service - franchise offerings of a business.
"""

from decimal import Decimal
from typing import List, Optional
import logging

from franchisenexus.db.models import FranchiseModel
from franchisenexus.domain.errors import NotFoundError
from franchisenexus.domain.roles import Caller
from franchisenexus.domain.unit_of_work import AbstractUnitOfWork
from franchisenexus.schemas import FranchiseCreateRequest, FranchiseFields

logger = logging.getLogger(__name__)

MUTABLE_FIELDS = tuple(FranchiseFields.model_fields)


class FranchiseService:
    """Application service for franchises"""

    async def list_franchises(
        self,
        uow: AbstractUnitOfWork,
        caller: Optional[Caller] = None
    ) -> List[FranchiseModel]:
        return await uow.franchises.list_all()

    async def get_franchise(
        self,
        uow: AbstractUnitOfWork,
        franchise_id: int,
        caller: Optional[Caller] = None
    ) -> FranchiseModel:
        franchise = await uow.franchises.get_by_id(franchise_id)
        if not franchise:
            raise NotFoundError("Franchise", franchise_id)
        return franchise

    async def list_franchises_by_business(
        self,
        uow: AbstractUnitOfWork,
        business_id: int,
        caller: Optional[Caller] = None
    ) -> List[FranchiseModel]:
        if not await uow.businesses.get_by_id(business_id):
            raise NotFoundError("Business", business_id)
        return await uow.franchises.list_by_business(business_id)

    async def list_franchises_by_industry(
        self,
        uow: AbstractUnitOfWork,
        industry: str,
        caller: Optional[Caller] = None
    ) -> List[FranchiseModel]:
        return await uow.franchises.list_by_industry(industry)

    async def list_franchises_by_max_investment(
        self,
        uow: AbstractUnitOfWork,
        max_investment: Decimal,
        caller: Optional[Caller] = None
    ) -> List[FranchiseModel]:
        return await uow.franchises.list_by_max_investment(max_investment)

    async def list_franchises_by_location(
        self,
        uow: AbstractUnitOfWork,
        country: str,
        city: str = "",
        caller: Optional[Caller] = None
    ) -> List[FranchiseModel]:
        """Exact, case-insensitive match on both country and city."""
        return await uow.franchises.list_by_location(country, city)

    async def create_franchise(
        self,
        uow: AbstractUnitOfWork,
        caller: Caller,
        request: FranchiseCreateRequest
    ) -> FranchiseModel:
        """
        Create a franchise under an existing business.

        Raises:
            NotFoundError: If the business does not exist (nothing is written)
        """
        if not await uow.businesses.get_by_id(request.business_id):
            raise NotFoundError("Business", request.business_id)

        franchise = FranchiseModel(business_id=request.business_id)
        for field in MUTABLE_FIELDS:
            setattr(franchise, field, getattr(request, field))

        franchise = await uow.franchises.add(franchise)
        await uow.commit()

        logger.info(
            f"Created franchise {franchise.id} (business={franchise.business_id}) "
            f"by user {caller.user_id}"
        )
        return franchise

    async def update_franchise(
        self,
        uow: AbstractUnitOfWork,
        caller: Caller,
        franchise_id: int,
        request: FranchiseFields
    ) -> FranchiseModel:
        franchise = await self.get_franchise(uow, franchise_id)

        for field in MUTABLE_FIELDS:
            setattr(franchise, field, getattr(request, field))

        franchise = await uow.franchises.save(franchise)
        await uow.commit()

        logger.info(f"Updated franchise {franchise.id} by user {caller.user_id}")
        return franchise

    async def delete_franchise(self, uow: AbstractUnitOfWork, caller: Caller, franchise_id: int) -> None:
        """Delete a franchise and the applications made to it."""
        await self.get_franchise(uow, franchise_id)
        await uow.franchises.delete(franchise_id)
        await uow.commit()

        logger.info(f"Deleted franchise {franchise_id} by user {caller.user_id}")
