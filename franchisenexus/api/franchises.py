"""
Franchise endpoints.

Static paths (/business/..., /industry/..., /investment, /location) are
declared before /{franchise_id}.
"""
from decimal import Decimal
from fastapi import APIRouter, Depends, Query, Response, status
from typing import List

from franchisenexus.api.dependencies import get_franchise_service, get_uow
from franchisenexus.api.security import require
from franchisenexus.application import FranchiseService
from franchisenexus.domain.roles import Caller, Operation
from franchisenexus.domain.unit_of_work import AbstractUnitOfWork
from franchisenexus.schemas import FranchiseCreateRequest, FranchiseResponse, FranchiseUpdateRequest

router = APIRouter()


@router.get("", response_model=List[FranchiseResponse])
async def list_franchises(
    caller: Caller = Depends(require(Operation.READ_FRANCHISES)),
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: FranchiseService = Depends(get_franchise_service)
):
    return await service.list_franchises(uow, caller)


@router.get("/business/{business_id}", response_model=List[FranchiseResponse])
async def list_franchises_by_business(
    business_id: int,
    caller: Caller = Depends(require(Operation.READ_FRANCHISES)),
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: FranchiseService = Depends(get_franchise_service)
):
    return await service.list_franchises_by_business(uow, business_id, caller)


@router.get("/industry/{industry}", response_model=List[FranchiseResponse])
async def list_franchises_by_industry(
    industry: str,
    caller: Caller = Depends(require(Operation.READ_FRANCHISES)),
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: FranchiseService = Depends(get_franchise_service)
):
    return await service.list_franchises_by_industry(uow, industry, caller)


@router.get("/investment", response_model=List[FranchiseResponse])
async def list_franchises_by_max_investment(
    max_investment: Decimal = Query(..., alias="maxInvestment"),
    caller: Caller = Depends(require(Operation.READ_FRANCHISES)),
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: FranchiseService = Depends(get_franchise_service)
):
    """Franchises whose initial investment is at most maxInvestment."""
    return await service.list_franchises_by_max_investment(uow, max_investment, caller)


@router.get("/location", response_model=List[FranchiseResponse])
async def list_franchises_by_location(
    country: str = Query(...),
    city: str = Query(""),
    caller: Caller = Depends(require(Operation.READ_FRANCHISES)),
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: FranchiseService = Depends(get_franchise_service)
):
    """Exact (case-insensitive) country and city match."""
    return await service.list_franchises_by_location(uow, country, city, caller)


@router.get("/{franchise_id}", response_model=FranchiseResponse)
async def get_franchise(
    franchise_id: int,
    caller: Caller = Depends(require(Operation.READ_FRANCHISES)),
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: FranchiseService = Depends(get_franchise_service)
):
    return await service.get_franchise(uow, franchise_id, caller)


@router.post("", response_model=FranchiseResponse, status_code=status.HTTP_201_CREATED)
async def create_franchise(
    request: FranchiseCreateRequest,
    caller: Caller = Depends(require(Operation.CREATE_FRANCHISE)),
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: FranchiseService = Depends(get_franchise_service)
):
    """Create a franchise under an existing business (franchisors only)."""
    return await service.create_franchise(uow, caller, request)


@router.put("/{franchise_id}", response_model=FranchiseResponse)
async def update_franchise(
    franchise_id: int,
    request: FranchiseUpdateRequest,
    caller: Caller = Depends(require(Operation.UPDATE_FRANCHISE)),
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: FranchiseService = Depends(get_franchise_service)
):
    return await service.update_franchise(uow, caller, franchise_id, request)


@router.delete("/{franchise_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_franchise(
    franchise_id: int,
    caller: Caller = Depends(require(Operation.DELETE_FRANCHISE)),
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: FranchiseService = Depends(get_franchise_service)
):
    await service.delete_franchise(uow, caller, franchise_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
