"""
Public browse endpoints - no authentication.

Read-only views over businesses and franchises for anonymous visitors.
"""
from decimal import Decimal
from fastapi import APIRouter, Depends, Query
from typing import List

from franchisenexus.api.dependencies import get_business_service, get_franchise_service, get_uow
from franchisenexus.application import BusinessService, FranchiseService
from franchisenexus.domain.unit_of_work import AbstractUnitOfWork
from franchisenexus.schemas import BusinessResponse, FranchiseResponse

router = APIRouter()


# ============================================
# Businesses
# ============================================

@router.get("/businesses", response_model=List[BusinessResponse])
async def browse_businesses(
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: BusinessService = Depends(get_business_service)
):
    return await service.list_businesses(uow)


@router.get("/businesses/industry/{industry}", response_model=List[BusinessResponse])
async def browse_businesses_by_industry(
    industry: str,
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: BusinessService = Depends(get_business_service)
):
    return await service.list_businesses_by_industry(uow, industry)


@router.get("/businesses/{business_id}", response_model=BusinessResponse)
async def browse_business(
    business_id: int,
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: BusinessService = Depends(get_business_service)
):
    return await service.get_business(uow, business_id)


# ============================================
# Franchises
# ============================================

@router.get("/franchises", response_model=List[FranchiseResponse])
async def browse_franchises(
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: FranchiseService = Depends(get_franchise_service)
):
    return await service.list_franchises(uow)


@router.get("/franchises/business/{business_id}", response_model=List[FranchiseResponse])
async def browse_franchises_by_business(
    business_id: int,
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: FranchiseService = Depends(get_franchise_service)
):
    return await service.list_franchises_by_business(uow, business_id)


@router.get("/franchises/industry/{industry}", response_model=List[FranchiseResponse])
async def browse_franchises_by_industry(
    industry: str,
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: FranchiseService = Depends(get_franchise_service)
):
    return await service.list_franchises_by_industry(uow, industry)


@router.get("/franchises/investment", response_model=List[FranchiseResponse])
async def browse_franchises_by_max_investment(
    max_investment: Decimal = Query(..., alias="maxInvestment"),
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: FranchiseService = Depends(get_franchise_service)
):
    return await service.list_franchises_by_max_investment(uow, max_investment)


@router.get("/franchises/location", response_model=List[FranchiseResponse])
async def browse_franchises_by_location(
    country: str = Query(...),
    city: str = Query(""),
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: FranchiseService = Depends(get_franchise_service)
):
    return await service.list_franchises_by_location(uow, country, city)


@router.get("/franchises/{franchise_id}", response_model=FranchiseResponse)
async def browse_franchise(
    franchise_id: int,
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: FranchiseService = Depends(get_franchise_service)
):
    return await service.get_franchise(uow, franchise_id)
