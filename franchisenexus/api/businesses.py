"""
Business endpoints.

Static paths (/owner/..., /industry/...) are declared before /{business_id}.
"""
from fastapi import APIRouter, Depends, Response, status
from typing import List

from franchisenexus.api.dependencies import get_business_service, get_uow
from franchisenexus.api.security import require
from franchisenexus.application import BusinessService
from franchisenexus.domain.roles import Caller, Operation
from franchisenexus.domain.unit_of_work import AbstractUnitOfWork
from franchisenexus.schemas import BusinessCreateRequest, BusinessResponse, BusinessUpdateRequest

router = APIRouter()


@router.get("", response_model=List[BusinessResponse])
async def list_businesses(
    caller: Caller = Depends(require(Operation.READ_BUSINESSES)),
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: BusinessService = Depends(get_business_service)
):
    return await service.list_businesses(uow, caller)


@router.get("/owner/{owner_id}", response_model=List[BusinessResponse])
async def list_businesses_by_owner(
    owner_id: int,
    caller: Caller = Depends(require(Operation.READ_BUSINESSES)),
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: BusinessService = Depends(get_business_service)
):
    """Businesses of one owner; 404 if the owner does not exist."""
    return await service.list_businesses_by_owner(uow, owner_id, caller)


@router.get("/industry/{industry}", response_model=List[BusinessResponse])
async def list_businesses_by_industry(
    industry: str,
    caller: Caller = Depends(require(Operation.READ_BUSINESSES)),
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: BusinessService = Depends(get_business_service)
):
    """Case-insensitive substring match on industry."""
    return await service.list_businesses_by_industry(uow, industry, caller)


@router.get("/{business_id}", response_model=BusinessResponse)
async def get_business(
    business_id: int,
    caller: Caller = Depends(require(Operation.READ_BUSINESSES)),
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: BusinessService = Depends(get_business_service)
):
    return await service.get_business(uow, business_id, caller)


@router.post("", response_model=BusinessResponse, status_code=status.HTTP_201_CREATED)
async def create_business(
    request: BusinessCreateRequest,
    caller: Caller = Depends(require(Operation.CREATE_BUSINESS)),
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: BusinessService = Depends(get_business_service)
):
    """
    Create a business (franchisors only).

    ownerId defaults to the caller.
    """
    return await service.create_business(uow, caller, request)


@router.put("/{business_id}", response_model=BusinessResponse)
async def update_business(
    business_id: int,
    request: BusinessUpdateRequest,
    caller: Caller = Depends(require(Operation.UPDATE_BUSINESS)),
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: BusinessService = Depends(get_business_service)
):
    return await service.update_business(uow, caller, business_id, request)


@router.delete("/{business_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_business(
    business_id: int,
    caller: Caller = Depends(require(Operation.DELETE_BUSINESS)),
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: BusinessService = Depends(get_business_service)
):
    await service.delete_business(uow, caller, business_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
