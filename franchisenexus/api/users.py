"""
User endpoints.
"""
from fastapi import APIRouter, Depends, Response, status
from typing import List

from franchisenexus.api.dependencies import get_uow, get_user_service
from franchisenexus.api.security import require
from franchisenexus.application import UserService
from franchisenexus.domain.roles import Caller, Operation
from franchisenexus.domain.unit_of_work import AbstractUnitOfWork
from franchisenexus.schemas import UserResponse, UserUpdateRequest

router = APIRouter()


@router.get("", response_model=List[UserResponse])
async def list_users(
    caller: Caller = Depends(require(Operation.LIST_USERS)),
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: UserService = Depends(get_user_service)
):
    """List all users (admin only)."""
    return await service.list_users(uow, caller)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    caller: Caller = Depends(require(Operation.READ_USER)),
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: UserService = Depends(get_user_service)
):
    return await service.get_user(uow, user_id, caller)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    request: UserUpdateRequest,
    caller: Caller = Depends(require(Operation.UPDATE_USER)),
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: UserService = Depends(get_user_service)
):
    """Replace profile fields (names, phone, profile image)."""
    return await service.update_user(uow, caller, user_id, request)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    caller: Caller = Depends(require(Operation.DELETE_USER)),
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: UserService = Depends(get_user_service)
):
    """Delete a user and everything they own (admin only)."""
    await service.delete_user(uow, caller, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
