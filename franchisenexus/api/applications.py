"""
Franchise application endpoints.

PUT replaces applicant documents (franchisees); PATCH /{id}/status sets the
status (franchisors and admins). Neither path can touch the other's fields.
"""
from fastapi import APIRouter, Depends, Response, status
from typing import List

from franchisenexus.api.dependencies import get_application_service, get_uow
from franchisenexus.api.security import require
from franchisenexus.application import ApplicationService
from franchisenexus.domain.roles import Caller, Operation
from franchisenexus.domain.unit_of_work import AbstractUnitOfWork
from franchisenexus.schemas import (
    ApplicationCreateRequest,
    ApplicationResponse,
    ApplicationStatusRequest,
    ApplicationUpdateRequest,
)

router = APIRouter()


@router.get("", response_model=List[ApplicationResponse])
async def list_applications(
    caller: Caller = Depends(require(Operation.LIST_APPLICATIONS)),
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: ApplicationService = Depends(get_application_service)
):
    """List every application (admin only)."""
    return await service.list_applications(uow, caller)


@router.get("/applicant/{applicant_id}", response_model=List[ApplicationResponse])
async def list_applications_by_applicant(
    applicant_id: int,
    caller: Caller = Depends(require(Operation.READ_APPLICATIONS)),
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: ApplicationService = Depends(get_application_service)
):
    return await service.list_applications_by_applicant(uow, applicant_id, caller)


@router.get("/franchise/{franchise_id}", response_model=List[ApplicationResponse])
async def list_applications_by_franchise(
    franchise_id: int,
    caller: Caller = Depends(require(Operation.LIST_APPLICATIONS_BY_FRANCHISE)),
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: ApplicationService = Depends(get_application_service)
):
    return await service.list_applications_by_franchise(uow, franchise_id, caller)


@router.get("/status/{application_status}", response_model=List[ApplicationResponse])
async def list_applications_by_status(
    application_status: str,
    caller: Caller = Depends(require(Operation.READ_APPLICATIONS)),
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: ApplicationService = Depends(get_application_service)
):
    """Exact status match."""
    return await service.list_applications_by_status(uow, application_status, caller)


@router.get("/{application_id}", response_model=ApplicationResponse)
async def get_application(
    application_id: int,
    caller: Caller = Depends(require(Operation.READ_APPLICATIONS)),
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: ApplicationService = Depends(get_application_service)
):
    return await service.get_application(uow, application_id, caller)


@router.post("", response_model=ApplicationResponse, status_code=status.HTTP_201_CREATED)
async def create_application(
    request: ApplicationCreateRequest,
    caller: Caller = Depends(require(Operation.CREATE_APPLICATION)),
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: ApplicationService = Depends(get_application_service)
):
    """
    Submit an application (franchisees only).

    Starts as "Pending" with a server-assigned submission date.
    """
    return await service.create_application(uow, caller, request)


@router.patch("/{application_id}/status", response_model=ApplicationResponse)
async def update_application_status(
    application_id: int,
    request: ApplicationStatusRequest,
    caller: Caller = Depends(require(Operation.UPDATE_APPLICATION_STATUS)),
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: ApplicationService = Depends(get_application_service)
):
    return await service.update_application_status(uow, caller, application_id, request.status)


@router.put("/{application_id}", response_model=ApplicationResponse)
async def update_application(
    application_id: int,
    request: ApplicationUpdateRequest,
    caller: Caller = Depends(require(Operation.UPDATE_APPLICATION)),
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: ApplicationService = Depends(get_application_service)
):
    return await service.update_application(uow, caller, application_id, request)


@router.delete("/{application_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_application(
    application_id: int,
    caller: Caller = Depends(require(Operation.DELETE_APPLICATION)),
    uow: AbstractUnitOfWork = Depends(get_uow),
    service: ApplicationService = Depends(get_application_service)
):
    await service.delete_application(uow, caller, application_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
