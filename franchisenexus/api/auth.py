"""
Auth endpoints - registration and login (public).
"""
from fastapi import APIRouter, Depends, status
import logging

from franchisenexus.api.dependencies import get_auth_service, get_uow
from franchisenexus.application import AuthService
from franchisenexus.domain.unit_of_work import AbstractUnitOfWork
from franchisenexus.schemas import AuthResponse, LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)

router = APIRouter()


def _auth_response(user, token: str) -> AuthResponse:
    return AuthResponse(
        token=token,
        user_id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        role=user.role,
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    uow: AbstractUnitOfWork = Depends(get_uow),
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Create an account and return a bearer token for it.

    Returns 400 if the email is already registered.
    """
    user, token = await auth_service.register(uow, request)
    return _auth_response(user, token)


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    uow: AbstractUnitOfWork = Depends(get_uow),
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Exchange email and password for a bearer token.

    Returns 401 on unknown email or wrong password.
    """
    user, token = await auth_service.login(uow, request.email, request.password)
    return _auth_response(user, token)
