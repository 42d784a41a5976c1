"""
Shared FastAPI dependencies: unit of work and application services.

Services are stateless and built once per process. Tests may swap any of
them through app.dependency_overrides.
"""
from functools import lru_cache
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from franchisenexus.application import (
    ApplicationService,
    AuthService,
    BusinessService,
    FranchiseService,
    UserService,
)
from franchisenexus.config import settings
from franchisenexus.db.connection import get_db_session
from franchisenexus.domain.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from franchisenexus.domain.workflow import ApplicationStatusPolicy
from franchisenexus.services.token_service import get_token_service


async def get_uow(db: AsyncSession = Depends(get_db_session)) -> AbstractUnitOfWork:
    """One unit of work per request, sharing the request's session."""
    return get_unit_of_work(db)


@lru_cache
def get_auth_service() -> AuthService:
    return AuthService(get_token_service())


@lru_cache
def get_user_service() -> UserService:
    return UserService()


@lru_cache
def get_business_service() -> BusinessService:
    return BusinessService()


@lru_cache
def get_franchise_service() -> FranchiseService:
    return FranchiseService()


@lru_cache
def get_application_service() -> ApplicationService:
    return ApplicationService(ApplicationStatusPolicy(settings.application_status_allowlist))
