"""
Bearer authentication and role checks for protected routes.

get_current_caller never fails: a missing, malformed, forged or expired
token simply yields an anonymous caller (None). The role check in
require() is what turns that into 401, or into 403 for the wrong role.
"""
from fastapi import Depends, Header
from typing import Callable, Optional
import logging

from franchisenexus.api.dependencies import get_auth_service, get_uow
from franchisenexus.application import AuthService
from franchisenexus.domain.roles import Caller, Operation, authorize
from franchisenexus.domain.unit_of_work import AbstractUnitOfWork

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token of a 'Bearer <token>' header, or None."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


async def get_current_caller(
    authorization: Optional[str] = Header(None),
    uow: AbstractUnitOfWork = Depends(get_uow),
    auth_service: AuthService = Depends(get_auth_service)
) -> Optional[Caller]:
    """
    Resolve the caller of the current request.

    Returns:
        Caller for a valid token whose user still exists, None otherwise
    """
    token = extract_bearer_token(authorization)
    if token is None:
        return None

    caller = await auth_service.resolve_caller(uow, token)
    if caller is None:
        logger.warning("Bearer token rejected; continuing as anonymous")
    return caller


def require(operation: Operation) -> Callable:
    """
    Build a dependency that admits only callers allowed to perform `operation`.

    Usage:
        @router.post("")
        async def create(caller: Caller = Depends(require(Operation.CREATE_BUSINESS))):
            ...
    """
    async def dependency(caller: Optional[Caller] = Depends(get_current_caller)) -> Caller:
        return authorize(caller, operation)

    dependency.__name__ = f"require_{operation.value}"
    return dependency
