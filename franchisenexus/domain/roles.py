"""
Roles and role-based access control.

Every protected operation is listed in Operation and mapped to the set of
roles allowed to perform it. Authorization is role-only: it never inspects
which business, franchise or application the caller is touching.

The caller is always passed explicitly; nothing here reads request state.
"""

import enum
from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional

from .errors import ForbiddenError, UnauthenticatedError


class Role(str, enum.Enum):
    """Closed set of user roles. Values are the wire/authority names."""

    ADMIN = "ROLE_ADMIN"
    FRANCHISEE = "ROLE_FRANCHISEE"
    FRANCHISOR = "ROLE_FRANCHISOR"

    @property
    def label(self) -> str:
        """Human-readable name: ROLE_FRANCHISOR -> Franchisor"""
        return self.value.removeprefix("ROLE_").capitalize()


@dataclass(frozen=True)
class Caller:
    """
    Authenticated identity resolved from a bearer token.

    Flows as a parameter into every authorization check and service call.
    """

    user_id: int
    email: str
    role: Role

    def __repr__(self) -> str:
        return f"Caller(user_id={self.user_id}, role={self.role.label})"


class Operation(str, enum.Enum):
    """Protected operations. Public browse and auth routes are not listed."""

    # Users
    LIST_USERS = "list_users"
    READ_USER = "read_user"
    UPDATE_USER = "update_user"
    DELETE_USER = "delete_user"

    # Businesses
    READ_BUSINESSES = "read_businesses"
    CREATE_BUSINESS = "create_business"
    UPDATE_BUSINESS = "update_business"
    DELETE_BUSINESS = "delete_business"

    # Franchises
    READ_FRANCHISES = "read_franchises"
    CREATE_FRANCHISE = "create_franchise"
    UPDATE_FRANCHISE = "update_franchise"
    DELETE_FRANCHISE = "delete_franchise"

    # Applications
    LIST_APPLICATIONS = "list_applications"
    READ_APPLICATIONS = "read_applications"
    LIST_APPLICATIONS_BY_FRANCHISE = "list_applications_by_franchise"
    CREATE_APPLICATION = "create_application"
    UPDATE_APPLICATION = "update_application"
    UPDATE_APPLICATION_STATUS = "update_application_status"
    DELETE_APPLICATION = "delete_application"


ANY_AUTHENTICATED: FrozenSet[Role] = frozenset(Role)
ADMIN_ONLY: FrozenSet[Role] = frozenset({Role.ADMIN})
FRANCHISOR_ONLY: FrozenSet[Role] = frozenset({Role.FRANCHISOR})
FRANCHISEE_ONLY: FrozenSet[Role] = frozenset({Role.FRANCHISEE})
FRANCHISOR_OR_ADMIN: FrozenSet[Role] = frozenset({Role.FRANCHISOR, Role.ADMIN})


OPERATION_ROLES: Dict[Operation, FrozenSet[Role]] = {
    Operation.LIST_USERS: ADMIN_ONLY,
    Operation.READ_USER: ANY_AUTHENTICATED,
    Operation.UPDATE_USER: ANY_AUTHENTICATED,
    Operation.DELETE_USER: ADMIN_ONLY,

    Operation.READ_BUSINESSES: ANY_AUTHENTICATED,
    Operation.CREATE_BUSINESS: FRANCHISOR_ONLY,
    Operation.UPDATE_BUSINESS: FRANCHISOR_ONLY,
    Operation.DELETE_BUSINESS: FRANCHISOR_OR_ADMIN,

    Operation.READ_FRANCHISES: ANY_AUTHENTICATED,
    Operation.CREATE_FRANCHISE: FRANCHISOR_ONLY,
    Operation.UPDATE_FRANCHISE: FRANCHISOR_ONLY,
    Operation.DELETE_FRANCHISE: FRANCHISOR_OR_ADMIN,

    Operation.LIST_APPLICATIONS: ADMIN_ONLY,
    Operation.READ_APPLICATIONS: ANY_AUTHENTICATED,
    Operation.LIST_APPLICATIONS_BY_FRANCHISE: FRANCHISOR_OR_ADMIN,
    Operation.CREATE_APPLICATION: FRANCHISEE_ONLY,
    Operation.UPDATE_APPLICATION: FRANCHISEE_ONLY,
    Operation.UPDATE_APPLICATION_STATUS: FRANCHISOR_OR_ADMIN,
    Operation.DELETE_APPLICATION: ANY_AUTHENTICATED,
}


def allowed_roles(operation: Operation) -> FrozenSet[Role]:
    """Roles allowed to perform an operation."""
    return OPERATION_ROLES[operation]


def is_authorized(caller: Optional[Caller], operation: Operation) -> bool:
    """True if the caller is authenticated and holds an allowed role."""
    return caller is not None and caller.role in allowed_roles(operation)


def authorize(caller: Optional[Caller], operation: Operation) -> Caller:
    """
    Gate an operation by the caller's role.

    Args:
        caller: Resolved caller, or None for anonymous requests
        operation: Operation being attempted

    Returns:
        The caller, for chaining into the domain operation

    Raises:
        UnauthenticatedError: If there is no caller
        ForbiddenError: If the caller's role is not allowed
    """
    if caller is None:
        raise UnauthenticatedError()

    if not is_authorized(caller, operation):
        raise ForbiddenError(operation.value, caller.role.label)

    return caller
