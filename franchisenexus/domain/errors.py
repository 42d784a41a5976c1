"""
Domain exceptions.

Each exception carries the HTTP status the API boundary translates it to,
so handlers in main.py stay a single mapping.
"""

from typing import Optional


class DomainError(Exception):
    """Base exception for domain layer errors"""

    status_code: int = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when an id (or a referenced relation) doesn't resolve"""

    status_code = 404

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found with id: {entity_id}")


class DuplicateEmailError(DomainError):
    """Raised when registering an email that is already in use"""

    status_code = 400

    def __init__(self, email: str):
        self.email = email
        super().__init__("Email is already in use")


class InvalidCredentialsError(DomainError):
    """Raised on failed login. Never says whether the email exists."""

    status_code = 401

    def __init__(self):
        super().__init__("Invalid email or password")


class InvalidTokenError(DomainError):
    """Raised when a bearer token fails verification. Deliberately vague."""

    status_code = 401

    def __init__(self):
        super().__init__("Invalid token")


class UnauthenticatedError(DomainError):
    """Raised when a protected operation is attempted anonymously"""

    status_code = 401

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "Authentication is required to access this resource")


class ForbiddenError(DomainError):
    """Raised when the caller's role is not allowed for an operation"""

    status_code = 403

    def __init__(self, operation: str, role: str):
        self.operation = operation
        self.role = role
        super().__init__("Access denied")


class InvalidStatusError(DomainError):
    """Raised when a status is outside the configured allow-list"""

    status_code = 400

    def __init__(self, status: str, allowed):
        self.status = status
        self.allowed = list(allowed)
        super().__init__(
            f"Invalid application status '{status}'. Allowed: {', '.join(self.allowed)}"
        )
