"""
Application services (use cases).

Each service method receives a unit of work and, for writes, the caller.
"""
from franchisenexus.application.auth_service import AuthService
from franchisenexus.application.user_service import UserService
from franchisenexus.application.business_service import BusinessService
from franchisenexus.application.franchise_service import FranchiseService
from franchisenexus.application.application_service import ApplicationService

__all__ = [
    'AuthService',
    'UserService',
    'BusinessService',
    'FranchiseService',
    'ApplicationService',
]
