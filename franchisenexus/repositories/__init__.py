"""SQLAlchemy repository implementations."""
from franchisenexus.repositories.user_repository import UserRepository
from franchisenexus.repositories.business_repository import BusinessRepository
from franchisenexus.repositories.franchise_repository import FranchiseRepository
from franchisenexus.repositories.application_repository import ApplicationRepository

__all__ = [
    "UserRepository",
    "BusinessRepository",
    "FranchiseRepository",
    "ApplicationRepository",
]
