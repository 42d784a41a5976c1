"""
Core interfaces for FranchiseNexus persistence.

Services depend on these abstractions; the SQLAlchemy implementations live
in franchisenexus/repositories/. All list methods return records ordered by
id (insertion order) and hold no cursor state.
"""
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional, List, TYPE_CHECKING

if TYPE_CHECKING:
    from franchisenexus.db.models import UserModel, BusinessModel, FranchiseModel, ApplicationModel


class IUserRepository(ABC):
    """Interface for user storage and retrieval"""

    @abstractmethod
    async def add(self, user: 'UserModel') -> 'UserModel':
        """Persist a new user and assign its id"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional['UserModel']:
        """Get user by database ID"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional['UserModel']:
        """Get user by login email"""
        pass

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        """Check whether an email is already registered"""
        pass

    @abstractmethod
    async def list_all(self) -> List['UserModel']:
        """List every user"""
        pass

    @abstractmethod
    async def save(self, user: 'UserModel') -> 'UserModel':
        """Flush pending changes to an existing user"""
        pass

    @abstractmethod
    async def delete(self, user_id: int) -> None:
        """
        Delete a user together with owned businesses and submitted applications.

        Callers must check existence first.
        """
        pass


class IBusinessRepository(ABC):
    """Interface for business storage and filtered lookups"""

    @abstractmethod
    async def add(self, business: 'BusinessModel') -> 'BusinessModel':
        pass

    @abstractmethod
    async def get_by_id(self, business_id: int) -> Optional['BusinessModel']:
        pass

    @abstractmethod
    async def list_all(self) -> List['BusinessModel']:
        pass

    @abstractmethod
    async def list_by_owner(self, owner_id: int) -> List['BusinessModel']:
        pass

    @abstractmethod
    async def list_by_industry(self, industry: str) -> List['BusinessModel']:
        """Case-insensitive substring match on industry"""
        pass

    @abstractmethod
    async def save(self, business: 'BusinessModel') -> 'BusinessModel':
        pass

    @abstractmethod
    async def delete(self, business_id: int) -> None:
        """Delete a business with its franchises and their applications"""
        pass


class IFranchiseRepository(ABC):
    """Interface for franchise storage and filtered lookups"""

    @abstractmethod
    async def add(self, franchise: 'FranchiseModel') -> 'FranchiseModel':
        pass

    @abstractmethod
    async def get_by_id(self, franchise_id: int) -> Optional['FranchiseModel']:
        pass

    @abstractmethod
    async def list_all(self) -> List['FranchiseModel']:
        pass

    @abstractmethod
    async def list_by_business(self, business_id: int) -> List['FranchiseModel']:
        pass

    @abstractmethod
    async def list_by_industry(self, industry: str) -> List['FranchiseModel']:
        """Case-insensitive substring match on industry"""
        pass

    @abstractmethod
    async def list_by_max_investment(self, max_investment: Decimal) -> List['FranchiseModel']:
        """Franchises whose initial investment is <= the ceiling"""
        pass

    @abstractmethod
    async def list_by_location(self, country: str, city: str) -> List['FranchiseModel']:
        """Case-insensitive exact match on both country and city"""
        pass

    @abstractmethod
    async def save(self, franchise: 'FranchiseModel') -> 'FranchiseModel':
        pass

    @abstractmethod
    async def delete(self, franchise_id: int) -> None:
        """Delete a franchise with its applications"""
        pass


class IApplicationRepository(ABC):
    """Interface for application storage and filtered lookups"""

    @abstractmethod
    async def add(self, application: 'ApplicationModel') -> 'ApplicationModel':
        pass

    @abstractmethod
    async def get_by_id(self, application_id: int) -> Optional['ApplicationModel']:
        pass

    @abstractmethod
    async def list_all(self) -> List['ApplicationModel']:
        pass

    @abstractmethod
    async def list_by_applicant(self, applicant_id: int) -> List['ApplicationModel']:
        pass

    @abstractmethod
    async def list_by_franchise(self, franchise_id: int) -> List['ApplicationModel']:
        pass

    @abstractmethod
    async def list_by_status(self, status: str) -> List['ApplicationModel']:
        """Exact match on status"""
        pass

    @abstractmethod
    async def save(self, application: 'ApplicationModel') -> 'ApplicationModel':
        """Flush pending changes to an existing application"""
        pass

    @abstractmethod
    async def delete(self, application_id: int) -> None:
        pass
