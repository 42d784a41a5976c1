"""
Unit of Work pattern for transaction management.

One request = one session = one unit of work. Repositories share the
session, so a cascade delete or a create-with-relations either commits as a
whole or not at all. There is no optimistic locking: two requests updating
the same row can still overwrite each other.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
import logging

if TYPE_CHECKING:
    from franchisenexus.core.interfaces import (
        IUserRepository,
        IBusinessRepository,
        IFranchiseRepository,
        IApplicationRepository,
    )

logger = logging.getLogger(__name__)


class AbstractUnitOfWork(ABC):
    """
    Abstract Unit of Work for transaction management.

    Provides:
    - Transaction boundaries (commit/rollback)
    - Repository access (users, businesses, franchises, applications)
    """

    users: 'IUserRepository'
    businesses: 'IBusinessRepository'
    franchises: 'IFranchiseRepository'
    applications: 'IApplicationRepository'

    async def __aenter__(self):
        """Enter async context"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """
        Exit async context.

        On success: commits
        On exception: rolls back
        """
        if exc_type is None:
            await self.commit()
        else:
            await self.rollback()

    @abstractmethod
    async def commit(self):
        """Commit transaction"""
        pass

    @abstractmethod
    async def rollback(self):
        """Rollback transaction"""
        pass


class SQLAlchemyUnitOfWork(AbstractUnitOfWork):
    """
    SQLAlchemy implementation of Unit of Work.

    The session's lifetime belongs to whoever created it (get_db_session
    in the API, the test fixture in tests); this class never closes it.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize Unit of Work.

        Args:
            session: SQLAlchemy async session
        """
        self._session = session

        # Import here to avoid circular dependencies
        from franchisenexus.repositories import (
            UserRepository,
            BusinessRepository,
            FranchiseRepository,
            ApplicationRepository,
        )

        self.users = UserRepository(session)
        self.businesses = BusinessRepository(session)
        self.franchises = FranchiseRepository(session)
        self.applications = ApplicationRepository(session)

    async def commit(self):
        await self._session.commit()
        logger.debug("✅ Transaction committed")

    async def rollback(self):
        await self._session.rollback()
        logger.debug("↩️  Transaction rolled back")


def get_unit_of_work(session: AsyncSession) -> AbstractUnitOfWork:
    """
    Factory function for Unit of Work.

    Usage in FastAPI:
        async def endpoint(db: AsyncSession = Depends(get_db_session)):
            async with get_unit_of_work(db) as uow:
                business = await service.create_business(uow, caller, data)
                # Commit happens on context exit
    """
    return SQLAlchemyUnitOfWork(session)
