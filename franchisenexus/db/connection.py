"""
Database connection management with SQLAlchemy async support.

Supports SQLite (development/tests) and MySQL/PostgreSQL (production) via DATABASE_URL.
"""
from typing import AsyncIterator, Optional
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool
from franchisenexus.db.models import Base
from franchisenexus.config import settings
import logging

logger = logging.getLogger(__name__)

# Database engine (will be initialized in init_db)
engine: Optional[AsyncEngine] = None
async_session_maker: Optional[async_sessionmaker] = None


def create_engine_for_url(database_url: str) -> AsyncEngine:
    """Create an async engine with pool settings suited to the backend."""
    if database_url.startswith("sqlite"):
        # SQLite-specific configuration (StaticPool keeps :memory: databases alive)
        return create_async_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    # MySQL/PostgreSQL configuration
    return create_async_engine(
        database_url,
        echo=False,
        pool_pre_ping=True,  # Verify connections before using
        pool_recycle=3600,   # Recycle connections after 1 hour
    )


async def init_db(database_url: Optional[str] = None):
    """Initialize database connection and create tables."""
    global engine, async_session_maker

    database_url = database_url or settings.database_url
    logger.info(f"Initializing database: {database_url.split('://')[0]}")

    engine = create_engine_for_url(database_url)

    # Create session factory
    async_session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("✅ Database initialized successfully")


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """
    Get database session for dependency injection.

    Usage in FastAPI:
        @router.get("/endpoint")
        async def endpoint(db: AsyncSession = Depends(get_db_session)):
            ...

    The session commits on success and rolls back on error, so a request
    is a single unit of work.
    """
    if async_session_maker is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")

    async with async_session_maker() as session:
        try:
            yield session
        except Exception as e:
            await session.rollback()
            logger.error(f"Database session error: {e}")
            raise
        else:
            # Only commit if no exception occurred
            await session.commit()
        finally:
            await session.close()


async def close_db():
    """Close database connection."""
    global engine, async_session_maker
    if engine:
        await engine.dispose()
        logger.info("Database connection closed")
    engine = None
    async_session_maker = None
