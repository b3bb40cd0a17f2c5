import logging

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from core.config import settings

logger = logging.getLogger(__name__)

db_engine = create_async_engine(settings.database_url, echo=settings.db_echo)


# Create async session maker to be used throughout the application
AsyncSessionLocal = async_sessionmaker(
    db_engine, class_=AsyncSession, expire_on_commit=False
)


# Base class for declarative models
class Base(DeclarativeBase):
    pass


# Dependency to get DB session
async def get_db():
    async with AsyncSessionLocal() as session:
        yield session


async def init_db():
    """Create missing tables when schema synchronization is enabled."""
    # Register every model on Base.metadata
    import database.models  # noqa: F401

    if not settings.synchronize_schema:
        logger.info("Schema synchronization disabled")
        return
    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables synchronized")


async def close_db():
    """Close database engine and connections."""
    await db_engine.dispose()
