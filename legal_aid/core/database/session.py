"""
Global database session and engine management.

This module manages the global AsyncEngine and async_sessionmaker instances
that are used throughout the application for database access.
"""

from __future__ import annotations

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from legal_aid.core.logging_config import get_logger
from legal_aid.server.core.config import settings

from .utils import create_all, create_engine, create_sessionmaker

logger = get_logger(__name__)

# Create global engine and session factory
engine = create_engine(settings.database_url)
async_session_maker = create_sessionmaker(engine)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency generator for database sessions.

    The transaction is rolled back when the request fails.

    Yields:
        AsyncSession: An asynchronous SQLAlchemy session.
    """
    async with async_session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """
    Initialize the database.

    In production Alembic migrations own the schema and this function does
    nothing. With ``AUTO_CREATE_TABLES`` set (local development, demos) the
    tables are created from the ORM metadata.
    """
    if not settings.auto_create_tables:
        logger.debug("AUTO_CREATE_TABLES disabled, relying on Alembic migrations")
        return
    await create_all(engine)
    logger.info("Database tables created from ORM metadata")
