"""
Database session configuration.

Engine and session factory for the entity store, built from the settings
object at import time. Production runs on PostgreSQL through asyncpg; a
``sqlite+aiosqlite`` URL is accepted for local runs and gets no pool sizing.
"""

import logging
from typing import Any, Dict
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from backend.app.core.config import settings

logger = logging.getLogger(__name__)


def engine_options(database_url: str) -> Dict[str, Any]:
    """Keyword arguments for ``create_async_engine`` suited to the URL's backend."""
    options: Dict[str, Any] = {"echo": settings.db_echo, "pool_pre_ping": True}
    if database_url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_size"] = settings.db_pool_size
        options["max_overflow"] = settings.db_max_overflow
    return options


engine = create_async_engine(settings.database_url, **engine_options(settings.database_url))

# Loaded attributes stay readable after commit
AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)

Base = declarative_base()


async def init_models() -> None:
    """
    Create all tables.

    Any connection error propagates so the process stops instead of serving
    traffic without a store.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Connected to database, tables ready")


async def get_db():
    """
    FastAPI dependency for database sessions.

    Yields one async session per request and closes it afterwards.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()
