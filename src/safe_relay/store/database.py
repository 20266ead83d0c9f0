"""Engine and sessions for the sponsorship store.

The store is a single table, so one process-wide async engine is enough.
In-memory SQLite keeps one shared connection so the table created by
``init_db`` is visible to every later session; file SQLite gets its parent
directory created on first use.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

from sqlalchemy import func, select
from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from safe_relay.config import get_settings
from safe_relay.store.models import Base, SponsoredAddress

logger = logging.getLogger(__name__)

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def store_url(database_url: str) -> URL:
    """Parse the configured URL, forcing the async SQLite driver."""
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.get_driver_name() != "aiosqlite":
        url = url.set(drivername="sqlite+aiosqlite")
    return url


def is_memory_sqlite(url: URL) -> bool:
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create the async engine backing the sponsorship store."""
    url = store_url(database_url)
    if is_memory_sqlite(url):
        return create_async_engine(
            url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    if url.get_backend_name() == "sqlite":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return create_async_engine(url, echo=echo, pool_pre_ping=True)


def get_engine() -> AsyncEngine:
    """Get or create the sponsorship store engine from settings."""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = build_engine(
            settings.database_url,
            echo=settings.debug and not settings.is_production,
        )
        logger.info(f"Sponsorship store: {store_url(settings.database_url).render_as_string()}")
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            bind=get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
    return _session_factory


@asynccontextmanager
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Open a session on the sponsorship store.

    Commits when the block exits cleanly, rolls back and re-raises otherwise.
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create the sponsored_addresses table if it does not exist."""
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"Sponsorship store ready ({SponsoredAddress.__tablename__})")


async def count_sponsored() -> int:
    """Row count across all chains, used by the detailed health check."""
    async with get_db() as session:
        result = await session.execute(select(func.count()).select_from(SponsoredAddress))
        return result.scalar_one()


async def close_db() -> None:
    """Dispose the engine; the next access rebuilds it from settings."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
