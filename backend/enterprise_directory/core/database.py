"""Async SQLAlchemy engine and session factory for the record and identity stores."""

from __future__ import annotations

import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from enterprise_directory.core.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def _engine_options(url: str) -> dict:
    # Every connection to ":memory:" would otherwise open a fresh, empty database.
    if url.startswith("sqlite") and ":memory:" in url:
        return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
    if url.startswith("sqlite"):
        return {}
    return {"pool_pre_ping": True}


class Database:
    def __init__(self) -> None:
        self.engine: AsyncEngine | None = None
        self.session_factory: async_sessionmaker[AsyncSession] | None = None
        self.initialized: bool = False

    async def initialize(self, settings: Settings) -> None:
        if self.initialized:
            return

        # Register every mapped table on Base.metadata before create_all.
        from enterprise_directory.entities import employee, identity  # noqa: F401

        self.engine = create_async_engine(
            settings.DATABASE_URL,
            echo=settings.DATABASE_ECHO,
            **_engine_options(settings.DATABASE_URL),
        )
        self.session_factory = async_sessionmaker(self.engine, expire_on_commit=False)

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        self.initialized = True
        logger.info("Database initialized (dialect=%s)", self.engine.dialect.name)

    async def close(self) -> None:
        if self.engine:
            await self.engine.dispose()
        self.engine = None
        self.session_factory = None
        self.initialized = False

    async def check_connection(self) -> bool:
        if not self.engine:
            return False
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception:
            logger.exception("Database connection check failed")
            return False


database = Database()
