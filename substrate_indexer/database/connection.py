# substrate_indexer/database/connection.py

from typing import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from ..core.logging import IndexerLogger, log_with_context, INFO, DEBUG, ERROR
from ..types import DatabaseConfig
from .base import IndexerBase
from . import tables  # noqa: F401  registers the tables on IndexerBase.metadata


class DatabaseManager:
    def __init__(self, config: DatabaseConfig):
        if not config:
            raise ValueError("DatabaseConfig is required")

        self.config = config
        self.logger = IndexerLogger.get_logger(f'database.{self.__class__.__name__.lower()}')
        self._engine = None
        self._session_factory = None

        log_with_context(self.logger, INFO, "DatabaseManager initialized",
                         db_url_host=self._extract_host_from_url(config.url))

    def _extract_host_from_url(self, url: str) -> str:
        try:
            if '@' in url and '/' in url:
                after_at = url.split('@')[1]
                host_part = after_at.split('/')[0]
                return host_part
            return "local"
        except Exception:
            return "unknown"

    @property
    def is_sqlite(self) -> bool:
        return self.config.url.startswith("sqlite")

    async def initialize(self) -> None:
        if self._engine is not None:
            self.logger.warning("Database already initialized")
            return

        try:
            self.logger.info("Initializing database engine")

            if self.is_sqlite:
                # one shared connection so ":memory:" databases survive across sessions
                self._engine = create_async_engine(
                    self.config.url,
                    poolclass=StaticPool,
                    connect_args={"check_same_thread": False},
                    echo=self.config.echo,
                )
            else:
                self._engine = create_async_engine(
                    self.config.url,
                    pool_size=self.config.pool_size,
                    max_overflow=self.config.max_overflow,
                    pool_timeout=30,
                    pool_recycle=3600,
                    echo=self.config.echo,
                )

            self._session_factory = async_sessionmaker(
                bind=self._engine,
                expire_on_commit=False,
            )

            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))

            log_with_context(self.logger, INFO, "Database initialized successfully",
                             pool_size=self.config.pool_size,
                             max_overflow=self.config.max_overflow)

        except Exception as e:
            log_with_context(self.logger, ERROR, "Failed to initialize database",
                             error=str(e),
                             exception_type=type(e).__name__)
            raise

    async def create_tables(self) -> None:
        """Create all indexer tables. Development and test helper, not a migration tool."""
        async with self.engine.begin() as conn:
            await conn.run_sync(IndexerBase.metadata.create_all)
        self.logger.info("Indexer tables created")

    async def shutdown(self) -> None:
        self.logger.info("Shutting down database connections")

        try:
            if self._engine:
                await self._engine.dispose()
                self._engine = None

            self._session_factory = None

            self.logger.info("Database shutdown completed")

        except Exception as e:
            log_with_context(self.logger, ERROR, "Error during database shutdown",
                             error=str(e),
                             exception_type=type(e).__name__)

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database not initialized. Call initialize() first.")
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker:
        if self._session_factory is None:
            raise RuntimeError("Database not initialized. Call initialize() first.")
        return self._session_factory

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self.session_factory()
        try:
            log_with_context(self.logger, DEBUG, "Database session created")
            yield session
        except Exception as e:
            log_with_context(self.logger, ERROR, "Database session error, rolling back",
                             error=str(e),
                             exception_type=type(e).__name__)
            await session.rollback()
            raise
        finally:
            await session.close()
            log_with_context(self.logger, DEBUG, "Database session closed")

    @asynccontextmanager
    async def get_transaction(self) -> AsyncGenerator[AsyncSession, None]:
        async with self.get_session() as session:
            yield session
            await session.commit()
            log_with_context(self.logger, DEBUG, "Database transaction committed")

    async def health_check(self) -> bool:
        try:
            async with self.get_session() as session:
                await session.execute(text("SELECT 1"))
            return True
        except Exception as e:
            log_with_context(self.logger, ERROR, "Database health check failed",
                             error=str(e),
                             exception_type=type(e).__name__)
            return False
