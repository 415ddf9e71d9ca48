"""
Relational store handle.

A `Database` owns the async engine and the session factory. The application
lifespan creates one, connects it at startup and disposes it at shutdown;
handlers receive it through dependency injection.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from product_api.core.config import Config, config
from product_api.core.errors import ErrorResponse
from product_api.core.logger import logger
from product_api.db.models import Base


class Database:
    """Database connection manager"""

    def __init__(self, url: str, echo: bool = False, create_tables: bool = True):
        self.url = url
        self.echo = echo
        self.create_tables = create_tables
        self.engine: Optional[AsyncEngine] = None
        self._sessionmaker: Optional[async_sessionmaker[AsyncSession]] = None

    @classmethod
    def from_config(cls, settings: Config = config) -> "Database":
        return cls(
            settings.database_url,
            echo=settings.database_echo,
            create_tables=settings.database_create_tables,
        )

    @property
    def is_connected(self) -> bool:
        return self.engine is not None

    async def connect(self) -> None:
        """Create the engine, verify connectivity and ensure tables exist"""
        if self.is_connected:
            return

        logger.info("Connecting to database...")
        self.engine = create_async_engine(self.url, echo=self.echo, pool_pre_ping=True)
        self._sessionmaker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

        try:
            async with self.engine.begin() as conn:
                await conn.execute(text("SELECT 1"))
                if self.create_tables:
                    await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            logger.error(
                f"Could not connect to database: {e}",
                metadata={"event": "database_connection_error", "error": str(e)},
            )
            await self.disconnect()
            raise ErrorResponse(f"Could not connect to database: {e}", status_code=503)

        logger.info(
            "Successfully connected to database",
            metadata={"event": "database_connected", "dialect": self.engine.dialect.name},
        )

    async def disconnect(self) -> None:
        """Dispose of the engine and its connection pool"""
        if self.engine is not None:
            logger.info("Closing database connection pool...")
            await self.engine.dispose()
        self.engine = None
        self._sessionmaker = None

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Open a session; the caller commits, anything unfinished is rolled back"""
        if self._sessionmaker is None:
            raise ConnectionError("Database is not connected")
        async with self._sessionmaker() as session:
            yield session

    async def ping(self) -> None:
        """Run a trivial query; raises SQLAlchemyError when the store is unreachable"""
        async with self.session() as session:
            await session.execute(text("SELECT 1"))
