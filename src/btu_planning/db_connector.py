from __future__ import annotations

import asyncio
import logging
import time
from typing import Optional

from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from .models import DatabaseConfig
from .schema import metadata

LOGGER = logging.getLogger("btu_planning.db")


class DatabaseSession:
    """Manage the SQLAlchemy engine used for performer persistence."""

    def __init__(self, config: DatabaseConfig) -> None:
        self._config = config
        self._engine: Optional[AsyncEngine] = None

    async def open(self) -> AsyncEngine:
        if self._engine is not None:
            return self._engine

        deadline = time.time() + self._config.connect_timeout
        attempts = 0
        while True:
            attempts += 1
            try:
                LOGGER.info("Connecting to planning database (attempt %s)", attempts)
                async_engine = create_async_engine(self._config.url)
                async with async_engine.connect() as connection:
                    await connection.execute(text("SELECT 1"))
                self._engine = async_engine
                LOGGER.info("Planning database ready")
                break
            except OperationalError as exc:
                await async_engine.dispose()
                if time.time() >= deadline:
                    raise RuntimeError(
                        f"Planning database unreachable after "
                        f"{self._config.connect_timeout:.0f}s"
                    ) from exc
                LOGGER.warning(
                    "Planning database not reachable yet (%s), retrying", exc
                )
                await asyncio.sleep(min(2 * attempts, 10))

        if self._config.apply_schema:
            LOGGER.info("Creating project and performer tables (DATABASE_APPLY_SCHEMA)")
            await self.ensure_schema()
        return self._engine

    async def ensure_schema(self) -> None:
        if self._engine is None:
            raise RuntimeError("Planning database not opened; call open() first")
        async with self._engine.begin() as conn:
            await conn.run_sync(metadata.create_all)

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Planning database not opened; call open() first")
        return self._engine

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
