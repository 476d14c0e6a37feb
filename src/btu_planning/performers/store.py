"""Persistence collaborators for performer records."""

from __future__ import annotations

import itertools
import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from ..errors import PersistenceError
from .entities import EntityKind

LOGGER = logging.getLogger("btu_planning.performers.store")


@dataclass(frozen=True)
class PersistedPerformer:
    kind: str
    id: int
    owner_column: str
    owner_id: int
    btu_user_login: str
    created_at: Optional[datetime] = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            self.owner_column: self.owner_id,
            "btu_user_login": self.btu_user_login,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class PerformerStore(Protocol):
    async def insert(
        self, kind: EntityKind, owner_id: int, login: str
    ) -> PersistedPerformer:
        ...


class SqlPerformerStore:
    """Insert performers on an open connection; the caller owns the transaction."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def insert(
        self, kind: EntityKind, owner_id: int, login: str
    ) -> PersistedPerformer:
        table = kind.table
        stmt = (
            table.insert()
            .values({kind.owner_column: owner_id, "btu_user_login": login})
            .returning(table.c.id, table.c.created_at)
        )
        try:
            result = await self._conn.execute(stmt)
            row = result.one()
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Failed to insert {kind.name} performer {login!r} for {owner_id}"
            ) from exc
        return PersistedPerformer(
            kind=kind.name,
            id=row.id,
            owner_column=kind.owner_column,
            owner_id=owner_id,
            btu_user_login=login,
            created_at=row.created_at,
        )


class AutocommitPerformerStore:
    """Commit every insert in its own transaction."""

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    async def insert(
        self, kind: EntityKind, owner_id: int, login: str
    ) -> PersistedPerformer:
        try:
            async with self._engine.begin() as conn:
                return await SqlPerformerStore(conn).insert(kind, owner_id, login)
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Failed to insert {kind.name} performer {login!r} for {owner_id}"
            ) from exc


class InMemoryPerformerStore:
    """Keeps performers in process memory, assigning ids per entity kind."""

    def __init__(self) -> None:
        self.records: List[PersistedPerformer] = []
        self._ids: Dict[str, Iterator[int]] = defaultdict(
            lambda: itertools.count(1)
        )

    async def insert(
        self, kind: EntityKind, owner_id: int, login: str
    ) -> PersistedPerformer:
        record = PersistedPerformer(
            kind=kind.name,
            id=next(self._ids[kind.name]),
            owner_column=kind.owner_column,
            owner_id=owner_id,
            btu_user_login=login,
            created_at=datetime.now(timezone.utc),
        )
        self.records.append(record)
        LOGGER.debug("Stored %s performer %s in memory", kind.name, record.id)
        return record

    def records_for(self, kind: EntityKind) -> List[PersistedPerformer]:
        return [record for record in self.records if record.kind == kind.name]
