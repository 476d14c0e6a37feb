"""Orchestrates performer assignment for projects in planning."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Dict, Union

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from .errors import ProjectNotFoundError
from .payloads import PlanningUpdateRequest, parse_update_request
from .performers.handlers import handle_section
from .performers.registry import SECTIONS
from .performers.store import (AutocommitPerformerStore, PersistedPerformer,
                               PerformerStore, SqlPerformerStore)
from .schema import project

LOGGER = logging.getLogger("btu_planning")

CREATED_STATUS = 201

UpdateRequest = Union[PlanningUpdateRequest, Mapping[str, Any]]


async def handle_performers(
    request: UpdateRequest, store: PerformerStore
) -> Dict[str, Any]:
    """Create every performer named in ``request`` and return the envelope.

    Sections are processed in registry order, and absent sections are skipped.
    The returned ``performers`` map still holds ``PersistedPerformer`` objects;
    pass the envelope through :func:`serialize` before emitting JSON.
    """
    payload = (
        request.to_payload() if isinstance(request, PlanningUpdateRequest) else request
    )
    performers: Dict[str, Any] = {}

    for key, kind in SECTIONS:
        section = payload.get(key)
        if section is None:
            continue
        performers[key] = await handle_section(kind, section, store)

    return {"status": "success", "performers": performers}


def serialize(value: Any) -> Any:
    if isinstance(value, PersistedPerformer):
        return value.as_dict()
    if isinstance(value, Mapping):
        return {key: serialize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize(item) for item in value]
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def build_response(envelope: Mapping[str, Any]) -> tuple[Dict[str, Any], int]:
    return serialize(envelope), CREATED_STATUS


def count_performers(value: Any) -> int:
    if isinstance(value, PersistedPerformer):
        return 1
    if isinstance(value, Mapping):
        return sum(count_performers(item) for item in value.values())
    if isinstance(value, (list, tuple)):
        return sum(count_performers(item) for item in value)
    return 0


async def run_planning_update(
    engine: AsyncEngine, request: UpdateRequest, atomic: bool = True
) -> Dict[str, Any]:
    """Validate ``request`` and persist its performers through ``engine``.

    With ``atomic`` the whole request shares one transaction, so a failed
    insert leaves no performers behind. Without it every insert commits on
    its own and earlier records survive a later failure.
    """
    parsed = parse_update_request(request)

    if atomic:
        async with engine.begin() as conn:
            envelope = await handle_performers(parsed, SqlPerformerStore(conn))
    else:
        envelope = await handle_performers(parsed, AutocommitPerformerStore(engine))

    for key, section in envelope["performers"].items():
        LOGGER.info("Created %s performers for %s", count_performers(section), key)
    return envelope


async def set_planning(
    conn: AsyncConnection, project_id: int, user_id: int
) -> Dict[str, Any]:
    """Mark a project owned by ``user_id`` as being in planning."""
    stmt = (
        update(project)
        .where(project.c.id == project_id, project.c.created_by == user_id)
        .values(is_planning=True)
    )
    result = await conn.execute(stmt)
    if result.rowcount == 0:
        raise ProjectNotFoundError(
            f"Project {project_id} not found for user {user_id}"
        )
    LOGGER.info("Project %s marked as in planning", project_id)
    return {"status": "success"}
