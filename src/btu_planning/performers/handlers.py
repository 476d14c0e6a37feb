"""Walk update sections and create performers for every listed entity."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Dict, List, Optional

from .entities import EntityKind
from .store import PersistedPerformer, PerformerStore

LOGGER = logging.getLogger("btu_planning.performers.handlers")


def merge_into(target: Dict[str, Any], source: Mapping[str, Any]) -> Dict[str, Any]:
    """Deep-merge ``source`` into ``target``; lists are concatenated in order."""
    for key, value in source.items():
        existing = target.get(key)
        if isinstance(existing, dict) and isinstance(value, Mapping):
            merge_into(existing, value)
        elif isinstance(existing, list) and isinstance(value, list):
            existing.extend(value)
        else:
            target[key] = value
    return target


def _create_list(entity: Mapping[str, Any], field: str) -> Optional[Sequence[Any]]:
    block = entity.get(field)
    if not isinstance(block, Mapping):
        return None
    return block.get("create")


async def create_performers(
    kind: EntityKind,
    entity: Mapping[str, Any],
    descriptors: Sequence[Mapping[str, Any]],
    store: PerformerStore,
) -> List[PersistedPerformer]:
    owner_id = entity["id"]
    performers: List[PersistedPerformer] = []
    for descriptor in descriptors:
        login = descriptor["btu_user_login"]
        performer = await store.insert(kind, owner_id, login)
        LOGGER.debug(
            "Created %s performer %s (%s=%s, login=%s)",
            kind.name,
            performer.id,
            kind.owner_column,
            owner_id,
            login,
        )
        performers.append(performer)
    return performers


async def handle_entity_performers(
    kind: EntityKind,
    entities: Sequence[Mapping[str, Any]],
    store: PerformerStore,
) -> Dict[str, Any]:
    performers: Dict[str, Any] = {}
    for entity in entities:
        descriptors = _create_list(entity, kind.create_field)
        if descriptors is not None:
            created = await create_performers(kind, entity, descriptors, store)
            merge_into(performers, {kind.create_field: {"create": created}})

        for key, child_kind in kind.children:
            child_section = entity.get(key)
            if child_section is not None:
                merge_into(
                    performers,
                    {key: await handle_section(child_kind, child_section, store)},
                )
    return performers


async def handle_section(
    kind: EntityKind, section: Mapping[str, Any], store: PerformerStore
) -> Dict[str, Any]:
    performers: Dict[str, Any] = {}
    updates = section.get("update")
    if updates is not None:
        performers["update"] = await handle_entity_performers(kind, updates, store)
    return performers
