"""Performer assignment on network entities."""

from .entities import CROSS, DBOARD, ENTITY_KINDS, FOCABLE, KNOT, OM, EntityKind
from .handlers import (create_performers, handle_entity_performers,
                       handle_section, merge_into)
from .registry import SECTIONS
from .store import (AutocommitPerformerStore, InMemoryPerformerStore,
                    PersistedPerformer, PerformerStore, SqlPerformerStore)

__all__ = [
    "AutocommitPerformerStore",
    "CROSS",
    "DBOARD",
    "ENTITY_KINDS",
    "EntityKind",
    "FOCABLE",
    "InMemoryPerformerStore",
    "KNOT",
    "OM",
    "PerformerStore",
    "PersistedPerformer",
    "SECTIONS",
    "SqlPerformerStore",
    "create_performers",
    "handle_entity_performers",
    "handle_section",
    "merge_into",
]
