"""Entity kinds that can receive performers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from sqlalchemy import Table

from .. import schema


@dataclass(frozen=True)
class EntityKind:
    """How one entity type names its performers in requests and storage."""

    name: str
    create_field: str
    owner_column: str
    table: Table
    children: Tuple[Tuple[str, "EntityKind"], ...] = ()

    def __repr__(self) -> str:
        return f"EntityKind({self.name!r})"


CROSS = EntityKind(
    name="cross",
    create_field="performers",
    owner_column="project_knot_cross_id",
    table=schema.cross_performer,
)

KNOT = EntityKind(
    name="knot",
    create_field="cupboard_users",
    owner_column="project_knot_id",
    table=schema.knot_performer,
    children=(("passive_optical_equipments", CROSS),),
)

OM = EntityKind(
    name="om",
    create_field="performers",
    owner_column="aop_om_id",
    table=schema.om_performer,
)

DBOARD = EntityKind(
    name="dboard",
    create_field="performers",
    owner_column="aop_dboard_id",
    table=schema.dboard_performer,
)

FOCABLE = EntityKind(
    name="focable",
    create_field="performers",
    owner_column="aop_focable_id",
    table=schema.focable_performer,
)

ENTITY_KINDS: Tuple[EntityKind, ...] = (KNOT, CROSS, OM, DBOARD, FOCABLE)
