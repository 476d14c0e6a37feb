"""Relational schema for projects and performer assignments."""

from __future__ import annotations

from sqlalchemy import (BigInteger, Boolean, Column, DateTime, Integer,
                        MetaData, Table, Text, func, false)

# SQLite only autoincrements INTEGER PRIMARY KEY columns.
Identifier = BigInteger().with_variant(Integer(), "sqlite")

metadata = MetaData()

project = Table(
    "project",
    metadata,
    Column("id", Identifier, primary_key=True, autoincrement=True),
    Column("created_by", Identifier, nullable=False, index=True),
    Column("is_planning", Boolean, nullable=False, server_default=false()),
)


def performer_table(name: str, owner_column: str) -> Table:
    return Table(
        name,
        metadata,
        Column("id", Identifier, primary_key=True, autoincrement=True),
        Column(owner_column, Identifier, nullable=False, index=True),
        Column("btu_user_login", Text, nullable=False),
        Column(
            "created_at",
            DateTime(timezone=True),
            nullable=False,
            server_default=func.now(),
        ),
    )


knot_performer = performer_table("knot_performer", "project_knot_id")
cross_performer = performer_table("cross_performer", "project_knot_cross_id")
om_performer = performer_table("om_performer", "aop_om_id")
dboard_performer = performer_table("dboard_performer", "aop_dboard_id")
focable_performer = performer_table("focable_performer", "aop_focable_id")
