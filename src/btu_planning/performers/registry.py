"""Registry of top-level request sections."""

from __future__ import annotations

from typing import Tuple

from .entities import DBOARD, FOCABLE, KNOT, OM, EntityKind

SECTIONS: Tuple[Tuple[str, EntityKind], ...] = (
    ("aor_knots", KNOT),
    ("aor_oms", OM),
    ("aor_dboards", DBOARD),
    ("aor_focables", FOCABLE),
)
