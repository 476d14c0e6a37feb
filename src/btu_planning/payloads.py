"""pydantic models describing a planning update request."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import RequestValidationError


class PayloadModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class PerformerCreate(PayloadModel):
    btu_user_login: str


class CreateBlock(PayloadModel):
    create: Optional[list[PerformerCreate]] = None


class CrossUpdate(PayloadModel):
    id: int
    performers: Optional[CreateBlock] = None


class CrossSection(PayloadModel):
    update: Optional[list[CrossUpdate]] = None


class KnotUpdate(PayloadModel):
    id: int
    cupboard_users: Optional[CreateBlock] = None
    passive_optical_equipments: Optional[CrossSection] = None


class KnotSection(PayloadModel):
    update: Optional[list[KnotUpdate]] = None


class EntityUpdate(PayloadModel):
    """Update entry for oms, dboards and focables."""

    id: int
    performers: Optional[CreateBlock] = None


class EntitySection(PayloadModel):
    update: Optional[list[EntityUpdate]] = None


class PlanningUpdateRequest(PayloadModel):
    aor_knots: Optional[KnotSection] = None
    aor_oms: Optional[EntitySection] = None
    aor_dboards: Optional[EntitySection] = None
    aor_focables: Optional[EntitySection] = None

    def to_payload(self) -> dict[str, Any]:
        """Return the request as plain data with absent keys dropped."""
        return self.model_dump(exclude_none=True)


def parse_update_request(data: Any) -> PlanningUpdateRequest:
    if isinstance(data, PlanningUpdateRequest):
        return data
    if not isinstance(data, Mapping):
        raise RequestValidationError(
            f"Update request must be a JSON object, got {type(data).__name__}"
        )
    try:
        return PlanningUpdateRequest.model_validate(dict(data))
    except ValidationError as exc:
        raise RequestValidationError(str(exc)) from exc
