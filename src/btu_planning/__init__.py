"""Performer assignment for telecom projects in planning."""

from .errors import (PersistenceError, PlanningError, ProjectNotFoundError,
                     RequestValidationError)
from .payloads import PlanningUpdateRequest, parse_update_request
from .planning import (CREATED_STATUS, build_response, handle_performers,
                       run_planning_update, serialize, set_planning)

__all__ = [
    "CREATED_STATUS",
    "PersistenceError",
    "PlanningError",
    "PlanningUpdateRequest",
    "ProjectNotFoundError",
    "RequestValidationError",
    "build_response",
    "handle_performers",
    "parse_update_request",
    "run_planning_update",
    "serialize",
    "set_planning",
]
