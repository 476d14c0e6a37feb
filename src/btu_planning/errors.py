"""Exceptions raised by the planning service."""

from __future__ import annotations


class PlanningError(Exception):
    """Base class for planning failures."""


class RequestValidationError(PlanningError):
    """Raised when an update request does not match the expected shape."""


class ProjectNotFoundError(PlanningError):
    """Raised when a project does not exist or is not owned by the caller."""


class PersistenceError(PlanningError):
    """Raised when a performer record cannot be written."""
