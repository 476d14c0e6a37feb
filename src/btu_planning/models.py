from __future__ import annotations

from dataclasses import dataclass

DEFAULT_DB_CONNECT_TIMEOUT = 60.0
DEFAULT_DB_HOST = "localhost"
DEFAULT_DB_PORT = "5432"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_ATOMIC = True


@dataclass(frozen=True)
class DatabaseConfig:
    url: str
    connect_timeout: float = DEFAULT_DB_CONNECT_TIMEOUT
    apply_schema: bool = False


@dataclass(frozen=True)
class PlanningConfig:
    atomic: bool = DEFAULT_ATOMIC


@dataclass(frozen=True)
class AppConfig:
    database: DatabaseConfig
    planning: PlanningConfig
    log_level: str = DEFAULT_LOG_LEVEL
