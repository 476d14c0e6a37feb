"""Configuration loading for the planning service."""

from __future__ import annotations

import os
from typing import Mapping, Optional

from dotenv import load_dotenv

from .models import (DEFAULT_ATOMIC, DEFAULT_DB_CONNECT_TIMEOUT,
                     DEFAULT_DB_HOST, DEFAULT_DB_PORT, DEFAULT_LOG_LEVEL,
                     AppConfig, DatabaseConfig, PlanningConfig)

TRUTHY = {"1", "true", "yes", "on"}
FALSY = {"0", "false", "no", "off"}


def _float(value: Optional[str], default: float) -> float:
    try:
        return float(value) if value is not None else default
    except ValueError:
        return default


def _bool(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    lowered = value.strip().lower()
    if lowered in TRUTHY:
        return True
    if lowered in FALSY:
        return False
    return default


def database_url_from_env(env: Mapping[str, str]) -> str:
    url = env.get("DATABASE_URL")
    if url:
        return url

    pg_user = env.get("POSTGRES_USER")
    pg_password = env.get("POSTGRES_PASSWORD")
    pg_db = env.get("POSTGRES_DB")
    pg_host = env.get("POSTGRES_HOST", env.get("PGHOST", DEFAULT_DB_HOST))
    pg_port = env.get("POSTGRES_PORT", env.get("PGPORT", DEFAULT_DB_PORT))
    if not (pg_user and pg_password and pg_db):
        raise RuntimeError(
            "DATABASE_URL or POSTGRES_USER, POSTGRES_PASSWORD, and POSTGRES_DB "
            "environment variables are required"
        )
    return f"postgresql+asyncpg://{pg_user}:{pg_password}@{pg_host}:{pg_port}/{pg_db}"


def load_config(
    env: Optional[Mapping[str, str]] = None, use_dotenv: bool = True
) -> AppConfig:
    """Load configuration from environment variables (and ``.env``)."""
    if env is None:
        if use_dotenv:
            load_dotenv()
        env = os.environ

    return AppConfig(
        database=DatabaseConfig(
            url=database_url_from_env(env),
            connect_timeout=_float(
                env.get("DATABASE_CONNECT_TIMEOUT"), DEFAULT_DB_CONNECT_TIMEOUT
            ),
            apply_schema=_bool(env.get("DATABASE_APPLY_SCHEMA"), False),
        ),
        planning=PlanningConfig(
            atomic=_bool(env.get("PLANNING_ATOMIC"), DEFAULT_ATOMIC),
        ),
        log_level=env.get("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )
