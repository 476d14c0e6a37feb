from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from rich.console import Console

from .config import load_config
from .db_connector import DatabaseSession
from .errors import (PersistenceError, ProjectNotFoundError,
                     RequestValidationError)
from .logging_utils import setup_logging
from .models import AppConfig
from .payloads import PlanningUpdateRequest, parse_update_request
from .performers.store import InMemoryPerformerStore
from .planning import (build_response, handle_performers, run_planning_update,
                       set_planning)

console = Console()
LOGGER = logging.getLogger("btu_planning")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="btu-planning",
        description="Assign performers to network entities of projects in planning.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("init-db", help="Create the project and performer tables.")

    update_cmd = commands.add_parser(
        "update", help="Create the performers described by a JSON request file."
    )
    update_cmd.add_argument("request", type=Path, help="Path to the request JSON.")
    update_cmd.add_argument(
        "--non-atomic",
        action="store_true",
        help="Commit every performer separately instead of once per request.",
    )
    update_cmd.add_argument(
        "--dry-run",
        action="store_true",
        help="Run against an in-memory store without touching the database.",
    )

    planning_cmd = commands.add_parser(
        "set-planning", help="Mark a project as being in planning."
    )
    planning_cmd.add_argument("project_id", type=int)
    planning_cmd.add_argument("--user-id", type=int, required=True)
    return parser


def read_request(path: Path) -> PlanningUpdateRequest:
    with path.open("r", encoding="utf-8") as fh:
        return parse_update_request(json.load(fh))


async def run_command(
    args: argparse.Namespace,
    config: Optional[AppConfig],
    request: Optional[PlanningUpdateRequest] = None,
) -> Any:
    if args.command == "update" and args.dry_run:
        envelope = await handle_performers(request, InMemoryPerformerStore())
        body, _ = build_response(envelope)
        return body

    session = DatabaseSession(config.database)
    engine = await session.open()
    try:
        if args.command == "init-db":
            await session.ensure_schema()
            LOGGER.info("Database schema created")
            return {"status": "success"}

        if args.command == "update":
            atomic = config.planning.atomic and not args.non_atomic
            envelope = await run_planning_update(engine, request, atomic=atomic)
            body, _ = build_response(envelope)
            return body

        async with engine.begin() as conn:
            return await set_planning(conn, args.project_id, args.user_id)
    finally:
        await session.dispose()


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    config: Optional[AppConfig] = None
    needs_database = not (args.command == "update" and args.dry_run)
    try:
        if needs_database:
            config = load_config()
    except Exception as exc:  # pragma: no cover - guard for CLI usage
        setup_logging()
        LOGGER.error("Configuration error: %s", exc)
        print(f"Configuration error: {exc}", file=sys.stderr)
        sys.exit(1)
    setup_logging(config.log_level if config else os.getenv("LOG_LEVEL", "INFO"))

    request: Optional[PlanningUpdateRequest] = None
    if args.command == "update":
        try:
            request = read_request(args.request)
        except (RequestValidationError, json.JSONDecodeError, OSError) as exc:
            LOGGER.error("Invalid request %s: %s", args.request, exc)
            print(f"Invalid request: {exc}", file=sys.stderr)
            sys.exit(2)

    try:
        result = asyncio.run(run_command(args, config, request))
    except ProjectNotFoundError as exc:
        LOGGER.error("%s", exc)
        print(f"Not found: {exc}", file=sys.stderr)
        sys.exit(2)
    except PersistenceError as exc:
        LOGGER.exception("Failed to persist performers")
        print(f"Persistence error: {exc}", file=sys.stderr)
        sys.exit(3)
    except Exception as exc:  # pragma: no cover - guard for CLI usage
        LOGGER.exception("Planning command failed")
        print(f"Planning command failed: {exc}", file=sys.stderr)
        sys.exit(3)

    console.print_json(json.dumps(result))


if __name__ == "__main__":
    main()
