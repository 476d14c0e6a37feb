"""Tests for the command-line entry point."""

import json
import logging

import pytest
from sqlalchemy import create_engine, func, insert, inspect, select, text

from btu_planning.__main__ import main
from btu_planning.schema import cross_performer, knot_performer, project


def write_request(tmp_path, data):
    path = tmp_path / "request.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_dry_run_prints_response(tmp_path, capsys):
    path = write_request(
        tmp_path,
        {"aor_oms": {"update": [{"id": 5, "performers": {"create": [{"btu_user_login": "alice"}]}}]}},
    )

    main(["update", str(path), "--dry-run"])

    body = json.loads(capsys.readouterr().out)
    created = body["performers"]["aor_oms"]["update"]["performers"]["create"]
    assert body["status"] == "success"
    assert [(item["aop_om_id"], item["btu_user_login"]) for item in created] == [(5, "alice")]


def test_dry_run_rejects_invalid_request(tmp_path):
    path = write_request(tmp_path, {"aor_oms": {"update": [{"performers": {}}]}})

    with pytest.raises(SystemExit) as excinfo:
        main(["update", str(path), "--dry-run"])

    assert excinfo.value.code == 2


def test_missing_request_file(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main(["update", str(tmp_path / "missing.json"), "--dry-run"])

    assert excinfo.value.code == 2


def test_dry_run_honours_log_level(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    path = write_request(tmp_path, {})

    try:
        main(["update", str(path), "--dry-run"])
        assert logging.getLogger().level == logging.DEBUG
    finally:
        logging.getLogger().setLevel(logging.WARNING)

    assert json.loads(capsys.readouterr().out) == {"status": "success", "performers": {}}


SCENARIO_B = {
    "aor_knots": {
        "update": [
            {
                "id": 1,
                "cupboard_users": {"create": [{"btu_user_login": "bob"}]},
                "passive_optical_equipments": {
                    "update": [{"id": 9, "performers": {"create": [{"btu_user_login": "carl"}]}}]
                },
            }
        ]
    }
}


@pytest.fixture
def database(tmp_path, monkeypatch):
    """SQLite file configured through the environment, plus a sync engine to inspect it."""
    path = tmp_path / "planning.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{path}")
    monkeypatch.setenv("DATABASE_APPLY_SCHEMA", "true")
    monkeypatch.setenv("DATABASE_CONNECT_TIMEOUT", "1")
    monkeypatch.delenv("PLANNING_ATOMIC", raising=False)
    engine = create_engine(f"sqlite:///{path}")
    yield engine
    engine.dispose()


def count_rows(engine, table):
    with engine.connect() as conn:
        return conn.scalar(select(func.count()).select_from(table))


def test_init_db_creates_tables(database, capsys):
    main(["init-db"])

    assert json.loads(capsys.readouterr().out) == {"status": "success"}
    assert {
        "project",
        "knot_performer",
        "cross_performer",
        "om_performer",
        "dboard_performer",
        "focable_performer",
    } <= set(inspect(database).get_table_names())


def test_update_persists_knots_and_crosses(database, tmp_path, capsys):
    path = write_request(tmp_path, SCENARIO_B)

    main(["update", str(path)])

    body = json.loads(capsys.readouterr().out)
    knots = body["performers"]["aor_knots"]["update"]
    assert knots["cupboard_users"]["create"][0]["project_knot_id"] == 1
    cross = knots["passive_optical_equipments"]["update"]["performers"]["create"][0]
    assert (cross["project_knot_cross_id"], cross["btu_user_login"]) == (9, "carl")
    assert count_rows(database, knot_performer) == 1
    assert count_rows(database, cross_performer) == 1


def test_non_atomic_update_persists_records(database, tmp_path, capsys):
    path = write_request(tmp_path, SCENARIO_B)

    main(["update", str(path), "--non-atomic"])
    main(["update", str(path), "--non-atomic"])

    capsys.readouterr()
    assert count_rows(database, knot_performer) == 2
    assert count_rows(database, cross_performer) == 2


def test_set_planning_on_owned_project(database, capsys):
    main(["init-db"])
    capsys.readouterr()
    with database.begin() as conn:
        conn.execute(insert(project).values(id=3, created_by=11))

    main(["set-planning", "3", "--user-id", "11"])

    assert json.loads(capsys.readouterr().out) == {"status": "success"}
    with database.connect() as conn:
        assert conn.scalar(select(project.c.is_planning).where(project.c.id == 3)) is True


def test_set_planning_on_missing_project(database):
    with pytest.raises(SystemExit) as excinfo:
        main(["set-planning", "99", "--user-id", "1"])

    assert excinfo.value.code == 2


def test_persistence_failure_exits_with_3(database, tmp_path, monkeypatch, capsys):
    main(["init-db"])
    capsys.readouterr()
    with database.begin() as conn:
        conn.execute(text("DROP TABLE om_performer"))
    monkeypatch.setenv("DATABASE_APPLY_SCHEMA", "false")
    path = write_request(
        tmp_path,
        {"aor_oms": {"update": [{"id": 5, "performers": {"create": [{"btu_user_login": "alice"}]}}]}},
    )

    with pytest.raises(SystemExit) as excinfo:
        main(["update", str(path)])

    assert excinfo.value.code == 3
    assert capsys.readouterr().out == ""
