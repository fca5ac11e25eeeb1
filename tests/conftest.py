"""Pytest fixtures for the projects data-access layer."""
from __future__ import annotations

import os
from decimal import Decimal

import psycopg2
import pytest

from db import connection
from models.project import Project


# --- Scripted fake psycopg2 objects ----------------------------------------
#
# Each execute() consumes the next entry of the connection's script:
#   (rows, rowcount)  -> result for fetchone/fetchall/rowcount
#   an exception      -> raised from execute()

def rows(*items: tuple) -> tuple[list, int]:
    return list(items), len(items)


def affected(count: int) -> tuple[list, int]:
    return [], count


class FakeCursor:
    def __init__(self, conn: "FakeConnection"):
        self.conn = conn
        self.rowcount = -1
        self._rows: list = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, sql, params=None):
        self.conn.executed.append((" ".join(sql.split()), params))
        step = self.conn.script.pop(0)
        if isinstance(step, BaseException):
            raise step
        self._rows, self.rowcount = step

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)


class FakeConnection:
    def __init__(self, script, commit_error=None, rollback_error=None):
        self.script = list(script)
        self.executed: list[tuple[str, object]] = []
        self.events: list[str] = []
        self.commit_error = commit_error
        self.rollback_error = rollback_error

    def cursor(self):
        return FakeCursor(self)

    def commit(self):
        self.events.append("commit")
        if self.commit_error is not None:
            raise self.commit_error

    def rollback(self):
        self.events.append("rollback")
        if self.rollback_error is not None:
            raise self.rollback_error

    @property
    def statements(self) -> list[str]:
        return [sql for sql, _ in self.executed]


class FakePool:
    def __init__(self, conn: FakeConnection):
        self.conn = conn

    def getconn(self):
        self.conn.events.append("acquire")
        return self.conn

    def putconn(self, conn):
        conn.events.append("release")


@pytest.fixture()
def fake_db(monkeypatch):
    """Install a FakePool; call the fixture with the statement script."""

    def install(*script, **kwargs) -> FakeConnection:
        conn = FakeConnection(script, **kwargs)
        monkeypatch.setattr(connection, "_pool", FakePool(conn))
        return conn

    return install


@pytest.fixture()
def sample_project() -> Project:
    return Project(
        project_name="Hang a door",
        estimated_hours=Decimal("4.00"),
        actual_hours=Decimal("5.25"),
        difficulty=3,
        notes="Use the good hinges",
    )


# --- Real PostgreSQL -------------------------------------------------------

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")

SCHEMA_SQL = """
DROP TABLE IF EXISTS material, step, project_category, category, project;

CREATE TABLE project (
    project_id      SERIAL PRIMARY KEY,
    project_name    VARCHAR(128) NOT NULL,
    estimated_hours NUMERIC(7,2),
    actual_hours    NUMERIC(7,2),
    difficulty      INT,
    notes           TEXT
);

CREATE TABLE category (
    category_id     SERIAL PRIMARY KEY,
    category_name   VARCHAR(128) NOT NULL UNIQUE
);

CREATE TABLE project_category (
    project_id      INT NOT NULL REFERENCES project(project_id) ON DELETE CASCADE,
    category_id     INT NOT NULL REFERENCES category(category_id) ON DELETE CASCADE,
    UNIQUE (project_id, category_id)
);

CREATE TABLE step (
    step_id         SERIAL PRIMARY KEY,
    project_id      INT NOT NULL REFERENCES project(project_id) ON DELETE CASCADE,
    step_text       TEXT NOT NULL,
    step_order      INT NOT NULL
);

CREATE TABLE material (
    material_id     SERIAL PRIMARY KEY,
    project_id      INT NOT NULL REFERENCES project(project_id) ON DELETE CASCADE,
    material_name   VARCHAR(128) NOT NULL,
    num_required    INT,
    cost            NUMERIC(7,2)
);
"""

DROP_SQL = "DROP TABLE IF EXISTS material, step, project_category, category, project;"


@pytest.fixture()
def pg_db():
    """Fresh schema in TEST_DATABASE_URL with the pool pointed at it."""
    if not TEST_DATABASE_URL:
        pytest.skip("TEST_DATABASE_URL not set")

    admin = psycopg2.connect(TEST_DATABASE_URL)
    admin.autocommit = True
    with admin.cursor() as cur:
        cur.execute(SCHEMA_SQL)

    connection.init_pool(1, 2, dsn=TEST_DATABASE_URL)
    try:
        yield admin
    finally:
        connection.close_pool()
        with admin.cursor() as cur:
            cur.execute(DROP_SQL)
        admin.close()
