"""Shared fixtures for the test suite."""

import sqlite3

import pytest
from fastapi.testclient import TestClient

from covid_api.api.main import create_app

TABLE = "covid19"

_DDL = f"""
CREATE TABLE {TABLE} (
    location_key TEXT,
    date TEXT,
    new_confirmed INTEGER,
    new_deceased INTEGER,
    new_recovered INTEGER,
    new_tested INTEGER,
    cumulative_confirmed INTEGER,
    cumulative_deceased INTEGER,
    cumulative_recovered INTEGER,
    cumulative_tested INTEGER
)
"""


class _SqliteCursor:
    """DB-API cursor wrapper that accepts the Snowflake pyformat markers."""

    def __init__(self, cur, log):
        self._cur = cur
        self._log = log

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self._cur.close()

    @property
    def description(self):
        return self._cur.description

    def execute(self, sql, params=()):
        self._log.append((sql, tuple(params)))
        self._cur.execute(sql.replace("%s", "?"), params)
        return self

    def fetchall(self):
        return self._cur.fetchall()


class SqliteConnection:
    """Stand-in for the Snowflake connection, backed by in-memory SQLite."""

    def __init__(self):
        self._db = sqlite3.connect(":memory:", check_same_thread=False)
        self._db.execute(_DDL)
        self.closed = False
        self.executed = []

    def cursor(self):
        return _SqliteCursor(self._db.cursor(), self.executed)

    def insert(self, location_key, date, **counters):
        row = {"location_key": location_key, "date": date, **counters}
        cols = ", ".join(row)
        marks = ", ".join("?" for _ in row)
        self._db.execute(f"INSERT INTO {TABLE} ({cols}) VALUES ({marks})", tuple(row.values()))
        self._db.commit()

    def close(self):
        self.closed = True
        self._db.close()


class BrokenConnection:
    """Connection whose every use fails, as after a dropped session."""

    def cursor(self):
        raise RuntimeError("connection refused: localhost:443")

    def close(self):
        pass


@pytest.fixture
def store():
    con = SqliteConnection()
    yield con
    if not con.closed:
        con.close()


@pytest.fixture
def sample_store(store):
    """Two US observations and one GB observation."""
    store.insert(
        "US", "2021-01-01",
        new_confirmed=100, new_deceased=1, new_recovered=50, new_tested=1000,
        cumulative_confirmed=1000, cumulative_deceased=10,
        cumulative_recovered=500, cumulative_tested=10000,
    )
    store.insert(
        "US", "2021-01-02",
        new_confirmed=120, new_deceased=2, new_recovered=60, new_tested=1100,
        cumulative_confirmed=1120, cumulative_deceased=12,
        cumulative_recovered=560, cumulative_tested=11100,
    )
    store.insert(
        "GB", "2021-01-01",
        new_confirmed=30, new_deceased=0, new_recovered=10, new_tested=300,
        cumulative_confirmed=300, cumulative_deceased=3,
        cumulative_recovered=100, cumulative_tested=3000,
    )
    return store


@pytest.fixture
def client(sample_store):
    return TestClient(create_app(connection=sample_store, table=TABLE))
