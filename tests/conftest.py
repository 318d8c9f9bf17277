# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - An in-memory stand-in for the Supabase query builder, so services can
#   be tested against real rows instead of per-call mocks
# - Sample teams, players and events
# =============================================================================

import os
import re
import uuid
from collections import defaultdict
from datetime import date, datetime, timedelta, timezone

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest

from lib.supabase_client import NOT_FOUND_CODE, UNIQUE_VIOLATION_CODE, SupabaseClient


# =============================================================================
# In-memory Supabase
# =============================================================================

# (table, column) pairs with a unique constraint
UNIQUE_COLUMNS = {("teams", "name")}

EMBED_PATTERN = re.compile(r"(\w+)\(([^)]*)\)")


class FakeAPIError(Exception):
    """Mimics postgrest's APIError: carries a PostgREST/Postgres code."""

    def __init__(self, message: str, code: str):
        super().__init__(message)
        self.code = code


class FakeResponse:
    def __init__(self, data, count=None):
        self.data = data
        self.count = count


class FakeQuery:
    """
    Chainable query covering the subset of the postgrest builder the
    services use: select (with embedded parents and exact counts), insert,
    update, upsert, delete, eq, neq, in_, gte, order, limit, single.
    """

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table_name = table
        self.operation = "select"
        self.columns = "*"
        self.payload = None
        self.on_conflict = "id"
        self.filters = []
        self.orders = []
        self.row_limit = None
        self.want_single = False
        self.count_mode = None
        self.head = False

    # -- operations ----------------------------------------------------------

    def select(self, columns: str = "*", count=None, head: bool = False):
        self.operation = "select"
        self.columns = columns
        self.count_mode = count
        self.head = head
        return self

    def insert(self, rows):
        self.operation = "insert"
        self.payload = rows
        return self

    def update(self, values: dict):
        self.operation = "update"
        self.payload = values
        return self

    def upsert(self, rows, on_conflict: str = "id"):
        self.operation = "upsert"
        self.payload = rows
        self.on_conflict = on_conflict
        return self

    def delete(self):
        self.operation = "delete"
        return self

    # -- filters -------------------------------------------------------------

    def eq(self, column: str, value):
        self.filters.append(lambda row: str(row.get(column)) == str(value))
        return self

    def neq(self, column: str, value):
        self.filters.append(lambda row: str(row.get(column)) != str(value))
        return self

    def in_(self, column: str, values):
        wanted = {str(v) for v in values}
        self.filters.append(lambda row: str(row.get(column)) in wanted)
        return self

    def gte(self, column: str, value):
        self.filters.append(
            lambda row: row.get(column) is not None and str(row.get(column)) >= str(value)
        )
        return self

    def order(self, column: str, desc: bool = False):
        self.orders.append((column, desc))
        return self

    def limit(self, count: int):
        self.row_limit = count
        return self

    def single(self):
        self.want_single = True
        return self

    # -- execution -----------------------------------------------------------

    def _matching(self) -> list[dict]:
        rows = self.db.tables[self.table_name]
        return [row for row in rows if all(f(row) for f in self.filters)]

    def _check_unique(self, candidate: dict, ignore: dict | None = None) -> None:
        for table, column in UNIQUE_COLUMNS:
            if table != self.table_name or column not in candidate:
                continue
            for row in self.db.tables[table]:
                if row is ignore:
                    continue
                if row.get(column) == candidate[column]:
                    raise FakeAPIError(
                        f'duplicate key value violates unique constraint "{table}_{column}_key"',
                        UNIQUE_VIOLATION_CODE,
                    )

    def _project(self, row: dict) -> dict:
        plain = EMBED_PATTERN.sub("", self.columns)
        names = [name.strip() for name in plain.split(",") if name.strip()]

        if "*" in names:
            result = dict(row)
        else:
            result = {name: row.get(name) for name in names}

        for relation, relation_columns in EMBED_PATTERN.findall(self.columns):
            foreign_key = relation.rstrip("s") + "_id"
            parent = next(
                (p for p in self.db.tables[relation] if str(p["id"]) == str(row.get(foreign_key))),
                None,
            )
            if parent is None:
                result[relation] = None
                continue
            wanted = [c.strip() for c in relation_columns.split(",") if c.strip()]
            result[relation] = dict(parent) if "*" in wanted else {c: parent.get(c) for c in wanted}
        return result

    def execute(self) -> FakeResponse:
        self.db.executed.append((self.table_name, self.operation))

        if self.operation == "insert":
            rows = self.payload if isinstance(self.payload, list) else [self.payload]
            inserted = [self.db.insert_row(self.table_name, row, query=self) for row in rows]
            return FakeResponse([dict(row) for row in inserted])

        if self.operation == "upsert":
            rows = self.payload if isinstance(self.payload, list) else [self.payload]
            result = []
            for row in rows:
                existing = next(
                    (r for r in self.db.tables[self.table_name]
                     if str(r.get(self.on_conflict)) == str(row.get(self.on_conflict))),
                    None,
                )
                if existing is None:
                    result.append(dict(self.db.insert_row(self.table_name, row, query=self)))
                else:
                    existing.update(row)
                    result.append(dict(existing))
            return FakeResponse(result)

        if self.operation == "update":
            matched = self._matching()
            for row in matched:
                self._check_unique(self.payload, ignore=row)
            for row in matched:
                row.update(self.payload)
            return FakeResponse([dict(row) for row in matched])

        if self.operation == "delete":
            matched = self._matching()
            self.db.tables[self.table_name] = [
                row for row in self.db.tables[self.table_name] if row not in matched
            ]
            return FakeResponse([dict(row) for row in matched])

        rows = self._matching()
        for column, desc in reversed(self.orders):
            rows = sorted(rows, key=lambda r: str(r.get(column) or ""), reverse=desc)
        count = len(rows) if self.count_mode == "exact" else None
        if self.row_limit is not None:
            rows = rows[:self.row_limit]

        if self.head:
            return FakeResponse([], count=count)

        projected = [self._project(row) for row in rows]

        if self.want_single:
            if len(projected) != 1:
                raise FakeAPIError(
                    "JSON object requested, multiple (or no) rows returned",
                    NOT_FOUND_CODE,
                )
            return FakeResponse(projected[0], count=count)

        return FakeResponse(projected, count=count)


class FakeSupabase:
    """Stands in for supabase.Client: only .table() is used by the services."""

    def __init__(self):
        self.tables: dict[str, list[dict]] = defaultdict(list)
        self.executed: list[tuple[str, str]] = []
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def insert_row(self, table: str, row: dict, query: FakeQuery | None = None) -> dict:
        if query is not None:
            query._check_unique(row)
        self._clock += timedelta(seconds=1)
        stored = {"id": str(uuid.uuid4()), "created_at": self._clock.isoformat(), **row}
        self.tables[table].append(stored)
        return stored

    # Seeding helpers -------------------------------------------------------

    def add(self, table: str, **row) -> dict:
        return dict(self.insert_row(table, row))

    def rows(self, table: str) -> list[dict]:
        return [dict(row) for row in self.tables[table]]


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_db():
    """An empty in-memory database installed as the shared Supabase client."""
    db = FakeSupabase()
    SupabaseClient.set_client(db)
    yield db
    SupabaseClient.set_client(None)


@pytest.fixture
def coach_id():
    return str(uuid.uuid4())


@pytest.fixture
def player_user_id():
    return str(uuid.uuid4())


@pytest.fixture
def days_from_today():
    """Date string n days from today, as stored in events.date."""
    def _days(n: int) -> str:
        return (date.today() + timedelta(days=n)).isoformat()
    return _days


@pytest.fixture
def team(fake_db, coach_id):
    """A team administered by coach_id."""
    return fake_db.add("teams", name="P14 Blue", description="Saturday league", admin_id=coach_id)


@pytest.fixture
def players(fake_db, team):
    """Three players on the team; Elsa has no email."""
    return [
        fake_db.add("players", team_id=team["id"], name="Alva Berg",
                    email="alva@example.com", phone="070-111", birth_year=2011),
        fake_db.add("players", team_id=team["id"], name="Ebba Lind",
                    email="ebba@example.com", phone="070-222", birth_year=2011),
        fake_db.add("players", team_id=team["id"], name="Elsa Ek",
                    email=None, phone=None, birth_year=2012),
    ]


@pytest.fixture
def event(fake_db, team, days_from_today):
    """An upcoming training for the team."""
    return fake_db.add(
        "events",
        team_id=team["id"],
        title="Training",
        date=days_from_today(3),
        start_time="18:00:00",
        end_time="19:30:00",
        type="training",
        location="Central Sports Field",
        description=None,
    )


@pytest.fixture
def player_profile(fake_db, player_user_id):
    """A profile with the player role for player_user_id."""
    return fake_db.add("profiles", id=player_user_id, name="Alva Berg", phone="070-111", role="player")
