"""Shared fixtures: an in-memory stand-in for the Supabase client and an API client wired to it."""

from __future__ import annotations

import copy
import re
import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from postgrest.exceptions import APIError

from app.database.supabase_client import get_auth_client, get_session_client, get_supabase
from app.main import app, limiter
from app.modules.auth.service import clear_auth_cache

ALICE = "11111111-1111-1111-1111-111111111111"
BOB = "22222222-2222-2222-2222-222222222222"
CAROL = "33333333-3333-3333-3333-333333333333"

# ---------------------------------------------------------------------------
# Fake Supabase client
# ---------------------------------------------------------------------------

UNIQUE_CONSTRAINTS = {
    "profiles": [("user_id",)],
    "skills": [("name",)],
    "user_skills": [("user_id", "skill_id", "skill_type")],
    "feedback": [("swap_request_id", "reviewer_id")],
}

DEFAULTS = {
    "profiles": {"display_name": None, "location": None, "avatar_url": None, "availability": None, "is_public": True},
    "skills": {"category": None, "is_approved": True},
    "swap_requests": {"message": None, "status": "pending"},
    "feedback": {"comment": None},
}

# Tables whose updated_at is stamped by a trigger
TIMESTAMPED = {"profiles", "swap_requests"}


def _like_to_regex(pattern: str) -> re.Pattern:
    parts = [".*" if ch == "%" else "." if ch == "_" else re.escape(ch) for ch in pattern]
    return re.compile("".join(parts), re.IGNORECASE | re.DOTALL)


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.op = "select"
        self.payload = None
        self.on_conflict = None
        self.filters = []
        self.orders = []
        self.row_limit = None
        self.mode = None

    # builders
    def select(self, *columns, **kwargs):
        return self

    def insert(self, payload):
        self.op, self.payload = "insert", payload
        return self

    def upsert(self, payload, on_conflict=None, **kwargs):
        self.op, self.payload, self.on_conflict = "upsert", payload, on_conflict
        return self

    def update(self, payload):
        self.op, self.payload = "update", payload
        return self

    def delete(self):
        self.op = "delete"
        return self

    # filters
    def eq(self, column, value):
        self.filters.append(lambda r: r.get(column) == value)
        return self

    def neq(self, column, value):
        self.filters.append(lambda r: r.get(column) != value)
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda r: r.get(column) in values)
        return self

    def ilike(self, column, pattern):
        regex = _like_to_regex(pattern)
        self.filters.append(lambda r: r.get(column) is not None and regex.fullmatch(str(r[column])) is not None)
        return self

    def or_(self, expression):
        clauses = []
        for clause in expression.split(","):
            column, op, value = clause.split(".", 2)
            assert op == "eq", f"unsupported or_ operator {op}"
            clauses.append((column, value))
        self.filters.append(lambda r: any(r.get(c) == v for c, v in clauses))
        return self

    def order(self, column, desc=False):
        self.orders.append((column, desc))
        return self

    def limit(self, n):
        self.row_limit = n
        return self

    def single(self):
        self.mode = "single"
        return self

    def maybe_single(self):
        self.mode = "maybe_single"
        return self

    # execution
    def _matching(self):
        return [r for r in self.db.tables.setdefault(self.table, []) if all(f(r) for f in self.filters)]

    def execute(self):
        self.db.queries.append((self.table, self.op))
        if self.op == "select":
            rows = [copy.deepcopy(r) for r in self._matching()]
            for column, desc in reversed(self.orders):
                rows.sort(key=lambda r: (r.get(column) is None, r.get(column)), reverse=desc)
            if self.row_limit is not None:
                rows = rows[:self.row_limit]
            if self.mode == "single":
                if len(rows) != 1:
                    raise APIError({"message": "JSON object requested, multiple (or no) rows returned", "code": "PGRST116"})
                return SimpleNamespace(data=rows[0], count=None)
            if self.mode == "maybe_single":
                if not rows:
                    return None
                return SimpleNamespace(data=rows[0], count=None)
            return SimpleNamespace(data=rows, count=None)
        if self.op == "insert":
            payload = self.payload if isinstance(self.payload, list) else [self.payload]
            return SimpleNamespace(data=[self.db.insert_row(self.table, row) for row in payload], count=None)
        if self.op == "upsert":
            return SimpleNamespace(data=[self.db.upsert_row(self.table, self.payload, self.on_conflict)], count=None)
        if self.op == "update":
            updated = []
            for row in self._matching():
                row.update(copy.deepcopy(self.payload))
                if self.table in TIMESTAMPED:
                    row["updated_at"] = self.db.now()
                updated.append(copy.deepcopy(row))
            return SimpleNamespace(data=updated, count=None)
        if self.op == "delete":
            doomed = self._matching()
            self.db.tables[self.table] = [r for r in self.db.tables[self.table] if r not in doomed]
            return SimpleNamespace(data=[copy.deepcopy(r) for r in doomed], count=None)
        raise AssertionError(f"unknown op {self.op}")


class FakeBucket:
    def __init__(self, storage: "FakeStorage", name: str):
        self.storage = storage
        self.name = name

    def upload(self, path, file, file_options=None):
        self.storage.objects[(self.name, path)] = (file, dict(file_options or {}))
        return SimpleNamespace(path=path)

    def remove(self, paths):
        removed = [p for p in paths if (self.name, p) in self.storage.objects]
        for p in removed:
            del self.storage.objects[(self.name, p)]
        return [SimpleNamespace(name=p) for p in removed]

    def get_public_url(self, path):
        return f"https://fake.supabase.co/storage/v1/object/public/{self.name}/{path}"


class FakeStorage:
    def __init__(self):
        self.objects = {}

    def from_(self, bucket):
        return FakeBucket(self, bucket)


class FakeAuthAdmin:
    """Records which JWTs were revoked."""

    def __init__(self):
        self.revoked = []

    def sign_out(self, jwt, scope="global"):
        self.revoked.append((jwt, scope))


class FakeAuth:
    """Resolves tokens of the form token-<user id>."""

    def __init__(self):
        self.users = {}
        self.admin = FakeAuthAdmin()

    def add_user(self, user_id, email=None, metadata=None):
        self.users[f"token-{user_id}"] = SimpleNamespace(
            id=user_id,
            email=email or f"{user_id[:4]}@example.com",
            user_metadata=metadata or {},
            app_metadata={},
            created_at=None,
            updated_at=None,
        )

    def get_user(self, jwt=None):
        if jwt not in self.users:
            raise Exception("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=self.users[jwt])


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self.queries = []
        self.storage = FakeStorage()
        self.auth = FakeAuth()
        self._clock = datetime(2025, 1, 1, tzinfo=timezone.utc)

    def now(self) -> str:
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat()

    def table(self, name):
        return FakeQuery(self, name)

    def _check_unique(self, table, row, ignore=None):
        for columns in UNIQUE_CONSTRAINTS.get(table, []):
            key = tuple(row.get(c) for c in columns)
            for existing in self.tables.get(table, []):
                if existing is ignore:
                    continue
                if tuple(existing.get(c) for c in columns) == key:
                    raise APIError({
                        "message": f'duplicate key value violates unique constraint "{table}_{"_".join(columns)}_key"',
                        "code": "23505",
                        "details": None,
                        "hint": None,
                    })

    def insert_row(self, table, row):
        stored = dict(DEFAULTS.get(table, {}))
        stored.update(copy.deepcopy(row))
        stored.setdefault("id", str(uuid.uuid4()))
        stored.setdefault("created_at", self.now())
        if table in TIMESTAMPED:
            stored.setdefault("updated_at", stored["created_at"])
        if table == "feedback" and not 1 <= stored["rating"] <= 5:
            raise APIError({"message": "new row violates check constraint \"feedback_rating_check\"", "code": "23514"})
        self._check_unique(table, stored)
        self.tables.setdefault(table, []).append(stored)
        return copy.deepcopy(stored)

    def upsert_row(self, table, row, on_conflict):
        key = on_conflict or "id"
        for existing in self.tables.get(table, []):
            if existing.get(key) == row.get(key):
                candidate = dict(existing)
                candidate.update(copy.deepcopy(row))
                self._check_unique(table, candidate, ignore=existing)
                existing.update(candidate)
                if table in TIMESTAMPED:
                    existing["updated_at"] = self.now()
                return copy.deepcopy(existing)
        return self.insert_row(table, row)

    # seeding helpers
    def seed(self, table, **row):
        return self.insert_row(table, row)

    def add_user(self, user_id, display_name=None, is_public=True, **profile):
        """Sign a user up: auth record plus the profile row the signup trigger would create."""
        self.auth.add_user(user_id, metadata={"display_name": display_name} if display_name else {})
        return self.seed("profiles", user_id=user_id, display_name=display_name, is_public=is_public, **profile)

    def skill(self, name, **extra):
        for existing in self.tables.get("skills", []):
            if existing["name"] == name:
                return copy.deepcopy(existing)
        return self.seed("skills", name=name, **extra)

    def offer(self, user_id, name, skill_type="offered"):
        skill = self.skill(name)
        self.seed("user_skills", user_id=user_id, skill_id=skill["id"], skill_type=skill_type)
        return skill

    def rows(self, table):
        return copy.deepcopy(self.tables.get(table, []))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def reset_auth_cache():
    clear_auth_cache()
    yield
    clear_auth_cache()


@pytest.fixture
def db():
    """Fake Supabase project with three signed-up users."""
    fake = FakeSupabase()
    fake.add_user(ALICE, display_name="Alice")
    fake.add_user(BOB, display_name="Bob")
    fake.add_user(CAROL, display_name="Carol")
    return fake


@pytest.fixture
def client(db):
    """TestClient with the Supabase dependencies overridden."""
    app.dependency_overrides[get_supabase] = lambda: db
    app.dependency_overrides[get_auth_client] = lambda: db
    app.dependency_overrides[get_session_client] = lambda: db
    limiter.reset()
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def auth_headers(user_id: str) -> dict:
    return {"Authorization": f"Bearer token-{user_id}"}
