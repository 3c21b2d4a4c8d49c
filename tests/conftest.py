import datetime as dt
import uuid
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from postgrest.exceptions import APIError

from congregation.config.permissions_config import Role
from congregation.core.dependencies import get_session
from congregation.core.session import SessionContext
from congregation.database.gateway import DataGateway, get_gateway
from congregation.modules.groups import join_registry
from congregation.modules.groups.fallback import FallbackMembershipStore, get_fallback_store
from congregation.modules.groups.membership import MembershipWorkflow
from congregation.modules.profiles.schemas import ProfileResponse


class FakeResponse:
    def __init__(self, data, count=None):
        self.data = data
        self.count = count


class FakeQuery:
    """Subset of the postgrest request builder backed by FakeSupabase.tables."""

    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.op = "select"
        self.payload = None
        self.filters = []
        self.orders = []
        self._limit = None
        self._offset = 0
        self.on_conflict = None
        self.ignore_duplicates = False
        self.count_mode = None

    def select(self, *columns, count=None):
        self.op = "select"
        self.count_mode = count
        return self

    def insert(self, payload):
        self.op, self.payload = "insert", payload
        return self

    def upsert(self, payload, on_conflict="", ignore_duplicates=False):
        self.op, self.payload = "upsert", payload
        self.on_conflict = [c.strip() for c in on_conflict.split(",") if c.strip()] or ["id"]
        self.ignore_duplicates = ignore_duplicates
        return self

    def update(self, payload):
        self.op, self.payload = "update", payload
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column, values):
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def gte(self, column, value):
        self.filters.append(lambda row: row.get(column) is not None and str(row.get(column)) >= str(value))
        return self

    def lte(self, column, value):
        self.filters.append(lambda row: row.get(column) is not None and str(row.get(column)) <= str(value))
        return self

    def order(self, column, desc=False):
        self.orders.append((column, desc))
        return self

    def limit(self, size):
        self._limit = size
        return self

    def offset(self, size):
        self._offset = size
        return self

    def _matches(self, row):
        return all(f(row) for f in self.filters)

    def execute(self):
        self.db.executed.append((self.table, self.op))
        hook = self.db.hooks.get((self.table, self.op))
        if hook is not None:
            hook()
        if self.table in self.db.missing:
            raise APIError({
                "code": "PGRST205",
                "message": f"Could not find the table 'public.{self.table}' in the schema cache",
                "hint": None,
                "details": None,
            })
        if (self.table, self.op) in self.db.failing or (self.table, "*") in self.db.failing:
            raise APIError({"code": "XX000", "message": "internal error", "hint": None, "details": None})

        rows = self.db.tables.setdefault(self.table, [])
        if self.op == "select":
            matched = [row for row in rows if self._matches(row)]
            for column, desc in reversed(self.orders):
                matched.sort(key=lambda r: (r.get(column) is None, str(r.get(column))), reverse=desc)
            total = len(matched)
            matched = matched[self._offset:]
            if self._limit is not None:
                matched = matched[:self._limit]
            return FakeResponse([dict(row) for row in matched], total if self.count_mode else None)

        if self.op == "insert":
            payloads = self.payload if isinstance(self.payload, list) else [self.payload]
            return FakeResponse([dict(self.db.add_row(self.table, p)) for p in payloads])

        if self.op == "upsert":
            payloads = self.payload if isinstance(self.payload, list) else [self.payload]
            written = []
            for payload in payloads:
                existing = next(
                    (row for row in rows if all(row.get(c) == payload.get(c) for c in self.on_conflict)),
                    None
                )
                if existing is None:
                    written.append(dict(self.db.add_row(self.table, payload)))
                elif not self.ignore_duplicates:
                    existing.update(payload)
                    written.append(dict(existing))
            return FakeResponse(written)

        if self.op == "update":
            matched = [row for row in rows if self._matches(row)]
            for row in matched:
                row.update(self.payload)
            return FakeResponse([dict(row) for row in matched])

        if self.op == "delete":
            matched = [row for row in rows if self._matches(row)]
            self.db.tables[self.table] = [row for row in rows if not self._matches(row)]
            return FakeResponse([dict(row) for row in matched])

        raise AssertionError(f"unsupported op {self.op}")


class FakeBucket:
    def __init__(self, name, uploads):
        self.name = name
        self.uploads = uploads

    def upload(self, path, content, file_options=None):
        self.uploads[(self.name, path)] = (content, file_options)

    def get_public_url(self, path):
        return f"https://storage.test/{self.name}/{path}"


class FakeStorage:
    def __init__(self):
        self.uploads = {}

    def from_(self, bucket):
        return FakeBucket(bucket, self.uploads)


class FakePostgrest:
    def __init__(self):
        self.token = None

    def auth(self, token):
        self.token = token


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self.missing = set()
        self.failing = set()
        self.hooks = {}
        self.executed = []
        self.storage = FakeStorage()
        self.postgrest = FakePostgrest()
        self.options = SimpleNamespace(headers={"Authorization": "Bearer anon-key"})

    def table(self, name):
        return FakeQuery(self, name)

    def add_row(self, table, payload):
        row = {"id": str(uuid.uuid4()), "created_at": dt.datetime.now(dt.timezone.utc).isoformat()}
        row.update(payload)
        self.tables.setdefault(table, []).append(row)
        return row

    def seed(self, table, *rows):
        return [self.add_row(table, row) for row in rows]


def make_session(user_id=None, role=Role.MEMBER, email=None):
    if user_id is None:
        return SessionContext.guest()
    return SessionContext(
        user_id=user_id,
        email=email or f"{user_id}@example.com",
        role=role,
        profile=ProfileResponse(id=user_id, email=email or f"{user_id}@example.com", first_name=user_id, role=role.value),
    )


@pytest.fixture(autouse=True)
def clear_join_registry():
    yield
    with join_registry._lock:
        join_registry._in_flight.clear()


@pytest.fixture
def fake_db():
    return FakeSupabase()


@pytest.fixture
def gateway(fake_db):
    return DataGateway(fake_db)


@pytest.fixture
def fallback_store(tmp_path):
    return FallbackMembershipStore(str(tmp_path / "fallback"))


@pytest.fixture
def workflow(gateway, fallback_store):
    return MembershipWorkflow(gateway, fallback_store)


@pytest.fixture
def member():
    return make_session("user-a")


@pytest.fixture
def admin():
    return make_session("admin-1", role=Role.ADMIN)


@pytest.fixture
def guest():
    return SessionContext.guest()


class SessionHolder:
    def __init__(self):
        self.session = SessionContext.guest()

    def use(self, session):
        self.session = session


@pytest.fixture
def session_holder():
    return SessionHolder()


@pytest.fixture
def client(gateway, fallback_store, session_holder):
    from congregation.main import app

    app.dependency_overrides[get_gateway] = lambda: gateway
    app.dependency_overrides[get_fallback_store] = lambda: fallback_store
    app.dependency_overrides[get_session] = lambda: session_holder.session
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
