"""
Shared fixtures: an in-memory Supabase client, JWT minting and a wired-up
TestClient.
"""

import copy
import os
import uuid
from collections import defaultdict
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any, Callable

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-for-mindpal-unit-tests")

import httpx
import jwt
import pytest
from fastapi.testclient import TestClient

from mindpal.core.config import settings
from mindpal.core.deps import (
    get_auth_client,
    get_huggingface_service,
    get_sentiment_service,
    get_supabase_service,
)
from mindpal.main import app
from mindpal.services import HuggingFaceService, KVStore, SentimentService, SupabaseService


# ============================================================================
# In-memory Supabase
# ============================================================================


def _comparable(value: Any) -> Any:
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return value
    return value


class FakeQuery:
    """Enough of the PostgREST query builder for the service layer."""

    def __init__(self, rows: list[dict[str, Any]]) -> None:
        self.rows = rows
        self.op = "select"
        self.columns = "*"
        self.payload: Any = None
        self.on_conflict = "id"
        self.filters: list[Callable[[dict[str, Any]], bool]] = []
        self.order_by: tuple[str, bool] | None = None
        self.max_rows: int | None = None

    # Operations
    def select(self, columns: str = "*", count: str | None = None) -> "FakeQuery":
        self.op, self.columns = "select", columns
        return self

    def insert(self, payload: Any) -> "FakeQuery":
        self.op, self.payload = "insert", payload
        return self

    def update(self, payload: dict[str, Any]) -> "FakeQuery":
        self.op, self.payload = "update", payload
        return self

    def upsert(self, payload: Any, on_conflict: str = "id") -> "FakeQuery":
        self.op, self.payload, self.on_conflict = "upsert", payload, on_conflict
        return self

    def delete(self) -> "FakeQuery":
        self.op = "delete"
        return self

    # Filters
    def eq(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column: str, values: list[Any]) -> "FakeQuery":
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def gt(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append(
            lambda row: row.get(column) is not None
            and _comparable(row[column]) > _comparable(value)
        )
        return self

    def gte(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append(
            lambda row: row.get(column) is not None
            and _comparable(row[column]) >= _comparable(value)
        )
        return self

    def like(self, column: str, pattern: str) -> "FakeQuery":
        prefix = pattern.rstrip("%")
        self.filters.append(lambda row: str(row.get(column, "")).startswith(prefix))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self.order_by = (column, desc)
        return self

    def limit(self, count: int) -> "FakeQuery":
        self.max_rows = count
        return self

    # Execution
    def _matches(self) -> list[dict[str, Any]]:
        return [row for row in self.rows if all(f(row) for f in self.filters)]

    def _new_row(self, values: dict[str, Any]) -> dict[str, Any]:
        row = copy.deepcopy(values)
        row.setdefault("id", str(uuid.uuid4()))
        row.setdefault("created_at", datetime.now(timezone.utc).isoformat())
        self.rows.append(row)
        return row

    def execute(self) -> SimpleNamespace:
        if self.op == "insert":
            payload = self.payload if isinstance(self.payload, list) else [self.payload]
            data = [self._new_row(values) for values in payload]

        elif self.op == "upsert":
            payload = self.payload if isinstance(self.payload, list) else [self.payload]
            data = []
            for values in payload:
                existing = next(
                    (r for r in self.rows if r.get(self.on_conflict) == values[self.on_conflict]),
                    None,
                )
                if existing is None:
                    data.append(self._new_row(values))
                else:
                    existing.update(copy.deepcopy(values))
                    data.append(existing)

        elif self.op == "update":
            data = self._matches()
            for row in data:
                row.update(copy.deepcopy(self.payload))

        elif self.op == "delete":
            data = self._matches()
            for row in data:
                self.rows.remove(row)

        else:
            data = self._matches()
            if self.order_by:
                column, desc = self.order_by
                data = sorted(
                    data,
                    key=lambda row: (row.get(column) is not None, _comparable(row.get(column))),
                    reverse=desc,
                )
            if self.max_rows is not None:
                data = data[: self.max_rows]
            if self.columns != "*":
                wanted = [c.strip() for c in self.columns.split(",")]
                data = [{c: row.get(c) for c in wanted} for row in data]

        return SimpleNamespace(data=copy.deepcopy(data), count=len(data))


class FakeAuth:
    """Supabase Auth stand-in that issues real signed tokens."""

    def __init__(self) -> None:
        self.users: dict[str, dict[str, Any]] = {}

    def _session(self, user_id: str) -> SimpleNamespace:
        return SimpleNamespace(access_token=make_token(user_id), refresh_token="refresh-token")

    def sign_up(self, credentials: dict[str, Any]) -> SimpleNamespace:
        if credentials["email"] in self.users:
            raise Exception("User already registered")

        user_id = str(uuid.uuid4())
        self.users[credentials["email"]] = {
            "id": user_id,
            "password": credentials["password"],
            "metadata": credentials.get("options", {}).get("data", {}),
        }
        return SimpleNamespace(user=SimpleNamespace(id=user_id), session=self._session(user_id))

    def sign_in_with_password(self, credentials: dict[str, Any]) -> SimpleNamespace:
        user = self.users.get(credentials["email"])
        if not user or user["password"] != credentials["password"]:
            raise Exception("Invalid login credentials")

        return SimpleNamespace(
            user=SimpleNamespace(id=user["id"]), session=self._session(user["id"])
        )


class FakeSupabaseClient:
    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = defaultdict(list)
        self.auth = FakeAuth()

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self.tables[name])


# ============================================================================
# Helpers
# ============================================================================


def make_token(user_id: str, expires_in: int = 3600, **claims: Any) -> str:
    """Sign a Supabase-style access token."""
    payload = {
        "sub": user_id,
        "aud": "authenticated",
        "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
        **claims,
    }
    return jwt.encode(payload, settings.supabase_jwt_secret, algorithm="HS256")


def auth_header(user_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id)}"}


def seed_profile(client: FakeSupabaseClient, user_id: str, **fields: Any) -> dict[str, Any]:
    row = {
        "id": user_id,
        "username": "tester",
        "email": "tester@example.com",
        "user_type": "user",
        "coins": 100,
        "is_premium": False,
        "level": 1,
        "streak": 0,
        "total_entries": 0,
        "created_at": datetime.now(timezone.utc).isoformat(),
        **fields,
    }
    client.tables["profiles"].append(row)
    return row


def seed_entry(
    client: FakeSupabaseClient, user_id: str, mood: str, created_at: datetime, **fields: Any
) -> dict[str, Any]:
    row = {
        "id": str(uuid.uuid4()),
        "user_id": user_id,
        "entry_text": f"Feeling {mood} today",
        "mood": mood,
        "sentiment_score": 0.8,
        "risk_level": "low",
        "triggers": [],
        "emotions": {mood: 0.8},
        "suggestions": [],
        "word_count": 3,
        "created_at": created_at.isoformat(),
        **fields,
    }
    client.tables["journal_entries"].append(row)
    return row


class FakeAnalyzer:
    """Bedrock stand-in. Returns ``result`` or raises ``error``."""

    def __init__(self, result: dict[str, Any] | None = None, error: Exception | None = None):
        self.result = result
        self.error = error
        self.calls: list[str] = []

    async def analyze_journal_entry(self, text: str) -> dict[str, Any] | None:
        self.calls.append(text)
        if self.error:
            raise self.error
        return self.result


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def fake_supabase() -> FakeSupabaseClient:
    return FakeSupabaseClient()


@pytest.fixture
def supabase_service(fake_supabase: FakeSupabaseClient) -> SupabaseService:
    return SupabaseService(client=fake_supabase)


@pytest.fixture
def kv(fake_supabase: FakeSupabaseClient) -> KVStore:
    return KVStore(fake_supabase)


@pytest.fixture
def analyzer() -> FakeAnalyzer:
    return FakeAnalyzer()


@pytest.fixture
def hf_requests() -> list[httpx.Request]:
    return []


@pytest.fixture
def hf_handler(hf_requests: list[httpx.Request]) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        hf_requests.append(request)
        return httpx.Response(200, json=[[{"label": "joy", "score": 0.91}]])

    return handler


@pytest.fixture
def client(
    fake_supabase: FakeSupabaseClient,
    supabase_service: SupabaseService,
    analyzer: FakeAnalyzer,
    hf_handler: Callable[[httpx.Request], httpx.Response],
):
    app.dependency_overrides[get_supabase_service] = lambda: supabase_service
    app.dependency_overrides[get_auth_client] = lambda: fake_supabase
    app.dependency_overrides[get_sentiment_service] = lambda: SentimentService(analyzer=analyzer)
    app.dependency_overrides[get_huggingface_service] = lambda: HuggingFaceService(
        transport=httpx.MockTransport(hf_handler)
    )

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def user_id() -> str:
    return str(uuid.uuid4())


@pytest.fixture
def headers(user_id: str) -> dict[str, str]:
    return auth_header(user_id)
