"""
Pytest configuration and fixtures for Kitchenbook tests.
"""

import os
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

# Set test environment before importing kitchenbook modules
os.environ["KITCHEN_ENV"] = "development"
os.environ["SUPABASE_URL"] = ""
os.environ["SUPABASE_ANON_KEY"] = ""


class FakeQuery:
    """Chainable stand-in for a PostgREST request builder."""

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.op = "select"
        self.payload = None
        self.filters: list[tuple[str, object]] = []
        self.limit_to: int | None = None

    def select(self, *columns):
        return self

    def insert(self, payload):
        self.op, self.payload = "insert", payload
        return self

    def update(self, payload):
        self.op, self.payload = "update", payload
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, *args, **kwargs):
        return self

    def or_(self, *args, **kwargs):
        return self

    def limit(self, count):
        self.limit_to = count
        return self

    def _matches(self, row: dict) -> bool:
        return all(row.get(column) == value for column, value in self.filters)

    def execute(self):
        self.db.calls.append((self.table, self.op, self.payload))
        for table, op, predicate, error in self.db.failures:
            if table == self.table and op == self.op and predicate(self.payload):
                raise error

        rows = self.db.tables.setdefault(self.table, [])

        if self.op == "insert":
            batch = self.payload if isinstance(self.payload, list) else [self.payload]
            created = []
            for item in batch:
                row = {"id": f"{self.table}-{len(rows) + 1}", **item}
                rows.append(row)
                created.append(dict(row))
            return SimpleNamespace(data=created)

        matched = [row for row in rows if self._matches(row)]

        if self.op == "update":
            for row in matched:
                row.update(self.payload)
            return SimpleNamespace(data=[dict(row) for row in matched])

        if self.op == "delete":
            self.db.tables[self.table] = [row for row in rows if not self._matches(row)]
            return SimpleNamespace(data=[dict(row) for row in matched])

        data = [dict(row) for row in matched]
        if self.limit_to is not None:
            data = data[: self.limit_to]
        return SimpleNamespace(data=data)


class FakeSupabase:
    """
    In-memory Supabase client.

    Rows live in self.tables keyed by table name; every executed request
    is recorded in self.calls as (table, op, payload).
    """

    def __init__(self, tables: dict[str, list[dict]] | None = None):
        self.tables = {name: [dict(row) for row in rows] for name, rows in (tables or {}).items()}
        self.calls: list[tuple[str, str, object]] = []
        self.failures: list = []

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rpc(self, fn: str, params: dict | None = None):
        raise NotImplementedError(fn)

    def fail_on(self, table: str, op: str, error: Exception, when=lambda payload: True) -> None:
        """Make matching requests raise error."""
        self.failures.append((table, op, when, error))

    def ops(self, table: str, op: str) -> list:
        return [payload for t, o, payload in self.calls if t == table and o == op]


@pytest.fixture
def mock_supabase():
    """Mock Supabase client for unit tests."""
    mock_client = MagicMock()

    # Mock table operations
    mock_table = MagicMock()
    mock_table.select.return_value = mock_table
    mock_table.insert.return_value = mock_table
    mock_table.update.return_value = mock_table
    mock_table.delete.return_value = mock_table
    mock_table.eq.return_value = mock_table
    mock_table.order.return_value = mock_table
    mock_table.limit.return_value = mock_table
    mock_table.execute.return_value = MagicMock(data=[])

    mock_client.table.return_value = mock_table

    return mock_client


@pytest.fixture
def fake_db():
    """Empty in-memory database."""
    return FakeSupabase()


@pytest.fixture
def make_db():
    """Factory for in-memory databases seeded with rows."""
    return FakeSupabase


@pytest.fixture
def sample_inventory_items():
    """Sample inventory rows for testing."""
    return [
        {"id": "ing-1", "name": "鸡蛋", "unit": "个", "quantity": 6, "threshold": 2, "expiry_date": "2026-10-20"},
        {"id": "ing-2", "name": "西红柿", "unit": "个", "quantity": 1, "threshold": 2, "expiry_date": "2026-10-25"},
        {"id": "ing-3", "name": "盐", "unit": "g", "quantity": 500, "threshold": 50, "expiry_date": None},
        {"id": "ing-4", "name": "葱", "unit": "根", "quantity": 0, "threshold": 1, "expiry_date": "2026-10-18"},
    ]


@pytest.fixture
def sample_markdown():
    """Import document with one complete recipe."""
    return "\n".join(
        [
            "## 番茄炒蛋",
            "**分类**: 家常菜",
            "**难度**: 1",
            "**准备时间**: 5 分钟",
            "**烹饪时间**: 10 分钟",
            "**份数**: 2",
            "**标签**: #快手 #下饭",
            "**简介**:",
            "经典家常菜",
            "",
            "### 食材",
            "- 鸡蛋 3个",
            "- 西红柿 2个",
            "- 葱花 适量[可选]",
            "",
            "### 步骤",
            "1. 打散鸡蛋。",
            "2. 炒熟出锅(5 分钟)[计时]",
        ]
    )
