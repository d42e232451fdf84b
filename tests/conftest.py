"""Pytest configuration and fixtures for xa_xid tests."""

from __future__ import annotations

from typing import Any, Callable, Sequence

import pytest
from prometheus_client import CollectorRegistry

from xa_xid.infrastructure.metrics import XidMetrics


class FakeCursor:
    """In-memory DB-API cursor returning canned rows.

    Set ``fail_on`` to 'execute', 'fetchall' or 'close' to make that step raise.
    """

    def __init__(self, rows: Sequence[Sequence[Any]], fail_on: str | None = None) -> None:
        self.rows = rows
        self.fail_on = fail_on
        self.executed: list[str] = []
        self.closed = False

    def execute(self, operation: str) -> None:
        if self.fail_on == "execute":
            raise RuntimeError("relation does not exist")
        self.executed.append(operation)

    def fetchall(self) -> list[Sequence[Any]]:
        if self.fail_on == "fetchall":
            raise RuntimeError("connection lost")
        return list(self.rows)

    def close(self) -> None:
        self.closed = True
        if self.fail_on == "close":
            raise RuntimeError("cursor already closed")


class FakeConnection:
    """In-memory DB-API connection handing out FakeCursors."""

    def __init__(self, rows: Sequence[Sequence[Any]] = (), fail_on: str | None = None) -> None:
        self.rows = rows
        self.fail_on = fail_on
        self.cursors: list[FakeCursor] = []

    def cursor(self) -> FakeCursor:
        if self.fail_on == "cursor":
            raise RuntimeError("connection closed")
        cursor = FakeCursor(self.rows, self.fail_on)
        self.cursors.append(cursor)
        return cursor


RECOVERY_ROWS = [
    ("0_Z3RyaWQ=_YnF1YWw=", "t1", "u1", "d1"),
    ("raw-string", "t2", "u2", "d2"),
    ("5_Zw==_Yg==", "t3", "u3", "d3"),
]


@pytest.fixture
def recovery_rows() -> list[tuple[str, str, str, str]]:
    """Rows as a prepared transaction catalog would return them."""
    return list(RECOVERY_ROWS)


@pytest.fixture
def fake_connection(recovery_rows: list[tuple[str, str, str, str]]) -> FakeConnection:
    """Provide a connection whose cursor returns the standard recovery rows."""
    return FakeConnection(recovery_rows)


@pytest.fixture
def make_connection() -> Callable[..., FakeConnection]:
    """Provide a factory for connections with custom rows or failure points."""
    return FakeConnection


@pytest.fixture
def metrics() -> XidMetrics:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    registry = CollectorRegistry(auto_describe=True)
    return XidMetrics(registry=registry)


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
