"""Pytest configuration and fixtures for holders snapshot tests."""

from typing import Any, Callable

import pytest

from holders_snapshot.core.config import SnapshotConfig
from holders_snapshot.core.models import AuditEntry, HolderRow
from holders_snapshot.core.types import DataSource

ADDRESS_A = "0x" + "a" * 64
ADDRESS_B = "0x" + "b" * 64
ADDRESS_C = "0x" + "c" * 64
COIN_TYPE = "0x" + "1" * 64 + "::kush::KUSH"


def make_node(owner: str | None, balance: Any, typename: str = "AddressOwner") -> dict[str, Any]:
    """Build a coin object node as returned by the objects query."""
    if owner is None:
        owner_field: dict[str, Any] = {"__typename": typename}
    else:
        owner_field = {"__typename": typename, "address": {"address": owner}}
    return {
        "owner": owner_field,
        "asMoveObject": {"contents": {"json": {"id": "0x1", "balance": balance}}},
    }


def make_page(
    entries: list[tuple[str | None, Any]],
    has_next: bool = False,
    cursor: str | None = None,
) -> dict[str, Any]:
    """Build an objects query response from (owner, balance) pairs."""
    return {
        "data": {
            "objects": {
                "pageInfo": {"hasNextPage": has_next, "endCursor": cursor},
                "nodes": [make_node(owner, balance) for owner, balance in entries],
            }
        }
    }


class FakePageSource:
    """Serves canned pages keyed by cursor and records the cursors asked for."""

    def __init__(self, pages: dict[str | None, dict[str, Any]]):
        self.pages = pages
        self.requested: list[str | None] = []

    def __call__(self, cursor: str | None) -> dict[str, Any]:
        self.requested.append(cursor)
        return self.pages[cursor]


class FakeProvider:
    """Stands in for SuiGraphQLProvider without touching the network."""

    def __init__(self, pages: dict[str | None, dict[str, Any]], decimals: int = 0):
        self.source = FakePageSource(pages)
        self.decimals = decimals
        self.calls: list[str] = []
        self.closed = False
        self._audit: list[AuditEntry] = []

    def fetch_decimals(self, coin_type: str) -> int:
        self.calls.append("fetch_decimals")
        self._audit.append(AuditEntry(source=DataSource.SUI_GRAPHQL, action="fetch_metadata"))
        return self.decimals

    def page_fetcher(self, coin_type: str) -> Callable[[str | None], dict[str, Any]]:
        self.calls.append("page_fetcher")

        def fetch(cursor: str | None) -> dict[str, Any]:
            self._audit.append(AuditEntry(source=DataSource.SUI_GRAPHQL, action="fetch_page"))
            return self.source(cursor)

        return fetch

    def get_audit_trail(self) -> list[AuditEntry]:
        return list(self._audit)

    def clear_audit_trail(self) -> None:
        self._audit.clear()

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def two_pages() -> dict[str | None, dict[str, Any]]:
    """Two pages where ADDRESS_A appears on both."""
    return {
        None: make_page([(ADDRESS_A, "100"), (ADDRESS_B, "50")], has_next=True, cursor="c1"),
        "c1": make_page([(ADDRESS_A, "25")], has_next=False, cursor=None),
    }


@pytest.fixture
def equal_holders() -> list[HolderRow]:
    """Three holders with identical balances, in rank order."""
    return [
        HolderRow(address=ADDRESS_A, raw_balance=100),
        HolderRow(address=ADDRESS_B, raw_balance=100),
        HolderRow(address=ADDRESS_C, raw_balance=100),
    ]


@pytest.fixture
def config() -> SnapshotConfig:
    """Settings pointing at a dummy endpoint."""
    return SnapshotConfig(endpoint="https://graphql.test/graphql", page_size=2)
