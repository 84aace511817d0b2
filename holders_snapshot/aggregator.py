"""Cursor-driven aggregation of coin balances by owner.

The aggregator asks an injected page fetcher for one page at a time,
starting with no cursor, and folds every (owner, balance) pair into a
BalanceAccumulator until a page reports no further pages.
"""

import logging
import re
from typing import Any

from .core.exceptions import MalformedResponseError
from .core.models import BalanceEntry, BalancePage
from .core.types import Address, BalanceMap, Cursor, RawAmount
from .providers.base import PageFetcher

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"[0-9]+")


class BalanceAccumulator:
    """Running per-owner totals, in first-seen order."""

    def __init__(self) -> None:
        self._balances: BalanceMap = {}
        self.page_count = 0

    def add(self, owner: Address, raw_balance: RawAmount) -> None:
        """Add ``raw_balance`` to the running total for ``owner``."""
        self._balances[owner] = self._balances.get(owner, 0) + raw_balance

    def add_page(self, page: BalancePage) -> None:
        for entry in page.entries:
            self.add(entry.owner, entry.raw_balance)
        self.page_count += 1

    @property
    def balances(self) -> BalanceMap:
        return dict(self._balances)

    @property
    def total(self) -> RawAmount:
        return sum(self._balances.values())

    def __len__(self) -> int:
        return len(self._balances)


def parse_balance(value: Any) -> RawAmount:
    """Interpret a coin balance given as a decimal string or an int."""
    if isinstance(value, bool):
        raise MalformedResponseError(f"Invalid coin balance: {value!r}")
    if isinstance(value, int):
        if value < 0:
            raise MalformedResponseError(f"Negative coin balance: {value}")
        return value
    if isinstance(value, str) and _DIGITS.fullmatch(value.strip()):
        return int(value.strip())
    raise MalformedResponseError(f"Invalid coin balance: {value!r}")


def _owner_address(node: dict[str, Any]) -> Address | None:
    owner = node.get("owner")
    if not isinstance(owner, dict):
        return None
    address = owner.get("address")
    if isinstance(address, dict):
        address = address.get("address")
    return address if isinstance(address, str) and address else None


def _coin_balance(node: dict[str, Any]) -> RawAmount:
    try:
        contents = node["asMoveObject"]["contents"]["json"]
        return parse_balance(contents["balance"])
    except (KeyError, TypeError):
        raise MalformedResponseError("Coin object is missing asMoveObject.contents.json.balance")


def parse_page(payload: dict[str, Any]) -> BalancePage:
    """
    Extract balances and paging info from an objects query response.

    Args:
        payload: Decoded GraphQL response

    Returns:
        BalancePage with one entry per coin object

    Raises:
        MalformedResponseError: If ``data.objects``, pageInfo, a coin owner
            address or a coin balance is absent or malformed
    """
    data = payload.get("data") if isinstance(payload, dict) else None
    connection = data.get("objects") if isinstance(data, dict) else None
    if not isinstance(connection, dict):
        raise MalformedResponseError("Missing data.objects in GraphQL response")

    entries: list[BalanceEntry] = []
    for node in connection.get("nodes") or []:
        if not isinstance(node, dict):
            raise MalformedResponseError(f"Unexpected node in data.objects: {node!r}")

        owner = _owner_address(node)
        if owner is None:
            raw_owner = node.get("owner")
            typename = raw_owner.get("__typename", "unknown") if isinstance(raw_owner, dict) else "unknown"
            raise MalformedResponseError(f"Coin object owner has no address ({typename})")

        entries.append(BalanceEntry(owner=owner, raw_balance=_coin_balance(node)))

    page_info = connection.get("pageInfo") or {}
    if not isinstance(page_info, dict):
        raise MalformedResponseError(f"Unexpected pageInfo: {page_info!r}")

    has_next_page = page_info.get("hasNextPage")
    if has_next_page is None:
        has_next_page = False
    end_cursor = page_info.get("endCursor")
    if not isinstance(has_next_page, bool):
        raise MalformedResponseError(f"Invalid pageInfo.hasNextPage: {has_next_page!r}")
    if end_cursor is not None and not isinstance(end_cursor, str):
        raise MalformedResponseError(f"Invalid pageInfo.endCursor: {end_cursor!r}")

    return BalancePage(entries=entries, has_next_page=has_next_page, end_cursor=end_cursor)


def aggregate(
    fetch_page: PageFetcher,
    accumulator: BalanceAccumulator | None = None,
) -> BalanceMap:
    """
    Page through all coin objects and sum balances by owner.

    Pages are requested sequentially; any fetch failure propagates.

    Args:
        fetch_page: Callable returning the GraphQL response for a cursor
        accumulator: Optional accumulator to fold into (lets callers read
                     the page count afterwards)

    Returns:
        Mapping of owner address to total raw balance
    """
    accumulator = accumulator if accumulator is not None else BalanceAccumulator()
    cursor: Cursor = None

    while True:
        page = parse_page(fetch_page(cursor))
        accumulator.add_page(page)
        logger.debug(
            f"Page {accumulator.page_count}: {len(page.entries)} coins, "
            f"{len(accumulator)} holders so far"
        )

        if not page.has_next_page:
            break

        if not page.end_cursor or page.end_cursor == cursor:
            raise MalformedResponseError(
                f"hasNextPage is set but endCursor does not advance ({page.end_cursor!r})"
            )
        cursor = page.end_cursor

    logger.info(f"Scanned {accumulator.page_count} pages: {len(accumulator)} holders")
    return accumulator.balances
