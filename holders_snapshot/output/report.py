"""Ranking and display formatting of aggregated holders."""

import logging
from collections.abc import Iterable, Mapping

from ..calculator.units import to_display
from ..core.models import HolderRow, ReportRow, SnapshotReport
from ..core.types import Address, BalanceMap, RawAmount

logger = logging.getLogger(__name__)

BASE_HEADER = ["rank", "address", "balance"]
AIRDROP_COLUMN = "airdrop_amount"


def rank_holders(rows: Iterable[HolderRow] | BalanceMap) -> list[HolderRow]:
    """
    Order holders by descending raw balance.

    Equal balances keep their incoming order (first seen during paging).
    """
    if isinstance(rows, Mapping):
        rows = [HolderRow(address=a, raw_balance=b) for a, b in rows.items()]
    return sorted(rows, key=lambda row: row.raw_balance, reverse=True)


def build_report(
    rows: Iterable[HolderRow],
    decimals: int,
    allocations: Mapping[Address, RawAmount] | None = None,
) -> SnapshotReport:
    """
    Build ranked, display-formatted report rows.

    Args:
        rows: Holders in any order
        decimals: Coin decimals used for every amount
        allocations: Optional airdrop map; holders missing from it get 0

    Returns:
        SnapshotReport with header and one row per holder
    """
    header = list(BASE_HEADER)
    if allocations is not None:
        header.append(AIRDROP_COLUMN)

    report_rows = []
    for rank, row in enumerate(rank_holders(rows), start=1):
        airdrop = None
        if allocations is not None:
            airdrop = to_display(allocations.get(row.address, 0), decimals)
        report_rows.append(
            ReportRow(
                rank=rank,
                address=row.address,
                balance=to_display(row.raw_balance, decimals),
                airdrop_amount=airdrop,
            )
        )

    logger.debug(f"Built report with {len(report_rows)} rows")
    return SnapshotReport(header=header, rows=report_rows)
