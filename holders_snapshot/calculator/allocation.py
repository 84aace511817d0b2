"""Proportional airdrop allocation over ranked holders.

Shares are computed with exact integer arithmetic:

    share = floor(total_raw * balance / eligible_total_raw)

The rounding dust left by flooring goes to the first eligible holder in
rank order, so allocations always sum to exactly ``total_raw``.
"""

import logging
from typing import Iterable, Sequence

from ..core.exceptions import NoEligibleHoldersError
from ..core.models import AllocationPlan, HolderRow
from ..core.types import Address, AllocationMap, RawAmount

logger = logging.getLogger(__name__)


def normalize_exclusions(addresses: Iterable[str]) -> set[str]:
    """Trim and lower-case addresses, dropping empty items."""
    return {a.strip().lower() for a in addresses if a and a.strip()}


def allocate(
    rows: Sequence[HolderRow],
    total_raw: RawAmount,
    excluded: Iterable[Address] = (),
) -> AllocationMap:
    """
    Split ``total_raw`` across holders proportionally to their balances.

    Args:
        rows: Holders in rank order (the first eligible one absorbs dust)
        total_raw: Raw amount to distribute
        excluded: Addresses that receive nothing (matched case-insensitively)

    Returns:
        Mapping with one entry per row; excluded holders map to 0

    Raises:
        NoEligibleHoldersError: If eligible holders carry no balance
    """
    return AirdropCalculator().calculate(rows, total_raw, excluded).allocations


class AirdropCalculator:
    """Builds an AllocationPlan for a ranked list of holders."""

    def calculate(
        self,
        rows: Sequence[HolderRow],
        total_raw: RawAmount,
        excluded: Iterable[Address] = (),
    ) -> AllocationPlan:
        if total_raw < 0:
            raise ValueError(f"Total allocation must be non-negative, got {total_raw}")

        excluded_set = normalize_exclusions(excluded)
        eligible = [row for row in rows if row.address.lower() not in excluded_set]
        eligible_total = sum(row.raw_balance for row in eligible)

        if eligible_total == 0:
            raise NoEligibleHoldersError(
                holder_count=len(rows),
                excluded_count=len(rows) - len(eligible),
            )

        allocations: AllocationMap = {}
        allocated = 0
        for row in rows:
            if row.address.lower() in excluded_set:
                allocations[row.address] = 0
                continue

            share = total_raw * row.raw_balance // eligible_total
            allocations[row.address] = share
            allocated += share

        remainder = total_raw - allocated
        recipient = None
        if remainder > 0 and eligible:
            recipient = eligible[0].address
            allocations[recipient] += remainder
            logger.debug(f"Assigned rounding remainder {remainder} to {recipient}")

        logger.info(
            f"Allocated {total_raw} raw units across {len(eligible)} eligible holders "
            f"({len(rows) - len(eligible)} excluded)"
        )

        return AllocationPlan(
            total_raw=total_raw,
            eligible_total_raw=eligible_total,
            allocations=allocations,
            eligible_count=len(eligible),
            excluded_count=len(rows) - len(eligible),
            remainder_raw=remainder,
            remainder_recipient=recipient,
        )
