"""Tests for proportional airdrop allocation."""

import pytest

from holders_snapshot.calculator.allocation import (
    AirdropCalculator,
    allocate,
    normalize_exclusions,
)
from holders_snapshot.core.exceptions import NoEligibleHoldersError
from holders_snapshot.core.models import HolderRow

from conftest import ADDRESS_A, ADDRESS_B, ADDRESS_C


class TestAllocate:
    """Tests for the allocate function."""

    def test_remainder_goes_to_first_holder(self, equal_holders):
        result = allocate(equal_holders, 10)

        assert result == {ADDRESS_A: 4, ADDRESS_B: 3, ADDRESS_C: 3}
        assert sum(result.values()) == 10

    def test_proportional_split(self):
        rows = [
            HolderRow(address=ADDRESS_A, raw_balance=300),
            HolderRow(address=ADDRESS_B, raw_balance=100),
        ]
        assert allocate(rows, 1000) == {ADDRESS_A: 750, ADDRESS_B: 250}

    def test_excluded_address_gets_zero(self, equal_holders):
        result = allocate(equal_holders, 10, excluded={ADDRESS_A})

        assert result[ADDRESS_A] == 0
        assert result == {ADDRESS_A: 0, ADDRESS_B: 5, ADDRESS_C: 5}

    def test_exclusion_is_case_insensitive(self, equal_holders):
        result = allocate(equal_holders, 9, excluded={ADDRESS_B.upper()})

        assert result[ADDRESS_B] == 0
        assert sum(result.values()) == 9

    def test_remainder_skips_excluded_leader(self):
        rows = [
            HolderRow(address=ADDRESS_A, raw_balance=1000),
            HolderRow(address=ADDRESS_B, raw_balance=1),
            HolderRow(address=ADDRESS_C, raw_balance=1),
        ]
        result = allocate(rows, 3, excluded=[ADDRESS_A])

        # floor(3/2) = 1 each, dust of 1 goes to B (first eligible)
        assert result == {ADDRESS_A: 0, ADDRESS_B: 2, ADDRESS_C: 1}

    def test_only_holder_excluded(self):
        rows = [HolderRow(address=ADDRESS_A, raw_balance=100)]
        with pytest.raises(NoEligibleHoldersError):
            allocate(rows, 10, excluded={ADDRESS_A})

    def test_no_holders(self):
        with pytest.raises(NoEligibleHoldersError):
            allocate([], 10)

    def test_zero_total(self, equal_holders):
        assert allocate(equal_holders, 0) == {ADDRESS_A: 0, ADDRESS_B: 0, ADDRESS_C: 0}

    def test_negative_total_rejected(self, equal_holders):
        with pytest.raises(ValueError):
            allocate(equal_holders, -1)

    def test_large_values_are_exact(self):
        """Amounts far beyond float precision still sum exactly."""
        rows = [
            HolderRow(address=ADDRESS_A, raw_balance=10**40 + 1),
            HolderRow(address=ADDRESS_B, raw_balance=3 * 10**39 + 7),
            HolderRow(address=ADDRESS_C, raw_balance=17),
        ]
        total = 10**45 + 12345
        result = allocate(rows, total)

        assert sum(result.values()) == total
        assert all(0 <= share <= total for share in result.values())

    @pytest.mark.parametrize("total", [1, 2, 7, 99, 1000, 123457])
    def test_sum_is_exact_with_exclusions(self, total):
        rows = [
            HolderRow(address=f"0x{i:02x}", raw_balance=b)
            for i, b in enumerate([97, 53, 53, 11, 3, 1])
        ]
        result = allocate(rows, total, excluded={"0x01"})

        assert sum(result.values()) == total
        assert result["0x01"] == 0
        assert set(result) == {row.address for row in rows}


class TestAirdropCalculator:
    """Tests for the AllocationPlan produced by AirdropCalculator."""

    def test_plan_records_remainder(self, equal_holders):
        plan = AirdropCalculator().calculate(equal_holders, 10)

        assert plan.eligible_total_raw == 300
        assert plan.eligible_count == 3
        assert plan.excluded_count == 0
        assert plan.remainder_raw == 1
        assert plan.remainder_recipient == ADDRESS_A
        assert plan.allocated_raw == 10

    def test_plan_without_remainder(self, equal_holders):
        plan = AirdropCalculator().calculate(equal_holders, 30, excluded=[ADDRESS_C])

        assert plan.remainder_raw == 0
        assert plan.remainder_recipient is None
        assert plan.excluded_count == 1


def test_normalize_exclusions():
    assert normalize_exclusions([" 0xAB ", "", "  ", "0xcd"]) == {"0xab", "0xcd"}
