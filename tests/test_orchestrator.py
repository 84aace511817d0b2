"""Tests for the end-to-end snapshot pipeline with a fake provider."""

import pytest

from holders_snapshot.core.exceptions import (
    ArgumentError,
    InvalidAmountError,
    MalformedResponseError,
    NoEligibleHoldersError,
    PrecisionOverflowError,
)
from holders_snapshot.orchestrator import SnapshotOrchestrator

from conftest import ADDRESS_A, ADDRESS_B, COIN_TYPE, FakeProvider, make_page


def make_orchestrator(pages, config, decimals=0) -> tuple[SnapshotOrchestrator, FakeProvider]:
    provider = FakeProvider(pages, decimals=decimals)
    return SnapshotOrchestrator(provider=provider, config=config), provider


class TestSnapshotOrchestrator:
    """Tests for SnapshotOrchestrator.run."""

    def test_snapshot_without_airdrop(self, two_pages, config):
        orchestrator, _ = make_orchestrator(two_pages, config, decimals=2)

        result = orchestrator.run(COIN_TYPE)

        assert [(h.address, h.raw_balance) for h in result.holders] == [
            (ADDRESS_A, 125),
            (ADDRESS_B, 50),
        ]
        assert result.total_raw_supply == 175
        assert result.page_count == 2
        assert result.allocation is None
        assert result.report.header == ["rank", "address", "balance"]
        assert result.report.rows[0].balance == "1.25"
        assert result.object_type == f"0x2::coin::Coin<{COIN_TYPE}>"

    def test_snapshot_with_airdrop(self, two_pages, config):
        orchestrator, _ = make_orchestrator(two_pages, config, decimals=0)

        result = orchestrator.run(COIN_TYPE, airdrop_amount="10")

        # 10*125//175 = 7, 10*50//175 = 2, dust of 1 goes to A
        assert result.allocation.allocations == {ADDRESS_A: 8, ADDRESS_B: 2}
        assert [r.airdrop_amount for r in result.report.rows] == ["8", "2"]

    def test_exclusion(self, two_pages, config):
        orchestrator, _ = make_orchestrator(two_pages, config)

        result = orchestrator.run(COIN_TYPE, airdrop_amount="10", excluded=[ADDRESS_A.upper()])

        assert result.allocation.allocations == {ADDRESS_A: 0, ADDRESS_B: 10}

    def test_everyone_excluded(self, config):
        pages = {None: make_page([(ADDRESS_A, "100")])}
        orchestrator, _ = make_orchestrator(pages, config)

        with pytest.raises(NoEligibleHoldersError):
            orchestrator.run(COIN_TYPE, airdrop_amount="1", excluded=[ADDRESS_A])

    def test_invalid_amount_fails_before_network(self, two_pages, config):
        orchestrator, provider = make_orchestrator(two_pages, config)

        with pytest.raises(InvalidAmountError):
            orchestrator.run(COIN_TYPE, airdrop_amount="ten")
        assert provider.calls == []

    def test_precision_checked_before_paging(self, two_pages, config):
        orchestrator, provider = make_orchestrator(two_pages, config, decimals=2)

        with pytest.raises(PrecisionOverflowError):
            orchestrator.run(COIN_TYPE, airdrop_amount="1.2345")
        assert provider.calls == ["fetch_decimals"]

    def test_exclude_requires_airdrop(self, two_pages, config):
        orchestrator, provider = make_orchestrator(two_pages, config)

        with pytest.raises(ArgumentError):
            orchestrator.run(COIN_TYPE, excluded=[ADDRESS_A])
        assert provider.calls == []

    @pytest.mark.parametrize("coin_type", ["", "   ", "--airdrop"])
    def test_missing_coin_type(self, two_pages, config, coin_type):
        orchestrator, _ = make_orchestrator(two_pages, config)

        with pytest.raises(ArgumentError):
            orchestrator.run(coin_type)

    def test_malformed_page_aborts(self, config):
        orchestrator, _ = make_orchestrator({None: {"data": None}}, config)

        with pytest.raises(MalformedResponseError):
            orchestrator.run(COIN_TYPE)

    def test_audit_trail_collected(self, two_pages, config):
        orchestrator, _ = make_orchestrator(two_pages, config)

        result = orchestrator.run(COIN_TYPE)

        assert [e.action for e in result.audit_trail] == [
            "fetch_metadata",
            "fetch_page",
            "fetch_page",
        ]

    def test_close_releases_provider(self, two_pages, config):
        orchestrator, provider = make_orchestrator(two_pages, config)
        orchestrator.close()
        assert provider.closed
