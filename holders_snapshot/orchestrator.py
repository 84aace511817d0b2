"""Main orchestrator for the holders snapshot pipeline.

Coordinates the provider, aggregator, allocation calculator and report
builder to produce a complete SnapshotResult from a coin type.
"""

import logging
from typing import Iterable

from .aggregator import BalanceAccumulator, aggregate
from .calculator.allocation import AirdropCalculator, normalize_exclusions
from .calculator.units import to_display, to_raw, validate_amount_syntax
from .core.config import SnapshotConfig, get_config
from .core.exceptions import ArgumentError
from .core.models import SnapshotResult
from .output.report import build_report, rank_holders
from .providers.sui_graphql import SuiGraphQLProvider, coin_object_type

logger = logging.getLogger(__name__)


class SnapshotOrchestrator:
    """Orchestrates a complete holders snapshot."""

    def __init__(
        self,
        provider: SuiGraphQLProvider | None = None,
        config: SnapshotConfig | None = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            provider: Data provider (built from config if not provided)
            config: Snapshot settings (global config if not provided)
        """
        self.config = config or get_config()
        self.provider = provider or SuiGraphQLProvider.from_config(self.config)
        self.airdrop_calculator = AirdropCalculator()

    def close(self) -> None:
        self.provider.close()

    def run(
        self,
        coin_type: str,
        airdrop_amount: str | None = None,
        excluded: Iterable[str] = (),
    ) -> SnapshotResult:
        """
        Take a holders snapshot and optionally split an airdrop.

        Args:
            coin_type: Coin type as ``PACKAGE::MODULE::TOKEN``
            airdrop_amount: Human-decimal amount to distribute, or None
            excluded: Addresses to leave out of the airdrop

        Returns:
            SnapshotResult with ranked holders and rendered report
        """
        coin_type = (coin_type or "").strip()
        if not coin_type or coin_type.startswith("--"):
            raise ArgumentError("Missing required coin address: <PACKAGE::MODULE::TOKEN>")

        excluded_set = normalize_exclusions(excluded)
        if excluded_set and airdrop_amount is None:
            raise ArgumentError("--exclude can only be used together with --airdrop")

        # Syntax errors surface before any network activity
        if airdrop_amount is not None:
            airdrop_amount = validate_amount_syntax(airdrop_amount)

        logger.info(f"Starting snapshot for: {coin_type}")
        self.provider.clear_audit_trail()

        # Step 1: Resolve decimals
        decimals = self.provider.fetch_decimals(coin_type)
        logger.info(f"Step 1: Coin decimals resolved to {decimals}")

        total_airdrop_raw = None
        if airdrop_amount is not None:
            total_airdrop_raw = to_raw(airdrop_amount, decimals)

        # Step 2: Aggregate balances
        logger.info("Step 2: Scanning coin objects...")
        accumulator = BalanceAccumulator()
        balances = aggregate(self.provider.page_fetcher(coin_type), accumulator)
        holders = rank_holders(balances)

        # Step 3: Allocate airdrop
        plan = None
        if total_airdrop_raw is not None:
            logger.info(
                f"Step 3: Allocating {to_display(total_airdrop_raw, decimals)} "
                f"({len(excluded_set)} addresses excluded)"
            )
            plan = self.airdrop_calculator.calculate(holders, total_airdrop_raw, excluded_set)

        # Step 4: Build report
        report = build_report(holders, decimals, plan.allocations if plan else None)

        return SnapshotResult(
            coin_type=coin_type,
            object_type=coin_object_type(coin_type),
            decimals=decimals,
            holders=holders,
            total_raw_supply=accumulator.total,
            page_count=accumulator.page_count,
            allocation=plan,
            report=report,
            audit_trail=self.provider.get_audit_trail(),
        )
