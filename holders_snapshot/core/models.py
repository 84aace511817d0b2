"""Pydantic data models for the holders snapshot tool.

All data structures are immutable (frozen) after creation. Amounts are
plain Python ints so balances and allocations never lose precision.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from .types import Address, DataSource, RawAmount


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BalanceEntry(BaseModel):
    """A single owner/balance pair extracted from a coin object."""

    owner: Address
    raw_balance: RawAmount = Field(ge=0)

    model_config = {"frozen": True}


class BalancePage(BaseModel):
    """One page of coin objects, reduced to what aggregation needs."""

    entries: list[BalanceEntry] = Field(default_factory=list)
    has_next_page: bool = False
    end_cursor: str | None = None

    model_config = {"frozen": True}


class HolderRow(BaseModel):
    """Aggregated balance for one owner."""

    address: Address
    raw_balance: RawAmount = Field(ge=0)

    model_config = {"frozen": True}


class AllocationPlan(BaseModel):
    """Result of a proportional airdrop split."""

    total_raw: RawAmount
    eligible_total_raw: RawAmount
    allocations: dict[Address, RawAmount]  # One entry per holder, excluded -> 0
    eligible_count: int
    excluded_count: int
    remainder_raw: RawAmount = 0  # Rounding dust added to the first eligible holder
    remainder_recipient: Address | None = None

    model_config = {"frozen": True}

    @property
    def allocated_raw(self) -> RawAmount:
        """Sum of all allocations (always equals total_raw)."""
        return sum(self.allocations.values())


class ReportRow(BaseModel):
    """A ranked, display-formatted holder line."""

    rank: int = Field(ge=1)
    address: Address
    balance: str
    airdrop_amount: str | None = None

    model_config = {"frozen": True}

    def as_fields(self) -> list[str]:
        """Field values in column order."""
        fields = [str(self.rank), self.address, self.balance]
        if self.airdrop_amount is not None:
            fields.append(self.airdrop_amount)
        return fields


class SnapshotReport(BaseModel):
    """Header plus ranked rows, ready for rendering."""

    header: list[str]
    rows: list[ReportRow] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def has_allocation(self) -> bool:
        return "airdrop_amount" in self.header


class AuditEntry(BaseModel):
    """Audit trail entry for a data fetch."""

    timestamp: datetime = Field(default_factory=_utcnow)
    source: DataSource
    action: str  # "fetch_page", "fetch_metadata"
    endpoint: str | None = None
    success: bool = True
    error_message: str | None = None
    duration_ms: int | None = None
    notes: str | None = None

    model_config = {"frozen": True}


class SnapshotResult(BaseModel):
    """Complete result of a holders snapshot run."""

    # Token identification
    coin_type: str
    object_type: str
    decimals: int = 0

    # Aggregated holders, ranked by descending balance
    holders: list[HolderRow] = Field(default_factory=list)
    total_raw_supply: RawAmount = 0
    page_count: int = 0

    # Optional airdrop
    allocation: AllocationPlan | None = None

    # Rendered rows
    report: SnapshotReport

    # Audit trail
    audit_trail: list[AuditEntry] = Field(default_factory=list)

    # Metadata
    snapshot_timestamp: datetime = Field(default_factory=_utcnow)
    tool_version: str = "0.1.0"

    model_config = {"frozen": True}

    @property
    def holder_count(self) -> int:
        return len(self.holders)
