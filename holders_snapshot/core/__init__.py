"""Core module - data models, types, config and exceptions."""

from .models import (
    AllocationPlan,
    AuditEntry,
    BalanceEntry,
    BalancePage,
    HolderRow,
    ReportRow,
    SnapshotReport,
    SnapshotResult,
)
from .types import (
    Address,
    AllocationMap,
    BalanceMap,
    DataSource,
    OutputFormat,
    RawAmount,
)
from .exceptions import (
    ArgumentError,
    ConfigurationError,
    DataSourceError,
    InvalidAmountError,
    MalformedResponseError,
    MissingArgumentValueError,
    NoEligibleHoldersError,
    PrecisionOverflowError,
    RateLimitError,
    SnapshotError,
)
from .config import SnapshotConfig, get_config, reload_config

__all__ = [
    # Models
    "AllocationPlan",
    "AuditEntry",
    "BalanceEntry",
    "BalancePage",
    "HolderRow",
    "ReportRow",
    "SnapshotReport",
    "SnapshotResult",
    # Types
    "Address",
    "AllocationMap",
    "BalanceMap",
    "DataSource",
    "OutputFormat",
    "RawAmount",
    # Exceptions
    "ArgumentError",
    "ConfigurationError",
    "DataSourceError",
    "InvalidAmountError",
    "MalformedResponseError",
    "MissingArgumentValueError",
    "NoEligibleHoldersError",
    "PrecisionOverflowError",
    "RateLimitError",
    "SnapshotError",
    # Config
    "SnapshotConfig",
    "get_config",
    "reload_config",
]
