"""Type definitions and enums for the holders snapshot tool."""

from enum import Enum


class DataSource(str, Enum):
    """Data source identifiers."""

    SUI_GRAPHQL = "sui_graphql"
    UNKNOWN = "unknown"


class OutputFormat(str, Enum):
    """Supported report output formats."""

    CSV = "csv"
    JSON = "json"
    TABLE = "table"

    @property
    def suffix(self) -> str:
        """File suffix used when saving this format."""
        suffixes = {
            self.CSV: ".csv",
            self.JSON: ".json",
            self.TABLE: ".txt",
        }
        return suffixes[self]


# Type aliases for common patterns
Address = str          # Owner address, case preserved as received
RawAmount = int        # Smallest indivisible unit, arbitrary precision
BalanceMap = dict[Address, RawAmount]
AllocationMap = dict[Address, RawAmount]
Cursor = str | None    # Opaque pagination cursor
