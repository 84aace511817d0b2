"""Output formatters for snapshot results.

Provides multiple output formats:
- CSV: the holders file (rank,address,balance[,airdrop_amount])
- JSON: Machine-readable, complete data including the audit trail
- Table: Human-readable CLI output
"""

import io
import json
import logging
from abc import ABC, abstractmethod
from typing import Any

from rich.console import Console
from rich.table import Table

from ..calculator.units import to_display
from ..core.models import SnapshotResult
from ..core.types import OutputFormat

logger = logging.getLogger(__name__)


class OutputFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def format(self, result: SnapshotResult) -> str:
        """Format the result as a string."""
        pass

    def format_to_file(self, result: SnapshotResult, filepath: str) -> None:
        """Write formatted result to a file."""
        content = self.format(result)
        with open(filepath, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        logger.info(f"Wrote {len(result.report.rows)} rows to {filepath}")


class CSVFormatter(OutputFormatter):
    """Formats the holder report as comma-separated text."""

    def __init__(self, delimiter: str = ","):
        """
        Initialize CSV formatter.

        Args:
            delimiter: CSV delimiter
        """
        self.delimiter = delimiter

    def format(self, result: SnapshotResult) -> str:
        """Format result as CSV string, one line per holder."""
        lines = [self.delimiter.join(result.report.header)]
        # Fields are written verbatim, without quoting or escaping
        lines.extend(self.delimiter.join(row.as_fields()) for row in result.report.rows)
        return "\n".join(lines) + "\n"


class JSONFormatter(OutputFormatter):
    """Formats results as JSON."""

    def __init__(self, indent: int = 2, include_audit: bool = True):
        """
        Initialize JSON formatter.

        Args:
            indent: JSON indentation level
            include_audit: Include the audit trail in output
        """
        self.indent = indent
        self.include_audit = include_audit

    def format(self, result: SnapshotResult) -> str:
        """Format result as JSON string.

        Raw amounts are emitted as strings so consumers with 64-bit
        floats do not round them.
        """
        data: dict[str, Any] = result.model_dump(mode="json", exclude={"holders", "allocation"})
        if not self.include_audit:
            data.pop("audit_trail", None)

        data["holders"] = [
            {"address": h.address, "raw_balance": str(h.raw_balance)} for h in result.holders
        ]
        data["total_raw_supply"] = str(result.total_raw_supply)

        if result.allocation is not None:
            plan = result.allocation
            data["allocation"] = {
                "total_raw": str(plan.total_raw),
                "eligible_total_raw": str(plan.eligible_total_raw),
                "eligible_count": plan.eligible_count,
                "excluded_count": plan.excluded_count,
                "remainder_raw": str(plan.remainder_raw),
                "remainder_recipient": plan.remainder_recipient,
                "allocations": {a: str(v) for a, v in plan.allocations.items()},
            }
        else:
            data["allocation"] = None

        return json.dumps(data, indent=self.indent)


class TableFormatter(OutputFormatter):
    """Formats results as human-readable tables for CLI output."""

    def __init__(self, top: int | None = 25, width: int = 120, color: bool = True):
        """
        Initialize table formatter.

        Args:
            top: Show only the first N holders (None for all)
            width: Maximum table width
            color: Emit ANSI styling
        """
        self.top = top
        self.width = width
        self.color = color

    def format(self, result: SnapshotResult) -> str:
        """Format result as a rich table."""
        output = io.StringIO()
        console = Console(
            file=output,
            force_terminal=self.color,
            no_color=not self.color,
            width=self.width,
        )

        report = result.report
        rows = report.rows if self.top is None else report.rows[: self.top]

        table = Table(title=f"Holders of {result.coin_type}")
        table.add_column("Rank", justify="right", style="dim")
        table.add_column("Address", style="cyan")
        table.add_column("Balance", justify="right", style="green")
        if report.has_allocation:
            table.add_column("Airdrop", justify="right", style="magenta")

        for row in rows:
            table.add_row(*row.as_fields())

        console.print(table)

        supply = to_display(result.total_raw_supply, result.decimals)
        console.print(
            f"{result.holder_count} holders, total supply {supply} "
            f"(decimals={result.decimals}, pages={result.page_count})"
        )
        if len(rows) < len(report.rows):
            console.print(f"[dim]... {len(report.rows) - len(rows)} more holders not shown[/]")
        if result.allocation is not None:
            plan = result.allocation
            console.print(
                f"Airdrop {to_display(plan.total_raw, result.decimals)} across "
                f"{plan.eligible_count} eligible holders ({plan.excluded_count} excluded)"
            )

        return output.getvalue()

    def format_to_file(self, result: SnapshotResult, filepath: str) -> None:
        """Write formatted output to file."""
        # For file output, use plain format (no ANSI codes)
        old_color = self.color
        self.color = False
        try:
            super().format_to_file(result, filepath)
        finally:
            self.color = old_color


def get_formatter(output_format: OutputFormat, top: int | None = None) -> OutputFormatter:
    """Return the formatter for an output format."""
    if output_format == OutputFormat.JSON:
        return JSONFormatter()
    if output_format == OutputFormat.TABLE:
        return TableFormatter(top=top)
    return CSVFormatter()
