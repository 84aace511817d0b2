"""Output formatting module."""

from .formatters import (
    CSVFormatter,
    JSONFormatter,
    OutputFormatter,
    TableFormatter,
    get_formatter,
)
from .report import build_report, rank_holders

__all__ = [
    "OutputFormatter",
    "CSVFormatter",
    "JSONFormatter",
    "TableFormatter",
    "build_report",
    "get_formatter",
    "rank_holders",
]
