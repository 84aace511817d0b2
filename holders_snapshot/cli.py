"""CLI entry point for the Sui Token Holders Snapshot tool.

Usage:
    holders-snapshot 0xabc::coin::COIN
    holders-snapshot 0xabc::coin::COIN --airdrop 1000000 --exclude 0x1,0x2
    holders-snapshot 0xabc::coin::COIN --format table --top 50
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from . import __version__
from .calculator.allocation import normalize_exclusions
from .core.config import SnapshotConfig
from .core.exceptions import MissingArgumentValueError, SnapshotError
from .core.types import OutputFormat
from .orchestrator import SnapshotOrchestrator
from .output.formatters import get_formatter

# Initialize app
app = typer.Typer(
    name="holders-snapshot",
    help="Snapshot Sui coin holders and compute proportional airdrops",
    add_completion=False,
)

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=False, show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


def check_option_value(option: str, value: Optional[str]) -> Optional[str]:
    """Reject blank values and values that are really the next flag."""
    if value is None:
        return None
    if not value.strip() or value.startswith("--"):
        raise MissingArgumentValueError(option)
    return value.strip()


def parse_exclude_list(value: Optional[str]) -> set[str]:
    """Split a comma-separated address list into lower-cased addresses."""
    value = check_option_value("--exclude", value)
    if value is None:
        return set()
    return normalize_exclusions(value.split(","))


def _airdrop_callback(value: Optional[str]) -> Optional[str]:
    try:
        return check_option_value("--airdrop", value)
    except MissingArgumentValueError as e:
        raise typer.BadParameter(e.message)


def _exclude_callback(value: Optional[str]) -> Optional[str]:
    try:
        check_option_value("--exclude", value)
    except MissingArgumentValueError as e:
        raise typer.BadParameter(e.message)
    return value


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"Holders Snapshot v{__version__}")
        raise typer.Exit()


@app.command()
def snapshot(
    coin_type: str = typer.Argument(..., help="Coin type, e.g. 0xabc::coin::COIN"),
    airdrop: Optional[str] = typer.Option(
        None,
        "--airdrop",
        help="Total amount to distribute proportionally (decimal, e.g. 1000.5)",
        callback=_airdrop_callback,
    ),
    exclude: Optional[str] = typer.Option(
        None,
        "--exclude",
        help="Comma-separated addresses excluded from the airdrop",
        callback=_exclude_callback,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output", "-o",
        help="Output file (default: holders.csv)",
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.CSV,
        "--format", "-f",
        case_sensitive=False,
        help="Output format: csv, json, table",
    ),
    top: int = typer.Option(
        25,
        "--top",
        min=1,
        help="Rows shown by the table format",
    ),
    endpoint: Optional[str] = typer.Option(
        None,
        "--endpoint",
        help="Sui GraphQL endpoint URL",
    ),
    page_size: Optional[int] = typer.Option(
        None,
        "--page-size",
        help="Objects per page (1-50)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Path to YAML settings file",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable verbose logging",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    Snapshot every holder of a coin and write a ranked report.

    Examples:
        holders-snapshot 0xabc::coin::COIN
        holders-snapshot 0xabc::coin::COIN --airdrop 500 --exclude 0xdead
    """
    setup_logging(verbose)

    try:
        excluded = parse_exclude_list(exclude)
        settings = SnapshotConfig.load(config).with_overrides(
            endpoint=endpoint,
            page_size=page_size,
            output_path=output,
        )

        orchestrator = SnapshotOrchestrator(config=settings)
        try:
            result = orchestrator.run(coin_type, airdrop_amount=airdrop, excluded=excluded)
        finally:
            orchestrator.close()

        formatter = get_formatter(output_format, top=top)

        if output_format == OutputFormat.TABLE:
            typer.echo(formatter.format(result), nl=False)
            if output is None:
                return

        save_path = settings.output_path
        if output is None:
            save_path = save_path.with_suffix(output_format.suffix)
        save_path.parent.mkdir(parents=True, exist_ok=True)
        formatter.format_to_file(result, str(save_path))

    except (SnapshotError, OSError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/]")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)

    console.print(f"[green]Wrote {output_format.value.upper()}: {escape(str(save_path))}[/]")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
