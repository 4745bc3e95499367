"""Continuum CLI -- runs the dislocation analysis and publishes the report.

Commands:
    analyze  -- Analyze a batch of tickers, write the JSON report, print a summary
    classify -- Classify a single set of prices without any input files

``analyze`` exits with code 1 when any CRITICAL dislocation is found so that
scheduled runs can trigger notifications, and with code 2 when an input file
is missing or malformed.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from continuum.cli.formatters import (
    format_dislocation_panel,
    format_results_table,
    format_summary_panel,
)
from continuum.config import settings
from continuum.errors import ConfigError, ContinuumError
from continuum.narrative.types import PriceFacts, Severity

app = typer.Typer(
    name="continuum",
    help="Continuum narrative framework: dislocation severity analysis",
    rich_markup_mode="rich",
)
console = Console()


@app.callback()
def main() -> None:
    """Continuum narrative framework: dislocation severity analysis."""


# ---------------------------------------------------------------------------
# analyze
# ---------------------------------------------------------------------------


@app.command()
def analyze(
    tickers: Optional[str] = typer.Option(
        None, help="Comma-separated tickers, or 'all' for every configured ticker"
    ),
    threshold: Severity = typer.Option(
        Severity.NORMAL,
        case_sensitive=False,
        help="Minimum severity included in the report results",
    ),
    output: Path = typer.Option(
        settings.DEFAULT_OUTPUT, help="Where to write the JSON report"
    ),
    history: Path = typer.Option(
        settings.DEFAULT_HISTORY, help="Price-history snapshot (JSON keyed by ticker)"
    ),
    live_prices: Path = typer.Option(
        settings.DEFAULT_LIVE_PRICES, help="Live-price overlay (JSON keyed by ticker)"
    ),
    config: Optional[Path] = typer.Option(
        None, help="Ticker registry JSON (defaults to the packaged registry)"
    ),
) -> None:
    """Analyze tickers, write the JSON report, and print a summary."""
    from continuum.config.tickers import load_ticker_registry
    from continuum.data.prices import PriceSource
    from continuum.report.assembler import ReportAssembler

    try:
        registry = load_ticker_registry(config)
        source = PriceSource.from_files(history, live_prices)
    except ConfigError as exc:
        console.print(
            Panel(
                f"[red]Cannot load inputs:[/red] {escape(str(exc))}",
                title="Analyze",
                border_style="red",
            )
        )
        raise typer.Exit(code=2)

    symbols = registry.resolve(tickers)
    assembler = ReportAssembler(
        price_source=source,
        registry=registry,
        threshold=threshold,
    )
    report = assembler.run(symbols)
    written = report.write(output)

    visible = report.visible()
    if visible:
        console.print(format_results_table(visible))
    else:
        console.print(f"[dim]No results at or above {threshold.value}.[/dim]")
    console.print(format_summary_panel(report.summary, written))

    if report.has_critical:
        raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# classify
# ---------------------------------------------------------------------------


@app.command()
def classify(
    current: float = typer.Option(..., help="Current price"),
    previous: float = typer.Option(..., help="Previous close"),
    peak: Optional[float] = typer.Option(
        None, help="Historical peak (defaults to the current price)"
    ),
    ticker: str = typer.Option("TICKER", help="Label for the output"),
) -> None:
    """Classify a single set of prices and print the result."""
    from continuum.narrative.dislocation import classify_dislocation

    facts = PriceFacts(
        current_price=current,
        previous_price=previous,
        peak_price=peak if peak is not None else current,
    )
    try:
        result = classify_dislocation(facts, ticker=ticker)
    except ContinuumError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=2)

    console.print(format_dislocation_panel(ticker, result))
