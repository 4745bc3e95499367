"""Console views of an analysis run.

Severity colours are shared by the results table, the run summary and the
single-ticker panel of ``continuum classify``. Nothing here prints; the
commands in ``continuum.cli.app`` hand the returned Table or Panel to the
console.
"""

from __future__ import annotations

from pathlib import Path

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from continuum.narrative.types import DislocationResult, Severity, TickerAnalysis
from continuum.report.assembler import Summary

SEVERITY_STYLES: dict[Severity, str] = {
    Severity.NORMAL: "green",
    Severity.MODERATE: "yellow",
    Severity.HIGH: "dark_orange",
    Severity.CRITICAL: "bold red",
}


def _severity_cell(severity: Severity) -> str:
    style = SEVERITY_STYLES[severity]
    return f"[{style}]{severity.value}[/{style}]"


def _optional(value: float | None, fmt: str) -> str:
    return "-" if value is None else format(value, fmt)


def format_results_table(analyses: list[TickerAnalysis]) -> Table:
    """Build a Rich Table with one row per analyzed ticker.

    Parameters
    ----------
    analyses : list[TickerAnalysis]
        Results to display, typically ``AnalysisReport.visible()``.
    """
    table = Table(title="Dislocation Analysis")
    table.add_column("Ticker", style="bold")
    table.add_column("Severity", justify="center")
    table.add_column("Return %", justify="right")
    table.add_column("Drawdown %", justify="right")
    table.add_column("Z", justify="right")
    table.add_column("Vol x", justify="right")
    table.add_column("Pattern")
    table.add_column("Primary", justify="center")

    for analysis in analyses:
        d = analysis.dislocation
        primary = analysis.inference.primary_hypothesis.value if analysis.inference else "-"
        table.add_row(
            analysis.ticker,
            _severity_cell(d.severity),
            f"{d.today_return_pct:+.2f}",
            f"{d.drawdown_pct:.1f}",
            _optional(d.z_score, ".2f"),
            _optional(d.volume_ratio, ".2f"),
            d.pattern.value,
            primary,
        )

    return table


def format_summary_panel(summary: Summary, output_path: Path | None = None) -> Panel:
    """Render the run summary: bucket counts, errors and output location."""
    text = Text()
    text.append(f"Analyzed: {summary.tickers_analyzed}\n")
    text.append(f"Critical: {summary.critical_dislocations}\n", style="bold red")
    text.append(f"High:     {summary.high_dislocations}\n", style="dark_orange")
    text.append(f"Moderate: {summary.moderate_dislocations}\n", style="yellow")
    text.append(f"Normal:   {summary.normal}\n", style="green")

    if summary.errors:
        text.append(f"\nErrors: {len(summary.errors)}\n", style="red")
        for failure in summary.errors:
            text.append(f"  {failure.ticker}: {failure.error}\n")

    if output_path is not None:
        text.append(f"\nOutput: {output_path}")

    border = "red" if summary.critical_dislocations else "green"
    return Panel(text, title="ANALYSIS COMPLETE", border_style=border)


def format_dislocation_panel(ticker: str, result: DislocationResult) -> Panel:
    """Render a single classification for the ``classify`` command."""
    lines = [
        f"Severity:   {_severity_cell(result.severity)}",
        f"Return:     {result.today_return_pct:+.2f}%",
        f"Drawdown:   {result.drawdown_pct:.1f}%",
        f"Pattern:    {result.pattern.value}",
    ]
    style = SEVERITY_STYLES[result.severity].split()[-1]
    return Panel("\n".join(lines), title=ticker, border_style=style)
