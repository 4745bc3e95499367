"""Report assembly: batch orchestration and the JSON report document.

Public API:
  - ReportAssembler: runs the analysis over a ticker list
  - AnalysisReport: summary plus per-ticker analyses, serializable
  - analyze_ticker: single-ticker analysis from PriceFacts
"""

from continuum.report.assembler import (
    AnalysisReport,
    ReportAssembler,
    Summary,
    TickerFailure,
    analyze_ticker,
)

__all__ = [
    "AnalysisReport",
    "ReportAssembler",
    "Summary",
    "TickerFailure",
    "analyze_ticker",
]
