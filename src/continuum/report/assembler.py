"""Report assembler: runs the narrative analysis over a batch of tickers.

For each ticker the assembler resolves PriceFacts from the price source,
classifies the dislocation, derives hypothesis weights and the inference,
and tallies the result into the summary. A ticker whose facts are missing or
unusable is recorded as an error entry and the batch carries on; nothing a
single ticker does can abort the run.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

import structlog

from continuum.config.tickers import TickerRegistry
from continuum.data.prices import PriceSource
from continuum.errors import TickerError
from continuum.narrative.dislocation import classify_dislocation
from continuum.narrative.inference import infer_hypotheses
from continuum.narrative.types import (
    HypothesisTag,
    PriceFacts,
    Severity,
    TickerAnalysis,
)
from continuum.narrative.weights import generate_weights
from continuum.report.schemas import (
    ErrorEntry,
    ReportDocument,
    SummarySchema,
    TickerResultSchema,
)

logger = structlog.get_logger()


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def analyze_ticker(
    ticker: str,
    facts: PriceFacts,
    baselines: Mapping[HypothesisTag, float] | None = None,
) -> TickerAnalysis:
    """Run classifier, weight generator and inference for one ticker."""
    dislocation = classify_dislocation(facts, ticker=ticker)
    return TickerAnalysis(
        ticker=ticker,
        dislocation=dislocation,
        weights=generate_weights(dislocation.severity, baselines),
        inference=infer_hypotheses(dislocation.severity),
    )


@dataclass(frozen=True)
class TickerFailure:
    """A ticker skipped during the run and why."""

    ticker: str
    error: str


@dataclass(frozen=True)
class Summary:
    """Counts of analyzed tickers per severity bucket plus the error list."""

    run_at: str
    tickers_analyzed: int = 0
    critical_dislocations: int = 0
    high_dislocations: int = 0
    moderate_dislocations: int = 0
    normal: int = 0
    errors: tuple[TickerFailure, ...] = ()


@dataclass(frozen=True)
class AnalysisReport:
    """Outcome of one batch run.

    ``analyses`` holds every successfully analyzed ticker in run order;
    ``threshold`` only decides which of them appear in the document's
    ``results`` block.
    """

    summary: Summary
    analyses: tuple[TickerAnalysis, ...] = ()
    threshold: Severity = Severity.NORMAL

    @property
    def has_critical(self) -> bool:
        return self.summary.critical_dislocations > 0

    def visible(self) -> list[TickerAnalysis]:
        """Analyses at or above the report threshold."""
        return [a for a in self.analyses if a.severity.at_least(self.threshold)]

    def to_document(self, generated_at: str | None = None) -> dict:
        """Build the JSON-serializable report document."""
        summary = self.summary
        document = ReportDocument(
            summary=SummarySchema(
                run_at=summary.run_at,
                tickers_analyzed=summary.tickers_analyzed,
                critical_dislocations=summary.critical_dislocations,
                high_dislocations=summary.high_dislocations,
                moderate_dislocations=summary.moderate_dislocations,
                normal=summary.normal,
                errors=[ErrorEntry(ticker=e.ticker, error=e.error) for e in summary.errors],
            ),
            results={a.ticker: TickerResultSchema.from_analysis(a) for a in self.visible()},
            generated_at=generated_at or _utc_now(),
        )
        return document.model_dump(mode="json", by_alias=True)

    def write(self, path: Path | str, generated_at: str | None = None) -> Path:
        """Write the document as indented JSON, creating parent directories."""
        output_path = Path(path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json.dumps(self.to_document(generated_at), indent=2))
        logger.info(
            "report_written",
            path=str(output_path),
            results=len(self.visible()),
            errors=len(self.summary.errors),
        )
        return output_path


_SEVERITY_COUNTERS = {
    Severity.CRITICAL: "critical_dislocations",
    Severity.HIGH: "high_dislocations",
    Severity.MODERATE: "moderate_dislocations",
    Severity.NORMAL: "normal",
}


@dataclass
class ReportAssembler:
    """Orchestrates the per-ticker analysis for a batch run.

    Parameters
    ----------
    price_source : PriceSource
        Supplies PriceFacts per ticker.
    registry : TickerRegistry | None
        Per-ticker baselines. None means default baselines for all.
    threshold : Severity
        Minimum severity shown in the document's results.
    clock : Callable[[], str]
        Returns the ISO timestamp used for ``runAt``.
    """

    price_source: PriceSource
    registry: TickerRegistry | None = None
    threshold: Severity = Severity.NORMAL
    clock: Callable[[], str] = field(default=_utc_now)

    def run(self, tickers: Iterable[str]) -> AnalysisReport:
        """Analyze every ticker, recording failures instead of raising."""
        run_at = self.clock()
        counts = {name: 0 for name in _SEVERITY_COUNTERS.values()}
        analyses: list[TickerAnalysis] = []
        failures: list[TickerFailure] = []

        for ticker in tickers:
            log = logger.bind(ticker=ticker)
            try:
                facts = self.price_source.build_price_facts(ticker)
                analysis = analyze_ticker(ticker, facts, self._baselines(ticker))
            except TickerError as exc:
                log.warning(
                    "ticker_skipped",
                    error_type=type(exc).__name__,
                    error=exc.message,
                )
                failures.append(TickerFailure(ticker=ticker, error=exc.message))
                continue

            counts[_SEVERITY_COUNTERS[analysis.severity]] += 1
            analyses.append(analysis)
            log.info(
                "ticker_analyzed",
                severity=analysis.severity.value,
                today_return_pct=analysis.dislocation.today_return_pct,
                drawdown_pct=analysis.dislocation.drawdown_pct,
            )

        summary = Summary(
            run_at=run_at,
            tickers_analyzed=len(analyses),
            errors=tuple(failures),
            **counts,
        )
        logger.info(
            "analysis_complete",
            analyzed=summary.tickers_analyzed,
            critical=summary.critical_dislocations,
            high=summary.high_dislocations,
            errors=len(failures),
        )
        return AnalysisReport(
            summary=summary,
            analyses=tuple(analyses),
            threshold=self.threshold,
        )

    def _baselines(self, ticker: str) -> Mapping[HypothesisTag, float] | None:
        if self.registry is None:
            return None
        return self.registry.get(ticker).baselines or None
