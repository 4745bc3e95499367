"""Pydantic models for the JSON report document.

These schemas wrap the canonical types from continuum.narrative.types and
carry the camelCase wire names of the published document. Core types stay
plain dataclasses; only the serialization boundary depends on Pydantic.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from continuum.narrative.types import (
    Confidence,
    HypothesisTag,
    Pattern,
    Severity,
    TickerAnalysis,
)


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ErrorEntry(_WireModel):
    """A ticker that could not be analyzed."""

    ticker: str
    error: str


class SummarySchema(_WireModel):
    run_at: str = Field(alias="runAt", description="ISO 8601 UTC start of the run")
    tickers_analyzed: int = Field(
        alias="tickersAnalyzed", description="Tickers that produced a result"
    )
    critical_dislocations: int = Field(alias="criticalDislocations")
    high_dislocations: int = Field(alias="highDislocations")
    moderate_dislocations: int = Field(alias="moderateDislocations")
    normal: int
    errors: list[ErrorEntry] = Field(default_factory=list)


class MetricsSchema(_WireModel):
    today_return: float = Field(alias="todayReturn", description="Percent, 2 decimals")
    drawdown: float = Field(description="Percent from peak, 1 decimal")
    z_score: Optional[float] = Field(default=None, alias="zScore")
    volume_ratio: Optional[float] = Field(default=None, alias="volumeRatio")


class WeightSchema(_WireModel):
    long_term: float = Field(alias="longTerm")
    short_term: float = Field(alias="shortTerm")
    blended: float
    confidence: Confidence


class InferenceSchema(_WireModel):
    primary_hypothesis: HypothesisTag = Field(alias="primaryHypothesis")
    secondary_hypothesis: Optional[HypothesisTag] = Field(
        default=None, alias="secondaryHypothesis"
    )
    contradicted_hypothesis: Optional[HypothesisTag] = Field(
        default=None, alias="contradictedHypothesis"
    )
    confidence: float = Field(ge=0.0, le=1.0)


class TickerResultSchema(_WireModel):
    ticker: str
    severity: Severity
    metrics: MetricsSchema
    pattern: Pattern
    weights: dict[str, WeightSchema]
    inference: InferenceSchema

    @classmethod
    def from_analysis(cls, analysis: TickerAnalysis) -> TickerResultSchema:
        dislocation = analysis.dislocation
        inference = analysis.inference
        return cls(
            ticker=analysis.ticker,
            severity=dislocation.severity,
            metrics=MetricsSchema(
                today_return=dislocation.today_return_pct,
                drawdown=dislocation.drawdown_pct,
                z_score=dislocation.z_score,
                volume_ratio=dislocation.volume_ratio,
            ),
            pattern=dislocation.pattern,
            weights={
                tag.value: WeightSchema(
                    long_term=record.long_term,
                    short_term=record.short_term,
                    blended=record.blended,
                    confidence=record.confidence,
                )
                for tag, record in analysis.weights.items()
            },
            inference=InferenceSchema(
                primary_hypothesis=inference.primary_hypothesis,
                secondary_hypothesis=inference.secondary_hypothesis,
                contradicted_hypothesis=inference.contradicted_hypothesis,
                confidence=inference.confidence,
            ),
        )


class ReportDocument(_WireModel):
    """The complete published report."""

    summary: SummarySchema
    results: dict[str, TickerResultSchema]
    generated_at: str = Field(alias="generatedAt")
