"""Narrative analysis core: dislocation severity, hypothesis weights, inference.

Public API:
  - classify_dislocation: price facts -> DislocationResult
  - generate_weights: severity -> T1..T4 WeightRecords
  - infer_hypotheses: severity -> Inference
"""

from continuum.narrative.dislocation import classify_dislocation, classify_severity
from continuum.narrative.inference import infer_hypotheses
from continuum.narrative.types import (
    Confidence,
    DislocationResult,
    HypothesisTag,
    Inference,
    Pattern,
    PriceFacts,
    Severity,
    TickerAnalysis,
    WeightRecord,
)
from continuum.narrative.weights import DEFAULT_BASELINES, generate_weights

__all__ = [
    "classify_dislocation",
    "classify_severity",
    "infer_hypotheses",
    "generate_weights",
    "DEFAULT_BASELINES",
    "Confidence",
    "DislocationResult",
    "HypothesisTag",
    "Inference",
    "Pattern",
    "PriceFacts",
    "Severity",
    "TickerAnalysis",
    "WeightRecord",
]
