"""Inference engine: maps severity to supported and contradicted hypotheses."""

from __future__ import annotations

from continuum.narrative.types import HypothesisTag, Inference, Severity

CRITICAL_CONFIDENCE = 0.85
DEFAULT_CONFIDENCE = 0.6


def infer_hypotheses(severity: Severity) -> Inference:
    """Pick primary, secondary and contradicted hypotheses.

    A CRITICAL dislocation points at T2 with T3 in support and contradicts
    T4. Anything milder leaves the long-term T1 narrative in place.
    """
    if severity is Severity.CRITICAL:
        return Inference(
            primary_hypothesis=HypothesisTag.T2,
            secondary_hypothesis=HypothesisTag.T3,
            contradicted_hypothesis=HypothesisTag.T4,
            confidence=CRITICAL_CONFIDENCE,
        )

    return Inference(
        primary_hypothesis=HypothesisTag.T1,
        confidence=DEFAULT_CONFIDENCE,
    )
