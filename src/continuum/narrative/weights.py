"""Hypothesis weight generator: shifts T1-T4 weights toward divergence.

Each tag has a fixed long-term baseline and a divergence target. The
severity's stress factor decides how far the short-term weight moves from
baseline toward that target, and how much of the short-term weight flows
into the blended weight:

    short_term = long_term + stress * (target - long_term)
    blended    = long_term * (1 - w) + short_term * w,  w = 0.3 + 0.4 * stress

Under NORMAL severity stress is zero and every weight equals its baseline.
Under CRITICAL, T2 and T3 rise sharply with HIGH confidence while T4 drops
to LOW confidence.
"""

from __future__ import annotations

from collections.abc import Mapping

from continuum.narrative.types import (
    Confidence,
    HypothesisTag,
    Severity,
    WeightRecord,
)

DEFAULT_BASELINES: dict[HypothesisTag, float] = {
    HypothesisTag.T1: 60.0,
    HypothesisTag.T2: 35.0,
    HypothesisTag.T3: 20.0,
    HypothesisTag.T4: 50.0,
}

DIVERGENCE_TARGETS: dict[HypothesisTag, float] = {
    HypothesisTag.T1: 45.0,
    HypothesisTag.T2: 70.0,
    HypothesisTag.T3: 55.0,
    HypothesisTag.T4: 30.0,
}

STRESS_FACTORS: dict[Severity, float] = {
    Severity.NORMAL: 0.0,
    Severity.MODERATE: 0.25,
    Severity.HIGH: 0.5,
    Severity.CRITICAL: 1.0,
}

# Share of the short-term weight in the blend, at zero stress and per unit of stress
BLEND_BASE_WEIGHT = 0.3
BLEND_STRESS_WEIGHT = 0.4

CRITICAL_CONFIDENCE: dict[HypothesisTag, Confidence] = {
    HypothesisTag.T1: Confidence.MEDIUM,
    HypothesisTag.T2: Confidence.HIGH,
    HypothesisTag.T3: Confidence.HIGH,
    HypothesisTag.T4: Confidence.LOW,
}


def generate_weights(
    severity: Severity,
    baselines: Mapping[HypothesisTag, float] | None = None,
) -> dict[HypothesisTag, WeightRecord]:
    """Build one WeightRecord per hypothesis tag for the given severity.

    Parameters
    ----------
    severity : Severity
        Output of the dislocation classifier.
    baselines : Mapping[HypothesisTag, float] | None
        Per-ticker long-term overrides. Tags not present fall back to
        DEFAULT_BASELINES.

    Returns
    -------
    dict[HypothesisTag, WeightRecord]
        Ordered T1..T4.
    """
    stress = STRESS_FACTORS[severity]
    short_weight = BLEND_BASE_WEIGHT + BLEND_STRESS_WEIGHT * stress
    overrides = dict(baselines or {})

    weights: dict[HypothesisTag, WeightRecord] = {}
    for tag in HypothesisTag:
        long_term = round(float(overrides.get(tag, DEFAULT_BASELINES[tag])), 1)
        target = DIVERGENCE_TARGETS[tag]
        short_term = round(long_term + stress * (target - long_term), 1)
        blended = _clamp(
            round(long_term * (1 - short_weight) + short_term * short_weight, 1),
            long_term,
            short_term,
        )
        weights[tag] = WeightRecord(
            long_term=long_term,
            short_term=short_term,
            blended=blended,
            confidence=_confidence(severity, tag),
        )
    return weights


def _confidence(severity: Severity, tag: HypothesisTag) -> Confidence:
    if severity is Severity.CRITICAL:
        return CRITICAL_CONFIDENCE[tag]
    return Confidence.MEDIUM


def _clamp(value: float, a: float, b: float) -> float:
    """Keep ``value`` within [min(a, b), max(a, b)] after rounding."""
    return min(max(value, min(a, b)), max(a, b))
