"""Dislocation classifier: buckets a ticker's price move into a severity level.

Severity is a pure function of two rounded percentages:

  - today's return: (current - previous) / previous * 100, 2 decimals
  - drawdown:       (current - peak) / peak * 100, 1 decimal

Rules are evaluated in priority order, first match wins, every comparison
strict:

  1. CRITICAL: |return| > 8  or drawdown < -40
  2. HIGH:     |return| > 5  or drawdown < -25
  3. MODERATE: |return| > 2
  4. NORMAL

The z-score and volume ratio are reported alongside but never feed the
severity.
"""

from __future__ import annotations

import math

import numpy as np

from continuum.errors import ComputationError
from continuum.narrative.types import (
    DislocationResult,
    Pattern,
    PriceFacts,
    Severity,
)


# ---------------------------------------------------------------------------
# Thresholds (percent)
# ---------------------------------------------------------------------------

CRITICAL_RETURN_THRESHOLD = 8.0
CRITICAL_DRAWDOWN_THRESHOLD = -40.0

HIGH_RETURN_THRESHOLD = 5.0
HIGH_DRAWDOWN_THRESHOLD = -25.0

MODERATE_RETURN_THRESHOLD = 2.0

# Minimum number of historical daily returns for z-scoring
MIN_HISTORY_FOR_ZSCORE = 10


def classify_dislocation(
    facts: PriceFacts,
    ticker: str | None = None,
) -> DislocationResult:
    """Classify one ticker's price facts.

    Parameters
    ----------
    facts : PriceFacts
        Current, previous and peak prices plus optional history.
    ticker : str | None
        Only used to label a ComputationError.

    Returns
    -------
    DislocationResult
        Severity, rounded return and drawdown percentages, pattern and the
        informational metrics.

    Raises
    ------
    ComputationError
        If any of the three prices is non-positive or not finite.
    """
    for label, value in (
        ("current_price", facts.current_price),
        ("previous_price", facts.previous_price),
        ("peak_price", facts.peak_price),
    ):
        if not _is_positive(value):
            raise ComputationError(ticker, f"{label} must be a positive number, got {value!r}")

    today_return_pct = round(
        (facts.current_price - facts.previous_price) / facts.previous_price * 100, 2
    )
    drawdown_pct = round(
        (facts.current_price - facts.peak_price) / facts.peak_price * 100, 1
    )

    severity = classify_severity(today_return_pct, drawdown_pct)

    return DislocationResult(
        severity=severity,
        today_return_pct=today_return_pct,
        drawdown_pct=drawdown_pct,
        pattern=_pattern(severity, today_return_pct),
        z_score=_return_zscore(
            today_return_pct, facts.current_price, facts.price_history
        ),
        volume_ratio=_volume_ratio(facts.volume, facts.volume_history),
    )


def classify_severity(today_return_pct: float, drawdown_pct: float) -> Severity:
    """Apply the priority-ordered severity rules."""
    abs_return = abs(today_return_pct)

    if abs_return > CRITICAL_RETURN_THRESHOLD or drawdown_pct < CRITICAL_DRAWDOWN_THRESHOLD:
        return Severity.CRITICAL

    if abs_return > HIGH_RETURN_THRESHOLD or drawdown_pct < HIGH_DRAWDOWN_THRESHOLD:
        return Severity.HIGH

    if abs_return > MODERATE_RETURN_THRESHOLD:
        return Severity.MODERATE

    return Severity.NORMAL


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _pattern(severity: Severity, today_return_pct: float) -> Pattern:
    if severity is Severity.CRITICAL:
        return Pattern.DISTRIBUTION
    if severity is Severity.HIGH and today_return_pct < 0:
        return Pattern.GAP_DOWN
    return Pattern.NORMAL


def _return_zscore(
    today_return_pct: float,
    current_price: float,
    price_history: tuple[float, ...],
) -> float | None:
    """Z-score today's return against historical daily returns.

    When the last close is the current price, the last return is today's
    own move and is left out of the sample.

    Returns None when there are fewer than MIN_HISTORY_FOR_ZSCORE returns,
    when the history holds a non-positive price, or when it has no variance.
    """
    if len(price_history) < MIN_HISTORY_FOR_ZSCORE + 1:
        return None

    closes = np.array(price_history, dtype=np.float64)
    if not np.all(np.isfinite(closes)) or np.any(closes <= 0):
        return None

    returns = np.diff(closes) / closes[:-1] * 100
    if closes[-1] == current_price:
        returns = returns[:-1]
    if len(returns) < MIN_HISTORY_FOR_ZSCORE:
        return None

    std = float(np.std(returns, ddof=0))
    if std < 1e-12:
        return None

    return round(float((today_return_pct - np.mean(returns)) / std), 2)


def _volume_ratio(
    volume: float | None,
    volume_history: tuple[float, ...],
) -> float | None:
    """Today's volume relative to the mean historical volume."""
    if volume is None or not volume_history:
        return None

    mean_volume = float(np.mean(np.array(volume_history, dtype=np.float64)))
    if not math.isfinite(mean_volume) or mean_volume <= 0:
        return None

    return round(float(volume) / mean_volume, 2)


def _is_positive(value: float) -> bool:
    try:
        return math.isfinite(value) and value > 0
    except TypeError:
        return False
