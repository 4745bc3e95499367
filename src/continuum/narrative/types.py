"""Canonical shared types for the narrative analysis subsystem.

Every record here is a frozen dataclass produced fresh per analysis run.
Other modules (dislocation.py, weights.py, inference.py, the report
assembler) import from here rather than redefining types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Severity(str, Enum):
    """Ordinal dislocation bucket: NORMAL < MODERATE < HIGH < CRITICAL."""

    NORMAL = "NORMAL"
    MODERATE = "MODERATE"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        return _SEVERITY_ORDER.index(self)

    def at_least(self, other: Severity) -> bool:
        """True if this severity is the same as or worse than ``other``."""
        return self.rank >= other.rank


_SEVERITY_ORDER = [
    Severity.NORMAL,
    Severity.MODERATE,
    Severity.HIGH,
    Severity.CRITICAL,
]


class Pattern(str, Enum):
    """Shape of the price move behind a dislocation."""

    NORMAL = "NORMAL"
    GAP_DOWN = "GAP_DOWN"
    DISTRIBUTION = "DISTRIBUTION"


class Confidence(str, Enum):
    """Qualitative confidence attached to a hypothesis weight."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class HypothesisTag(str, Enum):
    """Explanatory weighting schemes whose balance shifts with severity."""

    T1 = "T1"
    T2 = "T2"
    T3 = "T3"
    T4 = "T4"


@dataclass(frozen=True)
class PriceFacts:
    """Price inputs for a single ticker.

    Attributes
    ----------
    current_price : float
        Latest traded price.
    previous_price : float
        Previous close.
    peak_price : float
        Historical peak used for drawdown. Usually >= current_price but
        not enforced.
    price_history : tuple[float, ...]
        Chronological closes, may be empty.
    volume : float | None
        Today's traded volume, if known.
    volume_history : tuple[float, ...]
        Chronological daily volumes, may be empty.
    """

    current_price: float
    previous_price: float
    peak_price: float
    price_history: tuple[float, ...] = ()
    volume: float | None = None
    volume_history: tuple[float, ...] = ()


@dataclass(frozen=True)
class DislocationResult:
    """Output of the dislocation classifier.

    ``severity`` depends only on ``today_return_pct`` and ``drawdown_pct``.
    ``z_score`` and ``volume_ratio`` are informational and None when the
    history is too short to compute them.
    """

    severity: Severity
    today_return_pct: float
    drawdown_pct: float
    pattern: Pattern
    z_score: float | None = None
    volume_ratio: float | None = None


@dataclass(frozen=True)
class WeightRecord:
    """Long-term, short-term and blended weight for one hypothesis tag."""

    long_term: float
    short_term: float
    blended: float
    confidence: Confidence


@dataclass(frozen=True)
class Inference:
    """Which hypotheses the current severity supports or contradicts."""

    primary_hypothesis: HypothesisTag
    confidence: float
    secondary_hypothesis: HypothesisTag | None = None
    contradicted_hypothesis: HypothesisTag | None = None


@dataclass(frozen=True)
class TickerAnalysis:
    """Everything computed for one ticker in one run."""

    ticker: str
    dislocation: DislocationResult
    weights: dict[HypothesisTag, WeightRecord] = field(default_factory=dict)
    inference: Inference | None = None

    @property
    def severity(self) -> Severity:
        return self.dislocation.severity
