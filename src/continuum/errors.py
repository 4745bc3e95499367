"""Error hierarchy for per-ticker analysis failures.

Both errors are recoverable at the batch level: the report assembler records
them as ``{ticker, error}`` entries and moves on to the next ticker.
"""

from __future__ import annotations


class ContinuumError(Exception):
    """Base class for all analysis errors."""


class TickerError(ContinuumError):
    """An error attributable to a single ticker."""

    def __init__(self, ticker: str | None, message: str) -> None:
        self.ticker = ticker
        self.message = message
        super().__init__(f"{ticker}: {message}" if ticker else message)


class MissingDataError(TickerError):
    """No usable price facts exist for the ticker."""


class ComputationError(TickerError):
    """Price facts are present but numerically unusable (e.g. zero price)."""


class ConfigError(ContinuumError):
    """An input or configuration file is missing or malformed."""
