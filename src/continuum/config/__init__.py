"""Configuration: default paths and the ticker registry."""

from continuum.config.tickers import (
    TickerConfig,
    TickerRegistry,
    load_ticker_registry,
)

__all__ = ["TickerConfig", "TickerRegistry", "load_ticker_registry"]
