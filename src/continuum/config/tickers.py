"""Ticker registry: static characteristics for every analyzed ticker.

Loaded from a JSON data file (``tickers.json`` shipped with the package by
default) with this shape::

    {
      "default": ["PME", "XRO", ...],
      "tickers": {
        "PME": {"name": "Pro Medicus", "sector": "Health Care",
                "baselines": {"T1": 55}}
      }
    }

``baselines`` is optional and overrides the long-term hypothesis weights for
that ticker only.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated, Optional

from pydantic import BaseModel, Field, ValidationError

from continuum.config.settings import DEFAULT_TICKER_CONFIG
from continuum.errors import ConfigError
from continuum.narrative.types import HypothesisTag


@dataclass(frozen=True)
class TickerConfig:
    """Immutable configuration for a single ticker.

    Attributes
    ----------
    symbol : str
        Exchange ticker symbol (e.g., "CSL").
    name : str
        Company name for display.
    sector : str
        GICS-style sector label.
    baselines : dict[HypothesisTag, float]
        Long-term weight overrides per hypothesis tag. Empty means defaults.
    """

    symbol: str
    name: str = ""
    sector: str = ""
    baselines: dict[HypothesisTag, float] = field(default_factory=dict)


@dataclass(frozen=True)
class TickerRegistry:
    """All configured tickers plus the list analyzed when none are given."""

    tickers: dict[str, TickerConfig]
    default: tuple[str, ...] = ()

    def get(self, symbol: str) -> TickerConfig:
        """Return the config for ``symbol``, or a bare config if unknown."""
        return self.tickers.get(symbol, TickerConfig(symbol=symbol))

    def resolve(self, selection: str | None) -> list[str]:
        """Turn a ``--tickers`` value into an ordered list of symbols.

        ``None`` or an empty string selects the default list (every
        configured ticker if no default is set), ``"all"`` selects every
        configured ticker in file order, anything else is read as a
        comma-separated list. Symbols are upper-cased and de-duplicated.
        """
        if selection is None or not selection.strip():
            return list(self.default) if self.default else list(self.tickers)
        if selection.strip().lower() == "all":
            return list(self.tickers)

        symbols: list[str] = []
        for raw in selection.split(","):
            symbol = raw.strip().upper()
            if symbol and symbol not in symbols:
                symbols.append(symbol)
        return symbols


PositiveWeight = Annotated[float, Field(gt=0, allow_inf_nan=False)]


class TickerEntry(BaseModel):
    """One ticker's entry in the registry file."""

    name: str = Field(default="", description="Company name")
    sector: str = Field(default="", description="Sector label")
    baselines: dict[HypothesisTag, PositiveWeight] = Field(
        default_factory=dict,
        description="Long-term weight overrides keyed by hypothesis tag",
    )


class RegistryFile(BaseModel):
    """Top-level shape of the registry file."""

    default: list[str] = Field(default_factory=list)
    tickers: dict[str, Optional[TickerEntry]] = Field(default_factory=dict)


def load_ticker_registry(path: Path | str | None = None) -> TickerRegistry:
    """Load the ticker registry from a JSON file.

    Raises
    ------
    ConfigError
        If the file is missing or unreadable, is not valid JSON, or does not
        match the registry shape (unknown hypothesis tag, non-object entry,
        non-finite or non-positive baseline).
    """
    config_path = Path(path) if path is not None else DEFAULT_TICKER_CONFIG
    try:
        payload = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigError(f"ticker config not found: {config_path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"ticker config is unreadable: {config_path} ({exc})") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"ticker config is not valid JSON: {config_path} ({exc})") from exc

    try:
        parsed = RegistryFile.model_validate(payload)
    except ValidationError as exc:
        error = exc.errors()[0]
        location = ".".join(str(part) for part in error["loc"]) or "<root>"
        raise ConfigError(
            f"invalid ticker config {config_path}: {location}: {error['msg']}"
        ) from exc

    tickers: dict[str, TickerConfig] = {}
    for symbol, entry in parsed.tickers.items():
        entry = entry or TickerEntry()
        tickers[symbol.upper()] = TickerConfig(
            symbol=symbol.upper(),
            name=entry.name,
            sector=entry.sector,
            baselines=dict(entry.baselines),
        )

    default = tuple(s.upper() for s in parsed.default)
    return TickerRegistry(tickers=tickers, default=default)
