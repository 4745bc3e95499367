"""Price source: builds PriceFacts from a history snapshot and a live overlay.

Two JSON inputs, both keyed by ticker symbol, are produced by external
collectors and only read here:

    price-history.json   {"CSL": {"prices": [..], "volumes": [..]}}
                         (a bare list of closes is also accepted)
    live-prices.json     {"CSL": {"p": 231.4, "pc": 236.0, "v": 1520000}}

Resolution per ticker:
    current  = live ``p``  else last close
    previous = live ``pc``, else last close when ``p`` is live,
               else second-to-last close
    peak     = max(closes, current), or current when there is no history
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

import structlog
from pydantic import BaseModel, Field, ValidationError

from continuum.errors import ComputationError, ConfigError, MissingDataError
from continuum.narrative.types import PriceFacts

logger = structlog.get_logger()


class LiveQuote(BaseModel):
    """One live-price overlay entry."""

    p: Optional[float] = Field(default=None, description="Current price")
    pc: Optional[float] = Field(default=None, description="Previous close")
    v: Optional[float] = Field(default=None, description="Volume traded today")


class PriceSource:
    """In-memory view over a price-history snapshot and live-price overlay.

    Parameters
    ----------
    history : Mapping[str, Any]
        Ticker -> list of closes, or ticker -> {"prices", "volumes"}.
    live : Mapping[str, Any] | None
        Ticker -> {"p", "pc", "v"}. Optional.
    """

    def __init__(
        self,
        history: Mapping[str, Any],
        live: Mapping[str, Any] | None = None,
    ) -> None:
        self._history = {k.upper(): v for k, v in history.items()}
        self._live = {k.upper(): v for k, v in (live or {}).items()}

    @classmethod
    def from_files(
        cls,
        history_path: Path | str,
        live_path: Path | str | None = None,
    ) -> PriceSource:
        """Load both snapshots from disk.

        The history file is required. A missing live-price file is not an
        error, the overlay is simply empty.
        """
        history = _read_json(Path(history_path), required=True)
        live = _read_json(Path(live_path), required=False) if live_path else {}
        logger.info(
            "price_source_loaded",
            history_path=str(history_path),
            live_path=str(live_path) if live_path else None,
            history_tickers=len(history),
            live_tickers=len(live),
        )
        return cls(history, live)

    def build_price_facts(self, ticker: str) -> PriceFacts:
        """Resolve the PriceFacts for one ticker.

        Raises
        ------
        MissingDataError
            If neither source yields a current and a previous price.
        ComputationError
            If an entry exists but cannot be read as numbers.
        """
        symbol = ticker.upper()
        prices, volumes = self._history_series(symbol)
        quote = self._live_quote(symbol)

        if not prices and quote is None:
            raise MissingDataError(symbol, "no price history or live price available")

        live_current = quote is not None and quote.p is not None
        current = quote.p if live_current else None
        if current is None and prices:
            current = prices[-1]

        previous = quote.pc if quote is not None and quote.pc is not None else None
        if previous is None:
            # A live price is today's, so the last close is the previous one
            if live_current and prices:
                previous = prices[-1]
            elif not live_current and len(prices) >= 2:
                previous = prices[-2]

        if current is None:
            raise MissingDataError(symbol, "no current price available")
        if previous is None:
            raise MissingDataError(symbol, "no previous close available")

        peak = max(max(prices), current) if prices else current

        return PriceFacts(
            current_price=current,
            previous_price=previous,
            peak_price=peak,
            price_history=tuple(prices),
            volume=quote.v if quote is not None else None,
            volume_history=tuple(volumes),
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _history_series(self, symbol: str) -> tuple[list[float], list[float]]:
        entry = self._history.get(symbol)
        if entry is None:
            return [], []

        if isinstance(entry, Mapping):
            raw_prices = entry.get("prices", [])
            raw_volumes = entry.get("volumes", [])
        else:
            raw_prices, raw_volumes = entry, []

        try:
            prices = [float(p) for p in raw_prices]
            volumes = [float(v) for v in raw_volumes]
        except (TypeError, ValueError) as exc:
            raise ComputationError(symbol, f"malformed price history: {exc}") from exc
        return prices, volumes

    def _live_quote(self, symbol: str) -> LiveQuote | None:
        entry = self._live.get(symbol)
        if entry is None:
            return None
        try:
            return LiveQuote.model_validate(entry)
        except ValidationError as exc:
            raise ComputationError(
                symbol, f"malformed live price entry: {exc.errors()[0]['msg']}"
            ) from exc


def _read_json(path: Path, required: bool) -> dict:
    if not path.exists():
        if required:
            raise ConfigError(f"price file not found: {path}")
        logger.warning("price_file_missing", path=str(path))
        return {}
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"price file is unreadable: {path} ({exc})") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"price file is not valid JSON: {path} ({exc})") from exc
    if not isinstance(payload, dict):
        raise ConfigError(f"price file must hold an object keyed by ticker: {path}")
    return payload
