"""Default file locations, overridable through the environment.

``CONTINUUM_DATA_DIR`` relocates every default input and output at once.
Individual CLI options still take precedence over these defaults.
"""

from __future__ import annotations

import os
from pathlib import Path

DATA_DIR: Path = Path(os.getenv("CONTINUUM_DATA_DIR", "data"))

DEFAULT_OUTPUT: Path = DATA_DIR / "narrative-analysis.json"
DEFAULT_HISTORY: Path = DATA_DIR / "price-history.json"
DEFAULT_LIVE_PRICES: Path = DATA_DIR / "live-prices.json"

# Packaged ticker registry shipped next to this module
DEFAULT_TICKER_CONFIG: Path = Path(__file__).resolve().parent / "tickers.json"
