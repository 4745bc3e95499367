"""Shared test fixtures for the Continuum test suite."""

import json

import pytest
from pathlib import Path


# Ten closes drifting up to a peak of 120, then a slide to 100
RISING_THEN_FALLING = [
    100.0, 102.0, 101.0, 104.0, 107.0, 110.0, 113.0, 116.0, 120.0, 112.0, 105.0, 100.0,
]


@pytest.fixture
def price_history() -> dict:
    """Snapshot covering a calm ticker, a crashing ticker and a thin one."""
    return {
        "CSL": {
            "prices": [250.0, 251.0, 249.5, 250.5, 252.0, 251.5, 250.0, 251.0, 252.5, 251.0, 250.0, 251.0],
            "volumes": [1_000_000.0] * 12,
        },
        "DRO": RISING_THEN_FALLING,
        "XRO": [180.0],
    }


@pytest.fixture
def live_prices() -> dict:
    """Live overlay: CSL flat, DRO gapping down 12%, XRO up 1%."""
    return {
        "CSL": {"p": 251.5, "pc": 251.0, "v": 1_500_000},
        "DRO": {"p": 88.0, "pc": 100.0, "v": 9_000_000},
        "XRO": {"p": 181.8, "pc": 180.0},
    }


@pytest.fixture
def history_file(tmp_path: Path, price_history: dict) -> Path:
    path = tmp_path / "price-history.json"
    path.write_text(json.dumps(price_history))
    return path


@pytest.fixture
def live_file(tmp_path: Path, live_prices: dict) -> Path:
    path = tmp_path / "live-prices.json"
    path.write_text(json.dumps(live_prices))
    return path


@pytest.fixture
def ticker_config_file(tmp_path: Path) -> Path:
    """Small ticker registry with one baseline override."""
    path = tmp_path / "tickers.json"
    path.write_text(json.dumps({
        "default": ["CSL", "DRO"],
        "tickers": {
            "CSL": {"name": "CSL", "sector": "Health Care"},
            "DRO": {"name": "DroneShield", "sector": "Industrials", "baselines": {"T1": 50}},
            "XRO": {"name": "Xero", "sector": "Information Technology"},
        },
    }))
    return path
