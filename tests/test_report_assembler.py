"""Tests for batch orchestration and the JSON report document."""

from __future__ import annotations

import json

import pytest

from continuum.config.tickers import load_ticker_registry
from continuum.data.prices import PriceSource
from continuum.narrative.types import HypothesisTag, PriceFacts, Severity
from continuum.report.assembler import ReportAssembler, analyze_ticker

RUN_AT = "2026-01-05T06:00:00+00:00"
GENERATED_AT = "2026-01-05T06:00:05+00:00"


def _assembler(source: PriceSource, **kwargs) -> ReportAssembler:
    return ReportAssembler(price_source=source, clock=lambda: RUN_AT, **kwargs)


@pytest.fixture
def source(price_history, live_prices) -> PriceSource:
    history = dict(price_history)
    live = dict(live_prices)
    live["BAD"] = {"p": 10.0, "pc": 0.0}
    return PriceSource(history, live)


# ---------------------------------------------------------------------------
# analyze_ticker
# ---------------------------------------------------------------------------


class TestAnalyzeTicker:
    def test_critical_pipeline(self):
        facts = PriceFacts(current_price=55.0, previous_price=55.0, peak_price=100.0)
        analysis = analyze_ticker("ABC", facts)
        assert analysis.severity == Severity.CRITICAL
        assert analysis.inference.primary_hypothesis == HypothesisTag.T2
        assert set(analysis.weights) == set(HypothesisTag)

    def test_baselines_flow_into_weights(self):
        facts = PriceFacts(current_price=100.0, previous_price=100.0, peak_price=100.0)
        analysis = analyze_ticker("ABC", facts, {HypothesisTag.T4: 42.0})
        assert analysis.weights[HypothesisTag.T4].long_term == 42.0


# ---------------------------------------------------------------------------
# Batch run
# ---------------------------------------------------------------------------


class TestRun:
    def test_counts_and_errors(self, source):
        report = _assembler(source).run(["CSL", "DRO", "XRO", "ZZZ", "BAD"])
        summary = report.summary

        assert summary.run_at == RUN_AT
        assert summary.tickers_analyzed == 3
        assert summary.critical_dislocations == 1
        assert summary.high_dislocations == 0
        assert summary.moderate_dislocations == 0
        assert summary.normal == 2
        assert [e.ticker for e in summary.errors] == ["ZZZ", "BAD"]
        assert "previous_price" in summary.errors[1].error
        assert report.has_critical

    def test_batch_continues_after_failures(self, source):
        report = _assembler(source).run(["ZZZ", "BAD", "CSL"])
        assert [a.ticker for a in report.analyses] == ["CSL"]
        assert not report.has_critical

    def test_registry_baselines_applied(self, source, ticker_config_file):
        registry = load_ticker_registry(ticker_config_file)
        report = _assembler(source, registry=registry).run(["DRO", "CSL"])
        by_ticker = {a.ticker: a for a in report.analyses}
        assert by_ticker["DRO"].weights[HypothesisTag.T1].long_term == 50.0
        assert by_ticker["CSL"].weights[HypothesisTag.T1].long_term == 60.0

    def test_threshold_filters_results_not_counts(self, source):
        report = _assembler(source, threshold=Severity.HIGH).run(["CSL", "DRO", "XRO"])
        assert [a.ticker for a in report.visible()] == ["DRO"]
        assert report.summary.normal == 2

        document = report.to_document(GENERATED_AT)
        assert list(document["results"]) == ["DRO"]
        assert document["summary"]["tickersAnalyzed"] == 3


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------


class TestDocument:
    def test_top_level_shape(self, source):
        document = _assembler(source).run(["CSL", "DRO", "ZZZ"]).to_document(GENERATED_AT)
        assert set(document) == {"summary", "results", "generatedAt"}
        assert document["generatedAt"] == GENERATED_AT
        assert document["summary"] == {
            "runAt": RUN_AT,
            "tickersAnalyzed": 2,
            "criticalDislocations": 1,
            "highDislocations": 0,
            "moderateDislocations": 0,
            "normal": 1,
            "errors": [{"ticker": "ZZZ", "error": "no price history or live price available"}],
        }

    def test_critical_result_entry(self, source):
        document = _assembler(source).run(["DRO"]).to_document(GENERATED_AT)
        entry = document["results"]["DRO"]

        assert entry["ticker"] == "DRO"
        assert entry["severity"] == "CRITICAL"
        assert entry["pattern"] == "DISTRIBUTION"
        assert entry["metrics"]["todayReturn"] == -12.0
        assert entry["metrics"]["drawdown"] == -26.7
        assert entry["metrics"]["volumeRatio"] is None
        assert set(entry["weights"]) == {"T1", "T2", "T3", "T4"}
        assert entry["weights"]["T2"] == {
            "longTerm": 35.0,
            "shortTerm": 70.0,
            "blended": 59.5,
            "confidence": "HIGH",
        }
        assert entry["inference"] == {
            "primaryHypothesis": "T2",
            "secondaryHypothesis": "T3",
            "contradictedHypothesis": "T4",
            "confidence": 0.85,
        }

    def test_normal_result_has_null_secondary(self, source):
        document = _assembler(source).run(["CSL"]).to_document(GENERATED_AT)
        entry = document["results"]["CSL"]
        assert entry["severity"] == "NORMAL"
        assert entry["metrics"]["volumeRatio"] == 1.5
        assert entry["inference"]["secondaryHypothesis"] is None
        assert entry["inference"]["contradictedHypothesis"] is None

    def test_identical_runs_give_identical_documents(self, source):
        first = _assembler(source).run(["CSL", "DRO", "XRO"]).to_document(GENERATED_AT)
        second = _assembler(source).run(["CSL", "DRO", "XRO"]).to_document(GENERATED_AT)
        assert json.dumps(first) == json.dumps(second)

    def test_write_creates_parent_dirs(self, source, tmp_path):
        path = tmp_path / "nested" / "out" / "narrative-analysis.json"
        written = _assembler(source).run(["CSL"]).write(path, GENERATED_AT)
        assert written == path
        payload = json.loads(path.read_text())
        assert payload["results"]["CSL"]["severity"] == "NORMAL"
        assert payload["generatedAt"] == GENERATED_AT
