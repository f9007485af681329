"""Tests for structured logging and Prometheus metrics."""

import pytest
import structlog
from structlog.testing import capture_logs

from selection_analysis.analysis.analyzer import CACHE_NAME, SelectionAnalyzer
from selection_analysis.analysis.exceptions import InvalidUserProfileError
from selection_analysis.core import logging as log_config
from selection_analysis.core.metrics import export_metrics, registry


def sample(name, labels=None):
    return registry.get_sample_value(name, labels or {}) or 0.0


@pytest.fixture
def analyzer(clock):
    return SelectionAnalyzer(clock=clock)


class TestMetrics:
    """Analysis outcomes and cache activity are counted."""

    def test_success_then_cache_hit(self, analyzer, profile, selections, context):
        success = sample("selection_analyses_total", {"outcome": "success"})
        hits = sample("selection_analyses_total", {"outcome": "cache_hit"})
        cache_hits = sample("cache_hits_total", {"cache_type": CACHE_NAME})

        analyzer.analyze_selections(profile, selections, context)
        analyzer.analyze_selections(profile, selections, context)

        assert sample("selection_analyses_total", {"outcome": "success"}) == success + 1
        assert sample("selection_analyses_total", {"outcome": "cache_hit"}) == hits + 1
        assert sample("cache_hits_total", {"cache_type": CACHE_NAME}) == cache_hits + 1

    def test_errors_counted(self, analyzer, selections):
        errors = sample("selection_analyses_total", {"outcome": "error"})
        with pytest.raises(InvalidUserProfileError):
            analyzer.analyze_selections(None, selections)
        assert sample("selection_analyses_total", {"outcome": "error"}) == errors + 1

    def test_factor_scores_observed(self, analyzer, profile, selections):
        before = sample("selection_factor_score_count", {"factor": "duration_fit"})
        analyzer.analyze_selections(profile, selections)
        assert sample("selection_factor_score_count", {"factor": "duration_fit"}) == before + 1

    def test_export(self, analyzer, profile, selections):
        analyzer.analyze_selections(profile, selections)
        text = export_metrics().decode()

        assert "selection_analyses_total" in text
        assert "selection_analysis_duration_seconds_bucket" in text


class TestStructuredLogging:
    """Structured events emitted by the aggregator."""

    def test_completed_event(self, analyzer, profile, selections):
        with capture_logs() as logs:
            analyzer.analyze_selections(profile, selections)

        completed = [e for e in logs if e["event"] == "selection_analysis_completed"]
        assert len(completed) == 1
        assert completed[0]["user_id"] == "user-1"
        assert completed[0]["log_level"] == "info"

    def test_factor_logs_at_debug_by_default(self, analyzer, profile, selections):
        with capture_logs() as logs:
            analyzer.analyze_selections(profile, selections)

        factor_logs = [e for e in logs if e["event"] == "factor_scored"]
        assert len(factor_logs) == 5
        assert {e["log_level"] for e in factor_logs} == {"debug"}

    def test_detailed_logging_raises_factor_level(self, clock, profile, selections):
        analyzer = SelectionAnalyzer(clock=clock)
        analyzer.update_config({"logging": {"detailed": True}})

        with capture_logs() as logs:
            analyzer.analyze_selections(profile, selections)

        assert {e["log_level"] for e in logs if e["event"] == "factor_scored"} == {"info"}

    def test_failure_logged(self, analyzer, selections):
        with capture_logs() as logs:
            with pytest.raises(InvalidUserProfileError):
                analyzer.analyze_selections(None, selections)

        failed = [e for e in logs if e["event"] == "selection_analysis_failed"]
        assert failed[0]["error_type"] == "INVALID_USER_PROFILE"


class TestLoggingConfiguration:
    """structlog setup helpers."""

    def test_configure_logging(self):
        try:
            log_config.configure_logging()
            assert structlog.is_configured()
        finally:
            structlog.reset_defaults()

    def test_log_context(self):
        log_config.add_log_context(request_id="r-1")
        try:
            assert structlog.contextvars.get_contextvars() == {"request_id": "r-1"}
        finally:
            log_config.clear_log_context()
        assert structlog.contextvars.get_contextvars() == {}
