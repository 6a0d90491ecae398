"""Tests for structured logging helpers."""

import json
import logging
import pytest
from freezegun import freeze_time

from marketplace.utils.logging_config import LoggingConfig
from marketplace.utils.logging import (
    correlation_context,
    get_correlation_id,
    get_structured_logger,
    log_timing,
    mask_email,
    mask_sensitive_data,
)


@pytest.mark.unit
def test_correlation_context_restores_previous():
    assert get_correlation_id() is None

    with correlation_context("req_outer") as outer:
        assert outer == "req_outer"
        with correlation_context() as inner:
            assert inner.startswith("req_")
            assert get_correlation_id() == inner
        assert get_correlation_id() == "req_outer"

    assert get_correlation_id() is None


@pytest.mark.unit
def test_mask_sensitive_data_hides_emails_and_keys():
    text = "contact renter@example.com with apikey=abcdefghijklmnopqrstuvwxyz"

    masked = mask_sensitive_data(text)

    assert "renter@example.com" not in masked
    assert "[REDACTED_EMAIL]" in masked
    assert "abcdefghijklmnopqrstuvwxyz" not in masked


@pytest.mark.unit
def test_mask_email_keeps_domain():
    assert mask_email("renter@example.com") == "r***@example.com"
    assert mask_email(None) is None


@pytest.mark.unit
@freeze_time("2024-12-09 12:00:00")
def test_structured_logger_adds_fields(caplog):
    logger = get_structured_logger("marketplace.tests")

    with caplog.at_level(logging.INFO, logger="marketplace.tests"):
        with correlation_context("req_abc"):
            logger.info("Fetched listings snapshot", count=3)

    record = caplog.records[-1]
    assert record.getMessage() == "Fetched listings snapshot"
    assert record.count == 3
    assert record.correlation_id == "req_abc"
    assert record.timestamp.startswith("2024-12-09T12:00:00")


@pytest.mark.unit
def test_log_timing_reports_duration(caplog):
    logger = get_structured_logger("marketplace.tests.timing")

    with caplog.at_level(logging.INFO, logger="marketplace.tests.timing"):
        with log_timing("listings.list_available", logger=logger, table="listings"):
            pass

    completed = [r for r in caplog.records if r.getMessage() == "Completed listings.list_available"]
    assert len(completed) == 1
    assert completed[0].table == "listings"
    assert completed[0].processing_time_ms >= 0


@pytest.mark.unit
def test_json_formatter_tags_service_and_level(monkeypatch):
    monkeypatch.setattr(LoggingConfig, "LOG_FORMAT", "json")
    formatter = LoggingConfig.build_formatter()
    record = logging.LogRecord("marketplace.test", logging.WARNING, __file__, 1, "slow upload", None, None)

    payload = json.loads(formatter.format(record))

    assert payload["service"] == "storage-marketplace"
    assert payload["level"] == "WARNING"
    assert payload["message"] == "slow upload"
    assert "timestamp" in payload


@pytest.mark.unit
def test_setup_logging_installs_single_stdout_handler(monkeypatch):
    monkeypatch.setattr(LoggingConfig, "_configured", False)
    root_logger = logging.getLogger()
    saved_handlers, saved_level = root_logger.handlers[:], root_logger.level

    try:
        LoggingConfig.setup_logging()
        LoggingConfig.setup_logging()

        assert len(root_logger.handlers) == 1
        assert logging.getLogger("postgrest").level == logging.WARNING
    finally:
        root_logger.handlers = saved_handlers
        root_logger.setLevel(saved_level)
