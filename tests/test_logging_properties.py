"""Property-based tests for logging configuration.

Every event written to the log file is a JSON line carrying the event
name, level and an ISO timestamp.
"""

import json
import logging
from datetime import datetime
from pathlib import Path

import pytest
import structlog
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from editlog.models.config import LoggingConfig
from editlog.utils.logging_config import configure_from_config, configure_logging, get_logger


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    for handler in list(logging.root.handlers):
        logging.root.removeHandler(handler)
        handler.close()
    structlog.reset_defaults()


def read_entries(log_file: Path) -> list[dict]:
    for handler in logging.root.handlers:
        handler.flush()
    lines = log_file.read_text(encoding="utf-8").splitlines()
    return [json.loads(line) for line in lines if line.strip()]


@given(
    level=st.sampled_from(["WARNING", "ERROR", "CRITICAL"]),
    message=st.text(min_size=1, max_size=200),
)
@settings(max_examples=25, suppress_health_check=[HealthCheck.function_scoped_fixture])
def test_file_log_entries_contain_required_fields(
    tmp_path: Path, level: str, message: str
) -> None:
    log_file = tmp_path / "tracker.log"
    log_file.unlink(missing_ok=True)
    configure_logging(log_level="DEBUG", json_logs=True, log_file=str(log_file))

    getattr(get_logger("test_logger"), level.lower())("flush_failed", error=message)

    entries = read_entries(log_file)
    assert len(entries) == 1
    entry = entries[0]
    assert entry["event"] == "flush_failed"
    assert entry["error"] == message
    assert entry["level"] == level.lower()
    datetime.fromisoformat(entry["timestamp"].replace("Z", "+00:00"))

    for handler in list(logging.root.handlers):
        logging.root.removeHandler(handler)
        handler.close()


def test_events_below_level_are_dropped(tmp_path: Path) -> None:
    log_file = tmp_path / "tracker.log"
    configure_logging(log_level="WARNING", json_logs=True, log_file=str(log_file))
    log = get_logger("test_logger")

    log.info("records_buffered", count=3)
    log.warning("flush_skipped_in_progress")

    assert [entry["event"] for entry in read_entries(log_file)] == ["flush_skipped_in_progress"]


def test_callsite_is_recorded(tmp_path: Path) -> None:
    log_file = tmp_path / "tracker.log"
    configure_logging(log_level="INFO", json_logs=True, log_file=str(log_file))

    get_logger("test_logger").info("tracker_started")

    entry = read_entries(log_file)[0]
    assert entry["func_name"] == "test_callsite_is_recorded"
    assert entry["filename"] == "test_logging_properties.py"


def test_noisy_libraries_are_quieted() -> None:
    configure_logging(log_level="DEBUG", json_logs=False)

    assert logging.getLogger("urllib3").level == logging.INFO
    assert logging.getLogger("watchdog").level == logging.INFO


def test_configure_from_config(tmp_path: Path) -> None:
    log_file = tmp_path / "tracker.log"

    configure_from_config(
        LoggingConfig(log_level="ERROR", json_logs=True, log_file=str(log_file))
    )
    get_logger("test_logger").error("remote_write_failed", name="logs.txt")

    entry = read_entries(log_file)[0]
    assert entry["event"] == "remote_write_failed"
    assert entry["name"] == "logs.txt"
    assert logging.root.level == logging.ERROR
