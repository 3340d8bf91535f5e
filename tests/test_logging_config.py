"""Tests for structured logging setup."""

import json

import pytest
import structlog

from kinesis_client.logging_config import configure_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


def test_json_logging(capsys):
    """Test JSON output carries event and context."""
    configure_logging("INFO", "json")

    structlog.get_logger("test").info("kinesis_request_sent", action="ListStreams")

    line = capsys.readouterr().err.strip().splitlines()[-1]
    record = json.loads(line)
    assert record["event"] == "kinesis_request_sent"
    assert record["action"] == "ListStreams"
    assert record["level"] == "info"


def test_level_filtering(capsys):
    """Test records below the configured level are dropped."""
    configure_logging("WARNING", "json")

    structlog.get_logger("test").info("hidden")

    assert capsys.readouterr().err == ""


@pytest.mark.parametrize("level, fmt", [("LOUD", "json"), ("INFO", "xml")])
def test_invalid_options(level, fmt):
    with pytest.raises(ValueError):
        configure_logging(level, fmt)
