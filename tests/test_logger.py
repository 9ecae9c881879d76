"""Logger setup tests."""

import io
import json

import pytest
import structlog
from vende_client.config import LogSection
from vende_client.logger import configure_logging, new_logger


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


def _json_lines(text: str) -> list[dict]:
    return [json.loads(line) for line in text.splitlines() if line.strip()]


def test_json_lines_carry_logger_level_and_timestamp(capsys: pytest.CaptureFixture[str]) -> None:
    """JSON output goes to stdout with logger, level and timestamp keys."""
    logger = new_logger(level="INFO", format="json")
    logger.info("configured", answer=42)

    [line] = _json_lines(capsys.readouterr().out)
    assert line["event"] == "configured"
    assert line["answer"] == 42
    assert line["logger"] == "vende_client"
    assert line["level"] == "info"
    assert line["timestamp"].endswith("Z")


def test_level_filters_events() -> None:
    """Events below the configured level are dropped."""
    stream = io.StringIO()
    logger = new_logger(level="WARNING", format="json", stream=stream)
    logger.info("hidden")
    logger.warning("shown")

    assert [line["event"] for line in _json_lines(stream.getvalue())] == ["shown"]


def test_module_loggers_share_configuration() -> None:
    """Loggers of client modules write through the same handler."""
    stream = io.StringIO()
    new_logger(level="DEBUG", format="json", stream=stream)
    structlog.stdlib.get_logger("vende_client.retry").debug("from module", attempt=1)

    [line] = _json_lines(stream.getvalue())
    assert line["logger"] == "vende_client.retry"
    assert line["level"] == "debug"


def test_bound_context_is_rendered() -> None:
    """Values bound on the logger appear on every line."""
    stream = io.StringIO()
    logger = new_logger(format="json", stream=stream).bind(request_id=7)
    logger.info("first")
    logger.info("second")

    assert [line["request_id"] for line in _json_lines(stream.getvalue())] == [7, 7]


def test_text_format_is_not_json() -> None:
    """The text format renders key=value pairs."""
    stream = io.StringIO()
    new_logger(level="INFO", format="text", stream=stream).info("configured", answer=42)

    output = stream.getvalue()
    assert "configured" in output
    assert "answer=42" in output
    assert not output.lstrip().startswith("{")


def test_reconfigure_replaces_handler() -> None:
    """A second configuration does not duplicate output."""
    first = io.StringIO()
    second = io.StringIO()
    new_logger(format="json", stream=first)
    logger = new_logger(format="json", stream=second)
    logger.info("once")

    assert first.getvalue() == ""
    assert len(_json_lines(second.getvalue())) == 1


def test_configure_logging_from_section() -> None:
    """configure_logging applies the section level."""
    stream = io.StringIO()
    logger = configure_logging(LogSection(level="ERROR", format="json"), stream=stream)
    logger.warning("hidden")
    logger.error("shown")

    assert [line["level"] for line in _json_lines(stream.getvalue())] == ["error"]
