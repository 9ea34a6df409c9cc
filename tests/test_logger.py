"""Tests for logging setup."""

from loguru import logger

from studyflow.logger import format_context, setup_logger


def test_format_context():
    """Test context rendering."""
    assert format_context({}) == ""
    assert format_context({"day": "monday", "conflicts": 2}) == "conflicts=2 day='monday'"


def test_file_sink_includes_context(tmp_path):
    """Test that the log file carries keyword context."""
    log_file = tmp_path / "logs" / "studyflow.log"
    setup_logger(level="INFO", log_file=str(log_file))
    try:
        logger.info("Deleted session", session_id="abc123")
        logger.info("Plain message")
    finally:
        logger.remove()

    lines = log_file.read_text().splitlines()
    assert any("Deleted session | session_id='abc123'" in line for line in lines)
    assert any(line.endswith("Plain message") for line in lines)


def test_level_filters_file_sink(tmp_path):
    """Test that messages below the level are dropped."""
    log_file = tmp_path / "studyflow.log"
    setup_logger(level="WARNING", log_file=str(log_file))
    try:
        logger.info("Created session", session_id="x")
        logger.warning("Stored sessions are not a list; starting empty")
    finally:
        logger.remove()

    text = log_file.read_text()
    assert "Created session" not in text
    assert "starting empty" in text
