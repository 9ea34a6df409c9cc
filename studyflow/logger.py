"""Logger configuration for the study planner."""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def format_context(extra: dict) -> str:
    """Render bound log context as "key=value" pairs in a stable order."""
    return " ".join(f"{key}={extra[key]!r}" for key in sorted(extra))


def _formatter(base: str):
    """Build a loguru format callable that appends context only when present."""
    def format_record(record) -> str:
        if record["extra"]:
            record["extra"]["_context"] = format_context(
                {k: v for k, v in record["extra"].items() if k != "_context"}
            )
            return base + " | {extra[_context]}\n{exception}"
        return base + "\n{exception}"
    return format_record


def setup_logger(
    level: str = "INFO",
    log_file: Optional[str] = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """Configure loguru for the CLI and the API.

    Store operations log with keyword context (session_id, day, reason);
    both sinks print it after the message.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path (STUDYFLOW_LOG_FILE). Console only if None.
        rotation: Log rotation size (e.g., "10 MB", "1 day")
        retention: Log retention period (e.g., "7 days", "1 month")
    """
    logger.remove()

    logger.add(sys.stderr, format=_formatter(CONSOLE_FORMAT), level=level, colorize=True)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format=_formatter(FILE_FORMAT),
            level=level,
            rotation=rotation,
            retention=retention,
        )

    logger.debug("Logging configured", level=level, log_file=log_file)
