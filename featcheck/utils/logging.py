"""Centralized logging configuration using Loguru with Pino-compatible output.

Usage:
    from featcheck.utils.logging import logger
    logger.info("Message")
    logger.debug("Debug message")  # Only shows if FEATCHECK_LOG_LEVEL=DEBUG

Environment Variables:
    FEATCHECK_LOG_LEVEL: DEBUG|INFO|WARNING|ERROR (default: WARNING)
    FEATCHECK_LOG_JSON: 0|1 (default: 0, human-readable)
    FEATCHECK_LOG_FILE: path to log file (optional)
    FEATCHECK_REQUEST_ID: correlation ID for cross-process tracing

The default level is WARNING because the hidden-feature report is written to
stdout and CI logs should only carry the report unless asked otherwise.
"""

import json
import os
import sys
import uuid

from loguru import logger

# Remove default handler
logger.remove()

# Pino-compatible numeric levels
PINO_LEVELS = {
    "TRACE": 10,
    "DEBUG": 20,
    "INFO": 30,
    "WARNING": 40,
    "ERROR": 50,
    "CRITICAL": 60,
}

_log_level = os.environ.get("FEATCHECK_LOG_LEVEL", "WARNING").upper()
_json_mode = os.environ.get("FEATCHECK_LOG_JSON", "0") == "1"
_log_file = os.environ.get("FEATCHECK_LOG_FILE")
_request_id = os.environ.get("FEATCHECK_REQUEST_ID") or str(uuid.uuid4())


def _to_pino(record) -> dict:
    """Convert a loguru record to a Pino log object."""
    pino_log = {
        "level": PINO_LEVELS.get(record["level"].name, 30),
        "time": int(record["time"].timestamp() * 1000),
        "msg": record["message"],
        "pid": record["process"].id,
        "request_id": record["extra"].get("request_id", _request_id),
    }

    for key, value in record["extra"].items():
        if key != "request_id":
            pino_log[key] = value

    if record["exception"]:
        pino_log["err"] = {
            "type": record["exception"].type.__name__ if record["exception"].type else "Error",
            "message": str(record["exception"].value) if record["exception"].value else "",
        }
    return pino_log


def pino_compatible_sink(message):
    """Format log records as Pino-compatible NDJSON on stderr.

    stdout is reserved for the report, so machine logs go to stderr here.
    Never call logger.* inside a sink - causes infinite recursion.
    """
    sys.stderr.write(json.dumps(_to_pino(message.record), default=str) + "\n")
    sys.stderr.flush()


# Human-readable format (no emojis - Windows CP1252 compatibility)
_human_format = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}:{function}:{line}</cyan> - "
    "<level>{message}</level>"
)

logger.level("DEBUG", color="<blue>")
logger.level("INFO", color="<white>")
logger.level("WARNING", color="<yellow>")
logger.level("ERROR", color="<red>")
logger.level("CRITICAL", color="<red><bold>")

if _json_mode:
    logger.add(
        pino_compatible_sink,
        level=_log_level,
        colorize=False,
    )
else:
    logger.add(
        sys.stderr,
        level=_log_level,
        format=_human_format,
        colorize=None,  # Auto-detect: colors if TTY, plain if piped
    )

# Optional file handler (always NDJSON for machine parsing)
if _log_file:

    def _file_pino_sink(message):
        """Write Pino-format JSON to the configured log file."""
        with open(_log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(_to_pino(message.record), default=str) + "\n")

    logger.add(
        _file_pino_sink,
        level="DEBUG",  # File always captures everything
    )


def get_subprocess_env() -> dict:
    """Get environment dict with REQUEST_ID for subprocess calls.

    Example:
        env = get_subprocess_env()
        subprocess.run(["rg", "--json", pattern], env=env)
    """
    env = os.environ.copy()
    env["FEATCHECK_REQUEST_ID"] = _request_id
    return env


__all__ = [
    "logger",
    "get_subprocess_env",
]
