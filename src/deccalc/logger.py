"""
Logging setup for DecCalc.

Console output always goes to stderr because stdout carries the MCP stdio
transport. An optional JSON-lines file receives every record together with
the structured fields passed through `extra=`.
"""

import datetime
import json
import logging
import sys
from typing import Any, Dict, Optional

LOGGER_NAME = "deccalc"

# Attributes every LogRecord has; anything else came in through `extra=`
_STANDARD_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
    "taskName",
}


class JsonLinesFormatter(logging.Formatter):
    """Format each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _STANDARD_ATTRS and not key.startswith("_"):
                entry[key] = value
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str, ensure_ascii=False)


def setup_logging(
    log_file: Optional[str] = None,
    level: int = logging.INFO,
    quiet_console: bool = True,
) -> None:
    """
    Configure the root logger.

    Args:
        log_file: Path of the JSON-lines log file, or None for no file
        level: Level for the file handler (and console when not quiet)
        quiet_console: Only show warnings and errors on the console
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.WARNING if quiet_console else level)
    console.setFormatter(
        logging.Formatter("%(asctime)s - %(levelname)s - %(name)s - %(message)s")
    )
    root.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(JsonLinesFormatter())
        root.addHandler(file_handler)

    # The MCP SDK is chatty at INFO
    logging.getLogger("mcp").setLevel(max(level, logging.WARNING))


def get_logger() -> logging.Logger:
    """Get the application logger."""
    return logging.getLogger(LOGGER_NAME)
