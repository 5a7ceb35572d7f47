"""Logging configuration for deepset.

Library modules only call ``logging.getLogger(__name__)`` and attach the
structured fields listed in ``RECORD_FIELDS`` through ``extra``. Nothing here
runs on import; applications that want deepset's debug output (hash
collisions, clones, derived sets) call ``setup_logging`` once.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

# Fields deepset attaches to its records via ``extra``
RECORD_FIELDS = ("operation", "size", "hash_key", "bucket_size", "operands")

_PLAIN_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class JSONFormatter(logging.Formatter):
    """One JSON object per record, carrying deepset's structured fields."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in RECORD_FIELDS:
            if hasattr(record, key):
                log_obj[key] = getattr(record, key)

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj, ensure_ascii=False, default=repr)


class ConsoleFormatter(logging.Formatter):
    """Colors the level name when writing to a terminal."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        original = record.levelname
        if original in self.COLORS:
            record.levelname = f"{self.COLORS[original]}{original}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def setup_logging(
    name: str = "deepset",
    level: str = "WARNING",
    console: bool = True,
    log_file: Optional[Union[str, Path]] = None,
    json_format: bool = True,
) -> logging.Logger:
    """
    Attach handlers to the ``deepset`` logger tree.

    Calling it again replaces the handlers instead of stacking them.

    Args:
        name: Logger name
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console: Write to stderr
        log_file: Optional file to append records to
        json_format: Write the file as JSON lines instead of plain text

    Returns:
        Configured logger instance
    """
    numeric_level = getattr(logging, level.upper())
    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.propagate = False

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        formatter_cls = ConsoleFormatter if sys.stderr.isatty() else logging.Formatter
        console_handler.setFormatter(formatter_cls(_PLAIN_FORMAT, datefmt=_DATE_FORMAT))
        logger.addHandler(console_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        if json_format:
            file_handler.setFormatter(JSONFormatter())
        else:
            file_handler.setFormatter(logging.Formatter(_PLAIN_FORMAT, datefmt=_DATE_FORMAT))
        logger.addHandler(file_handler)

    return logger


def setup_logging_from_config(config, **kwargs) -> logging.Logger:
    """Setup logging at the level named by a DeepSetConfig."""
    return setup_logging(level=config.log_level, **kwargs)
