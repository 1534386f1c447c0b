# ============================================================================
# src/lab_report_extraction/utils/logging.py
# ============================================================================
"""
Logging setup for lab report extraction.

Every module logs through ``logging.getLogger(__name__)``. The CLI calls
``setup_logging`` once; library callers configure logging themselves.

Per-document context (the report being processed, the field a matcher is
working on) is attached to records with ``LogContext`` and rendered by
``JsonFormatter`` when JSON logs are enabled.
"""

import functools
import json
import logging
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, TextIO

PACKAGE_LOGGER = "lab_report_extraction"

# Record attributes that LogContext may set and JsonFormatter emits
CONTEXT_FIELDS = ("document", "field", "strategy")

TEXT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    format_json: bool = False,
    stream: Optional[TextIO] = None
) -> None:
    """
    Configure the root logger.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file that receives the same records as the console
        format_json: Emit one JSON object per record instead of plain text
        stream: Console stream; the CLI passes stderr so stdout stays JSON
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level}")

    formatter = JsonFormatter() if format_json else logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler(stream or sys.stdout)]
    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=log_level, handlers=handlers, force=True)


class JsonFormatter(logging.Formatter):
    """One JSON object per record, including any LogContext fields."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'function': record.funcName,
            'line': record.lineno
        }

        for key in CONTEXT_FIELDS:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


def get_logger(name: str) -> logging.Logger:
    """Logger under the package namespace (``__name__`` of a package module is returned as is)."""
    if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")


class LogContext:
    """
    Attach key/value context to every record created inside the block.

    Usage:
        with LogContext(logger, document="scan_01.txt"):
            orchestrator.extract(text, words)
    """

    def __init__(self, logger: logging.Logger, **context):
        self.logger = logger
        self.context = context
        self.old_factory = None

    def __enter__(self):
        self.old_factory = logging.getLogRecordFactory()
        old_factory = self.old_factory
        context = self.context

        def record_factory(*args, **kwargs):
            record = old_factory(*args, **kwargs)
            for key, value in context.items():
                setattr(record, key, value)
            return record

        logging.setLogRecordFactory(record_factory)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        logging.setLogRecordFactory(self.old_factory)


def log_performance(logger: logging.Logger, operation: str, level: int = logging.INFO):
    """
    Decorator that logs how long a call took, and re-raises failures after logging them.

    Args:
        logger: Logger instance
        operation: Label used in the message
        level: Level used for the success message
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error("%s failed after %.3fs: %s", operation, time.perf_counter() - started, e)
                raise
            logger.log(level, "%s completed in %.3fs", operation, time.perf_counter() - started)
            return result

        return wrapper
    return decorator
