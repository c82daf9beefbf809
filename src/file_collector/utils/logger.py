from __future__ import annotations

import json
import logging
import os
import traceback
from datetime import datetime, timezone
from pathlib import Path

LOGGER_NAME = "file_collector"

_STANDARD_LOG_ATTRS = frozenset({
    "name", "msg", "args", "created", "relativeCreated", "exc_info", "exc_text",
    "stack_info", "lineno", "funcName", "levelno", "levelname", "pathname",
    "filename", "module", "thread", "threadName", "process", "processName",
    "message", "msecs", "taskName",
})


class JsonLineFormatter(logging.Formatter):
    """One JSON object per line.

    Collector failure records carry ``COLLECT_PATH`` and ``ERROR_TYPE``; these
    become the top-level ``path`` and ``error_type`` keys so a run log can be
    filtered by failure kind. Any other ``extra`` fields stay under ``extra``.
    """

    promoted = {"COLLECT_PATH": "path", "ERROR_TYPE": "error_type"}

    def format(self, record: logging.LogRecord) -> str:
        obj: dict = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        extra: dict = {}
        for k, v in record.__dict__.items():
            if k in _STANDARD_LOG_ATTRS or k.startswith("_"):
                continue
            if k in self.promoted:
                obj[self.promoted[k]] = v
            else:
                extra[k] = v
        if extra:
            obj["extra"] = extra
        if record.exc_info and record.exc_info[0] is not None:
            obj["traceback"] = traceback.format_exception(*record.exc_info)
        return json.dumps(obj, default=str)


def setup_file_handler(log_dir: Path, logger: logging.Logger | None = None) -> Path:
    """Add a JSON-lines file handler writing to *log_dir*/run.log at DEBUG level.

    Idempotent: an existing handler for the same file is reused. Returns the
    log file path.
    """
    logger = logger or logging.getLogger(LOGGER_NAME)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / "run.log"

    for h in logger.handlers:
        if isinstance(h, logging.FileHandler) and h.baseFilename == os.path.abspath(log_path):
            return log_path

    fh = logging.FileHandler(str(log_path), encoding="utf-8")
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(JsonLineFormatter())
    logger.addHandler(fh)
    if logger.level == logging.NOTSET or logger.level > logging.DEBUG:
        logger.setLevel(logging.DEBUG)
    return log_path


def setup_cli_logging(*, verbosity: int = 0) -> None:
    """Attach a RichHandler to the ``file_collector`` logger.

    Called from CLI entry-points only.

    *verbosity* mapping:
    - ``-1`` (quiet) → WARNING
    - ``0``          → INFO
    - ``1+`` (verbose) → DEBUG
    """
    from rich.logging import RichHandler

    level_map = {-1: logging.WARNING, 0: logging.INFO}
    level = level_map.get(verbosity, logging.DEBUG)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    for h in logger.handlers:
        if isinstance(h, RichHandler):
            h.setLevel(level)
            return

    handler = RichHandler(rich_tracebacks=True, markup=False, show_path=False)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
