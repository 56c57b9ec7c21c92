"""
App-layer JSONL logging bootstrap.
Attaches a single JSONL sink when a log path is configured.
"""

import json
import logging
import os
from datetime import UTC
from datetime import datetime
from pathlib import Path

LOG_PATH_ENV = "CODE_IMPORT_LOG_PATH"
LOG_LEVEL_ENV = "CODE_IMPORT_LOG_LEVEL"

# LogRecord attributes that are not user-supplied extras
_RECORD_FIELDS = frozenset(
    (
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "name",
    )
)


class JsonlHandler(logging.Handler):
    def __init__(self, path: str | Path):
        super().__init__()
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def format_record(self, record: logging.LogRecord) -> dict:
        base = {
            "ts": datetime.now(UTC).isoformat(timespec="milliseconds"),
            "lvl": record.levelname,
            "schema": {"name": "code-import.log", "ver": "1.0.0"},
            "logger": record.name,
            "message": record.getMessage(),
        }
        if isinstance(record.msg, dict):
            base.update(record.msg)
        for k, v in record.__dict__.items():
            if k in _RECORD_FIELDS:
                continue
            base.setdefault(k, v)
        if record.exc_info:
            base["exc"] = logging.Formatter().formatException(record.exc_info)
        return base

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = json.dumps(self.format_record(record), ensure_ascii=False, default=str)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
        except Exception:
            self.handleError(record)


def init_json_logging(path: str | Path | None = None, level: str | None = None) -> JsonlHandler | None:
    """Attach the JSONL sink to the root logger.

    Args:
        path: Log file (default: $CODE_IMPORT_LOG_PATH; no sink if unset)
        level: Level name (default: $CODE_IMPORT_LOG_LEVEL or INFO)

    Returns:
        The installed handler, or None when no path is configured
    """
    path = path or os.environ.get(LOG_PATH_ENV)
    level = (level or os.environ.get(LOG_LEVEL_ENV, "INFO")).upper()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level, logging.INFO))
    # Remove existing handlers of the same kind to avoid duplicates
    for h in list(root.handlers):
        if isinstance(h, JsonlHandler):
            root.removeHandler(h)
            h.close()
    if not path:
        return None
    handler = JsonlHandler(path)
    root.addHandler(handler)
    return handler
