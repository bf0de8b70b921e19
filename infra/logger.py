"""
Logging setup shared by every entrypoint.

Call ``configure_logging`` once at startup, then use ``get_logger(__name__)``
in modules. The bot writes protocol messages to stdout, so its logs must go
to stderr (the default stream here).
"""

from __future__ import annotations

import json
import logging
import sys
import time
from pathlib import Path
from typing import IO, Any, Dict, Optional

from .paths import LOG_DIR, STORAGE_DIR

__all__ = ["STORAGE_DIR", "LOG_DIR", "JsonFormatter", "configure_logging", "get_logger"]

_TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """Render each record as a single JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created)),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_logging(
    level: str | int = "INFO",
    json: bool = False,
    stream: Optional[IO[str]] = None,
    log_file: str | Path | None = None,
) -> None:
    """
    Configure the root logger.

    Args:
        level: Log level name or number
        json: Emit one JSON object per line instead of plain text
        stream: Console stream (default: stderr)
        log_file: Optional file to also write to; relative paths land in
            storage/logs
    """
    formatter: logging.Formatter = JsonFormatter() if json else logging.Formatter(_TEXT_FORMAT)

    handlers: list[logging.Handler] = []
    console = logging.StreamHandler(stream or sys.stderr)
    console.setFormatter(formatter)
    handlers.append(console)

    if log_file is not None:
        path = Path(log_file)
        if not path.is_absolute():
            path = LOG_DIR / path
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
