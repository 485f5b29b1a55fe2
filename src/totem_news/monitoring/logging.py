"""Logging for the totem-news CLI and proxy.

Records go to stderr as plain text by default, or as one JSON object per line
when ``monitoring.structured_logging`` is set, so proxy logs can be shipped
as-is. The HTTP client libraries log every upstream call at INFO; they are
held at WARNING unless the configured level is DEBUG.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
HTTP_LOGGERS = ("httpx", "httpcore")


class JSONFormatter(logging.Formatter):
    """Render a record as a single-line JSON object.

    ``extra={"extra_data": {...}}`` is emitted under ``data``.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        extra_data = getattr(record, "extra_data", None)
        if extra_data is not None:
            entry["data"] = extra_data
        return json.dumps(entry, default=str)


def setup_logging(
    *,
    structured: bool = False,
    log_file: Path | None = None,
    level: int | str = logging.INFO,
) -> None:
    """Configure the root logger for a CLI command.

    Args:
        structured: Emit JSON records instead of plain text.
        log_file: Also append records to this file, creating parent dirs.
        level: Logging level name or number (default INFO).
    """
    root = logging.getLogger()
    root.setLevel(level)

    # Each command calls this once; start from a clean handler list
    root.handlers.clear()

    formatter: logging.Formatter = JSONFormatter() if structured else logging.Formatter(PLAIN_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_file))
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    http_level = logging.DEBUG if root.level <= logging.DEBUG else logging.WARNING
    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)
