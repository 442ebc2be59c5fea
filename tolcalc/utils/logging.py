"""Structured logging setup for the tolerance service."""

import json
import logging
import sys
from typing import Optional

# Structured fields attached through ``extra=`` by resolver and API
_STRUCTURED_FIELDS = [
    "mode",
    "reason",
    "nominal",
    "error_code",
]


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        data = {
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }
        for attr in _STRUCTURED_FIELDS:
            if hasattr(record, attr):
                data[attr] = getattr(record, attr)
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return json.dumps(data, ensure_ascii=False)


def setup_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """Install a single stdout handler on the root logger.

    ``level`` and ``fmt`` default to LOG_LEVEL / LOG_FORMAT from settings.
    """
    from tolcalc.core.config import get_settings

    settings = get_settings()
    level = (level or settings.LOG_LEVEL).upper()
    fmt = (fmt or settings.LOG_FORMAT).lower()

    root = logging.getLogger()
    root.setLevel(level)
    handler = logging.StreamHandler(sys.stdout)
    if fmt == "text":
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    else:
        handler.setFormatter(JsonFormatter())
    root.handlers = [handler]
