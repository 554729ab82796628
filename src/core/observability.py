"""
Structured Logging — JSON formatter и настройка логирования

Все записи содержат timestamp, level, logger, message.
Extra-поля движка (operation, account, error_code, amount_wei)
выводятся, если присутствуют в записи.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Optional

EXTRA_FIELDS = ("operation", "account", "error_code", "amount_wei")


class JSONFormatter(logging.Formatter):
    """JSON-формат для structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(
    level: str = "INFO",
    fmt: str = "json",
    logger: Optional[logging.Logger] = None,
) -> logging.Handler:
    """
    Настройка логирования (по умолчанию root logger).

    Args:
        level: Уровень логирования ("DEBUG", "INFO", ...)
        fmt: "json" или "text"
        logger: Целевой logger (None → root)

    Returns:
        Установленный handler
    """
    target = logger or logging.getLogger()

    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    target.addHandler(handler)
    target.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
