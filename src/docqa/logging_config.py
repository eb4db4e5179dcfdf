"""Application logging configuration utilities."""

from __future__ import annotations

import json
import logging
import logging.config
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


class MinimalJSONFormatter(logging.Formatter):
    """Serialize log records to a compact JSON string."""

    _RESERVED_KEYS = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - inherited
        timestamp = (
            datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat()
            .replace("+00:00", "Z")
        )

        log_record: dict[str, Any] = {
            "ts": timestamp,
            "level": record.levelname,
            "module": record.name,
        }

        if isinstance(record.msg, dict):
            log_record.update(record.msg)
        else:
            message = record.getMessage()
            if message:
                log_record["message"] = message

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in self._RESERVED_KEYS or key.startswith("_"):
                continue
            log_record[key] = value

        return json.dumps(log_record, ensure_ascii=False, default=str)


def configure_logging(level: str | None = None, audit_log_path: str | Path | None = None) -> None:
    """Configure JSON logging for the service and the ``docqa.audit`` stream."""

    level = (level or os.getenv("DOCQA_LOG_LEVEL", "INFO")).upper()
    audit_path = audit_log_path or os.getenv("DOCQA_AUDIT_LOG")

    handlers: dict[str, dict[str, Any]] = {
        "default": {
            "class": "logging.StreamHandler",
            "formatter": "json",
        },
    }
    audit_handlers = ["default"]
    if audit_path:
        audit_file = Path(audit_path)
        audit_file.parent.mkdir(parents=True, exist_ok=True)
        handlers["audit"] = {
            "class": "logging.FileHandler",
            "filename": str(audit_file),
            "mode": "a",
            "encoding": "utf-8",
            "formatter": "json",
        }
        audit_handlers = ["audit"]

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"json": {"()": MinimalJSONFormatter}},
            "handlers": handlers,
            "root": {
                "level": level,
                "handlers": ["default"],
            },
            "loggers": {
                "docqa.audit": {
                    "level": "INFO",
                    "handlers": audit_handlers,
                    "propagate": False,
                }
            },
        }
    )
