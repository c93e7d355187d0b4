# stayease/logging_config.py
from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Callable, Optional

from .config import settings
from .middleware.request_id import get_request_id

if TYPE_CHECKING:
    from .auth import SessionStore

# record attributes copied into the JSON line when a caller passes them via extra=
EXTRA_FIELDS = ("user_id", "role", "view", "listing_id", "appointment_id")

# libraries whose INFO output duplicates the http_request line
QUIET_LOGGERS = ("httpx", "httpcore")


class JsonFormatter(logging.Formatter):
    """
    One JSON object per record:
      ts, level, logger, message, request_id (when scoped), exc_info, EXTRA_FIELDS
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        rid = getattr(record, "request_id", None) or get_request_id()
        if rid:
            payload["request_id"] = rid

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        for k in EXTRA_FIELDS:
            v = getattr(record, k, None)
            if v is not None:
                payload[k] = v

        return json.dumps(payload, ensure_ascii=False, default=str)


class SessionContextFilter(logging.Filter):
    """Stamps the signed-in user's id and role on records that don't carry them."""

    def __init__(self, session: "SessionStore") -> None:
        super().__init__()
        self.session = session

    def filter(self, record: logging.LogRecord) -> bool:
        ident = self.session.identity
        if ident is not None:
            if getattr(record, "user_id", None) is None:
                record.user_id = ident.user_id
            if getattr(record, "role", None) is None:
                record.role = ident.role.value
        return True


def attach_session(session: "SessionStore") -> Callable[[], None]:
    """Add a SessionContextFilter to every root handler; returns the undo."""
    f = SessionContextFilter(session)
    handlers = list(logging.getLogger().handlers)
    for h in handlers:
        h.addFilter(f)

    def detach() -> None:
        for h in handlers:
            h.removeFilter(f)

    return detach


def configure_logging(level: Optional[str] = None) -> logging.Handler:
    level = (level or settings.log_level or "INFO").upper()

    root = logging.getLogger()
    root.setLevel(level)

    # Clear existing handlers so repeated CLI runs don't double-log
    for h in list(root.handlers):
        root.removeHandler(h)

    # stdout carries the CLI's result; logs go to stderr
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel("WARNING")

    return handler
