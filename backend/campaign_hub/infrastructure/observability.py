"""Structured Logging - JSON records carrying campaign and influencer context.

Invariants:
    - Every record has timestamp, level, logger and message
    - Known extras (ids, rule names, error codes) are copied when set; UUIDs become strings
    - setup_logging is idempotent: calling it twice never duplicates output

Design Decisions:
    - Stdlib logging with a small formatter; services pass context via extra={...}
    - SQLAlchemy engine logging follows database_echo, not the root level
"""

import json
import logging
from datetime import datetime, timezone


EXTRA_FIELDS: tuple[str, ...] = (
    "campaign_id", "influencer_id", "application_id", "error_code",
    "path", "budget_rule", "assigned_phase",
)

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"

_HANDLER_NAME = "campaign_hub"


def _json_safe(value):
    if isinstance(value, (bool, int, float, str)):
        return value
    return str(value)


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update({
            key: _json_safe(record.__dict__[key])
            for key in EXTRA_FIELDS
            if record.__dict__.get(key) is not None
        })
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json", sql_echo: bool = False) -> None:
    """Install the single application handler on the root logger."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT),
    )
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if sql_echo else logging.WARNING,
    )
