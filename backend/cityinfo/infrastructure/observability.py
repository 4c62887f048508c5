"""Structured Logging — JSON records carrying city / point-of-interest context.

Invariants:
    - Every record has timestamp (record creation time, UTC), level, logger, message
    - city_id, point_of_interest_id, error_code and path appear only when set
    - setup_logging is idempotent: calling it twice does not duplicate output

Design Decisions:
    - stdlib logging + custom formatter; "json" for deployments, "text" for local runs
    - SQLAlchemy engine chatter capped at WARNING regardless of the app level
"""

import json
import logging
from datetime import datetime, timezone

EXTRA_FIELDS = ("city_id", "point_of_interest_id", "error_code", "path")

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_HANDLER_NAME = "cityinfo"


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update({
            key: getattr(record, key)
            for key in EXTRA_FIELDS
            if getattr(record, key, None) is not None
        })
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT),
    )
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
