"""Structured Logging: JSON log lines for the PulseCheck API.

Invariants:
    - Every line carries timestamp, level, logger name and message
    - Only whitelisted extras are emitted: owner identity, check id, collection,
      store operation, error code, request path and failed cascade ids
    - Password hashes, passwords and token ids never appear in EXTRA_KEYS
    - setup_logging installs at most one handler, however often the lifespan runs

Design Decisions:
    - log_format="text" for local runs and tests, "json" everywhere else
"""

import logging
import json
from datetime import datetime, timezone

EXTRA_KEYS = (
    "owner_identity", "check_id", "collection", "operation",
    "error_code", "path", "failed_check_ids",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure the root logger for the API process."""
    for existing in list(logging.root.handlers):
        if getattr(existing, "_pulsecheck", False):
            logging.root.removeHandler(existing)
    handler = logging.StreamHandler()
    handler._pulsecheck = True
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
