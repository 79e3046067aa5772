from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

# Attributes every LogRecord carries; anything else arrived through extra=
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}

# Key material and message bodies never reach the log stream
REDACTED_FIELDS = frozenset(("key", "shared_key", "key_bytes", "plaintext", "ciphertext"))
REDACTED = "REDACTED"

def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    fields: Dict[str, Any] = {}
    for k, v in vars(record).items():
        if k.startswith("_") or k in _RECORD_ATTRS:
            continue
        fields[k] = REDACTED if k in REDACTED_FIELDS else v
    return fields

class JsonFormatter(logging.Formatter):
    """One JSON object per line: ts, level, logger, event, then structured extras."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        for k, v in _extra_fields(record).items():
            payload.setdefault(k, v)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)

def setup_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(level.upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())

    # clear existing handlers to avoid duplicates
    root.handlers.clear()
    root.addHandler(handler)
