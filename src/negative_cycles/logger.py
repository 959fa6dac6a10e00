from __future__ import annotations

import json
import math
import os
import sys
from datetime import datetime, timezone
from typing import Any, Optional, TextIO


REDACT_KEYS = {"token", "auth", "authorization", "password", "secret", "api_key"}


def _clean(obj: Any) -> Any:
    """Redact secret-looking keys and turn non-finite floats into JSON-safe strings."""
    if isinstance(obj, dict):
        return {k: ("<redacted>" if str(k).lower() in REDACT_KEYS else _clean(v)) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_clean(v) for v in obj]
    if isinstance(obj, float) and not math.isfinite(obj):
        return str(obj)
    return obj


_LOG_DIR = os.environ.get("NC_LOG_DIR", ".logs")
_MAX_BYTES = int(os.environ.get("NC_LOG_MAX_BYTES", "1048576"))  # 1MB
_BACKUPS = int(os.environ.get("NC_LOG_BACKUPS", "5"))
_STREAM = os.environ.get("NC_LOG_STREAM", "stdout").lower()


def _stream() -> Optional[TextIO]:
    if _STREAM == "none":
        return None
    return sys.stderr if _STREAM == "stderr" else sys.stdout


def _rotate(path: str) -> None:
    for i in range(_BACKUPS, 0, -1):
        older = f"{path}.{i}"
        newer = f"{path}.{i-1}" if i > 1 else path
        if os.path.exists(older):
            os.remove(older)
        if os.path.exists(newer):
            os.rename(newer, older)


def _write_file_line(line: str) -> None:
    try:
        os.makedirs(_LOG_DIR, exist_ok=True)
        path = os.path.join(_LOG_DIR, "events.log")
        if os.path.exists(path) and os.path.getsize(path) > _MAX_BYTES:
            _rotate(path)
        with open(path, "a", encoding="utf-8") as f:
            f.write(line + "\n")
    except OSError:
        # file logging must never break a solve
        pass


def log_event(event: str, **fields: Any) -> None:
    record = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "event": event,
        **_clean(fields),
    }
    line = json.dumps(record, ensure_ascii=False)
    out = _stream()
    if out is not None:
        out.write(line + "\n")
        out.flush()
    _write_file_line(line)
