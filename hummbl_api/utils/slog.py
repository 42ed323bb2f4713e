# =============================================
# File: hummbl_api/utils/slog.py
# Purpose: JSON-line request and security events on the "hummbl" stdlib logger
# =============================================
from __future__ import annotations
import hashlib
import json
import logging
import time
import uuid
from typing import Any, Dict, Optional

from hummbl_api.config import log_level

LOGGER_NAME = "hummbl"
QHASH_LEN = 10
_LOUD_SEVERITIES = ("HIGH", "CRITICAL")


def _build_logger() -> logging.Logger:
    log = logging.getLogger(LOGGER_NAME)
    if not log.handlers:
        log.setLevel(getattr(logging, log_level(), logging.INFO))
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))  # records are JSON already
        log.addHandler(handler)
    log.propagate = True  # pytest caplog listens on the root logger
    return log


_logger = _build_logger()


def qhash(text: str) -> str:
    """Fingerprint of a problem text, insensitive to case and spacing. Logs carry this, never the text."""
    canonical = " ".join((text or "").lower().split())
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:QHASH_LEN]


def new_request_id() -> str:
    return uuid.uuid4().hex


def _emit(record: Dict[str, Any], level: int = logging.INFO) -> None:
    _logger.log(level, json.dumps(record, ensure_ascii=False, default=str))


def log_event(event: str, **fields: Any) -> None:
    _emit({"event": event, "ts": round(time.time(), 3), **fields})


def security_event(kind: str, severity: str, **fields: Any) -> None:
    """Emit `security.<kind>`; HIGH and CRITICAL go out at WARNING level."""
    level = logging.WARNING if severity in _LOUD_SEVERITIES else logging.INFO
    record = {"event": f"security.{kind}", "ts": round(time.time(), 3), "severity": severity}
    record.update(fields)
    _emit(record, level)


def finalize_request_log(
    request_id: str,
    method: str,
    path: str,
    status: int,
    latency_ms: int,
    client_ip: Optional[str],
    ctx: Optional[Dict[str, Any]] = None,
) -> None:
    """Closing `request.completed` line, with whatever the route put in its log context merged in."""
    record: Dict[str, Any] = {
        "event": "request.completed",
        "request_id": request_id,
        "method": method,
        "path": path,
        "status": status,
        "latency_ms": latency_ms,
        "client_ip": client_ip or "",
    }
    record.update(ctx or {})
    _emit(record)
