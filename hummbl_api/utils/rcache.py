# =============================================
# File: hummbl_api/utils/rcache.py
# Purpose: In-process TTL + LRU cache for /v1/recommend response bodies
# =============================================
from __future__ import annotations
import threading
import time
from collections import OrderedDict
from typing import Any, Dict, NamedTuple, Optional

from hummbl_api.config import cache_max_entries, cache_ttl_seconds


class _Entry(NamedTuple):
    expires_at: float
    body: Dict[str, Any]


# Oldest first; reads move an entry to the end.
_entries: "OrderedDict[str, _Entry]" = OrderedDict()
_lock = threading.Lock()


def _now() -> float:
    return time.time()


def make_key(problem: str, limit: int, version: str) -> str:
    """Problems differing only in case or spacing share a key; a new catalog version starts a fresh keyspace."""
    canonical = " ".join((problem or "").lower().split())
    return f"{version}|{limit}|{canonical}"


def get(key: str) -> Optional[Dict[str, Any]]:
    with _lock:
        entry = _entries.get(key)
        if entry is None:
            return None
        if entry.expires_at < _now():
            del _entries[key]
            return None
        _entries.move_to_end(key)
        return entry.body


def set(key: str, value: Dict[str, Any], ttl: Optional[int] = None) -> None:
    lifetime = cache_ttl_seconds() if ttl is None else ttl
    with _lock:
        _entries[key] = _Entry(_now() + lifetime, value)
        _entries.move_to_end(key)
        overflow = len(_entries) - cache_max_entries()
        for _ in range(max(0, overflow)):
            _entries.popitem(last=False)


def clear() -> None:
    with _lock:
        _entries.clear()


def size() -> int:
    with _lock:
        return len(_entries)
