# =============================================
# File: hummbl_api/utils/ratelimit.py
# Purpose: In-memory per-client sliding-window rate limiter
# =============================================

from __future__ import annotations
import threading
import time
from collections import deque
from typing import Deque, Dict, Optional

from hummbl_api.config import rate_limits, trust_proxy_headers

# client key -> request timestamps inside the current window
_store: Dict[str, Deque[float]] = {}
_lock = threading.Lock()

# Past this many tracked clients, keys with no request inside the window are dropped.
SWEEP_THRESHOLD = 10_000


class RateLimitExceeded(RuntimeError):
    def __init__(self, limit: int, retry_after: int) -> None:
        super().__init__("Rate limit exceeded")
        self.limit = limit
        self.retry_after = retry_after


def _now() -> float:
    return time.time()


def client_key(headers, peer: Optional[str], trust_proxy: Optional[bool] = None) -> str:
    """
    Identify the caller for rate limiting.

    The socket peer, unless proxy headers are trusted (TRUST_PROXY_HEADERS):
    then CF-Connecting-IP, then the first X-Forwarded-For hop, then the peer.
    """
    if trust_proxy is None:
        trust_proxy = trust_proxy_headers()
    if trust_proxy:
        cf = (headers.get("cf-connecting-ip") or "").strip()
        if cf:
            return cf
        fwd = (headers.get("x-forwarded-for") or "").split(",")[0].strip()
        if fwd:
            return fwd
    return peer or "anon"


def _sweep(cutoff: float) -> None:
    stale = [k for k, dq in _store.items() if not dq or dq[-1] < cutoff]
    for k in stale:
        del _store[k]


def check_rate_limit(key: str) -> int:
    """
    Record one request for `key` and return how many remain in the window.

    Raises RateLimitExceeded when the window is already full.
    """
    now = _now()
    max_reqs, window_s = rate_limits()
    cutoff = now - window_s
    with _lock:
        if key not in _store and len(_store) >= SWEEP_THRESHOLD:
            _sweep(cutoff)
        dq = _store.setdefault(key, deque())
        while dq and dq[0] < cutoff:
            dq.popleft()

        if len(dq) >= max_reqs:
            retry_after = max(1, int(dq[0] + window_s - now) + 1) if dq else window_s
            raise RateLimitExceeded(limit=max_reqs, retry_after=retry_after)

        dq.append(now)
        return max_reqs - len(dq)


def tracked_clients() -> int:
    with _lock:
        return len(_store)


def reset_rate_limit() -> None:
    """For tests: clear in-memory counters."""
    with _lock:
        _store.clear()
