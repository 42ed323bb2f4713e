# =============================================
# File: hummbl_api/routers/common.py
# Purpose: Shared router dependencies (per-client rate limiting) and helpers
# =============================================
from __future__ import annotations

from fastapi import HTTPException, Request, Response

from hummbl_api.config import rate_limits
from hummbl_api.utils import slog
from hummbl_api.utils.metrics import record_rate_limit_hit
from hummbl_api.utils.ratelimit import RateLimitExceeded, check_rate_limit, client_key


def enforce_rate_limit(request: Request, response: Response) -> str:
    """
    Count this request against the caller's window.

    Returns the client key; raises HTTP 429 (with Retry-After) when the
    window is full. Remaining quota is reported in X-RateLimit-* headers.
    """
    peer = request.client.host if request.client else None
    key = client_key(request.headers, peer)
    try:
        remaining = check_rate_limit(key)
    except RateLimitExceeded as e:
        record_rate_limit_hit()
        request.state.log_context = {"rate_limited": True}
        slog.security_event("rate_limit_exceeded", "MEDIUM", client=key, path=request.url.path)
        raise HTTPException(
            status_code=429,
            detail="Too Many Requests",
            headers={
                "Retry-After": str(e.retry_after),
                "X-RateLimit-Limit": str(e.limit),
                "X-RateLimit-Remaining": "0",
            },
        )
    response.headers["X-RateLimit-Limit"] = str(rate_limits()[0])
    response.headers["X-RateLimit-Remaining"] = str(remaining)
    return key
