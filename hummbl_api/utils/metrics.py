# =============================================
# File: hummbl_api/utils/metrics.py
# Purpose: In-process counters, latency histogram and per-route timings for /metrics
# =============================================
from __future__ import annotations
import bisect
import threading
import time
from collections import Counter, deque
from typing import Any, Deque, Dict, Iterable, List

_lock = threading.Lock()

COUNTERS = (
    "requests_total",
    "errors_total",
    "rate_limit_hits_total",
    "recommendations_total",
    "fallbacks_total",
    "blocked_inputs_total",
)
_counters: Counter = Counter({name: 0 for name in COUNTERS})

# pattern display name ("Decomposition", ...) -> times reported in a recommendation
_pattern_hits: Counter = Counter()

# Upper bounds (ms) of the latency buckets; one extra overflow slot at the end.
LATENCY_BOUNDS: List[int] = [5, 10, 25, 50, 100, 250, 500, 1000]
_latency_counts: List[int] = [0] * (len(LATENCY_BOUNDS) + 1)

# "METHOD /route/template" -> last N latencies and total count
ROUTE_SAMPLES = 1000
_route_samples: Dict[str, Deque[float]] = {}
_route_counts: Counter = Counter()


def _percentile(values: Iterable[float], q: float) -> float:
    xs = sorted(values)
    if not xs:
        return 0.0
    return xs[int(q * (len(xs) - 1))]


def record_request(latency_ms: int, error: bool = False) -> None:
    """Count one finished request and drop its latency into the histogram."""
    with _lock:
        _counters["requests_total"] += 1
        if error:
            _counters["errors_total"] += 1
        _latency_counts[bisect.bisect_left(LATENCY_BOUNDS, int(latency_ms))] += 1


def record_endpoint(method: str, path: str, latency_ms: float) -> None:
    key = f"{method.upper()} {path}"
    with _lock:
        _route_counts[key] += 1
        _route_samples.setdefault(key, deque(maxlen=ROUTE_SAMPLES)).append(float(latency_ms))


def record_rate_limit_hit() -> None:
    with _lock:
        _counters["rate_limit_hits_total"] += 1


def record_blocked_input() -> None:
    with _lock:
        _counters["blocked_inputs_total"] += 1


def record_recommendation(fallback: bool, matched_patterns: Iterable[str]) -> None:
    with _lock:
        _counters["recommendations_total"] += 1
        if fallback:
            _counters["fallbacks_total"] += 1
        _pattern_hits.update(matched_patterns)


def snapshot() -> Dict[str, Any]:
    """JSON-ready copy of everything recorded so far."""
    with _lock:
        routes = {
            key: {
                "count": _route_counts[key],
                "avg_latency_ms": sum(samples) / len(samples) if samples else 0.0,
                "p95_latency_ms": _percentile(samples, 0.95),
            }
            for key, samples in _route_samples.items()
        }
        return {
            "counters": {name: _counters[name] for name in COUNTERS},
            "pattern_hits": dict(_pattern_hits),
            "latency_ms": {
                "buckets": LATENCY_BOUNDS + ["+Inf"],
                "counts": list(_latency_counts),
            },
            "performance": {"endpoints": routes, "generated_at": time.time()},
        }


def reset() -> None:
    """For tests: zero every counter and drop the samples."""
    with _lock:
        _counters.clear()
        _counters.update({name: 0 for name in COUNTERS})
        _pattern_hits.clear()
        _latency_counts[:] = [0] * (len(LATENCY_BOUNDS) + 1)
        _route_samples.clear()
        _route_counts.clear()
