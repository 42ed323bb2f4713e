# =============================================
# File: tests/test_rate_limit.py
# Purpose: Validate per-client rate limiting on the /v1 endpoints
# =============================================
import sys, os
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

import pytest
from fastapi.testclient import TestClient

from hummbl_api.utils import ratelimit
from hummbl_api.utils.ratelimit import (
    RateLimitExceeded,
    check_rate_limit,
    client_key,
    reset_rate_limit,
    tracked_clients,
)


def _mount_client(monkeypatch, max_reqs="1"):
    monkeypatch.setenv("RL_MAX_REQS", max_reqs)
    monkeypatch.setenv("RL_WINDOW_SECONDS", "60")
    reset_rate_limit()

    from hummbl_api.main import app
    return TestClient(app)


def test_rate_limit_per_client(monkeypatch):
    client = _mount_client(monkeypatch)

    r1 = client.post("/v1/recommend", json={"problem": "Our team is stuck"})
    assert r1.status_code == 200
    assert r1.headers["X-RateLimit-Remaining"] == "0"

    r2 = client.post("/v1/recommend", json={"problem": "Our team is still stuck"})
    assert r2.status_code == 429
    assert r2.json() == {"success": False, "error": "Too Many Requests"}
    assert int(r2.headers["Retry-After"]) >= 1
    assert r2.headers["X-RateLimit-Limit"] == "1"


def test_clients_are_counted_separately_behind_trusted_proxy(monkeypatch):
    client = _mount_client(monkeypatch)
    monkeypatch.setenv("TRUST_PROXY_HEADERS", "true")

    assert client.get("/v1/models/P1", headers={"CF-Connecting-IP": "10.0.0.1"}).status_code == 200
    assert client.get("/v1/models/P1", headers={"CF-Connecting-IP": "10.0.0.1"}).status_code == 429
    assert client.get("/v1/models/P1", headers={"CF-Connecting-IP": "10.0.0.2"}).status_code == 200


def test_spoofed_forwarding_headers_do_not_bypass_limit(monkeypatch):
    client = _mount_client(monkeypatch)
    monkeypatch.delenv("TRUST_PROXY_HEADERS", raising=False)

    codes = [
        client.get("/v1/models", headers={"X-Forwarded-For": f"203.0.113.{i}", "CF-Connecting-IP": f"198.51.100.{i}"}).status_code
        for i in range(20)
    ]
    assert codes[0] == 200
    assert set(codes[1:]) == {429}
    assert tracked_clients() == 1


def test_health_is_not_limited(monkeypatch):
    client = _mount_client(monkeypatch)
    for _ in range(3):
        assert client.get("/health").status_code == 200


def test_limiter_counts_down(monkeypatch):
    monkeypatch.setenv("RL_MAX_REQS", "3")
    monkeypatch.setenv("RL_WINDOW_SECONDS", "60")
    reset_rate_limit()
    assert check_rate_limit("k") == 2
    assert check_rate_limit("k") == 1
    assert check_rate_limit("k") == 0
    with pytest.raises(RateLimitExceeded) as exc:
        check_rate_limit("k")
    assert exc.value.limit == 3
    assert exc.value.retry_after >= 1
    reset_rate_limit()


def test_client_key_precedence():
    headers = {"cf-connecting-ip": "1.1.1.1", "x-forwarded-for": "2.2.2.2"}
    assert client_key(headers, "3.3.3.3", trust_proxy=True) == "1.1.1.1"
    assert client_key({"x-forwarded-for": "2.2.2.2, 9.9.9.9"}, "3.3.3.3", trust_proxy=True) == "2.2.2.2"
    assert client_key({}, "3.3.3.3", trust_proxy=True) == "3.3.3.3"
    assert client_key(headers, "3.3.3.3", trust_proxy=False) == "3.3.3.3"
    assert client_key({}, None, trust_proxy=False) == "anon"


def test_proxy_trust_read_from_env(monkeypatch):
    headers = {"x-forwarded-for": "2.2.2.2"}
    monkeypatch.delenv("TRUST_PROXY_HEADERS", raising=False)
    assert client_key(headers, "3.3.3.3") == "3.3.3.3"
    monkeypatch.setenv("TRUST_PROXY_HEADERS", "1")
    assert client_key(headers, "3.3.3.3") == "2.2.2.2"


def test_idle_clients_are_swept(monkeypatch):
    monkeypatch.setenv("RL_MAX_REQS", "5")
    monkeypatch.setenv("RL_WINDOW_SECONDS", "60")
    monkeypatch.setattr(ratelimit, "SWEEP_THRESHOLD", 3)
    clock = {"t": 1000.0}
    monkeypatch.setattr(ratelimit, "_now", lambda: clock["t"])
    reset_rate_limit()

    for key in ("a", "b", "c"):
        check_rate_limit(key)
    assert tracked_clients() == 3

    clock["t"] += 61
    check_rate_limit("d")
    assert tracked_clients() == 1
    reset_rate_limit()
