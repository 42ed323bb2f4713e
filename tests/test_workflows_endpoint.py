# =============================================
# File: tests/test_workflows_endpoint.py
# Purpose: Workflow endpoints (list, lookup, match)
# =============================================
import sys, os
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from fastapi.testclient import TestClient

from hummbl_api.utils.ratelimit import reset_rate_limit


def _mount_client(monkeypatch):
    monkeypatch.setenv("RL_MAX_REQS", "1000")
    monkeypatch.setenv("RL_WINDOW_SECONDS", "60")
    reset_rate_limit()

    from hummbl_api.main import app
    return TestClient(app)


def test_list_workflows(monkeypatch):
    client = _mount_client(monkeypatch)
    body = client.get("/v1/workflows").json()
    assert body["count"] == 10
    step = body["data"][0]["steps"][0]
    assert step["model_code"] == "DE1"
    assert step["model_name"] == "Root Decomposition"


def test_read_workflow(monkeypatch):
    client = _mount_client(monkeypatch)
    r = client.get("/v1/workflows/root-cause")
    assert r.status_code == 200
    assert r.json()["data"]["name"] == "Root Cause Analysis"

    r = client.get("/v1/workflows/does-not-exist")
    assert r.status_code == 404
    assert r.json() == {"success": False, "error": "Workflow not found: does-not-exist"}


def test_match_workflows(monkeypatch):
    client = _mount_client(monkeypatch)
    r = client.post("/v1/workflows/match", json={"problem": "We are in a crisis and everything is urgent"})
    assert r.status_code == 200
    body = r.json()
    assert body["data"][0]["id"] == "crisis-response"
    assert body["count"] <= 3


def test_match_limit_and_validation(monkeypatch):
    client = _mount_client(monkeypatch)
    r = client.post("/v1/workflows/match", json={"problem": "team conflict risk failure learn", "limit": 1})
    assert r.json()["count"] == 1

    r = client.post("/v1/workflows/match", json={"problem": ""})
    assert r.status_code == 400
    assert r.json()["error"] == 'Missing or invalid "problem" field'

    r = client.post("/v1/workflows/match", json={"problem": "xyzzy"})
    assert r.status_code == 200
    assert r.json() == {"success": True, "data": [], "count": 0}
