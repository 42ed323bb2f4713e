# =============================================
# File: hummbl_api/routers/metrics.py
# Purpose: Expose internal metrics as JSON
# =============================================
from __future__ import annotations
from fastapi import APIRouter
from hummbl_api.utils import rcache
from hummbl_api.utils.metrics import snapshot

router = APIRouter(tags=["metrics"])


@router.get("/metrics")
def get_metrics():
    """Return in-process metrics (JSON), including the response cache size."""
    snap = snapshot()
    snap["cache_entries"] = rcache.size()
    return snap
