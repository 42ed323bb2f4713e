# hummbl_api/routers/recommend.py
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple
from fastapi import APIRouter, Body, Depends, HTTPException, Request
from pydantic import BaseModel

from hummbl_api.routers.common import enforce_rate_limit
from hummbl_api.services.catalog import catalog_version, get_catalog
from hummbl_api.services.recommender import clamp_limit, recommend_models
from hummbl_api.utils import rcache, slog
from hummbl_api.utils.metrics import record_blocked_input, record_recommendation
from hummbl_api.utils.recommend_core import MentalModel
from hummbl_api.utils.sanitize import redact_for_ranking, validate_input, validate_output
from hummbl_api.utils.timing import timer

router = APIRouter(tags=["recommend"])

FALLBACK_MESSAGE = "No specific matches - showing high-priority models"


# ---------- Response schema ----------
class RecommendResponse(BaseModel):
    success: bool = True
    data: List[MentalModel]
    count: int
    matched_patterns: List[str]
    keywords_used: List[str]
    message: Optional[str] = None


# ---------- Helpers ----------
def _coerce_payload(raw: Dict[str, Any]) -> Tuple[str, int]:
    """
    Pull (problem, limit) out of the request body.

    `problem` must be a non-blank string; `limit` is optional and clamped
    to [1, 20] (missing, non-numeric or <= 0 -> 5).
    """
    problem = (raw or {}).get("problem")
    if not isinstance(problem, str) or not problem.strip():
        raise HTTPException(status_code=400, detail='Missing or invalid "problem" field')
    return problem, clamp_limit(raw.get("limit"))


# ---------- Endpoint ----------
@router.post(
    "/v1/recommend",
    response_model=RecommendResponse,
    response_model_exclude_none=True,
)
def post_recommend(
    request: Request,
    payload: Dict[str, Any] = Body(...),
    client: str = Depends(enforce_rate_limit),
) -> Dict[str, Any]:
    """
    Recommend mental models for a free-text problem.

    Input: {"problem": str, "limit"?: int}
    Output: ranked models plus the transformations the problem leaned on
    and a sample of the keywords used.
    """
    problem, limit = _coerce_payload(payload)
    qh = slog.qhash(problem)
    request.state.log_context = {"client": client, "qhash": qh, "limit": limit, "cache_hit": False}

    valid, reason = validate_input(problem)
    if not valid:
        record_blocked_input()
        request.state.log_context["blocked"] = True
        raise HTTPException(status_code=400, detail=reason)

    problem, pii_types = redact_for_ranking(problem)
    if pii_types:
        slog.security_event("pii_redacted", "MEDIUM", qhash=qh, types=pii_types)

    cache_key = rcache.make_key(problem, limit, catalog_version())
    cached = rcache.get(cache_key)
    if cached:
        fallback = "message" in cached
        record_recommendation(fallback, cached["matched_patterns"])
        request.state.log_context.update({"cache_hit": True, "fallback": fallback, "count": cached["count"]})
        return cached

    with timer("recommend_models") as elapsed:
        result = recommend_models(problem, get_catalog(), limit)
        engine_ms = elapsed()

    body: Dict[str, Any] = {
        "success": True,
        "data": [m.model_dump() for m in result.models],
        "count": len(result.models),
        "matched_patterns": result.matched_patterns,
        "keywords_used": result.keywords_used,
    }
    if result.fallback:
        body["message"] = FALLBACK_MESSAGE

    ok, why = validate_output(body)
    if not ok:
        raise HTTPException(status_code=500, detail=f"Output validation failed: {why}")

    record_recommendation(result.fallback, result.matched_patterns)
    request.state.log_context.update({
        "engine_ms": engine_ms,
        "fallback": result.fallback,
        "matched_patterns": result.matched_patterns,
        "count": body["count"],
    })
    rcache.set(cache_key, body)
    return body
