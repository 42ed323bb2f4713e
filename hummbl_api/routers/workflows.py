# =============================================
# File: hummbl_api/routers/workflows.py
# Purpose: Curated workflow endpoints (list, lookup, match a problem)
# =============================================
from __future__ import annotations
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, Request

from hummbl_api.routers.common import enforce_rate_limit
from hummbl_api.services.catalog import get_model_by_code
from hummbl_api.services.recommender import clamp_limit
from hummbl_api.services.workflows import Workflow, all_workflows, get_workflow, match_workflows
from hummbl_api.utils import slog
from hummbl_api.utils.metrics import record_blocked_input
from hummbl_api.utils.sanitize import redact_pii, validate_input

router = APIRouter(tags=["workflows"], dependencies=[Depends(enforce_rate_limit)])

DEFAULT_MATCH_LIMIT = 3
MAX_MATCH_LIMIT = 10


def _with_models(workflow: Workflow) -> Dict[str, Any]:
    """Workflow as a dict, each step enriched with its model name when the catalog has it."""
    d = workflow.to_dict()
    for step in d["steps"]:
        model = get_model_by_code(step["model_code"])
        step["model_name"] = model.name if model else None
    return d


@router.get("/v1/workflows")
def list_workflows() -> Dict[str, Any]:
    data = [_with_models(w) for w in all_workflows()]
    return {"success": True, "data": data, "count": len(data)}


@router.get("/v1/workflows/{workflow_id}")
def read_workflow(workflow_id: str) -> Dict[str, Any]:
    workflow = get_workflow(workflow_id)
    if workflow is None:
        raise HTTPException(status_code=404, detail=f"Workflow not found: {workflow_id}")
    return {"success": True, "data": _with_models(workflow)}


@router.post("/v1/workflows/match")
def post_match(request: Request, payload: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    problem = (payload or {}).get("problem")
    if not isinstance(problem, str) or not problem.strip():
        raise HTTPException(status_code=400, detail='Missing or invalid "problem" field')
    limit = clamp_limit(payload.get("limit"), default=DEFAULT_MATCH_LIMIT, maximum=MAX_MATCH_LIMIT)

    valid, reason = validate_input(problem)
    if not valid:
        record_blocked_input()
        raise HTTPException(status_code=400, detail=reason)

    request.state.log_context = {"qhash": slog.qhash(problem), "limit": limit}
    picks: List[Workflow] = match_workflows(redact_pii(problem), limit=limit)
    data = [_with_models(w) for w in picks]
    return {"success": True, "data": data, "count": len(data)}
