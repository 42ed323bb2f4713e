# =============================================
# File: hummbl_api/main.py
# Purpose: FastAPI app: CORS, request logging/metrics middleware, error shapes, / and /health
# =============================================
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from hummbl_api.config import API_NAME, API_VERSION
from hummbl_api.routers import metrics, models, recommend, workflows
from hummbl_api.services.catalog import get_catalog
from hummbl_api.utils import slog
from hummbl_api.utils.logging import configure_logging
from hummbl_api.utils.metrics import record_endpoint, record_request
from hummbl_api.utils.timing import timer

configure_logging()

app = FastAPI(
    title=API_NAME,
    version=API_VERSION,
    description="Mental models for AI agents",
)

# Public API: allow every origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def _route_template(request: Request) -> str:
    """Matched route path ("/v1/models/{code}") so per-route metrics don't fan out per code."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


@app.middleware("http")
async def _request_log_and_metrics(request: Request, call_next):
    req_id = slog.new_request_id()
    client_ip = request.client.host if request.client else None
    with timer() as elapsed:
        try:
            response = await call_next(request)
        except Exception as e:
            ctx = getattr(request.state, "log_context", None) or {}
            slog.log_event(
                "request.error",
                request_id=req_id,
                method=request.method,
                path=request.url.path,
                latency_ms=elapsed(),
                client_ip=client_ip or "",
                error=repr(e),
                **ctx,
            )
            record_request(latency_ms=elapsed(), error=True)
            raise
    latency_ms = elapsed()

    ctx = getattr(request.state, "log_context", None) or {}
    ctx.setdefault("rate_limited", response.status_code == 429)
    slog.finalize_request_log(
        request_id=req_id,
        method=request.method,
        path=request.url.path,
        status=response.status_code,
        latency_ms=latency_ms,
        client_ip=client_ip,
        ctx=ctx,
    )
    # metrics are best-effort; a failure here must not fail the request
    try:
        record_request(latency_ms=latency_ms, error=response.status_code >= 500)
        record_endpoint(request.method, _route_template(request), latency_ms)
    except Exception as e:
        logger.warning(f"[metrics] could not record {request.url.path}: {e!r}")

    response.headers["X-Request-ID"] = req_id
    return response


# ---------- Error shapes: {"success": false, "error": "..."} ----------

@app.exception_handler(StarletteHTTPException)
async def _http_error(request: Request, exc: StarletteHTTPException):
    detail = exc.detail
    if exc.status_code == 404 and detail == "Not Found":
        detail = "Endpoint not found"
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def _validation_error(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"success": False, "error": "Invalid request body"})


@app.exception_handler(Exception)
async def _unhandled_error(request: Request, exc: Exception):
    logger.error(f"[main] unhandled error on {request.method} {request.url.path}: {exc!r}")
    return JSONResponse(status_code=500, content={"success": False, "error": "Internal server error"})


@app.get("/", include_in_schema=False)
def root():
    return {
        "name": API_NAME,
        "version": API_VERSION,
        "description": "Mental models for AI agents",
        "endpoints": {
            "health": "/health",
            "metrics": "/metrics",
            "models": "/v1/models",
            "model": "/v1/models/{code}",
            "transformations": "/v1/transformations",
            "recommend": "/v1/recommend",
            "workflows": "/v1/workflows",
            "workflow": "/v1/workflows/{id}",
            "workflow_match": "/v1/workflows/match",
        },
    }


@app.get("/health")
def health():
    return {
        "status": "healthy",
        "version": API_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "models_count": len(get_catalog()),
    }


app.include_router(models.router)
app.include_router(recommend.router)
app.include_router(workflows.router)
app.include_router(metrics.router)
