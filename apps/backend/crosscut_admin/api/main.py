"""
Name: CrossCut Admin API (composición FastAPI)

Responsibilities:
  - Build the ASGI app that the admin UI talks to
  - Wire request context, CORS for the UI origin and RFC7807 handlers
  - Mount resources + dashboard under /v1
  - Serve /healthz (process liveness) and /metrics (Prometheus)
  - Close the pooled BPO/PLM/DocGen httpx clients on shutdown

Collaborators:
  - container (service clients)
  - interfaces.api.http.router
  - api.exception_handlers

Constraints:
  - No authentication: the admin facade sits behind the internal network
  - Upstream health is reported by /v1/dashboard/metrics, not /healthz
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from ..container import close_service_clients
from ..crosscutting.config import get_settings
from ..crosscutting.logger import SERVICE_NAME, logger
from ..crosscutting.metrics import get_metrics_response
from ..crosscutting.middleware import REQUEST_ID_HEADER, RequestContextMiddleware
from ..interfaces.api.http.router import router
from .exception_handlers import register_exception_handlers

APP_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Logs the resolved topology and closes clients."""
    settings = get_settings()

    logger.info(
        "CrossCut Admin API starting up",
        extra={
            "app_env": settings.app_env,
            "bpo_service_url": settings.bpo_service_url,
            "plm_service_url": settings.plm_service_url,
            "docgen_service_url": settings.docgen_service_url,
            "audit_log_path": settings.audit_log_path,
            "product_source": settings.product_source,
        },
    )

    try:
        yield
    finally:
        await close_service_clients()
        logger.info("CrossCut Admin API shutting down")


app = FastAPI(
    title="CrossCut Admin API",
    version=APP_VERSION,
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "resources",
            "description": "Workflows (audit projection), audit entries and products",
        },
        {
            "name": "dashboard",
            "description": "Workflow counts and service health",
        },
    ],
)

# R: Last added runs first: CORS answers preflights before a request id is bound.
app.add_middleware(RequestContextMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().get_allowed_origins_list(),
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", REQUEST_ID_HEADER],
    # R: react-admin reads the list total from this header
    expose_headers=["X-Total-Count", REQUEST_ID_HEADER],
)

app.include_router(router, prefix="/v1")

register_exception_handlers(app)


@app.get("/healthz")
def healthz(request: Request):
    """R: Liveness of this process only."""
    return {
        "ok": True,
        "service": SERVICE_NAME,
        "version": APP_VERSION,
        "request_id": getattr(request.state, "request_id", None),
    }


@app.get("/metrics", include_in_schema=False)
def metrics():
    body, content_type = get_metrics_response()
    return Response(content=body, media_type=content_type)
