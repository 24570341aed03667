# apps/backend/crosscut_admin/crosscutting/middleware.py
"""
===============================================================================
MÓDULO: Middleware HTTP (correlación + métricas por request)
===============================================================================

CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  RequestContextMiddleware

Responsabilidades:
  - Aceptar el X-Request-Id del admin UI o generar uno nuevo.
  - Bindear el RequestContext (incluye la colección) durante el request.
  - Registrar latencia/status en Prometheus y un log de acceso.

Colaboradores:
  - crosscut_admin/context.py
  - crosscutting/metrics.py
  - crosscutting/logger.py
===============================================================================
"""

from __future__ import annotations

import re
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from ..context import bind_request_context, reset_request_context
from .logger import logger
from .metrics import record_request_metrics

REQUEST_ID_HEADER = "X-Request-Id"

# Ids de cliente aceptados tal cual; cualquier otra cosa se reemplaza.
_CLIENT_REQUEST_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")

_UNLOGGED_PATHS = frozenset({"/healthz", "/metrics"})


def resolve_request_id(header_value: str | None) -> str:
    candidate = (header_value or "").strip()
    if _CLIENT_REQUEST_ID.match(candidate):
        return candidate
    return uuid.uuid4().hex


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id
        path = request.url.path
        token = bind_request_context(request_id, request.method, path)

        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            elapsed = time.perf_counter() - started
            record_request_metrics(path, request.method, status_code, elapsed)
            if path not in _UNLOGGED_PATHS:
                log = logger.warning if status_code >= 500 else logger.info
                log(
                    "%s %s -> %s",
                    request.method,
                    path,
                    status_code,
                    extra={"status_code": status_code, "elapsed_ms": round(elapsed * 1000, 1)},
                )
            reset_request_context(token)
