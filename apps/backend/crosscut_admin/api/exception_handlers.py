"""
===============================================================================
TARJETA CRC — crosscut_admin/api/exception_handlers.py
===============================================================================

Responsabilidades:
  - ResourceError (404/405/422): errores del caller, log a nivel info.
  - UpstreamServiceError (502): BPO/PLM/feed caídos, log a nivel error con el
    servicio y el status de upstream.
  - CrossCutError sin subtipo conocido y excepciones no tipadas: 500 genérico.

Colaboradores:
  - interfaces.api.http.error_mapping.to_http_exception
  - crosscutting.error_responses (problem_response + factories)
  - context.current_request_id
===============================================================================
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..application.resource_errors import ResourceError
from ..context import current_request_id
from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
    internal_error,
    problem_response,
    upstream_error,
)
from ..crosscutting.exceptions import CrossCutError, UpstreamServiceError
from ..crosscutting.logger import logger
from ..interfaces.api.http.error_mapping import to_http_exception


def _request_id(request: Request) -> str | None:
    # Fuera del middleware (errores 500 no controlados) el contexto ya se limpió.
    return current_request_id() or getattr(request.state, "request_id", None)


async def resource_error_handler(request: Request, exc: ResourceError) -> JSONResponse:
    app_exc = to_http_exception(exc)
    logger.info(
        "request rechazado: %s",
        exc.message,
        extra={"code": app_exc.code.value, "error_id": exc.error_id},
    )
    return problem_response(request, app_exc, _request_id(request))


async def upstream_error_handler(
    request: Request, exc: UpstreamServiceError
) -> JSONResponse:
    logger.error(
        "falla de upstream",
        extra={
            "error_id": exc.error_id,
            "service": exc.service,
            "upstream_status": exc.status_code,
            "upstream_code": exc.upstream_code,
            "error_message": exc.message,
        },
    )
    app_exc = upstream_error(
        exc.message,
        [
            {"error_id": exc.error_id},
            {
                "service": exc.service,
                "upstream_status": exc.status_code,
                "upstream_code": exc.upstream_code,
            },
        ],
    )
    return problem_response(request, app_exc, _request_id(request))


async def crosscut_error_handler(request: Request, exc: CrossCutError) -> JSONResponse:
    logger.error(
        "error interno tipado",
        extra={"error_id": exc.error_id, "error_code": exc.error_code},
        exc_info=exc.original_error,
    )
    app_exc = AppHTTPException(
        ErrorCode.INTERNAL_ERROR, exc.message, [{"error_id": exc.error_id}]
    )
    return problem_response(request, app_exc, _request_id(request))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("excepción no controlada", exc_info=exc)

    # R: En producción no se filtran detalles internos.
    app_exc = (
        internal_error("Error interno.")
        if get_settings().is_production()
        else internal_error(f"{type(exc).__name__}: {exc}")
    )
    return problem_response(request, app_exc, _request_id(request))


def register_exception_handlers(app: FastAPI) -> None:
    # Starlette resuelve por MRO: los subtipos ganan sobre CrossCutError.
    app.add_exception_handler(ResourceError, resource_error_handler)
    app.add_exception_handler(UpstreamServiceError, upstream_error_handler)
    app.add_exception_handler(CrossCutError, crosscut_error_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
