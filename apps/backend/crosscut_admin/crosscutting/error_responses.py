# apps/backend/crosscut_admin/crosscutting/error_responses.py
"""
===============================================================================
MÓDULO: Problem Details (RFC 7807) para el admin API
===============================================================================

CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  ErrorCode + AppHTTPException + problem_response()

Responsabilidades:
  - Catálogo de códigos estables que el admin UI muestra por "code".
  - Cada código define su status HTTP (no se eligen a mano en cada raise).
  - Renderizar application/problem+json con instance y request_id.
  - Documentar las respuestas de error en OpenAPI.

Colaboradores:
  - interfaces/api/http/error_mapping.py (ResourceError -> AppHTTPException)
  - api/exception_handlers.py (errores de upstream y no controlados)
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from http import HTTPStatus
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    UNSUPPORTED_OPERATION = "UNSUPPORTED_OPERATION"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"

    @property
    def http_status(self) -> HTTPStatus:
        return _HTTP_STATUS[self]


_HTTP_STATUS: dict[ErrorCode, HTTPStatus] = {
    ErrorCode.VALIDATION_ERROR: HTTPStatus.UNPROCESSABLE_ENTITY,
    ErrorCode.NOT_FOUND: HTTPStatus.NOT_FOUND,
    ErrorCode.UNSUPPORTED_OPERATION: HTTPStatus.METHOD_NOT_ALLOWED,
    ErrorCode.INTERNAL_ERROR: HTTPStatus.INTERNAL_SERVER_ERROR,
    ErrorCode.UPSTREAM_ERROR: HTTPStatus.BAD_GATEWAY,
}


class ErrorDetail(BaseModel):
    """Cuerpo RFC 7807 más `code` (estable) y `errors` (detalles opcionales)."""

    type: str = "about:blank"
    title: str
    status: int
    detail: str
    code: ErrorCode
    instance: str | None = None
    errors: list[dict[str, Any]] | None = None


class AppHTTPException(HTTPException):
    def __init__(
        self,
        code: ErrorCode,
        detail: str,
        errors: list[dict[str, Any]] | None = None,
    ):
        super().__init__(status_code=int(code.http_status), detail=detail)
        self.code = code
        self.errors = errors


def validation_error(
    detail: str, errors: list[dict[str, Any]] | None = None
) -> AppHTTPException:
    return AppHTTPException(ErrorCode.VALIDATION_ERROR, detail, errors)


def not_found(resource: str, identifier: str) -> AppHTTPException:
    return AppHTTPException(
        ErrorCode.NOT_FOUND, f"{resource} '{identifier}' no encontrado"
    )


def unsupported_operation(detail: str) -> AppHTTPException:
    return AppHTTPException(ErrorCode.UNSUPPORTED_OPERATION, detail)


def upstream_error(
    detail: str, errors: list[dict[str, Any]] | None = None
) -> AppHTTPException:
    return AppHTTPException(ErrorCode.UPSTREAM_ERROR, detail, errors)


def internal_error(detail: str = "Ocurrió un error inesperado") -> AppHTTPException:
    return AppHTTPException(ErrorCode.INTERNAL_ERROR, detail)


def problem_response(
    request: Request, exc: AppHTTPException, request_id: str | None = None
) -> JSONResponse:
    errors = list(exc.errors or [])
    if request_id:
        errors.append({"request_id": request_id})

    status = exc.code.http_status
    body = ErrorDetail(
        title=status.phrase,
        status=int(status),
        detail=str(exc.detail),
        code=exc.code,
        instance=str(request.url),
        errors=errors or None,
    )
    return JSONResponse(
        status_code=int(status),
        content=body.model_dump(mode="json", exclude_none=True),
        media_type=PROBLEM_JSON_MEDIA_TYPE,
    )


async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    return problem_response(
        request, exc, getattr(request.state, "request_id", None)
    )


OPENAPI_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    int(code.http_status): {
        "model": ErrorDetail,
        "description": f"{code.http_status.phrase} ({code.value})",
        "content": {PROBLEM_JSON_MEDIA_TYPE: {}},
    }
    for code in (
        ErrorCode.NOT_FOUND,
        ErrorCode.UNSUPPORTED_OPERATION,
        ErrorCode.VALIDATION_ERROR,
        ErrorCode.UPSTREAM_ERROR,
    )
}
