"""
===============================================================================
TARJETA CRC — error_mapping.py (Resource Error -> HTTP RFC7807)
===============================================================================

Responsabilidades:
  - Traducir las excepciones tipadas del Resource Access Facade a
    AppHTTPException RFC7807.
  - Centralizar el mapeo para evitar duplicación en routers y handlers.
  - Mantener la capa de aplicación libre de HTTP.

Reglas:
  - ResourceNotFoundError -> 404 NOT_FOUND
  - UnsupportedOperationError -> 405 UNSUPPORTED_OPERATION
  - InvalidResourcePayloadError / UnknownResourceError -> 422 VALIDATION_ERROR

Colaboradores:
  - application.resource_errors
  - crosscutting.error_responses (not_found, unsupported_operation, ...)
===============================================================================
"""

from __future__ import annotations

from crosscut_admin.application.resource_errors import (
    InvalidResourcePayloadError,
    ResourceError,
    ResourceNotFoundError,
    UnknownResourceError,
    UnsupportedOperationError,
)
from crosscut_admin.crosscutting.error_responses import (
    AppHTTPException,
    internal_error,
    not_found,
    unsupported_operation,
    validation_error,
)


def to_http_exception(exc: ResourceError) -> AppHTTPException:
    """Traduce un ResourceError a su AppHTTPException equivalente."""
    if isinstance(exc, ResourceNotFoundError):
        return not_found(exc.resource, exc.resource_id)
    if isinstance(exc, UnsupportedOperationError):
        return unsupported_operation(exc.message)
    if isinstance(exc, InvalidResourcePayloadError):
        errors = [{"field": exc.field}] if exc.field else None
        return validation_error(exc.message, errors)
    if isinstance(exc, UnknownResourceError):
        return validation_error(
            exc.message, [{"field": "collection", "value": exc.name}]
        )
    return internal_error(exc.message)
