"""
===============================================================================
RESOURCE FACADE ERRORS
===============================================================================

Name:
    Resource Errors

Why (Context / Intención):
    - El facade lanza excepciones tipadas para errores de programación del
      caller (id inexistente, operación no soportada, payload inválido).
    - Los problemas de calidad de datos del audit log NO son errores: los
      resuelve la proyección descartando o sobrescribiendo.
    - Los errores de upstream (UpstreamServiceError) se propagan sin tocar.

Colaboradores:
    - crosscutting.exceptions.CrossCutError (base con error_code + error_id)
    - api/exception_handlers.py (mapeo a RFC7807: 404 / 405 / 422)
===============================================================================
"""

from __future__ import annotations

from ..crosscutting.exceptions import CrossCutError


class ResourceError(CrossCutError):
    """Base de errores del Resource Access Facade."""

    error_code: str = "RESOURCE_ERROR"


class UnknownResourceError(ResourceError):
    error_code: str = "UNKNOWN_RESOURCE"

    def __init__(self, name: str):
        super().__init__(f"Unknown resource: {name}")
        self.name = name


class ResourceNotFoundError(ResourceError):
    error_code: str = "NOT_FOUND"

    def __init__(self, resource: str, resource_id: str):
        super().__init__(f"{resource} not found: {resource_id}")
        self.resource = resource
        self.resource_id = resource_id


class UnsupportedOperationError(ResourceError):
    """El sistema es append-only: solo se permite crear workflows."""

    error_code: str = "UNSUPPORTED_OPERATION"

    def __init__(self, operation: str, resource: str):
        super().__init__(f"{operation} not supported for resource: {resource}")
        self.operation = operation
        self.resource = resource


class InvalidResourcePayloadError(ResourceError):
    error_code: str = "VALIDATION_ERROR"

    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.field = field
