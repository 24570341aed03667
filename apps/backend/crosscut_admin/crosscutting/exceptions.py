# apps/backend/crosscut_admin/crosscutting/exceptions.py
"""
===============================================================================
MÓDULO: Excepciones tipadas del backend
===============================================================================

CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  CrossCutError + subclases

Responsabilidades:
  - Estandarizar errores internos que luego se mapean a HTTP
  - Generar error_id para rastreo
  - Transportar el contexto del upstream (servicio, status HTTP)

Colaboradores:
  - api/exception_handlers.py (mapea a RFC7807)
  - application.resource_facade (errores de recurso)
  - infrastructure.* (errores de upstream)
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class CrossCutError(Exception):
    """Base para errores internos del sistema."""

    error_code: str = "CROSSCUT_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class UpstreamServiceError(CrossCutError):
    """
    Falla de un servicio externo (BPO, PLM, DocGen) o de su transporte.

    status_code es el HTTP status devuelto por el upstream (None si no hubo
    respuesta: timeout, conexión rechazada, etc.).
    """

    error_code: str = "UPSTREAM_ERROR"

    def __init__(
        self,
        message: str,
        *,
        service: str,
        status_code: int | None = None,
        upstream_code: str | None = None,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message, error_id=error_id, original_error=original_error)
        self.service = service
        self.status_code = status_code
        self.upstream_code = upstream_code


class AuditFeedError(UpstreamServiceError):
    """El audit log no se pudo leer o no tiene el formato esperado."""

    error_code: str = "AUDIT_FEED_ERROR"

    def __init__(
        self,
        message: str,
        *,
        source: str,
        original_error: Exception | None = None,
    ):
        super().__init__(
            message, service="audit-feed", original_error=original_error
        )
        self.source = source


class ProductCatalogError(UpstreamServiceError):
    """El catálogo de productos no se pudo leer o parsear."""

    error_code: str = "PRODUCT_CATALOG_ERROR"

    def __init__(
        self,
        message: str,
        *,
        source: str,
        original_error: Exception | None = None,
    ):
        super().__init__(
            message, service="product-catalog", original_error=original_error
        )
        self.source = source
