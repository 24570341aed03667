"""
===============================================================================
TARJETA CRC — domain/services.py
===============================================================================

Módulo:
    Puertos de colaboradores externos (Protocols)

Responsabilidades:
    - Definir el contrato de lectura del audit log (AuditFeed).
    - Definir el contrato del catálogo de productos (ProductCatalog).
    - Definir el contrato de disparo de workflows (WorkflowTriggerGateway).
    - Definir el contrato de health check de servicios (HealthProbe).

Colaboradores:
    - infrastructure/feeds, infrastructure/catalog, infrastructure/services:
      implementaciones concretas.
    - application: consume estos puertos.

Reglas:
    - SOLO interfaces: nada de implementación.
    - Todas las operaciones son async: cualquier llamada saliente debe poder
      cancelarse desde el caller.
    - Los errores de transporte se propagan (UpstreamServiceError); los puertos
      no reintentan.
===============================================================================
"""

from __future__ import annotations

from typing import List, Protocol

from .audit import AuditEvent
from .entities import (
    Product,
    ServiceHealth,
    WorkflowTriggerAck,
    WorkflowTriggerRequest,
)


class AuditFeed(Protocol):
    """Contrato de lectura del audit trail completo, en orden de emisión."""

    async def read_events(self) -> List[AuditEvent]:
        """Snapshot completo y ordenado (sin streaming incremental)."""
        ...


class ProductCatalog(Protocol):
    """Contrato del catálogo estático de productos (PLM)."""

    async def list_products(self) -> List[Product]: ...


class WorkflowTriggerGateway(Protocol):
    """Contrato de disparo de workflows en el backend de ejecución."""

    async def trigger(self, request: WorkflowTriggerRequest) -> WorkflowTriggerAck:
        """
        Una única llamada saliente.

        Nota:
          - Los triggers NO son idempotentes: reintentar crea otro workflow_id.
        """
        ...


class HealthProbe(Protocol):
    """Contrato de health check de un servicio externo."""

    @property
    def service_name(self) -> str: ...

    async def check_health(self) -> ServiceHealth: ...
