"""
===============================================================================
USE CASE: Resource Access Facade (workflows | audit | products)
===============================================================================

Name:
    Resource Access Facade

Business Goal:
    Exponer al admin UI un contrato uniforme list / get-one / get-many /
    create sobre tres colecciones lógicas:
      - workflows: derivados por la proyección sobre el audit log completo
      - audit: el audit log tal cual, con ids sintetizados
      - products: catálogo estático de PLM, con ids sintetizados

Why (Context / Intención):
    - El sistema es append-only: la única mutación es disparar un workflow
      nuevo (create sobre workflows). update/delete fallan siempre.
    - Cada llamada re-lee el feed y recalcula la proyección: no hay cache ni
      estado compartido entre llamadas, así que get_one/get_many nunca
      devuelven algo que un list sobre el mismo snapshot no devolvería.
    - Filtros, orden y paginación NO se aplican acá: los aplica el caller
      (ver application.listing).

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    ResourceFacade

Responsibilities:
    - Despachar por ResourceKind usando una tabla de capacidades cerrada.
    - get_one = list + búsqueda lineal; NOT_FOUND si no existe.
    - get_many = get_one concurrentes, resultado en el orden pedido, todo o nada.
    - create(workflows) = trigger en BPO + stub de WorkflowView.
    - Registrar métricas y logs por operación.

Collaborators:
    - domain.services.AuditFeed / ProductCatalog / WorkflowTriggerGateway
    - application.workflow_projection.AuditProjector
    - application.resource_errors
===============================================================================
"""

from __future__ import annotations

import asyncio
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Iterator, List, Mapping, NoReturn, Sequence

from ..crosscutting.exceptions import UpstreamServiceError
from ..crosscutting.logger import logger
from ..crosscutting.metrics import record_facade_operation, record_projection_run
from ..domain.audit import AuditEntry, audit_entry_id
from ..domain.entities import (
    CreatedWorkflow,
    ProductEntry,
    WorkflowStatus,
    WorkflowTriggerAck,
    WorkflowTriggerRequest,
    WorkflowView,
    product_entry_id,
)
from ..domain.services import AuditFeed, ProductCatalog, WorkflowTriggerGateway
from .resource_errors import (
    InvalidResourcePayloadError,
    ResourceNotFoundError,
    UnknownResourceError,
    UnsupportedOperationError,
)
from .resource_records import as_record
from .workflow_projection import AuditProjector


class ResourceKind(str, Enum):
    WORKFLOWS = "workflows"
    AUDIT = "audit"
    PRODUCTS = "products"

    @classmethod
    def parse(cls, name: str | "ResourceKind") -> "ResourceKind":
        try:
            return cls(name)
        except ValueError:
            raise UnknownResourceError(str(name)) from None


# Nombre humano para mensajes NOT_FOUND (igual que el data provider del UI).
_RESOURCE_LABELS: Dict[ResourceKind, str] = {
    ResourceKind.WORKFLOWS: "Workflow",
    ResourceKind.AUDIT: "Audit entry",
    ResourceKind.PRODUCTS: "Product",
}

# Label de métricas para colecciones que no existen (cardinalidad acotada).
UNKNOWN_COLLECTION_LABEL = "{unknown}"

# Estados del ack de BPO que indican que el workflow ya terminó.
_ACK_COMPLETED = frozenset({"success", "completed"})
_ACK_FAILED = frozenset({"failed", "error"})


@dataclass(frozen=True)
class ListResult:
    items: List[Any]
    total: int


Loader = Callable[[], Awaitable[List[Any]]]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ResourceFacade:
    """
    Use Case (Application Service):
        Contrato uniforme sobre las colecciones del admin.
    """

    def __init__(
        self,
        *,
        audit_feed: AuditFeed,
        product_catalog: ProductCatalog,
        trigger_gateway: WorkflowTriggerGateway,
        default_trigger_event: str = "schematic.released",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._feed = audit_feed
        self._catalog = product_catalog
        self._gateway = trigger_gateway
        self._default_trigger_event = default_trigger_event
        self._clock = clock

        self._loaders: Dict[ResourceKind, Loader] = {
            ResourceKind.WORKFLOWS: self._load_workflows,
            ResourceKind.AUDIT: self._load_audit,
            ResourceKind.PRODUCTS: self._load_products,
        }
        missing = set(ResourceKind) - set(self._loaders)
        if missing:
            raise RuntimeError(f"No loader bound for resources: {sorted(missing)}")

    # =========================================================================
    # Lectura
    # =========================================================================

    async def list(self, kind: ResourceKind | str) -> ListResult:
        kind = ResourceKind.parse(kind)
        with _track(kind, "list"):
            items = await self._loaders[kind]()
        logger.info(
            "facade list",
            extra={"resource": kind.value, "total": len(items)},
        )
        return ListResult(items=items, total=len(items))

    async def get_one(self, kind: ResourceKind | str, resource_id: str) -> Any:
        kind = ResourceKind.parse(kind)
        with _track(kind, "get_one"):
            return await self._find(kind, resource_id)

    async def get_many(
        self, kind: ResourceKind | str, ids: Sequence[str]
    ) -> List[Any]:
        """
        Resuelve cada id con su propio snapshot, en paralelo.

        Reglas:
          - El resultado respeta el orden de `ids`.
          - Si falta un id (o el caller cancela) se cancelan las búsquedas
            pendientes y se propaga el error: nunca hay resultados parciales.
        """
        kind = ResourceKind.parse(kind)
        with _track(kind, "get_many"):
            tasks = [asyncio.ensure_future(self._find(kind, rid)) for rid in ids]
            try:
                return list(await asyncio.gather(*tasks))
            except BaseException:
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise

    async def get_many_reference(
        self, kind: ResourceKind | str, target: str, target_id: str
    ) -> ListResult:
        """Items cuyo campo `target` vale `target_id` (ej. audit de un workflow)."""
        kind = ResourceKind.parse(kind)
        with _track(kind, "get_many_reference"):
            items = await self._loaders[kind]()
        related = [
            item for item in items if _field_matches(as_record(item), target, target_id)
        ]
        return ListResult(items=related, total=len(related))

    # =========================================================================
    # Escritura (solo create de workflows)
    # =========================================================================

    async def create(
        self, kind: ResourceKind | str, data: Mapping[str, Any]
    ) -> CreatedWorkflow:
        kind = ResourceKind.parse(kind)
        with _track(kind, "create"):
            if kind is not ResourceKind.WORKFLOWS:
                raise UnsupportedOperationError("Create", kind.value)

            request = self._build_trigger_request(data)
            ack = await self._gateway.trigger(request)
            created = CreatedWorkflow(
                view=self._view_from_ack(ack, request),
                ack=ack,
            )

        logger.info(
            "workflow disparado",
            extra={
                "workflow_id": ack.workflow_id,
                "trigger_event": request.trigger_event,
                "ack_status": ack.status,
            },
        )
        return created

    async def update(self, kind: ResourceKind | str, *_: Any, **__: Any) -> NoReturn:
        self._reject("Update", kind)

    async def update_many(
        self, kind: ResourceKind | str, *_: Any, **__: Any
    ) -> NoReturn:
        self._reject("UpdateMany", kind)

    async def delete(self, kind: ResourceKind | str, *_: Any, **__: Any) -> NoReturn:
        self._reject("Delete", kind)

    async def delete_many(
        self, kind: ResourceKind | str, *_: Any, **__: Any
    ) -> NoReturn:
        self._reject("DeleteMany", kind)

    # =========================================================================
    # Loaders (tabla de capacidades)
    # =========================================================================

    async def _load_workflows(self) -> List[WorkflowView]:
        events = await self._feed.read_events()
        projector = AuditProjector().apply_all(events)

        stats = projector.stats
        anomalies = stats.anomalies()
        record_projection_run(stats.events_seen, anomalies)
        if any(anomalies.values()):
            logger.debug("proyección con anomalías", extra=anomalies)

        return list(projector.snapshot().values())

    async def _load_audit(self) -> List[AuditEntry]:
        events = await self._feed.read_events()
        return [
            AuditEntry(id=audit_entry_id(event.workflow_id, index), event=event)
            for index, event in enumerate(events)
        ]

    async def _load_products(self) -> List[ProductEntry]:
        products = await self._catalog.list_products()
        return [
            ProductEntry(id=product_entry_id(index), product=product)
            for index, product in enumerate(products)
        ]

    # =========================================================================
    # Helpers privados
    # =========================================================================

    async def _find(self, kind: ResourceKind, resource_id: str) -> Any:
        items = await self._loaders[kind]()
        for item in items:
            if item.id == resource_id:
                return item
        raise ResourceNotFoundError(_RESOURCE_LABELS[kind], resource_id)

    def _build_trigger_request(self, data: Mapping[str, Any]) -> WorkflowTriggerRequest:
        trigger_event = (
            str(data.get("trigger_event") or "").strip() or self._default_trigger_event
        )
        product_name = (data.get("product_name") or "").strip()
        if not product_name:
            raise InvalidResourcePayloadError(
                "product_name is required", field="product_name"
            )

        payload: Dict[str, Any] = {"product_name": product_name}
        revision = (data.get("revision") or "").strip()
        if revision:
            payload["revision"] = revision

        return WorkflowTriggerRequest(trigger_event=trigger_event, payload=payload)

    def _view_from_ack(
        self, ack: WorkflowTriggerAck, request: WorkflowTriggerRequest
    ) -> WorkflowView:
        status = ack.status.strip().lower()
        if status in _ACK_COMPLETED:
            workflow_status = WorkflowStatus.COMPLETED
        elif status in _ACK_FAILED:
            workflow_status = WorkflowStatus.FAILED
        else:
            workflow_status = WorkflowStatus.RUNNING

        return WorkflowView(
            workflow_id=ack.workflow_id,
            status=workflow_status,
            message=ack.message,
            created_at=self._clock(),
            product_name=request.payload.get("product_name"),
            revision=request.payload.get("revision"),
            document_url=ack.document_url,
        )

    @staticmethod
    def _reject(operation: str, kind: ResourceKind | str) -> NoReturn:
        name = kind.value if isinstance(kind, ResourceKind) else str(kind)
        try:
            label = ResourceKind.parse(name).value
        except UnknownResourceError:
            label = UNKNOWN_COLLECTION_LABEL
        record_facade_operation(label, operation.lower(), "unsupported")
        raise UnsupportedOperationError(operation, name)


def _field_matches(record: Mapping[str, Any], target: str, target_id: str) -> bool:
    value = record.get(target)
    return value is not None and str(value) == target_id


@contextmanager
def _track(kind: ResourceKind, operation: str) -> Iterator[None]:
    """Registra el resultado de la operación y re-lanza cualquier error."""
    try:
        yield
    except ResourceNotFoundError:
        record_facade_operation(kind.value, operation, "not_found")
        raise
    except UnsupportedOperationError:
        record_facade_operation(kind.value, operation, "unsupported")
        raise
    except InvalidResourcePayloadError:
        record_facade_operation(kind.value, operation, "invalid")
        raise
    except UpstreamServiceError as exc:
        record_facade_operation(kind.value, operation, "upstream_error")
        logger.error(
            "facade: falla de upstream",
            extra={
                "resource": kind.value,
                "operation": operation,
                "service": exc.service,
                "upstream_status": exc.status_code,
                "error_id": exc.error_id,
            },
        )
        raise
    except asyncio.CancelledError:
        record_facade_operation(kind.value, operation, "canceled")
        logger.info(
            "facade: operación cancelada",
            extra={"resource": kind.value, "operation": operation},
        )
        raise
    else:
        record_facade_operation(kind.value, operation, "ok")
