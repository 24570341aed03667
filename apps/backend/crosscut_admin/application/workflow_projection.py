"""
===============================================================================
AUDIT PROJECTION ENGINE (Audit trail -> WorkflowView)
===============================================================================

Name:
    Workflow Projection

Business Goal:
    Derivar el estado actual de cada workflow a partir del audit trail
    append-only que escribe BPO, para alimentar las pantallas de lista/detalle.

Why (Context / Intención):
    - BPO no expone un recurso "workflow": solo registra pasos de auditoría.
    - El estado se reconstruye plegando los eventos en el orden recibido
      (sin reordenar): started crea la vista, completed/failed la cierran.
    - Un evento malformado no debe invalidar la vista de los demás workflows:
      la proyección NUNCA lanza excepciones, resuelve ambigüedades descartando
      o sobrescribiendo.

Reglas de plegado:
    - workflow_started: inserta WorkflowView(running). Si ya existía, se
      sobrescribe (semántica de restart) y se cuenta en duplicate_starts.
    - workflow_completed / workflow_failed:
        * sin vista previa -> se descarta (orphan_terminals)
        * vista ya terminal -> se ignora (late_terminals)
        * vista running -> completed si status == success, failed si no;
          document_url si details.final_document_url está presente.
    - cualquier otra acción: no-op (ignored_actions).

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    AuditProjector

Responsibilities:
    - Mantener el mapping workflow_id -> WorkflowView (dueño exclusivo).
    - Aplicar eventos de a uno (apply) o en lote (apply_all), O(n).
    - Exponer snapshots inmutables y contadores de anomalías.

Collaborators:
    - domain.audit.AuditEvent / AuditAction
    - domain.entities.WorkflowView / WorkflowStatus
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterable, Mapping

from ..domain.audit import AuditAction, AuditEvent
from ..domain.entities import (
    MSG_WORKFLOW_COMPLETED,
    MSG_WORKFLOW_FAILED,
    MSG_WORKFLOW_RUNNING,
    WorkflowStatus,
    WorkflowView,
)

_STARTED = AuditAction.WORKFLOW_STARTED.value


@dataclass
class ProjectionStats:
    """
    Contadores del plegado.

    Campos:
      - events_seen: total de eventos aplicados.
      - orphan_terminals: terminales sin workflow_started previo (descartados).
      - duplicate_starts: workflow_started repetidos (sobrescriben la vista).
      - late_terminals: terminales sobre una vista ya terminal (ignorados).
      - ignored_actions: acciones intermedias o desconocidas (no-op).
    """

    events_seen: int = 0
    orphan_terminals: int = 0
    duplicate_starts: int = 0
    late_terminals: int = 0
    ignored_actions: int = 0

    def anomalies(self) -> dict[str, int]:
        return {
            "orphan_terminal": self.orphan_terminals,
            "duplicate_start": self.duplicate_starts,
            "late_terminal": self.late_terminals,
        }


def _detail_str(details: Mapping[str, object], key: str) -> str | None:
    """Extrae un string de details; cualquier otro tipo cuenta como ausente."""
    value = details.get(key) if isinstance(details, Mapping) else None
    return value if isinstance(value, str) and value else None


class AuditProjector:
    """
    Fold incremental del audit trail.

    Aplicar una secuencia partida en varios apply_all() produce el mismo
    resultado que un único apply_all() sobre la concatenación.
    """

    def __init__(self) -> None:
        self._views: Dict[str, WorkflowView] = {}
        self.stats = ProjectionStats()

    def apply(self, event: AuditEvent) -> None:
        self.stats.events_seen += 1

        if event.action == _STARTED:
            self._apply_started(event)
        elif event.is_terminal:
            self._apply_terminal(event)
        else:
            self.stats.ignored_actions += 1

    def apply_all(self, events: Iterable[AuditEvent]) -> "AuditProjector":
        for event in events:
            self.apply(event)
        return self

    def snapshot(self) -> Dict[str, WorkflowView]:
        """Copia del mapping; las vistas son inmutables."""
        return dict(self._views)

    # -------------------------------------------------------------------------
    # Transiciones
    # -------------------------------------------------------------------------

    def _apply_started(self, event: AuditEvent) -> None:
        if event.workflow_id in self._views:
            self.stats.duplicate_starts += 1

        self._views[event.workflow_id] = WorkflowView(
            workflow_id=event.workflow_id,
            status=WorkflowStatus.RUNNING,
            message=MSG_WORKFLOW_RUNNING,
            created_at=event.timestamp,
            product_name=_detail_str(event.details, "product_name"),
            revision=_detail_str(event.details, "revision"),
        )

    def _apply_terminal(self, event: AuditEvent) -> None:
        current = self._views.get(event.workflow_id)
        if current is None:
            self.stats.orphan_terminals += 1
            return
        if current.status.is_terminal:
            self.stats.late_terminals += 1
            return

        succeeded = event.is_success
        self._views[event.workflow_id] = replace(
            current,
            status=WorkflowStatus.COMPLETED if succeeded else WorkflowStatus.FAILED,
            message=MSG_WORKFLOW_COMPLETED if succeeded else MSG_WORKFLOW_FAILED,
            document_url=_detail_str(event.details, "final_document_url"),
            completed_at=event.timestamp,
        )


def project_workflows(events: Iterable[AuditEvent]) -> Dict[str, WorkflowView]:
    """
    Pliega `events` (en orden de entrada) en workflow_id -> WorkflowView.

    Función pura: mismo input, mismo output. El orden de las claves del
    resultado no es parte del contrato.
    """
    return AuditProjector().apply_all(events).snapshot()
