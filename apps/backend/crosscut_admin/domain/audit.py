"""
===============================================================================
TARJETA CRC — domain/audit.py
===============================================================================

Módulo:
    Modelos de Auditoría (Dominio)

Responsabilidades:
    - Definir el evento de auditoría emitido por BPO (AuditEvent).
    - Definir el vocabulario conocido de acciones y estados.
    - Definir AuditEntry: evento + identificador sintetizado para listados.

Colaboradores:
    - domain.services.AuditFeed: provee la secuencia ordenada de eventos.
    - application.workflow_projection: pliega eventos en WorkflowView.
    - infrastructure.feeds: mapea JSON del audit log hacia AuditEvent.

Notas:
    - La auditoría es append-only: los eventos son inmutables.
    - `action` es vocabulario abierto: acciones desconocidas son válidas y la
      proyección las trata como no-op.
    - `details` es flexible (dict) y su esquema depende de la acción.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class AuditAction(str, Enum):
    """Acciones conocidas del ciclo de vida de un workflow."""

    WORKFLOW_STARTED = "workflow_started"
    TEMPLATE_PLAN_GENERATED = "template_plan_generated"
    PLM_CONSULTATION = "plm_consultation"
    DOCGEN_COMMAND = "docgen_command"
    WORKFLOW_COMPLETED = "workflow_completed"
    WORKFLOW_FAILED = "workflow_failed"


TERMINAL_ACTIONS: frozenset[str] = frozenset(
    {AuditAction.WORKFLOW_COMPLETED.value, AuditAction.WORKFLOW_FAILED.value}
)


class AuditStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class AuditEvent:
    """Un paso del ciclo de vida de un workflow, tal como lo registró BPO."""

    timestamp: datetime
    workflow_id: str
    event: str
    action: str
    status: str
    details: dict[str, Any] = field(default_factory=dict)
    error: str | None = None

    def __post_init__(self) -> None:
        if not self.workflow_id:
            raise ValueError("workflow_id must be non-empty")
        if self.timestamp.tzinfo is None:
            # R: BPO escribe en UTC; un timestamp sin zona se interpreta como UTC.
            object.__setattr__(
                self, "timestamp", self.timestamp.replace(tzinfo=timezone.utc)
            )

    @property
    def is_success(self) -> bool:
        return self.status == AuditStatus.SUCCESS.value

    @property
    def is_terminal(self) -> bool:
        return self.action in TERMINAL_ACTIONS


@dataclass(frozen=True, slots=True)
class AuditEntry:
    """
    Evento de auditoría con identificador sintetizado.

    El id tiene la forma "{workflow_id}-{index}" donde index es la posición en
    el feed: solo es estable dentro de un mismo snapshot del feed.
    """

    id: str
    event: AuditEvent


def audit_entry_id(workflow_id: str, index: int) -> str:
    return f"{workflow_id}-{index}"
