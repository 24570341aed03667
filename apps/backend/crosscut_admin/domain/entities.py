"""
Name: Domain Entities (CrossCut Admin)

Responsibilities:
  - Define WorkflowView, the materialized current state of one workflow
  - Define the static product catalog shapes (Product, ProductComponent)
  - Define the trigger request/acknowledgment exchanged with BPO
  - Define dashboard value objects (ServiceHealth, SystemMetrics)

Collaborators:
  - application.workflow_projection: sole producer of WorkflowView
  - application.resource_facade: exposes these entities per collection
  - infrastructure.services: map HTTP payloads to/from these entities

Constraints:
  - Pure data structures, no IO
  - Frozen dataclasses: consumers receive read-only snapshots
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, List


class WorkflowStatus(str, Enum):
    """R: Lifecycle state of a workflow as derived from the audit trail."""

    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not WorkflowStatus.RUNNING


MSG_WORKFLOW_RUNNING = "Workflow in progress"
MSG_WORKFLOW_COMPLETED = "Workflow completed successfully"
MSG_WORKFLOW_FAILED = "Workflow failed"


@dataclass(frozen=True, slots=True)
class WorkflowView:
    """
    R: Current-state record for one workflow.

    Attributes:
        workflow_id: Owning workflow identifier (also exposed as `id`)
        status: running | completed | failed
        message: Human-readable status summary
        created_at: Timestamp of the workflow_started event
        product_name: Copied from the start event details
        revision: Copied from the start event details
        document_url: Final document reference, set by a terminal event
        completed_at: Timestamp of the applied terminal event
    """

    workflow_id: str
    status: WorkflowStatus
    message: str
    created_at: datetime | None = None
    product_name: str | None = None
    revision: str | None = None
    document_url: str | None = None
    completed_at: datetime | None = None

    @property
    def id(self) -> str:
        return self.workflow_id

    @property
    def duration_ms(self) -> float | None:
        """R: Elapsed time between start and terminal event, if both are known."""
        if self.created_at is None or self.completed_at is None:
            return None
        if (self.created_at.tzinfo is None) != (self.completed_at.tzinfo is None):
            return None
        return (self.completed_at - self.created_at).total_seconds() * 1000.0


@dataclass(frozen=True, slots=True)
class ProductComponent:
    name: str
    voltage: str
    test_type: str


@dataclass(frozen=True, slots=True)
class Product:
    """R: PLM catalog entry (no lifecycle managed here)."""

    name: str
    voltage: str
    description: str
    revision: str
    components: List[ProductComponent] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ProductEntry:
    """R: Catalog product with a synthesized "product-{index}" identifier."""

    id: str
    product: Product


def product_entry_id(index: int) -> str:
    return f"product-{index}"


@dataclass(frozen=True, slots=True)
class WorkflowTriggerRequest:
    trigger_event: str
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class WorkflowTriggerAck:
    """R: Initial acknowledgment returned by the execution backend."""

    status: str
    workflow_id: str
    message: str
    document_url: str | None = None


@dataclass(frozen=True, slots=True)
class CreatedWorkflow:
    """R: Result of triggering a workflow: a view stub plus the raw ack."""

    view: WorkflowView
    ack: WorkflowTriggerAck

    @property
    def id(self) -> str:
        return self.view.id


@dataclass(frozen=True, slots=True)
class ServiceHealth:
    service: str
    status: str
    version: str | None = None

    @property
    def is_healthy(self) -> bool:
        return self.status == "healthy"


@dataclass(frozen=True, slots=True)
class SystemMetrics:
    total_workflows: int
    completed_workflows: int
    failed_workflows: int
    running_workflows: int
    average_execution_time_ms: float | None
    services_health: List[ServiceHealth] = field(default_factory=list)
