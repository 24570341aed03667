"""
Name: Resource Records

Responsibilities:
  - Flatten facade items (WorkflowView, AuditEntry, ProductEntry,
    CreatedWorkflow) into plain dict records
  - Give the list helpers and the HTTP layer one field vocabulary per
    collection (the same field names the admin UI binds to)

Collaborators:
  - application.listing: filters/sorts on these records
  - application.resource_facade: get_many_reference filters on these records
  - interfaces.api.http.schemas: validates records into response models

Notes:
  - Enum values are emitted as their string value
  - Nested dataclasses (event, product, components) are flattened to the top level
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from ..domain.audit import AuditEntry
from ..domain.entities import CreatedWorkflow, ProductEntry, WorkflowView

Record = dict[str, Any]


def workflow_record(view: WorkflowView) -> Record:
    return {
        "id": view.id,
        "workflow_id": view.workflow_id,
        "status": view.status.value,
        "message": view.message,
        "created_at": view.created_at,
        "product_name": view.product_name,
        "revision": view.revision,
        "document_url": view.document_url,
        "completed_at": view.completed_at,
        "duration_ms": view.duration_ms,
    }


def audit_record(entry: AuditEntry) -> Record:
    return {"id": entry.id, **asdict(entry.event)}


def product_record(entry: ProductEntry) -> Record:
    return {"id": entry.id, **asdict(entry.product)}


def created_workflow_record(created: CreatedWorkflow) -> Record:
    return {**workflow_record(created.view), "ack_status": created.ack.status}


def as_record(item: object) -> Record:
    """R: Dispatch by item type; unknown types are a programming error."""
    if isinstance(item, WorkflowView):
        return workflow_record(item)
    if isinstance(item, AuditEntry):
        return audit_record(item)
    if isinstance(item, ProductEntry):
        return product_record(item)
    if isinstance(item, CreatedWorkflow):
        return created_workflow_record(item)
    raise TypeError(f"Unsupported resource item: {type(item).__name__}")
