"""
Domain layer: audit events, workflow views, catalog entities and ports.
"""

from .audit import (
    TERMINAL_ACTIONS,
    AuditAction,
    AuditEntry,
    AuditEvent,
    AuditStatus,
    audit_entry_id,
)
from .entities import (
    MSG_WORKFLOW_COMPLETED,
    MSG_WORKFLOW_FAILED,
    MSG_WORKFLOW_RUNNING,
    CreatedWorkflow,
    Product,
    ProductComponent,
    ProductEntry,
    ServiceHealth,
    SystemMetrics,
    WorkflowStatus,
    WorkflowTriggerAck,
    WorkflowTriggerRequest,
    WorkflowView,
    product_entry_id,
)
from .services import AuditFeed, HealthProbe, ProductCatalog, WorkflowTriggerGateway

__all__ = [
    "TERMINAL_ACTIONS",
    "AuditAction",
    "AuditEntry",
    "AuditEvent",
    "AuditStatus",
    "audit_entry_id",
    "MSG_WORKFLOW_COMPLETED",
    "MSG_WORKFLOW_FAILED",
    "MSG_WORKFLOW_RUNNING",
    "CreatedWorkflow",
    "Product",
    "ProductComponent",
    "ProductEntry",
    "ServiceHealth",
    "SystemMetrics",
    "WorkflowStatus",
    "WorkflowTriggerAck",
    "WorkflowTriggerRequest",
    "WorkflowView",
    "product_entry_id",
    "AuditFeed",
    "HealthProbe",
    "ProductCatalog",
    "WorkflowTriggerGateway",
]
