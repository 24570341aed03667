"""
Application layer: audit projection, resource facade and dashboard use cases.
"""

from .dashboard import GetSystemMetricsUseCase
from .listing import ListQuery, apply_list_query
from .resource_errors import (
    InvalidResourcePayloadError,
    ResourceError,
    ResourceNotFoundError,
    UnknownResourceError,
    UnsupportedOperationError,
)
from .resource_facade import ListResult, ResourceFacade, ResourceKind
from .resource_records import as_record
from .workflow_projection import AuditProjector, ProjectionStats, project_workflows

__all__ = [
    "GetSystemMetricsUseCase",
    "ListQuery",
    "apply_list_query",
    "InvalidResourcePayloadError",
    "ResourceError",
    "ResourceNotFoundError",
    "UnknownResourceError",
    "UnsupportedOperationError",
    "ListResult",
    "ResourceFacade",
    "ResourceKind",
    "as_record",
    "AuditProjector",
    "ProjectionStats",
    "project_workflows",
]
