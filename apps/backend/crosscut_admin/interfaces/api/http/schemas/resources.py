"""
===============================================================================
TARJETA CRC — schemas/resources.py
===============================================================================

Módulo:
    Schemas HTTP para las colecciones del admin (workflows / audit / products)

Responsabilidades:
    - DTOs de response por colección, con los mismos nombres de campo que
      usa el admin UI.
    - DTO de request para disparar un workflow.
    - Envelope de listados: {items, total}.

Colaboradores:
    - application.resource_records (records planos que se validan acá)
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Union

from pydantic import BaseModel, Field


class WorkflowRes(BaseModel):
    """Vista actual de un workflow (proyección del audit log)."""

    id: str
    workflow_id: str
    status: str
    message: str
    created_at: datetime | None = None
    product_name: str | None = None
    revision: str | None = None
    document_url: str | None = None
    completed_at: datetime | None = None
    duration_ms: float | None = None


class WorkflowCreatedRes(WorkflowRes):
    """Stub del workflow recién disparado + status crudo del ack de BPO."""

    ack_status: str


class AuditEntryRes(BaseModel):
    id: str
    timestamp: datetime
    workflow_id: str
    event: str
    action: str
    status: str
    details: dict[str, Any] = Field(default_factory=dict)
    error: str | None = None


class ProductComponentRes(BaseModel):
    name: str
    voltage: str
    test_type: str


class ProductRes(BaseModel):
    id: str
    name: str
    voltage: str
    description: str
    revision: str
    components: List[ProductComponentRes] = Field(default_factory=list)


ResourceRes = Union[WorkflowRes, AuditEntryRes, ProductRes]


class ResourceListRes(BaseModel):
    """Listado de una colección (la página pedida + total filtrado)."""

    items: List[ResourceRes]
    total: int


class CreateWorkflowReq(BaseModel):
    """
    Formulario de creación de workflow.

    product_name se valida en el facade para responder RFC7807 uniforme.
    """

    product_name: str | None = Field(None, max_length=200)
    revision: str | None = Field(None, max_length=50)
    trigger_event: str | None = Field(None, max_length=100)
