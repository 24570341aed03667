"""
===============================================================================
TARJETA CRC — schemas/dashboard.py
===============================================================================

Módulo:
    Schemas HTTP para el dashboard

Responsabilidades:
    - DTO de métricas agregadas y salud de servicios.

Colaboradores:
    - domain.entities.SystemMetrics / ServiceHealth
===============================================================================
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ServiceHealthRes(BaseModel):
    service: str
    status: str
    version: str | None = None


class SystemMetricsRes(BaseModel):
    total_workflows: int
    completed_workflows: int
    failed_workflows: int
    running_workflows: int
    average_execution_time_ms: float | None = None
    services_health: list[ServiceHealthRes] = Field(default_factory=list)
