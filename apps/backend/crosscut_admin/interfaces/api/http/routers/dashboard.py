"""
===============================================================================
TARJETA CRC — crosscut_admin/interfaces/api/http/routers/dashboard.py
===============================================================================

Name:
    Dashboard Router

Responsibilities:
    - Exponer las métricas agregadas de workflows y la salud de servicios.

Collaborators:
    - application.dashboard.GetSystemMetricsUseCase
    - container.get_system_metrics_use_case
    - schemas.dashboard
===============================================================================
"""

from __future__ import annotations

from crosscut_admin.application.dashboard import GetSystemMetricsUseCase
from crosscut_admin.container import get_system_metrics_use_case
from fastapi import APIRouter, Depends

from ..schemas.dashboard import ServiceHealthRes, SystemMetricsRes

router = APIRouter()


@router.get(
    "/dashboard/metrics",
    response_model=SystemMetricsRes,
    tags=["dashboard"],
)
async def get_system_metrics(
    use_case: GetSystemMetricsUseCase = Depends(get_system_metrics_use_case),
):
    metrics = await use_case.execute()
    return SystemMetricsRes(
        total_workflows=metrics.total_workflows,
        completed_workflows=metrics.completed_workflows,
        failed_workflows=metrics.failed_workflows,
        running_workflows=metrics.running_workflows,
        average_execution_time_ms=metrics.average_execution_time_ms,
        services_health=[
            ServiceHealthRes(service=h.service, status=h.status, version=h.version)
            for h in metrics.services_health
        ],
    )
