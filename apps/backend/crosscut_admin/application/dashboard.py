"""
===============================================================================
USE CASE: Get System Metrics (Dashboard)
===============================================================================

Name:
    Get System Metrics Use Case

Business Goal:
    Resumir para la home del admin:
      - cantidad de workflows por estado (running / completed / failed)
      - tiempo medio de ejecución de los workflows terminados
      - salud de BPO, PLM y DocGen

Why (Context / Intención):
    - Los conteos salen de la misma proyección que ve la lista de workflows,
      así el dashboard nunca contradice al listado.
    - Un servicio caído no debe romper el dashboard: se reporta como
      "unreachable" y el resto de la respuesta se arma igual.
    - Los errores del audit feed SÍ se propagan: sin workflows no hay métricas.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    GetSystemMetricsUseCase

Responsibilities:
    - Contar workflows por estado.
    - Promediar duration_ms sobre vistas terminales con ambos timestamps.
    - Consultar los health probes en paralelo.

Collaborators:
    - application.resource_facade.ResourceFacade (colección workflows)
    - domain.services.HealthProbe
===============================================================================
"""

from __future__ import annotations

import asyncio
from typing import List, Sequence

from ..crosscutting.exceptions import UpstreamServiceError
from ..crosscutting.logger import logger
from ..domain.entities import ServiceHealth, SystemMetrics, WorkflowStatus, WorkflowView
from ..domain.services import HealthProbe
from .resource_facade import ResourceFacade, ResourceKind

STATUS_UNREACHABLE = "unreachable"


class GetSystemMetricsUseCase:
    """
    Use Case (Application Service / Query):
        Métricas agregadas del sistema para el dashboard.
    """

    def __init__(
        self,
        facade: ResourceFacade,
        health_probes: Sequence[HealthProbe] = (),
    ) -> None:
        self._facade = facade
        self._probes = list(health_probes)

    async def execute(self) -> SystemMetrics:
        listing = asyncio.ensure_future(self._facade.list(ResourceKind.WORKFLOWS))
        probing = asyncio.ensure_future(self._probe_all())
        try:
            listed, health = await asyncio.gather(listing, probing)
        except BaseException:
            # R: si falla el listado (o cancelan) no quedan health checks colgados.
            listing.cancel()
            probing.cancel()
            await asyncio.gather(listing, probing, return_exceptions=True)
            raise
        views: List[WorkflowView] = listed.items

        by_status = {status: 0 for status in WorkflowStatus}
        for view in views:
            by_status[view.status] += 1

        durations = [
            view.duration_ms
            for view in views
            if view.status.is_terminal and view.duration_ms is not None
        ]
        average = sum(durations) / len(durations) if durations else None

        return SystemMetrics(
            total_workflows=len(views),
            completed_workflows=by_status[WorkflowStatus.COMPLETED],
            failed_workflows=by_status[WorkflowStatus.FAILED],
            running_workflows=by_status[WorkflowStatus.RUNNING],
            average_execution_time_ms=average,
            services_health=health,
        )

    async def _probe_all(self) -> List[ServiceHealth]:
        return list(await asyncio.gather(*(self._probe(p) for p in self._probes)))

    @staticmethod
    async def _probe(probe: HealthProbe) -> ServiceHealth:
        try:
            return await probe.check_health()
        except UpstreamServiceError as exc:
            logger.warning(
                "health check falló",
                extra={
                    "service": probe.service_name,
                    "upstream_status": exc.status_code,
                    "error_id": exc.error_id,
                },
            )
            return ServiceHealth(service=probe.service_name, status=STATUS_UNREACHABLE)
