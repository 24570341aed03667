"""
===============================================================================
ARCHIVO: crosscutting/metrics.py
===============================================================================

CRC CARD (Módulo)
-------------------------------------------------------------------------------
Nombre:
    Métricas Prometheus del admin

Responsabilidades:
    - Registrar requests HTTP, operaciones del facade, plegados de la proyección
      y llamadas a BPO/PLM/DocGen en un registry propio.
    - Mantener cardinalidad acotada: nunca workflow_id ni ids de entradas.
    - Renderizar el texto para GET /metrics.

Colaboradores:
    - crosscutting.middleware: latencia y conteo HTTP.
    - application.resource_facade: operaciones por colección y resultado.
    - application.workflow_projection: eventos plegados y anomalías.
    - infrastructure.services: llamadas salientes por servicio.
===============================================================================
"""

from __future__ import annotations

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

REGISTRY = CollectorRegistry()

_COLLECTIONS = frozenset({"workflows", "audit", "products", "dashboard"})
_FIXED_SEGMENTS = frozenset({"many", "reference", "metrics"})

HTTP_REQUESTS = Counter(
    "crosscut_admin_requests_total",
    "Requests HTTP atendidos por el admin API",
    ["route", "method", "status_class"],
    registry=REGISTRY,
)
HTTP_LATENCY = Histogram(
    "crosscut_admin_request_latency_seconds",
    "Latencia de requests HTTP (segundos)",
    ["route", "method"],
    buckets=(0.005, 0.02, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
    registry=REGISTRY,
)

FACADE_OPERATIONS = Counter(
    "crosscut_admin_facade_operations_total",
    "Operaciones del facade por colección y resultado",
    ["collection", "operation", "outcome"],
    registry=REGISTRY,
)

PROJECTION_EVENTS = Counter(
    "crosscut_admin_projection_events_total",
    "Eventos de auditoría plegados por la proyección",
    registry=REGISTRY,
)
PROJECTION_ANOMALIES = Counter(
    "crosscut_admin_projection_anomalies_total",
    "Eventos descartados o sobrescritos por la proyección",
    ["kind"],
    registry=REGISTRY,
)

UPSTREAM_CALLS = Counter(
    "crosscut_admin_upstream_calls_total",
    "Llamadas salientes por servicio y resultado",
    ["service", "operation", "outcome"],
    registry=REGISTRY,
)
UPSTREAM_LATENCY = Histogram(
    "crosscut_admin_upstream_latency_seconds",
    "Latencia de llamadas salientes (segundos)",
    ["service", "operation"],
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
    registry=REGISTRY,
)


def route_label(path: str) -> str:
    """
    Colapsa ids a '{id}' y todo lo desconocido a '{other}'.

    '/v1/audit/wf-1-3' -> '/v1/audit/{id}'; '/v1/audit/many' se conserva.
    """
    parts = [p for p in path.split("/") if p]
    if not parts or parts[0] != "v1":
        return path if path in ("/healthz", "/metrics") else "{other}"

    label = ["v1"]
    if len(parts) > 1:
        label.append(parts[1] if parts[1] in _COLLECTIONS else "{collection}")
    if len(parts) > 2:
        label.append(parts[2] if parts[2] in _FIXED_SEGMENTS else "{id}")
    if len(parts) > 3:
        label.append("...")
    return "/" + "/".join(label)


def record_request_metrics(
    path: str, method: str, status_code: int, latency_seconds: float
) -> None:
    route = route_label(path)
    HTTP_REQUESTS.labels(
        route=route, method=method, status_class=f"{status_code // 100}xx"
    ).inc()
    HTTP_LATENCY.labels(route=route, method=method).observe(latency_seconds)


def record_facade_operation(collection: str, operation: str, outcome: str) -> None:
    FACADE_OPERATIONS.labels(
        collection=collection, operation=operation, outcome=outcome
    ).inc()


def record_projection_run(events_seen: int, anomalies: dict[str, int]) -> None:
    """Registra un plegado completo: eventos vistos y anomalías por tipo."""
    PROJECTION_EVENTS.inc(events_seen)
    for kind, count in anomalies.items():
        if count:
            PROJECTION_ANOMALIES.labels(kind=kind).inc(count)


def record_upstream_call(
    service: str, operation: str, outcome: str, latency_seconds: float
) -> None:
    UPSTREAM_CALLS.labels(service=service, operation=operation, outcome=outcome).inc()
    UPSTREAM_LATENCY.labels(service=service, operation=operation).observe(
        latency_seconds
    )


def get_metrics_response() -> tuple[bytes, str]:
    return generate_latest(REGISTRY), CONTENT_TYPE_LATEST
