"""Unit tests for /v1/dashboard/metrics, /healthz and /metrics."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from crosscut_admin.api.main import app
from crosscut_admin.application.dashboard import GetSystemMetricsUseCase
from crosscut_admin.container import get_system_metrics_use_case
from crosscut_admin.domain.entities import ServiceHealth

pytestmark = pytest.mark.unit


class _HealthyProbe:
    service_name = "bpo"

    async def check_health(self) -> ServiceHealth:
        return ServiceHealth(service="crosscut-bpo", status="healthy", version="1.0.0")


def test_dashboard_metrics(facade):
    app.dependency_overrides[get_system_metrics_use_case] = lambda: GetSystemMetricsUseCase(
        facade, health_probes=[_HealthyProbe()]
    )
    try:
        res = TestClient(app).get("/v1/dashboard/metrics")
    finally:
        app.dependency_overrides.clear()

    assert res.status_code == 200
    body = res.json()
    assert body["total_workflows"] == 3
    assert body["completed_workflows"] == 1
    assert body["failed_workflows"] == 1
    assert body["running_workflows"] == 1
    assert body["average_execution_time_ms"] == pytest.approx(3500.0)
    assert body["services_health"] == [
        {"service": "crosscut-bpo", "status": "healthy", "version": "1.0.0"}
    ]


def test_healthz():
    res = TestClient(app).get("/healthz", headers={"X-Request-Id": "abc"})

    assert res.status_code == 200
    body = res.json()
    assert body["ok"] is True
    assert body["request_id"] == "abc"


def test_metrics_exposes_prometheus_text(facade):
    from crosscut_admin.container import get_resource_facade

    app.dependency_overrides[get_resource_facade] = lambda: facade
    try:
        client = TestClient(app)
        client.get("/v1/workflows")
        res = client.get("/metrics")
    finally:
        app.dependency_overrides.clear()

    assert res.status_code == 200
    assert "crosscut_admin_requests_total" in res.text
    assert "crosscut_admin_facade_operations_total" in res.text
