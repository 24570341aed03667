"""
===============================================================================
CRC — tests/unit/api/test_resource_endpoints.py

Responsibilities:
    - Validar GET /v1/{collection} (filtros, orden, paginación, X-Total-Count).
    - Validar GET one / many / reference.
    - Validar POST /v1/workflows (201) y errores RFC7807 (404/405/422/502).

Collaborators:
    - crosscut_admin.api.main.app (FastAPI)
    - container.get_resource_facade (override con adapters in-memory)
===============================================================================
"""

from __future__ import annotations

import pytest
from conftest import FakeTriggerGateway
from fastapi.testclient import TestClient

from crosscut_admin.api.main import app
from crosscut_admin.application.resource_facade import ResourceFacade
from crosscut_admin.container import get_resource_facade
from crosscut_admin.crosscutting.exceptions import UpstreamServiceError
from crosscut_admin.infrastructure.catalog import demo_product_catalog

pytestmark = pytest.mark.unit


@pytest.fixture
def client(facade):
    app.dependency_overrides[get_resource_facade] = lambda: facade
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# list
# ---------------------------------------------------------------------------


def test_list_workflows(client):
    res = client.get("/v1/workflows", params={"sort": "workflow_id"})

    assert res.status_code == 200
    body = res.json()
    assert body["total"] == 3
    assert res.headers["X-Total-Count"] == "3"
    assert [w["id"] for w in body["items"]] == ["wf-1", "wf-2", "wf-3"]
    assert [w["status"] for w in body["items"]] == ["completed", "failed", "running"]
    assert body["items"][0]["duration_ms"] == pytest.approx(4000.0)


def test_list_with_filter_and_paging(client):
    res = client.get(
        "/v1/audit",
        params={"workflow_id": "wf-1", "sort": "timestamp", "order": "desc", "limit": 2},
    )

    assert res.status_code == 200
    body = res.json()
    assert body["total"] == 3
    assert [e["id"] for e in body["items"]] == ["wf-1-3", "wf-1-1"]
    assert body["items"][0]["action"] == "workflow_completed"


def test_list_products(client):
    res = client.get("/v1/products", params={"q": "switch"})

    body = res.json()
    assert body["total"] == 1
    [product] = body["items"]
    assert product["id"] == "product-1"
    assert product["components"][0]["name"] == "PowerTest"


def test_list_invalid_order_is_validation_error(client):
    res = client.get("/v1/workflows", params={"order": "sideways"})

    assert res.status_code == 422
    assert res.json()["code"] == "VALIDATION_ERROR"


def test_unknown_collection_is_validation_error(client):
    res = client.get("/v1/invoices")

    assert res.status_code == 422
    assert res.headers["content-type"].startswith("application/problem+json")


# ---------------------------------------------------------------------------
# get one / many / reference
# ---------------------------------------------------------------------------


def test_get_one_workflow(client):
    res = client.get("/v1/workflows/wf-2")

    assert res.status_code == 200
    assert res.json()["status"] == "failed"
    assert res.json()["message"] == "Workflow failed"


def test_get_one_unknown_is_rfc7807_not_found(client):
    res = client.get("/v1/workflows/wf-unknown")

    assert res.status_code == 404
    assert res.headers["content-type"].startswith("application/problem+json")
    body = res.json()
    assert body["code"] == "NOT_FOUND"
    assert "wf-unknown" in body["detail"]
    assert body["instance"].endswith("/v1/workflows/wf-unknown")


def test_get_many_preserves_order(client):
    res = client.get("/v1/products/many", params=[("ids", "product-1"), ("ids", "product-0")])

    assert res.status_code == 200
    assert [p["id"] for p in res.json()["items"]] == ["product-1", "product-0"]


def test_get_many_missing_id_is_not_found(client):
    res = client.get("/v1/workflows/many", params=[("ids", "wf-1"), ("ids", "nope")])

    assert res.status_code == 404


def test_get_many_reference(client):
    res = client.get(
        "/v1/audit/reference", params={"target": "workflow_id", "id": "wf-2"}
    )

    assert res.status_code == 200
    assert [e["id"] for e in res.json()["items"]] == ["wf-2-2", "wf-2-4"]
    assert res.headers["X-Total-Count"] == "2"


# ---------------------------------------------------------------------------
# create / unsupported
# ---------------------------------------------------------------------------


def test_create_workflow(client, trigger_gateway):
    res = client.post(
        "/v1/workflows", json={"product_name": "ROUTER-100", "revision": "C"}
    )

    assert res.status_code == 201
    body = res.json()
    assert body["id"] == "wf-new"
    assert body["status"] == "completed"
    assert body["ack_status"] == "success"
    assert body["product_name"] == "ROUTER-100"
    assert trigger_gateway.requests[0].payload == {
        "product_name": "ROUTER-100",
        "revision": "C",
    }


def test_create_workflow_without_product_is_422(client):
    res = client.post("/v1/workflows", json={"revision": "C"})

    assert res.status_code == 422
    body = res.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert {"field": "product_name"} in body["errors"]


def test_create_workflow_upstream_failure_is_502(sample_events):
    from crosscut_admin.infrastructure.feeds import InMemoryAuditFeed

    failing = ResourceFacade(
        audit_feed=InMemoryAuditFeed(sample_events),
        product_catalog=demo_product_catalog(),
        trigger_gateway=FakeTriggerGateway(
            error=UpstreamServiceError(
                "docgen timeout", service="bpo", status_code=500, upstream_code="Workflow execution failed"
            )
        ),
    )
    app.dependency_overrides[get_resource_facade] = lambda: failing
    try:
        res = TestClient(app).post("/v1/workflows", json={"product_name": "ROUTER-100"})
    finally:
        app.dependency_overrides.clear()

    assert res.status_code == 502
    body = res.json()
    assert body["code"] == "UPSTREAM_ERROR"
    assert body["detail"] == "docgen timeout"
    assert any(e.get("upstream_status") == 500 for e in body["errors"])


@pytest.mark.parametrize(
    "method, path",
    [
        ("post", "/v1/audit"),
        ("post", "/v1/products"),
        ("put", "/v1/workflows/wf-1"),
        ("patch", "/v1/workflows/wf-1"),
        ("delete", "/v1/workflows/wf-1"),
        ("put", "/v1/audit"),
        ("delete", "/v1/products"),
    ],
)
def test_mutations_are_unsupported(client, method, path):
    kwargs = {"json": {"status": "completed"}} if method != "delete" else {}
    res = getattr(client, method)(path, **kwargs)

    assert res.status_code == 405
    assert res.json()["code"] == "UNSUPPORTED_OPERATION"


def test_request_id_is_propagated(client):
    res = client.get("/v1/workflows", headers={"X-Request-Id": "req-123"})

    assert res.headers["X-Request-Id"] == "req-123"
