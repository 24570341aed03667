"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure test environment (APP_ENV=test, no .env file)
  - Provide audit event factories and fake ports
  - Provide a ResourceFacade wired to in-memory adapters

Collaborators:
  - pytest: Test framework
  - crosscut_admin.domain: Domain entities and protocols
  - crosscut_admin.infrastructure: in-memory adapters

Notes:
  - Fixtures are auto-discovered by pytest
  - Use @pytest.fixture(scope="function") for per-test isolation
"""

import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List

import pytest

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("LOG_JSON", "false")

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from crosscut_admin.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from crosscut_admin.application.resource_facade import ResourceFacade  # noqa: E402
from crosscut_admin.domain.audit import AuditEvent  # noqa: E402
from crosscut_admin.domain.entities import (  # noqa: E402
    WorkflowTriggerAck,
    WorkflowTriggerRequest,
)
from crosscut_admin.infrastructure.catalog import demo_product_catalog  # noqa: E402
from crosscut_admin.infrastructure.feeds import InMemoryAuditFeed  # noqa: E402


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


# ============================================================================
# Audit event factories
# ============================================================================

BASE_TIME = datetime(2025, 9, 25, 10, 28, 0, tzinfo=timezone.utc)
FIXED_NOW = datetime(2025, 9, 26, 12, 0, 0, tzinfo=timezone.utc)


def make_event(
    workflow_id: str,
    action: str,
    *,
    status: str = "success",
    seconds: float = 0,
    details: dict | None = None,
    error: str | None = None,
) -> AuditEvent:
    """R: Audit event at BASE_TIME + seconds."""
    return AuditEvent(
        timestamp=BASE_TIME + timedelta(seconds=seconds),
        workflow_id=workflow_id,
        event="schematic.released",
        action=action,
        status=status,
        details=details or {},
        error=error,
    )


def started(workflow_id: str, *, seconds: float = 0, **details) -> AuditEvent:
    return make_event(
        workflow_id, "workflow_started", seconds=seconds, details=details
    )


def completed(
    workflow_id: str, *, seconds: float = 0, status: str = "success", **details
) -> AuditEvent:
    return make_event(
        workflow_id,
        "workflow_completed",
        status=status,
        seconds=seconds,
        details=details,
    )


def failed(workflow_id: str, *, seconds: float = 0, error: str = "boom") -> AuditEvent:
    return make_event(
        workflow_id, "workflow_failed", status="failed", seconds=seconds, error=error
    )


# ============================================================================
# Fake ports
# ============================================================================


class FakeTriggerGateway:
    """R: Records trigger requests and answers with a configurable ack."""

    def __init__(
        self,
        ack: WorkflowTriggerAck | None = None,
        error: Exception | None = None,
    ) -> None:
        self.requests: List[WorkflowTriggerRequest] = []
        self._ack = ack or WorkflowTriggerAck(
            status="success",
            workflow_id="wf-new",
            message="Workflow executed successfully",
            document_url="gcs://fake-bucket/ROUTER-100.docx",
        )
        self._error = error

    async def trigger(self, request: WorkflowTriggerRequest) -> WorkflowTriggerAck:
        self.requests.append(request)
        if self._error is not None:
            raise self._error
        return self._ack


class CountingAuditFeed(InMemoryAuditFeed):
    """R: In-memory feed that counts snapshot reads."""

    def __init__(self, events=()) -> None:
        super().__init__(events)
        self.reads = 0

    async def read_events(self):
        self.reads += 1
        return await super().read_events()


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def trigger_gateway() -> FakeTriggerGateway:
    return FakeTriggerGateway()


@pytest.fixture
def sample_events() -> List[AuditEvent]:
    """R: Three workflows: completed, failed and still running."""
    return [
        started("wf-1", seconds=0, product_name="ROUTER-100", revision="C"),
        make_event("wf-1", "template_plan_generated", seconds=1),
        started("wf-2", seconds=2, product_name="SWITCH-200", revision="B"),
        completed(
            "wf-1",
            seconds=4,
            final_document_url="gcs://fake-bucket/ROUTER-100-DVT-Procedure-Rev-C.docx",
        ),
        failed("wf-2", seconds=5),
        started("wf-3", seconds=6, product_name="ROUTER-100", revision="D"),
    ]


@pytest.fixture
def audit_feed(sample_events) -> CountingAuditFeed:
    return CountingAuditFeed(sample_events)


@pytest.fixture
def facade(audit_feed, trigger_gateway) -> ResourceFacade:
    return ResourceFacade(
        audit_feed=audit_feed,
        product_catalog=demo_product_catalog(),
        trigger_gateway=trigger_gateway,
        clock=lambda: FIXED_NOW,
    )
