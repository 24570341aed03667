"""Unit tests for audit events, workflow views and synthesized ids."""

from datetime import datetime, timedelta, timezone

import pytest

from crosscut_admin.domain.audit import AuditEvent, audit_entry_id
from crosscut_admin.domain.entities import (
    WorkflowStatus,
    WorkflowView,
    product_entry_id,
)

pytestmark = pytest.mark.unit

_T0 = datetime(2025, 9, 25, 10, 0, tzinfo=timezone.utc)


class TestAuditEvent:
    def test_empty_workflow_id_is_rejected(self):
        with pytest.raises(ValueError):
            AuditEvent(
                timestamp=_T0,
                workflow_id="",
                event="schematic.released",
                action="workflow_started",
                status="success",
            )

    def test_terminal_and_success_flags(self):
        event = AuditEvent(
            timestamp=_T0,
            workflow_id="wf-1",
            event="schematic.released",
            action="workflow_failed",
            status="failed",
            error="boom",
        )

        assert event.is_terminal is True
        assert event.is_success is False

    def test_zoneless_timestamp_is_taken_as_utc(self):
        event = AuditEvent(
            timestamp=datetime(2025, 9, 25, 10, 0),
            workflow_id="wf-1",
            event="schematic.released",
            action="workflow_started",
            status="success",
        )

        assert event.timestamp == _T0

    def test_unknown_action_is_accepted(self):
        event = AuditEvent(
            timestamp=_T0,
            workflow_id="wf-1",
            event="schematic.released",
            action="brand_new_step",
            status="success",
        )

        assert event.is_terminal is False


class TestWorkflowView:
    def test_id_is_workflow_id(self):
        view = WorkflowView(workflow_id="wf-1", status=WorkflowStatus.RUNNING, message="m")

        assert view.id == "wf-1"
        assert view.duration_ms is None

    def test_duration_ms(self):
        view = WorkflowView(
            workflow_id="wf-1",
            status=WorkflowStatus.COMPLETED,
            message="m",
            created_at=_T0,
            completed_at=_T0 + timedelta(seconds=1, milliseconds=250),
        )

        assert view.duration_ms == pytest.approx(1250.0)

    def test_duration_ms_with_mixed_zones_is_unknown(self):
        view = WorkflowView(
            workflow_id="wf-1",
            status=WorkflowStatus.COMPLETED,
            message="m",
            created_at=_T0,
            completed_at=datetime(2025, 9, 25, 10, 0, 1),
        )

        assert view.duration_ms is None

    def test_terminal_statuses(self):
        assert not WorkflowStatus.RUNNING.is_terminal
        assert WorkflowStatus.COMPLETED.is_terminal
        assert WorkflowStatus.FAILED.is_terminal


def test_synthesized_ids():
    assert audit_entry_id("wf-1", 3) == "wf-1-3"
    assert product_entry_id(0) == "product-0"
