"""
===============================================================================
CRC — tests/unit/application/test_workflow_projection.py

Responsibilities:
    - Validar el plegado started -> completed / failed.
    - Validar descarte de terminales huérfanos y no-op de acciones intermedias.
    - Validar restart (started duplicado) y sensibilidad al orden.
    - Validar determinismo y aplicación incremental (apply_all partido).

Collaborators:
    - AuditProjector / project_workflows (SUT)
===============================================================================
"""

from __future__ import annotations

import pytest
from conftest import BASE_TIME, completed, failed, make_event, started

from crosscut_admin.application.workflow_projection import (
    AuditProjector,
    project_workflows,
)
from crosscut_admin.domain.entities import (
    MSG_WORKFLOW_COMPLETED,
    MSG_WORKFLOW_FAILED,
    MSG_WORKFLOW_RUNNING,
    WorkflowStatus,
)

pytestmark = pytest.mark.unit

_DOC_URL = "gcs://fake-bucket/ROUTER-100-DVT-Procedure-Rev-C.docx"


class TestLifecycle:
    def test_started_creates_running_view(self):
        views = project_workflows(
            [started("wf1", product_name="ROUTER-100", revision="C")]
        )

        assert list(views) == ["wf1"]
        view = views["wf1"]
        assert view.id == "wf1"
        assert view.status == WorkflowStatus.RUNNING
        assert view.message == MSG_WORKFLOW_RUNNING
        assert view.product_name == "ROUTER-100"
        assert view.revision == "C"
        assert view.created_at == BASE_TIME
        assert view.document_url is None

    def test_completed_success_sets_document_url(self):
        views = project_workflows(
            [
                started("wf1", product_name="ROUTER-100", revision="C"),
                completed("wf1", seconds=3, final_document_url=_DOC_URL),
            ]
        )

        view = views["wf1"]
        assert view.status == WorkflowStatus.COMPLETED
        assert view.message == MSG_WORKFLOW_COMPLETED
        assert view.document_url == _DOC_URL
        assert view.product_name == "ROUTER-100"
        assert view.duration_ms == pytest.approx(3000.0)

    def test_completed_with_failed_status_is_failure(self):
        views = project_workflows(
            [started("wf1"), completed("wf1", status="failed")]
        )

        assert views["wf1"].status == WorkflowStatus.FAILED
        assert views["wf1"].message == MSG_WORKFLOW_FAILED

    def test_failed_event_marks_view_failed(self):
        views = project_workflows([started("wf1"), failed("wf1", error="boom")])

        assert views["wf1"].status == WorkflowStatus.FAILED
        assert views["wf1"].message == MSG_WORKFLOW_FAILED

    def test_non_string_document_url_is_ignored(self):
        views = project_workflows(
            [started("wf1"), completed("wf1", final_document_url=42)]
        )

        assert views["wf1"].document_url is None


class TestAnomalies:
    def test_orphan_terminal_is_dropped(self):
        projector = AuditProjector().apply_all(
            [started("wf1"), completed("wf2")]
        )

        views = projector.snapshot()
        assert set(views) == {"wf1"}
        assert views["wf1"].status == WorkflowStatus.RUNNING
        assert projector.stats.orphan_terminals == 1

    def test_unknown_action_is_noop(self):
        base = [started("wf1", product_name="ROUTER-100")]
        noisy = base + [
            make_event("wf1", "plm_consultation"),
            make_event("wf1", "something_new", status="failed"),
        ]

        assert project_workflows(noisy) == project_workflows(base)

    def test_unknown_action_for_unknown_workflow_creates_nothing(self):
        assert project_workflows([make_event("wf9", "docgen_command")]) == {}

    def test_duplicate_start_overwrites_view(self):
        projector = AuditProjector().apply_all(
            [
                started("wf1", revision="A"),
                completed("wf1", seconds=1),
                started("wf1", seconds=2, revision="B"),
            ]
        )

        view = projector.snapshot()["wf1"]
        assert view.status == WorkflowStatus.RUNNING
        assert view.revision == "B"
        assert view.completed_at is None
        assert projector.stats.duplicate_starts == 1

    def test_restart_is_order_sensitive(self):
        events = [started("wf1"), completed("wf1", seconds=1), started("wf1", seconds=2)]
        reordered = [started("wf1"), started("wf1", seconds=2), completed("wf1", seconds=1)]

        assert project_workflows(events)["wf1"].status == WorkflowStatus.RUNNING
        assert project_workflows(reordered)["wf1"].status == WorkflowStatus.COMPLETED

    def test_late_terminal_is_ignored(self):
        projector = AuditProjector().apply_all(
            [
                started("wf1"),
                completed("wf1", seconds=1, final_document_url=_DOC_URL),
                failed("wf1", seconds=2),
            ]
        )

        view = projector.snapshot()["wf1"]
        assert view.status == WorkflowStatus.COMPLETED
        assert view.document_url == _DOC_URL
        assert projector.stats.late_terminals == 1

    def test_stats_count_every_event(self, sample_events):
        projector = AuditProjector().apply_all(sample_events)

        assert projector.stats.events_seen == len(sample_events)
        assert projector.stats.ignored_actions == 1
        assert projector.stats.anomalies() == {
            "orphan_terminal": 0,
            "duplicate_start": 0,
            "late_terminal": 0,
        }


class TestDeterminism:
    def test_same_input_same_output(self, sample_events):
        assert project_workflows(sample_events) == project_workflows(list(sample_events))

    def test_split_application_matches_single_fold(self, sample_events):
        for cut in range(len(sample_events) + 1):
            projector = AuditProjector()
            projector.apply_all(sample_events[:cut])
            projector.apply_all(sample_events[cut:])

            assert projector.snapshot() == project_workflows(sample_events)

    def test_snapshot_is_a_copy(self):
        projector = AuditProjector().apply_all([started("wf1")])
        snapshot = projector.snapshot()

        projector.apply(started("wf2"))

        assert set(snapshot) == {"wf1"}

    def test_empty_feed_projects_nothing(self):
        assert project_workflows([]) == {}
