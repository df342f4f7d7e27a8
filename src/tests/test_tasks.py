"""
Unit tests for the cascade retry task and management command.
"""

from io import StringIO
from unittest.mock import patch

import pytest


@pytest.fixture
def incomplete_run(question, collection):
    """A takedown whose cascade stopped after the collections step."""
    from forum.models import CascadeRun

    question.is_removed = True
    question.save()
    return CascadeRun.objects.create(
        post_id=question.pk,
        post_type="question",
        status="incomplete",
        completed_steps=["remove_post_from_collections"],
        failed_step="remove_post_from_activity_history",
        error="history store offline",
        attempts=1,
    )


@pytest.mark.unit
class TestRetryIncompleteCascadesTask:
    """Tests for retry_incomplete_cascades_task."""

    def test_resumes_incomplete_runs(self, incomplete_run, question):
        from forum.models import ActivityEntry
        from forum.tasks.tasks import retry_incomplete_cascades_task

        result = retry_incomplete_cascades_task()

        incomplete_run.refresh_from_db()
        assert result == {"completed": 1, "failed": 0}
        assert incomplete_run.status == "completed"
        assert incomplete_run.attempts == 2
        assert not ActivityEntry.objects.filter(
            post_type="question", post_id=question.pk
        ).exists()

    def test_skips_runs_over_attempt_limit(self, incomplete_run):
        from forum.tasks.tasks import retry_incomplete_cascades_task

        incomplete_run.attempts = 3
        incomplete_run.save()

        result = retry_incomplete_cascades_task()

        incomplete_run.refresh_from_db()
        assert result == {"completed": 0, "failed": 0}
        assert incomplete_run.status == "incomplete"

    def test_explicit_limit(self, incomplete_run):
        from forum.tasks.tasks import retry_incomplete_cascades_task

        assert retry_incomplete_cascades_task(limit=1) == {"completed": 0, "failed": 0}

    def test_still_failing_run_is_counted(self, incomplete_run, monkeypatch):
        from forum.services.propagation_service import PropagationService
        from forum.tasks.tasks import retry_incomplete_cascades_task

        def broken(self, *args, **kwargs):
            raise RuntimeError("history store offline")

        monkeypatch.setattr(
            PropagationService, "remove_post_from_activity_history", broken
        )

        result = retry_incomplete_cascades_task()

        incomplete_run.refresh_from_db()
        assert result == {"completed": 0, "failed": 1}
        assert incomplete_run.attempts == 2
        assert incomplete_run.status == "incomplete"

    def test_completed_runs_ignored(self, question):
        from forum.models import CascadeRun
        from forum.tasks.tasks import retry_incomplete_cascades_task

        CascadeRun.objects.create(
            post_id=question.pk, post_type="question", status="completed", attempts=1
        )

        assert retry_incomplete_cascades_task() == {"completed": 0, "failed": 0}


@pytest.mark.unit
class TestRetryCascadesCommand:
    """Tests for the retry_cascades management command."""

    def test_resumes_runs(self, incomplete_run):
        from django.core.management import call_command

        out = StringIO()
        call_command("retry_cascades", stdout=out)

        incomplete_run.refresh_from_db()
        assert incomplete_run.status == "completed"
        assert f"Cascade {incomplete_run.pk} completed" in out.getvalue()

    def test_single_run(self, incomplete_run):
        from django.core.management import call_command

        out = StringIO()
        call_command("retry_cascades", run=incomplete_run.pk + 1, stdout=out)

        incomplete_run.refresh_from_db()
        assert incomplete_run.status == "incomplete"
        assert out.getvalue() == ""


@pytest.mark.unit
class TestResumedCascadeNotification:
    """A cascade finished by a retry tells clients the post is gone."""

    def test_task_sends_delete_notification(self, incomplete_run, question):
        from forum.services.notification import DeletePostNotification, EventBroadcaster
        from forum.tasks.tasks import retry_incomplete_cascades_task

        with patch.object(EventBroadcaster, "emit_on_commit") as mock_emit:
            retry_incomplete_cascades_task()

        mock_emit.assert_called_once_with(
            DeletePostNotification(postId=question.pk, postType="question")
        )

    def test_command_sends_delete_notification(self, incomplete_run, question):
        from django.core.management import call_command

        from forum.services.notification import EventBroadcaster

        with patch.object(EventBroadcaster, "emit_on_commit") as mock_emit:
            call_command("retry_cascades", stdout=StringIO())

        (event,) = mock_emit.call_args.args
        assert event.kind == "deletePostNotification"
        assert event.postId == question.pk
