import time

from celery import shared_task
from django.conf import settings

from forumutils.log_helpers import log_task
from forumutils.logging import CeleryLogger


@shared_task(bind=True, max_retries=3, default_retry_delay=60)
def retry_incomplete_cascades_task(self, limit: int | None = None):
    """
    Periodic task that resumes propagation runs left incomplete.

    Runs that have already used ``CASCADE_RETRY_LIMIT`` attempts are left
    for a moderator to inspect through the cascade runs endpoint.

    Args:
        limit: Attempt ceiling; defaults to settings.CASCADE_RETRY_LIMIT
    """
    logger = CeleryLogger.get_logger(__name__)
    started = time.time()
    limit = limit or getattr(settings, "CASCADE_RETRY_LIMIT", 5)

    try:
        from forum.exceptions import PropagationError
        from forum.models import CascadeRun, CascadeStatus
        from forum.services.propagation_service import PropagationService

        runs = CascadeRun.objects.filter(
            status=CascadeStatus.INCOMPLETE.value,
            attempts__lt=limit,
            is_deleted=0,
        ).order_by("created_at")

        service = PropagationService()
        completed = 0
        failed = 0
        for cascade in runs:
            try:
                service.resume(cascade)
                completed += 1
            except PropagationError as e:
                logger.warning(
                    "cascade_retry_failed",
                    cascade_run_id=cascade.cascade_run_id,
                    step=e.step,
                    attempts=cascade.attempts,
                )
                failed += 1

        result = {"completed": completed, "failed": failed}
        log_task(
            "retry_incomplete_cascades_task",
            "success",
            result=result,
            duration=time.time() - started,
        )
        return result
    except Exception as exc:
        log_task(
            "retry_incomplete_cascades_task",
            "retry",
            error=exc,
            duration=time.time() - started,
        )
        raise self.retry(exc=exc) from exc
