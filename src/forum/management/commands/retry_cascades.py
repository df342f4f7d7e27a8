from django.core.management.base import BaseCommand

from forum.exceptions import PropagationError
from forum.models import CascadeRun, CascadeStatus
from forum.services.propagation_service import PropagationService
from forumutils.log_helpers import LogContext


class Command(BaseCommand):
    help = "Resumes consistency propagation runs left incomplete after a takedown"

    def add_arguments(self, parser):
        parser.add_argument(
            "--run",
            type=int,
            help="Only resume the cascade run with this id",
        )

    def handle(self, *args, **options):
        runs = CascadeRun.objects.filter(
            status=CascadeStatus.INCOMPLETE.value, is_deleted=0
        )
        if options.get("run"):
            runs = runs.filter(pk=options["run"])

        service = PropagationService()
        for cascade in runs:
            try:
                with LogContext(cascade_run_id=cascade.cascade_run_id, post_type=cascade.post_type):
                    service.resume(cascade)
            except PropagationError as e:
                self.stdout.write(
                    self.style.ERROR(
                        f"Cascade {cascade.cascade_run_id} still failing at {e.step}"
                    )
                )
                continue
            self.stdout.write(
                self.style.SUCCESS(f"Cascade {cascade.cascade_run_id} completed")
            )
