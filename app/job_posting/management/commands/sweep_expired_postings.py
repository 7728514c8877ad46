"""
만료 공고 정리 커맨드

Celery beat 없이 외부 cron 등에서 직접 실행할 때 사용합니다.
"""

from common.application.result import Err
from django.core.management.base import BaseCommand, CommandError
from job_posting.application.container import build_sweep_expired_job_postings_usecase


class Command(BaseCommand):
    help = "Closes published job postings whose purchase validity period has ended."

    def add_arguments(self, parser):
        parser.add_argument(
            "--limit",
            type=int,
            default=None,
            help="Maximum number of postings to close in this run (default: JOB_POSTING_SWEEP_LIMIT).",
        )

    def handle(self, *args, **options):
        result = build_sweep_expired_job_postings_usecase().execute(
            limit=options["limit"]
        )
        if isinstance(result, Err):
            raise CommandError(result.message)

        sweep = result.value
        self.stdout.write(
            self.style.SUCCESS(
                f"Closed {sweep.closed_count} expired job postings "
                f"(scanned {sweep.scanned_count})."
            )
        )
        if sweep.closed_ids:
            self.stdout.write(f"Closed ids: {', '.join(str(i) for i in sweep.closed_ids)}")
