"""
Celery 앱 설정

- Django settings 의 CELERY_* 값을 사용합니다.
- 만료 공고 정리(sweep)는 beat 스케줄로 하루 한 번 외부에서 트리거됩니다.
"""

import os

from celery import Celery
from celery.schedules import crontab

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("job_posting_workflow")

app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()

app.conf.beat_schedule = {
    "sweep-expired-job-postings": {
        "task": "job_posting.tasks.sweep_expired_job_postings",
        "schedule": crontab(hour=0, minute=0),
    },
}

