from celery.schedules import crontab
from config.celery import app as celery_app_instance
from django.conf import settings
from job_posting.tasks import sweep_expired_job_postings


def test_celery_app_is_named_for_this_project():
    assert celery_app_instance.main == "job_posting_workflow"


def test_broker_and_backend_use_redis():
    assert settings.CELERY_BROKER_URL.startswith("redis://")
    assert settings.CELERY_RESULT_BACKEND.startswith("redis://")


def test_sweep_task_is_registered():
    assert sweep_expired_job_postings.name in celery_app_instance.tasks
    assert sweep_expired_job_postings.name == "job_posting.tasks.sweep_expired_job_postings"


def test_beat_schedules_expired_posting_sweep():
    """
    만료 공고 정리 태스크가 매일 자정(UTC) beat 스케줄에 등록되어 있는지 확인합니다.
    """
    entry = celery_app_instance.conf.beat_schedule["sweep-expired-job-postings"]

    assert entry["task"] == "job_posting.tasks.sweep_expired_job_postings"
    assert entry["schedule"] == crontab(hour=0, minute=0)
