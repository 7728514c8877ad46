# app/conftest.py
"""
pytest fixtures (Celery, 사용자/공고 팩토리)
"""
import os

import pytest


@pytest.fixture(scope="session")
def celery_config():
    """
    Celery 테스트용 설정을 제공합니다.
    """
    return {
        "broker_url": os.getenv("CELERY_BROKER_URL", "redis://redis:6379/0"),
        "result_backend": os.getenv("CELERY_RESULT_BACKEND", "redis://redis:6379/0"),
        "task_always_eager": False,
        "task_eager_propagates": True,
        "accept_content": ["json"],
        "task_serializer": "json",
        "result_serializer": "json",
    }


@pytest.fixture(scope="session")
def celery_app(celery_config):
    """
    테스트용 Celery 앱 인스턴스를 제공합니다.
    """
    from config.celery import app

    app.config_from_object(celery_config)
    return app


@pytest.fixture
def celery_eager_mode(celery_app):
    """
    Eager 모드로 Celery를 설정합니다 (동기 실행).
    """
    original_eager = celery_app.conf.task_always_eager
    celery_app.conf.task_always_eager = True
    yield celery_app
    celery_app.conf.task_always_eager = original_eager


@pytest.fixture
def make_user(db):
    """
    테스트용 사용자 생성 팩토리.
    """
    from django.contrib.auth import get_user_model

    User = get_user_model()
    counter = {"n": 0}

    def _make(username: str | None = None, **extra):
        counter["n"] += 1
        username = username or f"user{counter['n']}"
        extra.setdefault("email", f"{username}@example.com")
        return User.objects.create_user(username=username, password="pw", **extra)

    return _make


@pytest.fixture
def make_job_posting(db, make_user):
    """
    테스트용 채용 공고 생성 팩토리 (기본 DRAFT).
    """
    from job_posting.models import JobPosting

    def _make(owner=None, **fields):
        fields.setdefault("job_title", "Backend Engineer")
        fields.setdefault("company_name", "Acme")
        return JobPosting.objects.create(owner=owner or make_user(), **fields)

    return _make
