"""
Django settings for config project.

환경 변수 기반 설정. 로컬/테스트 기본값은 SQLite + 로컬 Redis 입니다.
"""

import os
from datetime import timedelta
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "django-insecure-local-development-key")
DEBUG = _env_bool("DJANGO_DEBUG", False)
ALLOWED_HOSTS = [
    h.strip() for h in os.getenv("DJANGO_ALLOWED_HOSTS", "*").split(",") if h.strip()
]

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "drf_spectacular",
    "organization",
    "job_posting",
    "purchase",
    "invitation",
    "task_gateway",
]

MIDDLEWARE = [
    "common.middleware.RequestIdMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
]

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "config.wsgi.application"

# Database
# POSTGRES_DB 가 설정되어 있으면 PostgreSQL, 아니면 SQLite
if os.getenv("POSTGRES_DB"):
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": os.getenv("POSTGRES_DB"),
            "USER": os.getenv("POSTGRES_USER", "postgres"),
            "PASSWORD": os.getenv("POSTGRES_PASSWORD", ""),
            "HOST": os.getenv("POSTGRES_HOST", "localhost"),
            "PORT": os.getenv("POSTGRES_PORT", "5432"),
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
        }
    }

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LANGUAGE_CODE = "ko-kr"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"

# REST Framework
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "rest_framework_simplejwt.authentication.JWTAuthentication",
    ),
    "DEFAULT_PERMISSION_CLASSES": ("rest_framework.permissions.IsAuthenticated",),
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
}

SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(minutes=30),
    "REFRESH_TOKEN_LIFETIME": timedelta(days=7),
}

SPECTACULAR_SETTINGS = {
    "TITLE": "Job Posting Workflow API",
    "DESCRIPTION": "채용 공고 결제/게시, 후보자 스크리닝 초대, 비동기 AI 태스크 API",
    "VERSION": "1.0.0",
}

# Celery
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://redis:6379/0")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://redis:6379/0")
CELERY_ACCEPT_CONTENT = ["application/json"]
CELERY_TASK_SERIALIZER = "json"
CELERY_RESULT_SERIALIZER = "json"
CELERY_TIMEZONE = TIME_ZONE
CELERY_TASK_TRACK_STARTED = True
CELERY_TASK_TIME_LIMIT = 30 * 60

# Job posting lifecycle
JOB_POSTING_VALIDITY_DAYS = 30
JOB_POSTING_SWEEP_LIMIT = int(os.getenv("JOB_POSTING_SWEEP_LIMIT", "1000"))
JOB_POSTING_AUTO_PUBLISH_ON_SETTLEMENT = _env_bool(
    "JOB_POSTING_AUTO_PUBLISH_ON_SETTLEMENT", True
)
CRON_SECRET = os.getenv("CRON_SECRET", "")

# Payment provider (Stripe checkout session + settlement webhook)
PAYMENT_PROVIDER_SECRET_KEY = os.getenv("PAYMENT_PROVIDER_SECRET_KEY", "")
PAYMENT_WEBHOOK_SECRET = os.getenv("PAYMENT_WEBHOOK_SECRET", "")
PAYMENT_WEBHOOK_TOLERANCE_SECONDS = int(
    os.getenv("PAYMENT_WEBHOOK_TOLERANCE_SECONDS", "300")
)
PAYMENT_SUCCESS_URL = os.getenv(
    "PAYMENT_SUCCESS_URL",
    "http://localhost:3000/employer/jobs?success=true&session_id={CHECKOUT_SESSION_ID}",
)
PAYMENT_CANCEL_URL = os.getenv(
    "PAYMENT_CANCEL_URL", "http://localhost:3000/employer/jobs/new?canceled=true"
)
PAYMENT_PRODUCTS = {
    "JUNIOR": {
        "price_id": os.getenv("PAYMENT_JUNIOR_PRICE_ID", ""),
        "amount": 3000,
        "currency": "aud",
    },
    "SENIOR": {
        "price_id": os.getenv("PAYMENT_SENIOR_PRICE_ID", ""),
        "amount": 30000,
        "currency": "aud",
    },
}

# Candidate screening invitations
INVITATION_DEFAULT_VALIDITY_DAYS = int(os.getenv("INVITATION_DEFAULT_VALIDITY_DAYS", "7"))
INVITATION_ALLOW_RESUBMISSION = _env_bool("INVITATION_ALLOW_RESUBMISSION", True)
INVITATION_LINK_BASE_URL = os.getenv("INVITATION_LINK_BASE_URL", "")

# External AI worker API
WORKER_API_BASE_URL = os.getenv("WORKER_API_BASE_URL", "http://127.0.0.1:8000")
WORKER_API_TIMEOUT_SECONDS = int(os.getenv("WORKER_API_TIMEOUT_SECONDS", "10"))

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "filters": {
        "request_id": {"()": "common.logging.RequestIdFilter"},
    },
    "formatters": {
        "default": {
            "format": "%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "filters": ["request_id"],
            "formatter": "default",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": os.getenv("LOG_LEVEL", "INFO"),
    },
}
