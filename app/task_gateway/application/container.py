from __future__ import annotations

from django.conf import settings
from task_gateway.adapters.worker_api_http_client import WorkerApiHttpClient
from task_gateway.application.gateway import TaskGateway


def build_task_gateway() -> TaskGateway:
    return TaskGateway(
        worker_queue=WorkerApiHttpClient(
            base_url=getattr(settings, "WORKER_API_BASE_URL", "http://127.0.0.1:8000"),
            timeout_seconds=int(getattr(settings, "WORKER_API_TIMEOUT_SECONDS", 10)),
        )
    )
