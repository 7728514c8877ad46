from __future__ import annotations

import json
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Optional

from task_gateway.ports.worker_queue import WorkerApiError, WorkerQueuePort


class WorkerApiHttpClient(WorkerQueuePort):
    """
    외부 AI 워커 API (Celery 기반) HTTP 클라이언트.

    한 번의 요청만 보내며 재시도하지 않습니다.
    """

    def __init__(self, *, base_url: str, timeout_seconds: int = 10):
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds

    def submit(self, *, path: str, body: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", path, body)

    def task_status(self, *, task_id: str) -> dict[str, Any]:
        return self._request("GET", f"/api/v1/tasks/status/{_quote(task_id)}")

    def batch_status(self, *, batch_task_id: str) -> dict[str, Any]:
        return self._request("GET", f"/api/v1/tasks/batch/{_quote(batch_task_id)}")

    def cancel(self, *, task_id: str) -> dict[str, Any]:
        return self._request("POST", f"/api/v1/tasks/cancel/{_quote(task_id)}")

    def _request(
        self, method: str, path: str, body: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        data = json.dumps(body).encode("utf-8") if body is not None else None
        req = urllib.request.Request(
            f"{self._base_url}{path}",
            data=data,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            method=method,
        )
        try:
            with urllib.request.urlopen(req, timeout=self._timeout_seconds) as resp:
                payload = json.loads(resp.read().decode("utf-8") or "{}")
        except urllib.error.HTTPError as e:
            raise WorkerApiError(
                f"worker_api_failed: http_{e.code}",
                status_code=e.code,
                detail=_error_detail(e),
            ) from e
        except Exception as e:
            raise WorkerApiError("worker_api_failed") from e

        if not isinstance(payload, dict):
            raise WorkerApiError("worker_api_failed: unexpected response body")
        return payload


def _quote(value: str) -> str:
    return urllib.parse.quote(str(value), safe="")


def _error_detail(e: urllib.error.HTTPError) -> str:
    # FastAPI 스타일 {"detail": ...} 응답에서 메시지만 추출
    try:
        body = json.loads(e.read().decode("utf-8"))
    except Exception:
        return ""
    detail = body.get("detail") if isinstance(body, dict) else None
    if detail is None:
        return ""
    return detail if isinstance(detail, str) else json.dumps(detail)
