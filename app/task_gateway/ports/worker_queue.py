from __future__ import annotations

from typing import Any, Optional, Protocol


class WorkerApiError(Exception):
    """
    워커 API 호출 실패.

    status_code 는 HTTP 응답을 받은 경우에만 채워집니다 (연결 실패/타임아웃은 None).
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None, detail: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail

    @property
    def is_client_error(self) -> bool:
        return self.status_code is not None and 400 <= self.status_code < 500


class WorkerQueuePort(Protocol):
    def submit(self, *, path: str, body: dict[str, Any]) -> dict[str, Any]: ...

    def task_status(self, *, task_id: str) -> dict[str, Any]: ...

    def batch_status(self, *, batch_task_id: str) -> dict[str, Any]: ...

    def cancel(self, *, task_id: str) -> dict[str, Any]: ...
