"""
비동기 AI 태스크 핸들/상태 정의

태스크 상태는 외부 워커 API 가 소유하며 이 서비스는 아무것도 저장하지 않습니다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

PENDING = "PENDING"
STARTED = "STARTED"
SUCCESS = "SUCCESS"
FAILURE = "FAILURE"

TASK_STATUSES = (PENDING, STARTED, SUCCESS, FAILURE)

_STATUS_ALIASES = {
    "RECEIVED": PENDING,
    "RETRY": STARTED,
    "PROGRESS": STARTED,
    "REVOKED": FAILURE,
}


def normalize_status(raw: Optional[str]) -> str:
    """워커가 돌려준 상태를 PENDING/STARTED/SUCCESS/FAILURE 로 맞춥니다."""
    status = str(raw or PENDING).upper()
    if status in TASK_STATUSES:
        return status
    return _STATUS_ALIASES.get(status, PENDING)


@dataclass(frozen=True, slots=True)
class TaskKind:
    """
    - name: API 경로에 쓰는 종류 이름 (예: "jd-analyze")
    - single_path: 단건 제출 워커 경로
    - batch_path: 일괄 제출 워커 경로 (None 이면 일괄 제출 미지원)
    - batch_field: 일괄 제출 바디에서 목록을 담는 키
    """

    name: str
    single_path: str
    batch_path: Optional[str] = None
    batch_field: str = "items"


@dataclass(frozen=True, slots=True)
class TaskHandle:
    task_id: str
    query_url: str


@dataclass(frozen=True, slots=True)
class BatchHandle:
    batch_task_id: str
    total_count: int
    query_url: str


@dataclass(frozen=True, slots=True)
class TaskStatus:
    task_id: str
    status: str
    result: Optional[Any] = None
    error: Optional[str] = None

    @property
    def ready(self) -> bool:
        return self.status in (SUCCESS, FAILURE)


@dataclass(frozen=True, slots=True)
class BatchStatus:
    batch_task_id: str
    total: int
    completed: int
    results: list[TaskStatus] = field(default_factory=list)

    @property
    def ready(self) -> bool:
        return self.completed == self.total

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.status == FAILURE)


@dataclass(frozen=True, slots=True)
class CancelResult:
    task_id: str
    status: str
