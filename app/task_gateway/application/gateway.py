from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from common.application.result import Err, ErrorCode, Ok, Result
from common.masking import mask_secrets
from pydantic import BaseModel, ValidationError
from task_gateway.domain.payloads import PAYLOAD_MODELS, TASK_KINDS
from task_gateway.domain.tasks import (
    BatchHandle,
    BatchStatus,
    CancelResult,
    TaskHandle,
    TaskKind,
    TaskStatus,
    normalize_status,
)
from task_gateway.ports.worker_queue import WorkerApiError, WorkerQueuePort

logger = logging.getLogger(__name__)


def task_query_url(task_id: str, *, batch: bool = False) -> str:
    url = f"/api/v1/tasks/{task_id}/"
    return f"{url}?batch=true" if batch else url


class TaskGateway:
    """
    외부 워커 API 앞단의 상태 없는 facade.

    - 페이로드는 종류별 pydantic 모델로 검증한 뒤에만 업스트림을 호출
    - 업스트림 4xx -> VALIDATION_ERROR, 그 외 실패 -> UPSTREAM_ERROR
    - 요청당 업스트림 왕복 1회, 재시도 없음
    """

    def __init__(
        self,
        *,
        worker_queue: WorkerQueuePort,
        kinds: Mapping[str, TaskKind] = TASK_KINDS,
        payload_models: Mapping[str, type[BaseModel]] = PAYLOAD_MODELS,
    ):
        self._worker_queue = worker_queue
        self._kinds = kinds
        self._payload_models = payload_models

    def submit_single(self, *, kind: str, payload: Any) -> Result[TaskHandle]:
        task_kind = self._kinds.get(kind)
        if task_kind is None:
            return self._unknown_kind(kind)

        body = self._validate(kind, payload)
        if isinstance(body, Err):
            return body

        try:
            data = self._worker_queue.submit(path=task_kind.single_path, body=body)
        except WorkerApiError as e:
            return self._upstream_err("submit", e, kind=kind)

        task_id = data.get("task_id")
        if not task_id:
            return Err(
                code=ErrorCode.UPSTREAM_ERROR,
                message="Worker API returned no task id",
            )
        logger.info("task_submitted kind=%s task_id=%s", kind, task_id)
        return Ok(TaskHandle(task_id=str(task_id), query_url=task_query_url(str(task_id))))

    def submit_batch(self, *, kind: str, payloads: Any) -> Result[BatchHandle]:
        task_kind = self._kinds.get(kind)
        if task_kind is None:
            return self._unknown_kind(kind)
        if task_kind.batch_path is None:
            return Err(
                code=ErrorCode.VALIDATION_ERROR,
                message=f"Batch submission is not supported for {kind}",
            )
        if not isinstance(payloads, list) or not payloads:
            return Err(
                code=ErrorCode.VALIDATION_ERROR,
                message="payloads must be a non-empty list",
            )

        items: list[dict[str, Any]] = []
        for index, payload in enumerate(payloads):
            body = self._validate(kind, payload, index=index)
            if isinstance(body, Err):
                return body
            items.append(body)

        try:
            data = self._worker_queue.submit(
                path=task_kind.batch_path, body={task_kind.batch_field: items}
            )
        except WorkerApiError as e:
            return self._upstream_err("submit_batch", e, kind=kind)

        batch_task_id = data.get("batch_task_id") or data.get("task_id")
        if not batch_task_id:
            return Err(
                code=ErrorCode.UPSTREAM_ERROR,
                message="Worker API returned no batch task id",
            )
        total = _first_int(data, ("total_count", "total_files", "total_pairs", "total"))
        logger.info(
            "task_batch_submitted kind=%s batch_task_id=%s total=%s",
            kind,
            batch_task_id,
            total if total is not None else len(items),
        )
        return Ok(
            BatchHandle(
                batch_task_id=str(batch_task_id),
                total_count=total if total is not None else len(items),
                query_url=task_query_url(str(batch_task_id), batch=True),
            )
        )

    def poll(self, *, task_id: str) -> Result[TaskStatus]:
        if not task_id:
            return Err(code=ErrorCode.VALIDATION_ERROR, message="Task ID is required")
        try:
            data = self._worker_queue.task_status(task_id=task_id)
        except WorkerApiError as e:
            return self._upstream_err("poll", e, task_id=task_id)
        return Ok(_to_task_status(data, fallback_id=task_id))

    def poll_batch(self, *, batch_task_id: str) -> Result[BatchStatus]:
        if not batch_task_id:
            return Err(code=ErrorCode.VALIDATION_ERROR, message="Task ID is required")
        try:
            data = self._worker_queue.batch_status(batch_task_id=batch_task_id)
        except WorkerApiError as e:
            return self._upstream_err("poll_batch", e, task_id=batch_task_id)

        results = [
            _to_task_status(item, fallback_id="")
            for item in data.get("results") or []
            if isinstance(item, dict)
        ]
        total = _first_int(data, ("total",))
        completed = _first_int(data, ("completed",))
        return Ok(
            BatchStatus(
                batch_task_id=str(data.get("batch_task_id") or batch_task_id),
                total=total if total is not None else len(results),
                completed=(
                    completed
                    if completed is not None
                    else sum(1 for r in results if r.ready)
                ),
                results=results,
            )
        )

    def cancel(self, *, task_id: str) -> Result[CancelResult]:
        """취소 요청은 참고용입니다. 이미 실행 중인 태스크가 멈춘다는 보장은 없습니다."""
        if not task_id:
            return Err(code=ErrorCode.VALIDATION_ERROR, message="Task ID is required")
        try:
            data = self._worker_queue.cancel(task_id=task_id)
        except WorkerApiError as e:
            return self._upstream_err("cancel", e, task_id=task_id)
        logger.info("task_cancel_requested task_id=%s", task_id)
        return Ok(
            CancelResult(
                task_id=str(data.get("task_id") or task_id),
                status=normalize_status(data.get("status")),
            )
        )

    def _validate(
        self, kind: str, payload: Any, *, index: Optional[int] = None
    ) -> dict[str, Any] | Err:
        model = self._payload_models[kind]
        try:
            return model.model_validate(payload).model_dump()
        except ValidationError as e:
            details: dict[str, Any] = {
                "errors": [
                    {
                        "loc": [str(p) for p in err.get("loc", ())],
                        "msg": err.get("msg", ""),
                    }
                    for err in e.errors()
                ]
            }
            if index is not None:
                details["index"] = index
            return Err(
                code=ErrorCode.VALIDATION_ERROR,
                message=f"Invalid {kind} payload",
                details=details,
            )

    def _unknown_kind(self, kind: str) -> Err:
        return Err(
            code=ErrorCode.VALIDATION_ERROR,
            message=f"Unknown task kind: {kind}",
            details={"supported": sorted(self._kinds)},
        )

    def _upstream_err(self, op: str, e: WorkerApiError, **context: Any) -> Err:
        logger.warning(
            "worker_api_failed op=%s status=%s context=%s error=%s",
            op,
            e.status_code,
            context,
            mask_secrets(f"{e} {e.detail}".strip()),
        )
        if e.is_client_error:
            return Err(
                code=ErrorCode.VALIDATION_ERROR,
                message=e.detail or f"Worker API rejected the request ({e.status_code})",
                details={"upstream_status": e.status_code},
            )
        return Err(
            code=ErrorCode.UPSTREAM_ERROR,
            message="Worker API request failed",
            details={"upstream_status": e.status_code} if e.status_code else None,
        )


def _to_task_status(data: Mapping[str, Any], *, fallback_id: str) -> TaskStatus:
    error = data.get("error")
    return TaskStatus(
        task_id=str(data.get("task_id") or fallback_id),
        status=normalize_status(data.get("status")),
        result=data.get("result"),
        error=str(error) if error else None,
    )


def _first_int(data: Mapping[str, Any], keys: tuple[str, ...]) -> Optional[int]:
    for key in keys:
        value = data.get(key)
        if value is not None:
            try:
                return int(value)
            except (TypeError, ValueError):
                continue
    return None
