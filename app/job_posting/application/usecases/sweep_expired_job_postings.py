from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

from common.application.result import Err, ErrorCode, Ok, Result
from django.utils import timezone
from job_posting.domain.lifecycle import CLOSE
from job_posting.ports.job_posting_repo import JobPostingRepositoryPort

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SweepResult:
    closed_count: int
    closed_ids: list[int] = field(default_factory=list)
    scanned_count: int = 0


class SweepExpiredJobPostingsUseCase:
    """
    결제 유효기간이 지난 PUBLISHED 공고를 CLOSED 로 전환합니다.

    - 한 번에 limit 건까지만 조회 (전체 스캔 방지)
    - id 별 조건부 UPDATE(PUBLISHED -> CLOSED). 그 사이 다른 상태가 된 공고는 건너뜀
    - 매 실행마다 현재 상태를 다시 평가하므로 중간 실패 후 재실행해도 안전
    """

    def __init__(
        self,
        *,
        job_posting_repo: JobPostingRepositoryPort,
        default_limit: int = 1000,
        clock: Callable[[], datetime] = timezone.now,
    ):
        self._job_posting_repo = job_posting_repo
        self._default_limit = default_limit
        self._clock = clock

    def execute(self, *, limit: Optional[int] = None) -> Result[SweepResult]:
        limit = self._default_limit if limit is None else limit
        if limit <= 0:
            return Err(
                code=ErrorCode.VALIDATION_ERROR, message="limit must be positive"
            )

        now = self._clock()
        candidate_ids = self._job_posting_repo.find_expired_published_ids(
            now=now, limit=limit
        )

        closed_ids: list[int] = []
        for job_posting_id in candidate_ids:
            if self._job_posting_repo.apply_transition(
                job_posting_id=job_posting_id, transition=CLOSE
            ):
                closed_ids.append(job_posting_id)
            else:
                logger.info(
                    "job_posting_sweep_skipped id=%s reason=status_changed",
                    job_posting_id,
                )

        logger.info(
            "job_posting_sweep_finished scanned=%s closed=%s limit=%s",
            len(candidate_ids),
            len(closed_ids),
            limit,
        )
        return Ok(
            SweepResult(
                closed_count=len(closed_ids),
                closed_ids=closed_ids,
                scanned_count=len(candidate_ids),
            )
        )
