"""
Celery 태스크: 만료 공고 정리
"""

import logging

from celery import shared_task
from common.application.result import Err
from job_posting.application.container import build_sweep_expired_job_postings_usecase

logger = logging.getLogger(__name__)


@shared_task
def sweep_expired_job_postings(limit: int | None = None):
    """
    결제 유효기간이 지난 PUBLISHED 공고를 CLOSED 로 전환합니다. (beat: 매일 00:00 UTC)

    실패 시 자동 재시도하지 않습니다. 다음 스케줄 실행이 남은 공고를 다시 처리합니다.

    Returns:
        dict: {"closed_count", "closed_ids"} 또는 {"error_code", "error"}
    """
    result = build_sweep_expired_job_postings_usecase().execute(limit=limit)
    if isinstance(result, Err):
        logger.warning(
            "job_posting_sweep_task_failed code=%s message=%s",
            result.code,
            result.message,
        )
        return {"error_code": result.code, "error": result.message}
    return {
        "closed_count": result.value.closed_count,
        "closed_ids": result.value.closed_ids,
    }
