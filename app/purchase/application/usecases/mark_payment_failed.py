from __future__ import annotations

import logging

from common.application.result import Err, ErrorCode, Ok, Result
from purchase.application.usecases.confirm_payment import PaymentUpdateResult
from purchase.ports.purchase_repo import PurchaseRepositoryPort

logger = logging.getLogger(__name__)


class MarkPaymentFailedUseCase:
    """PENDING -> FAILED. 이미 확정(SUCCEEDED)된 결제는 되돌리지 않습니다."""

    def __init__(self, *, purchase_repo: PurchaseRepositoryPort):
        self._purchase_repo = purchase_repo

    def execute(self, *, job_posting_id: int) -> Result[PaymentUpdateResult]:
        record = self._purchase_repo.get_by_job_posting(job_posting_id=job_posting_id)
        if record is None:
            return Err(code=ErrorCode.NOT_FOUND, message="Purchase not found")

        applied = self._purchase_repo.mark_failed(job_posting_id=job_posting_id)
        if applied:
            logger.info(
                "purchase_failed job_posting_id=%s purchase_id=%s",
                job_posting_id,
                record.id,
            )
            record = self._purchase_repo.get_by_job_posting(
                job_posting_id=job_posting_id
            )
            assert record is not None
        return Ok(PaymentUpdateResult(applied=applied, record=record))
