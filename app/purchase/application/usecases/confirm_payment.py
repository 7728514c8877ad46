from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from common.application.result import Err, ErrorCode, Ok, Result
from django.utils import timezone
from purchase.domain.expiry import VALIDITY_DAYS, compute_expires_at
from purchase.domain.purchase import (
    PurchaseRecordDomain,
    SettlementInfo,
    SettlementPatch,
)
from purchase.ports.purchase_repo import PurchaseRepositoryPort

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PaymentUpdateResult:
    applied: bool
    record: PurchaseRecordDomain


class ConfirmPaymentUseCase:
    """
    결제 확정 (멱등).

    이미 SUCCEEDED 인 기록에 대한 중복 알림은 아무것도 바꾸지 않고 applied=False 를 반환합니다.
    """

    def __init__(
        self,
        *,
        purchase_repo: PurchaseRepositoryPort,
        validity_days: int = VALIDITY_DAYS,
        clock: Callable[[], datetime] = timezone.now,
    ):
        self._purchase_repo = purchase_repo
        self._validity_days = validity_days
        self._clock = clock

    def execute(
        self, *, job_posting_id: int, settlement: SettlementInfo
    ) -> Result[PaymentUpdateResult]:
        record = self._purchase_repo.get_by_job_posting(job_posting_id=job_posting_id)
        if record is None:
            return Err(code=ErrorCode.NOT_FOUND, message="Purchase not found")

        if record.is_paid:
            logger.info(
                "purchase_settlement_duplicate job_posting_id=%s purchase_id=%s",
                job_posting_id,
                record.id,
            )
            return Ok(PaymentUpdateResult(applied=False, record=record))

        paid_at = self._clock()
        applied = self._purchase_repo.apply_settlement(
            job_posting_id=job_posting_id,
            patch=SettlementPatch(
                paid_at=paid_at,
                expires_at=compute_expires_at(paid_at, self._validity_days),
                provider_payment_intent_id=settlement.provider_payment_intent_id,
                provider_customer_id=settlement.provider_customer_id,
            ),
        )
        updated = self._purchase_repo.get_by_job_posting(job_posting_id=job_posting_id)
        assert updated is not None
        if applied:
            logger.info(
                "purchase_settled job_posting_id=%s purchase_id=%s expires_at=%s",
                job_posting_id,
                updated.id,
                updated.expires_at.isoformat() if updated.expires_at else None,
            )
        return Ok(PaymentUpdateResult(applied=applied, record=updated))
