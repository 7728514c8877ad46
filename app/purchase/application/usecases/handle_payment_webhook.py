from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from common.application.result import Err, ErrorCode, Ok, Result
from job_posting.application.usecases.lifecycle_transitions import (
    PublishJobPostingUseCase,
)
from purchase.application.usecases.confirm_payment import ConfirmPaymentUseCase
from purchase.application.usecases.mark_payment_failed import MarkPaymentFailedUseCase
from purchase.domain.purchase import PaymentEvent, SettlementInfo
from purchase.ports.payment_provider import PaymentProviderPort, WebhookSignatureError
from purchase.ports.purchase_repo import PurchaseRepositoryPort

logger = logging.getLogger(__name__)

EVENT_SESSION_COMPLETED = "checkout.session.completed"
EVENT_ASYNC_PAYMENT_SUCCEEDED = "checkout.session.async_payment_succeeded"
EVENT_SESSION_EXPIRED = "checkout.session.expired"
EVENT_ASYNC_PAYMENT_FAILED = "checkout.session.async_payment_failed"

_SETTLED_EVENTS = {EVENT_SESSION_COMPLETED, EVENT_ASYNC_PAYMENT_SUCCEEDED}
_FAILED_EVENTS = {EVENT_SESSION_EXPIRED, EVENT_ASYNC_PAYMENT_FAILED}


@dataclass(frozen=True, slots=True)
class WebhookOutcome:
    event_type: str
    handled: bool
    job_posting_id: Optional[int] = None
    published: bool = False


class HandlePaymentWebhookUseCase:
    """
    결제 대행사 webhook 처리.

    - 서명 검증 실패: VALIDATION_ERROR
    - 결제 완료 이벤트: confirm_payment (+ 설정 시 DRAFT 공고 자동 게시)
    - 체크아웃 만료/비동기 결제 실패: mark_payment_failed
    - 그 외 이벤트, 대상 공고를 찾지 못한 이벤트: 수신만 확인(handled=False)
    """

    def __init__(
        self,
        *,
        payment_provider: PaymentProviderPort,
        purchase_repo: PurchaseRepositoryPort,
        confirm_payment: ConfirmPaymentUseCase,
        mark_payment_failed: MarkPaymentFailedUseCase,
        publish_job_posting: PublishJobPostingUseCase,
        auto_publish: bool,
    ):
        self._payment_provider = payment_provider
        self._purchase_repo = purchase_repo
        self._confirm_payment = confirm_payment
        self._mark_payment_failed = mark_payment_failed
        self._publish_job_posting = publish_job_posting
        self._auto_publish = auto_publish

    def execute(
        self, *, payload: bytes, signature_header: str
    ) -> Result[WebhookOutcome]:
        try:
            event = self._payment_provider.construct_event(
                payload=payload, signature_header=signature_header
            )
        except WebhookSignatureError as e:
            logger.warning("payment_webhook_signature_invalid reason=%s", e)
            return Err(code=ErrorCode.VALIDATION_ERROR, message="Invalid signature")

        if event.type not in _SETTLED_EVENTS and event.type not in _FAILED_EVENTS:
            logger.info("payment_webhook_unhandled type=%s id=%s", event.type, event.id)
            return Ok(WebhookOutcome(event_type=event.type, handled=False))

        job_posting_id = self._resolve_job_posting_id(event)
        if job_posting_id is None:
            logger.warning(
                "payment_webhook_no_job_posting type=%s id=%s", event.type, event.id
            )
            return Ok(WebhookOutcome(event_type=event.type, handled=False))

        if event.type in _FAILED_EVENTS:
            failed = self._mark_payment_failed.execute(job_posting_id=job_posting_id)
            return Ok(
                WebhookOutcome(
                    event_type=event.type,
                    handled=isinstance(failed, Ok),
                    job_posting_id=job_posting_id,
                )
            )

        # checkout.session.completed 이지만 비동기 결제 수단이라 아직 미결제인 경우
        if event.data.get("payment_status") == "unpaid":
            logger.info(
                "payment_webhook_awaiting_async_payment job_posting_id=%s",
                job_posting_id,
            )
            return Ok(
                WebhookOutcome(
                    event_type=event.type, handled=False, job_posting_id=job_posting_id
                )
            )

        confirmed = self._confirm_payment.execute(
            job_posting_id=job_posting_id,
            settlement=SettlementInfo(
                provider_payment_intent_id=_str_or_none(
                    event.data.get("payment_intent")
                ),
                provider_customer_id=_str_or_none(event.data.get("customer")),
            ),
        )
        if isinstance(confirmed, Err):
            logger.warning(
                "payment_webhook_confirm_failed job_posting_id=%s code=%s",
                job_posting_id,
                confirmed.code,
            )
            return Ok(
                WebhookOutcome(
                    event_type=event.type, handled=False, job_posting_id=job_posting_id
                )
            )

        published = False
        if self._auto_publish:
            publish_result = self._publish_job_posting.execute(
                job_posting_id=job_posting_id, actor_id=None
            )
            published = isinstance(publish_result, Ok)
            if isinstance(publish_result, Err):
                logger.info(
                    "payment_webhook_auto_publish_skipped job_posting_id=%s code=%s",
                    job_posting_id,
                    publish_result.code,
                )

        return Ok(
            WebhookOutcome(
                event_type=event.type,
                handled=True,
                job_posting_id=job_posting_id,
                published=published,
            )
        )

    def _resolve_job_posting_id(self, event: PaymentEvent) -> Optional[int]:
        metadata = event.data.get("metadata") or {}
        raw = metadata.get("jobPostingId") or event.data.get("client_reference_id")
        if raw:
            try:
                return int(raw)
            except (TypeError, ValueError):
                return None
        return self._purchase_repo.find_job_posting_id_by_session(
            session_id=str(event.data.get("id") or "")
        )


def _str_or_none(value) -> Optional[str]:
    return str(value) if value else None
