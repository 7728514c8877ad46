from __future__ import annotations

import logging
from typing import Mapping, Optional

from common.application.result import Err, ErrorCode, Ok, Result
from common.masking import mask_secrets
from job_posting.application.access import load_posting_for_actor
from job_posting.ports.job_posting_repo import JobPostingRepositoryPort
from organization.ports.capability_checker import CapabilityCheckerPort
from purchase.domain.products import ProductConfig, product_type_for
from purchase.domain.purchase import (
    CheckoutSessionRequest,
    PaymentSession,
    PurchaseSessionPatch,
)
from purchase.ports.payment_provider import PaymentProviderPort
from purchase.ports.purchase_repo import PurchaseRepositoryPort

logger = logging.getLogger(__name__)


class PurchaseJobPostingUseCase:
    """
    공고 게시 상품 결제 세션 생성.

    결제 대행사 호출과 DB 기록은 하나의 트랜잭션으로 묶을 수 없으므로 아래 순서로 진행합니다.
    1) 결제 기록 get-or-create (PENDING, job_posting 당 1건)
    2) 결제 대행사에 체크아웃 세션 생성 (실패 시 UPSTREAM_ERROR, 기록은 PENDING 으로 남아 다음 시도에서 재사용)
    3) 세션/고객 id 를 PurchaseSessionPatch 로 기록
    결제 확정은 webhook 의 confirm_payment(멱등)가 담당합니다.
    """

    def __init__(
        self,
        *,
        job_posting_repo: JobPostingRepositoryPort,
        purchase_repo: PurchaseRepositoryPort,
        payment_provider: PaymentProviderPort,
        capability_checker: CapabilityCheckerPort,
        products: Mapping[str, ProductConfig],
        success_url: str,
        cancel_url: str,
    ):
        self._job_posting_repo = job_posting_repo
        self._purchase_repo = purchase_repo
        self._payment_provider = payment_provider
        self._capability_checker = capability_checker
        self._products = products
        self._success_url = success_url
        self._cancel_url = cancel_url

    def execute(
        self,
        *,
        job_posting_id: int,
        actor_id: int,
        actor_email: Optional[str] = None,
        success_url: Optional[str] = None,
        cancel_url: Optional[str] = None,
    ) -> Result[PaymentSession]:
        loaded = load_posting_for_actor(
            job_posting_repo=self._job_posting_repo,
            capability_checker=self._capability_checker,
            job_posting_id=job_posting_id,
            actor_id=actor_id,
        )
        if isinstance(loaded, Err):
            return loaded
        assert isinstance(loaded, Ok)
        posting = loaded.value

        product_type = product_type_for(posting.experience_level)
        product = self._products.get(product_type)
        if product is None:
            return Err(
                code=ErrorCode.VALIDATION_ERROR,
                message=f"Product {product_type} is not configured",
            )

        record = self._purchase_repo.get_or_create_pending(
            job_posting_id=posting.id,
            product_type=product.product_type,
            amount=product.amount,
            currency=product.currency,
            price_id=product.price_id,
        )
        if record.is_paid:
            return Err(
                code=ErrorCode.STATE_CONFLICT,
                message="Job posting already purchased",
                details={"payment_status": record.payment_status},
            )

        try:
            session = self._payment_provider.create_checkout_session(
                request=CheckoutSessionRequest(
                    job_posting_id=posting.id,
                    purchase_id=record.id,
                    actor_id=actor_id,
                    product_type=product.product_type,
                    amount=product.amount,
                    currency=product.currency,
                    price_id=product.price_id,
                    product_name=product.name,
                    success_url=success_url or self._success_url,
                    cancel_url=cancel_url or self._cancel_url,
                    customer_id=record.provider_customer_id or None,
                    customer_email=actor_email,
                )
            )
        except Exception as e:
            logger.warning(
                "purchase_checkout_session_failed job_posting_id=%s purchase_id=%s reason=%s",
                posting.id,
                record.id,
                mask_secrets(str(e)),
            )
            return Err(
                code=ErrorCode.UPSTREAM_ERROR,
                message="Failed to create payment session",
            )

        record = self._purchase_repo.apply_session_patch(
            purchase_id=record.id,
            patch=PurchaseSessionPatch(
                provider_session_id=session.session_id,
                provider_customer_id=session.customer_id,
            ),
        )
        logger.info(
            "purchase_session_created job_posting_id=%s purchase_id=%s product=%s actor=%s",
            posting.id,
            record.id,
            record.product_type,
            actor_id,
        )
        return Ok(
            PaymentSession(
                purchase_id=record.id,
                session_id=session.session_id,
                session_url=session.session_url,
                amount=record.amount,
                currency=record.currency,
                product_type=record.product_type,
                status=record.payment_status,
            )
        )
