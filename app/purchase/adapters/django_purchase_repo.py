from __future__ import annotations

from typing import Optional

from django.db import IntegrityError, transaction
from django.utils import timezone
from purchase.domain.purchase import (
    PurchaseRecordDomain,
    PurchaseSessionPatch,
    SettlementPatch,
)
from purchase.models import PurchaseRecord
from purchase.ports.purchase_repo import PurchaseRepositoryPort


def _to_domain(obj: PurchaseRecord) -> PurchaseRecordDomain:
    return PurchaseRecordDomain(
        id=int(obj.id),
        job_posting_id=int(obj.job_posting_id),
        payment_status=obj.payment_status,
        product_type=obj.product_type,
        amount=int(obj.amount),
        currency=obj.currency,
        provider_session_id=obj.provider_session_id,
        provider_customer_id=obj.provider_customer_id,
        provider_payment_intent_id=obj.provider_payment_intent_id,
        paid_at=obj.paid_at,
        expires_at=obj.expires_at,
        created_at=obj.created_at,
    )


class DjangoPurchaseRepository(PurchaseRepositoryPort):
    def get_by_job_posting(
        self, *, job_posting_id: int
    ) -> Optional[PurchaseRecordDomain]:
        obj = PurchaseRecord.objects.filter(job_posting_id=job_posting_id).first()
        return _to_domain(obj) if obj is not None else None

    def get_or_create_pending(
        self,
        *,
        job_posting_id: int,
        product_type: str,
        amount: int,
        currency: str,
        price_id: str,
    ) -> PurchaseRecordDomain:
        """
        job_posting 당 하나의 결제 기록을 보장합니다.

        - 동시 요청이 unique 제약에 걸리면(IntegrityError) 먼저 생성된 기록을 다시 읽어 재사용
        - PENDING/FAILED 기록은 상품 정보를 갱신하고 PENDING 으로 되돌림
        - SUCCEEDED 기록은 변경하지 않음
        """
        try:
            with transaction.atomic():
                obj, created = PurchaseRecord.objects.get_or_create(
                    job_posting_id=job_posting_id,
                    defaults={
                        "payment_status": PurchaseRecord.PaymentStatus.PENDING,
                        "product_type": product_type,
                        "amount": amount,
                        "currency": currency,
                        "provider_price_id": price_id,
                    },
                )
        except IntegrityError:
            obj = PurchaseRecord.objects.get(job_posting_id=job_posting_id)
            created = False

        if not created:
            reopened = PurchaseRecord.objects.filter(
                pk=obj.pk,
                payment_status__in=[
                    PurchaseRecord.PaymentStatus.PENDING,
                    PurchaseRecord.PaymentStatus.FAILED,
                ],
            ).update(
                payment_status=PurchaseRecord.PaymentStatus.PENDING,
                product_type=product_type,
                amount=amount,
                currency=currency,
                provider_price_id=price_id,
                updated_at=timezone.now(),
            )
            if reopened:
                obj.refresh_from_db()
        return _to_domain(obj)

    def apply_session_patch(
        self, *, purchase_id: int, patch: PurchaseSessionPatch
    ) -> PurchaseRecordDomain:
        fields: dict = {
            "provider_session_id": patch.provider_session_id,
            "updated_at": timezone.now(),
        }
        if patch.provider_customer_id is not None:
            fields["provider_customer_id"] = patch.provider_customer_id
        PurchaseRecord.objects.filter(pk=purchase_id).update(**fields)
        return _to_domain(PurchaseRecord.objects.get(pk=purchase_id))

    def apply_settlement(self, *, job_posting_id: int, patch: SettlementPatch) -> bool:
        """
        SUCCEEDED 가 아닌 기록만 조건부로 확정합니다.
        중복 알림으로 이미 확정된 경우 0 rows -> False
        """
        fields: dict = {
            "payment_status": PurchaseRecord.PaymentStatus.SUCCEEDED,
            "paid_at": patch.paid_at,
            "expires_at": patch.expires_at,
            "updated_at": timezone.now(),
        }
        if patch.provider_payment_intent_id is not None:
            fields["provider_payment_intent_id"] = patch.provider_payment_intent_id
        if patch.provider_customer_id is not None:
            fields["provider_customer_id"] = patch.provider_customer_id

        updated = (
            PurchaseRecord.objects.filter(job_posting_id=job_posting_id)
            .exclude(payment_status=PurchaseRecord.PaymentStatus.SUCCEEDED)
            .update(**fields)
        )
        return updated == 1

    def mark_failed(self, *, job_posting_id: int) -> bool:
        updated = PurchaseRecord.objects.filter(
            job_posting_id=job_posting_id,
            payment_status=PurchaseRecord.PaymentStatus.PENDING,
        ).update(
            payment_status=PurchaseRecord.PaymentStatus.FAILED,
            updated_at=timezone.now(),
        )
        return updated == 1

    def find_job_posting_id_by_session(self, *, session_id: str) -> Optional[int]:
        if not session_id:
            return None
        job_posting_id = (
            PurchaseRecord.objects.filter(provider_session_id=session_id)
            .values_list("job_posting_id", flat=True)
            .first()
        )
        return int(job_posting_id) if job_posting_id is not None else None
