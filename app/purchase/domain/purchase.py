from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

PENDING = "PENDING"
SUCCEEDED = "SUCCEEDED"
FAILED = "FAILED"


@dataclass(frozen=True, slots=True)
class PurchaseRecordDomain:
    id: int
    job_posting_id: int
    payment_status: str
    product_type: str
    amount: int
    currency: str
    provider_session_id: str = ""
    provider_customer_id: str = ""
    provider_payment_intent_id: str = ""
    paid_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def is_paid(self) -> bool:
        return self.payment_status == SUCCEEDED


@dataclass(frozen=True, slots=True)
class PurchaseSessionPatch:
    """
    체크아웃 세션 생성 직후 결제 기록에 반영할 값.

    - provider_session_id: 항상 덮어씀 (새 세션이 이전 세션을 대체)
    - provider_customer_id: None 이면 기존 값 유지, 값이 있으면 덮어씀
    """

    provider_session_id: str
    provider_customer_id: Optional[str] = None


@dataclass(frozen=True, slots=True)
class SettlementInfo:
    """결제 대행사가 알려준 결제 확정 정보."""

    provider_payment_intent_id: Optional[str] = None
    provider_customer_id: Optional[str] = None


@dataclass(frozen=True, slots=True)
class SettlementPatch:
    """
    결제 확정 시 결제 기록에 반영할 값.

    - payment_status: 항상 SUCCEEDED
    - paid_at / expires_at: 항상 덮어씀
    - provider_payment_intent_id / provider_customer_id: None 이면 기존 값 유지
    """

    paid_at: datetime
    expires_at: datetime
    provider_payment_intent_id: Optional[str] = None
    provider_customer_id: Optional[str] = None


@dataclass(frozen=True, slots=True)
class CheckoutSessionRequest:
    job_posting_id: int
    purchase_id: int
    actor_id: int
    product_type: str
    amount: int
    currency: str
    price_id: str
    product_name: str
    success_url: str
    cancel_url: str
    customer_id: Optional[str] = None
    customer_email: Optional[str] = None


@dataclass(frozen=True, slots=True)
class CheckoutSession:
    session_id: str
    session_url: str
    customer_id: Optional[str] = None


@dataclass(frozen=True, slots=True)
class PaymentSession:
    """purchase 유스케이스가 호출자에게 돌려주는 결제 세션 핸들."""

    purchase_id: int
    session_id: str
    session_url: str
    amount: int
    currency: str
    product_type: str
    status: str


@dataclass(frozen=True, slots=True)
class PaymentEvent:
    """서명 검증을 통과한 결제 대행사 이벤트."""

    id: str
    type: str
    data: dict
