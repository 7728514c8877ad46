from __future__ import annotations

from typing import Protocol

from purchase.domain.purchase import (
    CheckoutSession,
    CheckoutSessionRequest,
    PaymentEvent,
)


class WebhookSignatureError(Exception):
    pass


class PaymentProviderPort(Protocol):
    def create_checkout_session(
        self, *, request: CheckoutSessionRequest
    ) -> CheckoutSession: ...

    def construct_event(self, *, payload: bytes, signature_header: str) -> PaymentEvent:
        """서명 검증 실패 시 WebhookSignatureError"""
        ...
