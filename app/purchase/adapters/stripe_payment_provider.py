from __future__ import annotations

import json
from typing import Optional

import stripe
from purchase.domain.purchase import (
    CheckoutSession,
    CheckoutSessionRequest,
    PaymentEvent,
)
from purchase.ports.payment_provider import PaymentProviderPort, WebhookSignatureError


class StripePaymentProvider(PaymentProviderPort):
    """
    Stripe SDK 기반 결제 대행사 어댑터 (Checkout Session 생성 + webhook 서명 검증).

    전역 stripe.api_key 를 건드리지 않도록 호출마다 api_key 를 넘깁니다.
    """

    def __init__(
        self,
        *,
        secret_key: str,
        webhook_secret: str,
        tolerance_seconds: int = 300,
    ):
        self._secret_key = secret_key
        self._webhook_secret = webhook_secret
        self._tolerance_seconds = tolerance_seconds

    def create_checkout_session(
        self, *, request: CheckoutSessionRequest
    ) -> CheckoutSession:
        if not self._secret_key:
            raise RuntimeError("checkout_session_failed: secret key is not configured")

        try:
            customer_id = request.customer_id or self._create_customer(request)
            params = {
                "mode": "payment",
                "payment_method_types": ["card"],
                "line_items": [_line_item(request)],
                "allow_promotion_codes": True,
                "success_url": request.success_url,
                "cancel_url": request.cancel_url,
                "client_reference_id": str(request.job_posting_id),
                "metadata": {
                    "jobPostingId": str(request.job_posting_id),
                    "purchaseId": str(request.purchase_id),
                    "userId": str(request.actor_id),
                    "productType": request.product_type,
                },
            }
            if customer_id:
                params["customer"] = customer_id
            session = stripe.checkout.Session.create(api_key=self._secret_key, **params)
        except stripe.StripeError as e:
            # Stripe 에러 메시지에는 고객 정보가 포함될 수 있어 상태 코드만 남깁니다.
            raise RuntimeError(
                f"checkout_session_failed: http_{e.http_status or 'none'}"
            ) from e

        if not session.id or not session.url:
            raise RuntimeError("checkout_session_failed: no session id/url")

        return CheckoutSession(
            session_id=str(session.id),
            session_url=str(session.url),
            customer_id=str(customer_id) if customer_id else None,
        )

    def construct_event(self, *, payload: bytes, signature_header: str) -> PaymentEvent:
        if not self._webhook_secret:
            raise WebhookSignatureError("webhook secret is not configured")

        try:
            event = stripe.Webhook.construct_event(
                payload,
                signature_header,
                self._webhook_secret,
                tolerance=self._tolerance_seconds,
            )
        except stripe.SignatureVerificationError as e:
            raise WebhookSignatureError(str(e)) from e
        except ValueError as e:
            raise WebhookSignatureError("invalid payload") from e

        # 검증이 끝난 원본 바디에서 data.object 를 plain dict 로 꺼냅니다.
        body = json.loads(payload.decode("utf-8"))
        return PaymentEvent(
            id=str(event.get("id") or ""),
            type=str(event.get("type") or ""),
            data=dict((body.get("data") or {}).get("object") or {}),
        )

    def _create_customer(self, request: CheckoutSessionRequest) -> Optional[str]:
        if not request.customer_email:
            return None
        customer = stripe.Customer.create(
            api_key=self._secret_key,
            email=request.customer_email,
            metadata={"userId": str(request.actor_id)},
        )
        return customer.id


def _line_item(request: CheckoutSessionRequest) -> dict:
    if request.price_id:
        return {"price": request.price_id, "quantity": 1}
    return {
        "quantity": 1,
        "price_data": {
            "currency": request.currency,
            "unit_amount": request.amount,
            "product_data": {"name": request.product_name},
        },
    }
