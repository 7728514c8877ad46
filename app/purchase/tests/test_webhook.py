import json
import time

import pytest
from job_posting.models import JobPosting
from purchase.models import PurchaseRecord
from purchase.tests.signing import stripe_signature_header
from rest_framework import status
from rest_framework.test import APIClient

WEBHOOK_URL = "/api/v1/payments/webhook/"
SECRET = "whsec_testsecret"


def _signed(event: dict, secret: str = SECRET, timestamp: int | None = None):
    body = json.dumps(event).encode("utf-8")
    return body, stripe_signature_header(body, secret, timestamp)


def _event(event_type: str, job_posting_id: int, **obj):
    data = {
        "id": "cs_test_1",
        "metadata": {"jobPostingId": str(job_posting_id)},
        "payment_status": "paid",
        "payment_intent": "pi_123",
        "customer": "cus_123",
    }
    data.update(obj)
    return {"id": "evt_1", "type": event_type, "data": {"object": data}}


@pytest.mark.django_db
class TestPaymentWebhook:
    def setup_method(self):
        self.client = APIClient()

    @pytest.fixture(autouse=True)
    def _webhook_settings(self, settings):
        settings.PAYMENT_WEBHOOK_SECRET = SECRET
        settings.PAYMENT_WEBHOOK_TOLERANCE_SECONDS = 300
        settings.JOB_POSTING_AUTO_PUBLISH_ON_SETTLEMENT = True
        self.settings = settings

    def _post(self, body: bytes, signature: str | None):
        extra = {"HTTP_STRIPE_SIGNATURE": signature} if signature else {}
        return self.client.generic(
            "POST", WEBHOOK_URL, data=body, content_type="application/json", **extra
        )

    def _pending(self, posting):
        return PurchaseRecord.objects.create(
            job_posting=posting,
            payment_status="PENDING",
            product_type="JUNIOR",
            amount=3000,
            provider_session_id="cs_test_1",
        )

    def test_completed_session_settles_and_publishes_draft(self, make_job_posting):
        # Given
        posting = make_job_posting()
        self._pending(posting)
        body, signature = _signed(_event("checkout.session.completed", posting.id))

        # When
        resp = self._post(body, signature)

        # Then
        assert resp.status_code == status.HTTP_200_OK
        assert resp.data["received"] is True
        assert resp.data["handled"] is True
        record = PurchaseRecord.objects.get(job_posting=posting)
        assert record.payment_status == "SUCCEEDED"
        assert record.provider_payment_intent_id == "pi_123"
        assert record.expires_at is not None
        posting.refresh_from_db()
        assert posting.status == JobPosting.Status.PUBLISHED

    def test_duplicate_settlement_is_noop(self, make_job_posting):
        posting = make_job_posting()
        self._pending(posting)
        body, signature = _signed(_event("checkout.session.completed", posting.id))

        self._post(body, signature)
        first = PurchaseRecord.objects.get(job_posting=posting)
        resp = self._post(body, signature)

        assert resp.status_code == status.HTTP_200_OK
        second = PurchaseRecord.objects.get(job_posting=posting)
        assert second.paid_at == first.paid_at
        assert second.expires_at == first.expires_at

    def test_auto_publish_can_be_disabled(self, make_job_posting):
        self.settings.JOB_POSTING_AUTO_PUBLISH_ON_SETTLEMENT = False
        posting = make_job_posting()
        self._pending(posting)
        body, signature = _signed(_event("checkout.session.completed", posting.id))

        resp = self._post(body, signature)

        assert resp.status_code == status.HTTP_200_OK
        posting.refresh_from_db()
        assert posting.status == JobPosting.Status.DRAFT

    def test_session_lookup_when_metadata_missing(self, make_job_posting):
        posting = make_job_posting()
        self._pending(posting)
        event = _event("checkout.session.completed", posting.id, metadata={})

        resp = self._post(*_signed(event))

        assert resp.status_code == status.HTTP_200_OK
        assert resp.data["handled"] is True

    def test_expired_session_marks_pending_as_failed(self, make_job_posting):
        posting = make_job_posting()
        self._pending(posting)
        body, signature = _signed(_event("checkout.session.expired", posting.id))

        resp = self._post(body, signature)

        assert resp.status_code == status.HTTP_200_OK
        assert PurchaseRecord.objects.get(job_posting=posting).payment_status == "FAILED"

    def test_invalid_signature_returns_400(self, make_job_posting):
        posting = make_job_posting()
        self._pending(posting)
        body, signature = _signed(
            _event("checkout.session.completed", posting.id), secret="whsec_other"
        )

        resp = self._post(body, signature)

        assert resp.status_code == status.HTTP_400_BAD_REQUEST
        assert resp.data["error_code"] == "VALIDATION_ERROR"
        assert PurchaseRecord.objects.get(job_posting=posting).payment_status == "PENDING"

    def test_stale_timestamp_is_rejected(self, make_job_posting):
        posting = make_job_posting()
        body, signature = _signed(
            _event("checkout.session.completed", posting.id),
            timestamp=int(time.time()) - 3600,
        )

        resp = self._post(body, signature)

        assert resp.status_code == status.HTTP_400_BAD_REQUEST

    def test_missing_signature_header_returns_400(self):
        resp = self._post(b"{}", None)

        assert resp.status_code == status.HTTP_400_BAD_REQUEST

    def test_unhandled_event_is_acknowledged(self):
        body, signature = _signed({"id": "evt_2", "type": "invoice.paid", "data": {"object": {}}})

        resp = self._post(body, signature)

        assert resp.status_code == status.HTTP_200_OK
        assert resp.data["handled"] is False
