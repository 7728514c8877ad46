from datetime import timedelta

import pytest
from common.application.result import Err, ErrorCode, Ok
from job_posting.adapters.django_job_posting_repo import DjangoJobPostingRepository
from job_posting.application.usecases.lifecycle_transitions import (
    PublishJobPostingUseCase,
)
from job_posting.application.usecases.sweep_expired_job_postings import (
    SweepExpiredJobPostingsUseCase,
)
from job_posting.models import JobPosting
from job_posting.tests.fakes import T0, FakeJobPostingRepository, FixedClock, make_posting
from organization.adapters.django_capability_checker import DjangoCapabilityChecker
from purchase.adapters.django_purchase_repo import DjangoPurchaseRepository
from purchase.application.usecases.confirm_payment import ConfirmPaymentUseCase
from purchase.application.usecases.purchase_job_posting import (
    PurchaseJobPostingUseCase,
)
from purchase.domain.products import ProductConfig
from purchase.domain.purchase import CheckoutSession, SettlementInfo
from purchase.models import PurchaseRecord


class StubPaymentProvider:
    def create_checkout_session(self, *, request):
        return CheckoutSession(
            session_id=f"cs_test_{request.purchase_id}",
            session_url="https://checkout.example.com/pay",
            customer_id="cus_123",
        )

    def construct_event(self, *, payload, signature_header):  # pragma: no cover
        raise NotImplementedError


PRODUCTS = {
    "JUNIOR": ProductConfig(product_type="JUNIOR", amount=3000, currency="aud"),
    "SENIOR": ProductConfig(product_type="SENIOR", amount=30000, currency="aud"),
}


@pytest.mark.django_db
class TestPurchasePublishSweepScenario:
    def test_posting_is_closed_after_validity_window(self, make_job_posting):
        # Given: DRAFT 공고
        posting = make_job_posting()
        owner_id = posting.owner_id
        clock = FixedClock(T0)
        job_posting_repo = DjangoJobPostingRepository()
        purchase_repo = DjangoPurchaseRepository()

        # When: 구매 -> 결제 확정 -> 게시
        purchase = PurchaseJobPostingUseCase(
            job_posting_repo=job_posting_repo,
            purchase_repo=purchase_repo,
            payment_provider=StubPaymentProvider(),
            capability_checker=DjangoCapabilityChecker(),
            products=PRODUCTS,
            success_url="https://app.example.com/ok",
            cancel_url="https://app.example.com/cancel",
        ).execute(job_posting_id=posting.id, actor_id=owner_id)
        assert isinstance(purchase, Ok)
        assert purchase.value.status == "PENDING"

        confirmed = ConfirmPaymentUseCase(purchase_repo=purchase_repo, clock=clock).execute(
            job_posting_id=posting.id,
            settlement=SettlementInfo(provider_payment_intent_id="pi_1"),
        )
        assert isinstance(confirmed, Ok)
        record = PurchaseRecord.objects.get(job_posting=posting)
        assert record.payment_status == "SUCCEEDED"
        assert record.paid_at == T0
        assert record.expires_at == T0 + timedelta(days=30)

        published = PublishJobPostingUseCase(
            job_posting_repo=job_posting_repo,
            purchase_repo=purchase_repo,
            capability_checker=DjangoCapabilityChecker(),
            clock=clock,
        ).execute(job_posting_id=posting.id, actor_id=owner_id)
        assert isinstance(published, Ok)

        # Then: T+31d sweep 에서 CLOSED
        sweep = SweepExpiredJobPostingsUseCase(
            job_posting_repo=job_posting_repo,
            clock=FixedClock(T0 + timedelta(days=31)),
        )
        result = sweep.execute()

        assert isinstance(result, Ok)
        assert result.value.closed_ids == [posting.id]
        assert result.value.closed_count == 1
        posting.refresh_from_db()
        assert posting.status == JobPosting.Status.CLOSED

        # 재실행해도 이미 닫힌 공고는 다시 세지 않음
        rerun = sweep.execute()
        assert isinstance(rerun, Ok)
        assert rerun.value.closed_count == 0
        assert rerun.value.closed_ids == []


@pytest.mark.django_db
class TestSweepExpiredJobPostings:
    def _publish_with_expiry(self, make_job_posting, expires_at, status="PUBLISHED"):
        posting = make_job_posting(status=status)
        PurchaseRecord.objects.create(
            job_posting=posting,
            payment_status="SUCCEEDED",
            product_type="JUNIOR",
            amount=3000,
            paid_at=expires_at - timedelta(days=30),
            expires_at=expires_at,
        )
        return posting

    def test_only_expired_published_postings_are_closed(self, make_job_posting):
        expired = self._publish_with_expiry(make_job_posting, T0 - timedelta(hours=1))
        still_valid = self._publish_with_expiry(make_job_posting, T0 + timedelta(days=1))
        archived = self._publish_with_expiry(
            make_job_posting, T0 - timedelta(days=2), status="ARCHIVED"
        )
        make_job_posting(status="PUBLISHED")  # 결제 기록 없음: 만료되지 않음

        result = SweepExpiredJobPostingsUseCase(
            job_posting_repo=DjangoJobPostingRepository(), clock=FixedClock(T0)
        ).execute()

        assert isinstance(result, Ok)
        assert result.value.closed_ids == [expired.id]
        still_valid.refresh_from_db()
        archived.refresh_from_db()
        assert still_valid.status == "PUBLISHED"
        assert archived.status == "ARCHIVED"

    def test_sweep_is_bounded_by_limit(self, make_job_posting):
        for hours in (3, 2, 1):
            self._publish_with_expiry(make_job_posting, T0 - timedelta(hours=hours))

        result = SweepExpiredJobPostingsUseCase(
            job_posting_repo=DjangoJobPostingRepository(), clock=FixedClock(T0)
        ).execute(limit=2)

        assert isinstance(result, Ok)
        assert result.value.closed_count == 2
        assert JobPosting.objects.filter(status="PUBLISHED").count() == 1

    def test_non_positive_limit_is_rejected(self):
        result = SweepExpiredJobPostingsUseCase(
            job_posting_repo=FakeJobPostingRepository()
        ).execute(limit=0)

        assert isinstance(result, Err)
        assert result.code == ErrorCode.VALIDATION_ERROR


class TestSweepSkipsChangedPostings:
    def test_posting_archived_between_select_and_update_is_skipped(self):
        repo = FakeJobPostingRepository(
            [make_posting(id=1, status="PUBLISHED"), make_posting(id=2, status="PUBLISHED")]
        )
        repo.expires_at = {1: T0 - timedelta(days=1), 2: T0 - timedelta(days=1)}

        original = repo.find_expired_published_ids

        def find_then_archive(*, now, limit):
            ids = original(now=now, limit=limit)
            repo.postings[2] = make_posting(id=2, status="ARCHIVED")
            return ids

        repo.find_expired_published_ids = find_then_archive

        result = SweepExpiredJobPostingsUseCase(
            job_posting_repo=repo, clock=FixedClock(T0)
        ).execute()

        assert isinstance(result, Ok)
        assert result.value.closed_ids == [1]
        assert result.value.scanned_count == 2
