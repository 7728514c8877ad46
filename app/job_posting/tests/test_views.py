from datetime import timedelta

import pytest
from django.utils import timezone
from job_posting.models import JobPosting
from organization.models import Company, OrganizationMember
from purchase.models import PurchaseRecord
from rest_framework import status
from rest_framework.test import APIClient


def _succeeded_purchase(posting, expires_at):
    return PurchaseRecord.objects.create(
        job_posting=posting,
        payment_status="SUCCEEDED",
        product_type="JUNIOR",
        amount=3000,
        paid_at=expires_at - timedelta(days=30),
        expires_at=expires_at,
    )


@pytest.mark.django_db
class TestJobPostingLifecycleViews:
    def setup_method(self):
        self.client = APIClient()

    def test_unauthenticated_request_returns_401(self, make_job_posting):
        posting = make_job_posting(status="PUBLISHED")

        resp = self.client.patch(f"/api/v1/job-postings/{posting.id}/archive/")

        assert resp.status_code == status.HTTP_401_UNAUTHORIZED

    def test_archive_published_posting(self, make_job_posting):
        # Given
        posting = make_job_posting(status="PUBLISHED")
        self.client.force_authenticate(user=posting.owner)

        # When
        resp = self.client.patch(f"/api/v1/job-postings/{posting.id}/archive/")

        # Then
        assert resp.status_code == status.HTTP_200_OK
        assert resp.data == {"id": posting.id, "status": "ARCHIVED", "previous_status": "PUBLISHED"}
        posting.refresh_from_db()
        assert posting.status == JobPosting.Status.ARCHIVED

    def test_archive_draft_returns_400_state_conflict(self, make_job_posting):
        posting = make_job_posting()
        self.client.force_authenticate(user=posting.owner)

        resp = self.client.patch(f"/api/v1/job-postings/{posting.id}/archive/")

        assert resp.status_code == status.HTTP_400_BAD_REQUEST
        assert resp.data["error_code"] == "STATE_CONFLICT"

    def test_archive_by_other_user_returns_403(self, make_job_posting, make_user):
        posting = make_job_posting(status="PUBLISHED")
        self.client.force_authenticate(user=make_user())

        resp = self.client.patch(f"/api/v1/job-postings/{posting.id}/archive/")

        assert resp.status_code == status.HTTP_403_FORBIDDEN
        assert resp.data["error_code"] == "FORBIDDEN"

    def test_company_admin_can_archive_member_posting(self, make_job_posting, make_user):
        company = Company.objects.create(company_name="Acme")
        member = make_user()
        admin = make_user()
        OrganizationMember.objects.create(company=company, user=member, role="MEMBER")
        OrganizationMember.objects.create(company=company, user=admin, role="ADMIN")
        posting = make_job_posting(owner=member, status="CLOSED")
        self.client.force_authenticate(user=admin)

        resp = self.client.patch(f"/api/v1/job-postings/{posting.id}/archive/")

        assert resp.status_code == status.HTTP_200_OK
        assert resp.data["status"] == "ARCHIVED"

    def test_missing_posting_returns_404(self, make_user):
        self.client.force_authenticate(user=make_user())

        resp = self.client.patch("/api/v1/job-postings/999999/archive/")

        assert resp.status_code == status.HTTP_404_NOT_FOUND

    def test_republish_expired_posting_returns_400_expired(self, make_job_posting):
        posting = make_job_posting(status="ARCHIVED")
        _succeeded_purchase(posting, timezone.now() - timedelta(days=1))
        self.client.force_authenticate(user=posting.owner)

        resp = self.client.patch(f"/api/v1/job-postings/{posting.id}/republish/")

        assert resp.status_code == status.HTTP_400_BAD_REQUEST
        assert resp.data["error_code"] == "EXPIRED"

    def test_republish_within_validity(self, make_job_posting):
        posting = make_job_posting(status="ARCHIVED")
        _succeeded_purchase(posting, timezone.now() + timedelta(days=10))
        self.client.force_authenticate(user=posting.owner)

        resp = self.client.patch(f"/api/v1/job-postings/{posting.id}/republish/")

        assert resp.status_code == status.HTTP_200_OK
        posting.refresh_from_db()
        assert posting.status == JobPosting.Status.PUBLISHED

    def test_publish_without_payment_returns_payment_required(self, make_job_posting):
        posting = make_job_posting()
        self.client.force_authenticate(user=posting.owner)

        resp = self.client.patch(f"/api/v1/job-postings/{posting.id}/publish/")

        assert resp.status_code == status.HTTP_400_BAD_REQUEST
        assert resp.data["error_code"] == "PAYMENT_REQUIRED"


@pytest.mark.django_db
class TestJobPostingExpiryView:
    def setup_method(self):
        self.client = APIClient()

    def test_no_purchase_means_not_expired(self, make_job_posting):
        posting = make_job_posting()
        self.client.force_authenticate(user=posting.owner)

        resp = self.client.get(f"/api/v1/job-postings/{posting.id}/expiry/")

        assert resp.status_code == status.HTTP_200_OK
        assert resp.data["is_expired"] is False
        assert resp.data["days_remaining"] is None
        assert resp.data["has_expiry"] is False

    def test_days_remaining_is_rounded_up(self, make_job_posting):
        posting = make_job_posting(status="PUBLISHED")
        _succeeded_purchase(posting, timezone.now() + timedelta(days=2, hours=1))
        self.client.force_authenticate(user=posting.owner)

        resp = self.client.get(f"/api/v1/job-postings/{posting.id}/expiry/")

        assert resp.status_code == status.HTTP_200_OK
        assert resp.data["is_expired"] is False
        assert resp.data["days_remaining"] == 3
        assert resp.data["has_expiry"] is True
        assert resp.data["payment_status"] == "SUCCEEDED"


@pytest.mark.django_db
class TestSweepCronView:
    def setup_method(self):
        self.client = APIClient()

    def test_missing_secret_is_rejected(self, settings):
        settings.CRON_SECRET = "cron-secret"

        resp = self.client.post("/api/v1/cron/sweep-expired-job-postings/")

        assert resp.status_code == status.HTTP_403_FORBIDDEN

    def test_empty_configured_secret_rejects_everything(self, settings):
        settings.CRON_SECRET = ""

        resp = self.client.post(
            "/api/v1/cron/sweep-expired-job-postings/",
            HTTP_AUTHORIZATION="Bearer ",
        )

        assert resp.status_code == status.HTTP_403_FORBIDDEN

    def test_sweep_closes_expired_postings(self, settings, make_job_posting):
        settings.CRON_SECRET = "cron-secret"
        posting = make_job_posting(status="PUBLISHED")
        _succeeded_purchase(posting, timezone.now() - timedelta(minutes=5))

        resp = self.client.post(
            "/api/v1/cron/sweep-expired-job-postings/",
            {"limit": 10},
            format="json",
            HTTP_AUTHORIZATION="Bearer cron-secret",
        )

        assert resp.status_code == status.HTTP_200_OK
        assert resp.data["closed_count"] == 1
        assert resp.data["closed_ids"] == [posting.id]

    def test_scheduler_get_runs_the_same_sweep(self, settings, make_job_posting):
        settings.CRON_SECRET = "cron-secret"
        expired = make_job_posting(status="PUBLISHED")
        _succeeded_purchase(expired, timezone.now() - timedelta(minutes=5))
        active = make_job_posting(status="PUBLISHED")
        _succeeded_purchase(active, timezone.now() + timedelta(days=3))

        resp = self.client.get(
            "/api/v1/cron/sweep-expired-job-postings/?limit=10",
            HTTP_AUTHORIZATION="Bearer cron-secret",
        )

        assert resp.status_code == status.HTTP_200_OK
        assert resp.data["closed_ids"] == [expired.id]
        expired.refresh_from_db()
        active.refresh_from_db()
        assert expired.status == "CLOSED"
        assert active.status == "PUBLISHED"

    def test_scheduler_get_requires_secret(self, settings):
        settings.CRON_SECRET = "cron-secret"

        resp = self.client.get("/api/v1/cron/sweep-expired-job-postings/")

        assert resp.status_code == status.HTTP_403_FORBIDDEN
