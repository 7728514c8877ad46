from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from common.application.result import Err, Ok, Result
from django.utils import timezone
from job_posting.application.access import MODE_VIEW, load_posting_for_actor
from job_posting.ports.job_posting_repo import JobPostingRepositoryPort
from organization.ports.capability_checker import CapabilityCheckerPort
from purchase.domain.expiry import expiry_info
from purchase.ports.purchase_repo import PurchaseRepositoryPort


@dataclass(frozen=True, slots=True)
class JobPostingExpiry:
    job_posting_id: int
    status: str
    is_expired: bool
    days_remaining: Optional[int]
    has_expiry: bool
    payment_status: Optional[str] = None
    paid_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None


class GetJobPostingExpiryUseCase:
    """
    공고 만료 정보 조회 (같은 회사 멤버까지 조회 가능).
    """

    def __init__(
        self,
        *,
        job_posting_repo: JobPostingRepositoryPort,
        purchase_repo: PurchaseRepositoryPort,
        capability_checker: CapabilityCheckerPort,
        clock: Callable[[], datetime] = timezone.now,
    ):
        self._job_posting_repo = job_posting_repo
        self._purchase_repo = purchase_repo
        self._capability_checker = capability_checker
        self._clock = clock

    def execute(self, *, job_posting_id: int, actor_id: int) -> Result[JobPostingExpiry]:
        loaded = load_posting_for_actor(
            job_posting_repo=self._job_posting_repo,
            capability_checker=self._capability_checker,
            job_posting_id=job_posting_id,
            actor_id=actor_id,
            mode=MODE_VIEW,
        )
        if isinstance(loaded, Err):
            return loaded
        assert isinstance(loaded, Ok)
        posting = loaded.value

        purchase = self._purchase_repo.get_by_job_posting(job_posting_id=posting.id)
        info = expiry_info(purchase, now=self._clock())
        return Ok(
            JobPostingExpiry(
                job_posting_id=posting.id,
                status=posting.status,
                is_expired=info.is_expired,
                days_remaining=info.days_remaining,
                has_expiry=info.has_expiry,
                payment_status=purchase.payment_status if purchase else None,
                paid_at=purchase.paid_at if purchase else None,
                expires_at=purchase.expires_at if purchase else None,
            )
        )
