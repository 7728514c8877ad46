from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from common.application.result import Err, ErrorCode, Ok, Result
from django.utils import timezone
from job_posting.application.access import load_posting_for_actor
from job_posting.domain.job_posting import JobPostingDomain
from job_posting.domain.lifecycle import (
    ARCHIVE,
    PUBLISH,
    REPUBLISH,
    Transition,
    can_transition,
)
from job_posting.ports.job_posting_repo import JobPostingRepositoryPort
from organization.ports.capability_checker import CapabilityCheckerPort
from purchase.domain.expiry import is_expired
from purchase.ports.purchase_repo import PurchaseRepositoryPort

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TransitionResult:
    job_posting_id: int
    previous_status: str
    status: str


class _JobPostingTransitionUseCase:
    """
    공고 상태 전이 공통 흐름.

    1) 공고 조회 / 권한 판정 (actor_id 가 None 이면 시스템 호출로 보고 권한 판정 생략)
    2) 현재 상태가 전이 source 에 있는지 확인 (아니면 STATE_CONFLICT)
    3) 전이별 사전 조건(_check_preconditions)
    4) 조건부 UPDATE. 0 rows 면 다른 요청과의 경합에서 밀린 것이므로 STATE_CONFLICT
    """

    transition: Transition

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

    def execute(
        self, *, job_posting_id: int, actor_id: Optional[int]
    ) -> Result[TransitionResult]:
        if actor_id is None:
            posting = self._job_posting_repo.get(job_posting_id=job_posting_id)
            if posting is None:
                return Err(code=ErrorCode.NOT_FOUND, message="Job posting not found")
        else:
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

        if not can_transition(self.transition, posting.status):
            logger.warning(
                "job_posting_transition_rejected action=%s id=%s status=%s actor=%s",
                self.transition.action,
                posting.id,
                posting.status,
                actor_id,
            )
            return Err(
                code=ErrorCode.STATE_CONFLICT,
                message=self._conflict_message(posting.status),
                details={"status": posting.status},
            )

        precondition = self._check_preconditions(posting)
        if precondition is not None:
            return precondition

        applied = self._job_posting_repo.apply_transition(
            job_posting_id=posting.id, transition=self.transition
        )
        if not applied:
            logger.warning(
                "job_posting_transition_lost_race action=%s id=%s actor=%s",
                self.transition.action,
                posting.id,
                actor_id,
            )
            return Err(
                code=ErrorCode.STATE_CONFLICT,
                message="Job posting status was changed by another request",
            )

        logger.info(
            "job_posting_%s id=%s from=%s to=%s actor=%s",
            self.transition.action,
            posting.id,
            posting.status,
            self.transition.target,
            actor_id,
        )
        return Ok(
            TransitionResult(
                job_posting_id=posting.id,
                previous_status=posting.status,
                status=self.transition.target,
            )
        )

    def _check_preconditions(self, posting: JobPostingDomain) -> Optional[Err]:
        return None

    def _conflict_message(self, status: str) -> str:
        return f"Cannot {self.transition.action} a job posting in {status} status"

    def _check_paid_and_not_expired(self, posting: JobPostingDomain) -> Optional[Err]:
        purchase = self._purchase_repo.get_by_job_posting(job_posting_id=posting.id)
        if purchase is None or not purchase.is_paid:
            return Err(
                code=ErrorCode.PAYMENT_REQUIRED,
                message=f"Cannot {self.transition.action} job posting without successful payment",
                details={
                    "payment_status": purchase.payment_status if purchase else None
                },
            )
        if is_expired(purchase, now=self._clock()):
            return Err(
                code=ErrorCode.EXPIRED,
                message=(
                    f"Cannot {self.transition.action} expired job posting. "
                    "The 30-day validity period has ended."
                ),
                details={
                    "expires_at": (
                        purchase.expires_at.isoformat() if purchase.expires_at else None
                    )
                },
            )
        return None


class PublishJobPostingUseCase(_JobPostingTransitionUseCase):
    """DRAFT -> PUBLISHED. 결제 완료(SUCCEEDED) + 유효기간 내여야 합니다."""

    transition = PUBLISH

    def _check_preconditions(self, posting: JobPostingDomain) -> Optional[Err]:
        return self._check_paid_and_not_expired(posting)


class ArchiveJobPostingUseCase(_JobPostingTransitionUseCase):
    """PUBLISHED/CLOSED -> ARCHIVED."""

    transition = ARCHIVE

    def _conflict_message(self, status: str) -> str:
        return "Only published or closed jobs can be archived"


class RepublishJobPostingUseCase(_JobPostingTransitionUseCase):
    """
    ARCHIVED -> PUBLISHED.

    결제 상태를 먼저 확인(PAYMENT_REQUIRED)한 뒤 유효기간(EXPIRED)을 확인합니다.
    """

    transition = REPUBLISH

    def _check_preconditions(self, posting: JobPostingDomain) -> Optional[Err]:
        return self._check_paid_and_not_expired(posting)

    def _conflict_message(self, status: str) -> str:
        return "Only archived jobs can be republished"
