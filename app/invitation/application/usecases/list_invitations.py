from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable

from common.application.result import Err, Ok, Result
from django.utils import timezone
from invitation.domain.invitation import InvitationStats, InvitationSummary
from invitation.ports.invitation_repo import InvitationRepositoryPort
from job_posting.application.access import MODE_VIEW, load_posting_for_actor
from job_posting.ports.job_posting_repo import JobPostingRepositoryPort
from organization.ports.capability_checker import CapabilityCheckerPort


@dataclass(frozen=True, slots=True)
class InvitationList:
    job_posting_id: int
    invitations: list[InvitationSummary]
    stats: InvitationStats


class ListInvitationsUseCase:
    """공고의 초대 목록 + 상태별 집계."""

    def __init__(
        self,
        *,
        job_posting_repo: JobPostingRepositoryPort,
        invitation_repo: InvitationRepositoryPort,
        capability_checker: CapabilityCheckerPort,
        clock: Callable[[], datetime] = timezone.now,
    ):
        self._job_posting_repo = job_posting_repo
        self._invitation_repo = invitation_repo
        self._capability_checker = capability_checker
        self._clock = clock

    def execute(self, *, job_posting_id: int, actor_id: int) -> Result[InvitationList]:
        loaded = load_posting_for_actor(
            job_posting_repo=self._job_posting_repo,
            capability_checker=self._capability_checker,
            job_posting_id=job_posting_id,
            actor_id=actor_id,
            mode=MODE_VIEW,
        )
        if isinstance(loaded, Err):
            return loaded

        now = self._clock()
        summaries = [
            replace(s, is_expired=now > s.expires_at)
            for s in self._invitation_repo.list_for_job_posting(
                job_posting_id=job_posting_id
            )
        ]
        return Ok(
            InvitationList(
                job_posting_id=job_posting_id,
                invitations=summaries,
                stats=InvitationStats.collect(summaries, now=now),
            )
        )
