from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Iterable

from common.application.result import Err, ErrorCode, Ok, Result
from django.utils import timezone
from invitation.domain.invitation import (
    CandidateRef,
    InvitationDomain,
    InvitationReissuePatch,
    generate_invitation_token,
)
from invitation.ports.invitation_repo import InvitationRepositoryPort
from job_posting.application.access import load_posting_for_actor
from job_posting.ports.job_posting_repo import JobPostingRepositoryPort
from organization.ports.capability_checker import CapabilityCheckerPort

logger = logging.getLogger(__name__)


class IssueInvitationUseCase:
    """
    후보자 1명에게 초대를 발송합니다.

    같은 공고/후보자에게 다시 발송하면 토큰을 새로 만들고 상태를 PENDING 으로 되돌립니다.
    유효기간(validity_period)은 호출자가 매번 지정하며 양수여야 합니다.
    """

    def __init__(
        self,
        *,
        invitation_repo: InvitationRepositoryPort,
        clock: Callable[[], datetime] = timezone.now,
        token_factory: Callable[[], str] = generate_invitation_token,
    ):
        self._invitation_repo = invitation_repo
        self._clock = clock
        self._token_factory = token_factory

    def execute(
        self,
        *,
        job_posting_id: int,
        candidate: CandidateRef,
        validity_period: timedelta,
        message: str = "",
    ) -> Result[InvitationDomain]:
        if validity_period <= timedelta(0):
            return Err(
                code=ErrorCode.VALIDATION_ERROR,
                message="Invitation validity period must be positive",
            )

        now = self._clock()
        invitation = self._invitation_repo.upsert(
            job_posting_id=job_posting_id,
            candidate=candidate,
            patch=InvitationReissuePatch(
                token=self._token_factory(),
                message=message or "",
                sent_at=now,
                expires_at=now + validity_period,
            ),
        )
        logger.info(
            "invitation_issued id=%s job_posting=%s candidate=%s expires_at=%s",
            invitation.id,
            job_posting_id,
            candidate.id,
            invitation.expires_at.isoformat(),
        )
        return Ok(invitation)


@dataclass(frozen=True, slots=True)
class IssuedInvitations:
    job_posting_id: int
    invitations: list[InvitationDomain]
    skipped_candidate_ids: list[int] = field(default_factory=list)
    system_question_count: int = 0
    custom_question_count: int = 0

    @property
    def total_sent(self) -> int:
        return len(self.invitations)


class IssueInvitationsUseCase:
    """
    공고 소유자(또는 같은 회사 OWNER/ADMIN)가 여러 후보자에게 초대를 발송합니다.

    - 공고에 스크리닝 질문이 하나 이상 있어야 함
    - 존재하지 않는 후보자 ID 는 건너뜀 (유효한 후보자가 하나도 없으면 VALIDATION_ERROR)
    """

    def __init__(
        self,
        *,
        job_posting_repo: JobPostingRepositoryPort,
        invitation_repo: InvitationRepositoryPort,
        capability_checker: CapabilityCheckerPort,
        issue_invitation: IssueInvitationUseCase,
    ):
        self._job_posting_repo = job_posting_repo
        self._invitation_repo = invitation_repo
        self._capability_checker = capability_checker
        self._issue_invitation = issue_invitation

    def execute(
        self,
        *,
        job_posting_id: int,
        actor_id: int,
        candidate_ids: Iterable[int],
        validity_period: timedelta,
        message: str = "",
    ) -> Result[IssuedInvitations]:
        requested = list(dict.fromkeys(int(c) for c in candidate_ids))
        if not requested:
            return Err(
                code=ErrorCode.VALIDATION_ERROR,
                message="At least one candidate must be selected",
            )
        if validity_period <= timedelta(0):
            return Err(
                code=ErrorCode.VALIDATION_ERROR,
                message="Invitation validity period must be positive",
            )

        loaded = load_posting_for_actor(
            job_posting_repo=self._job_posting_repo,
            capability_checker=self._capability_checker,
            job_posting_id=job_posting_id,
            actor_id=actor_id,
        )
        if isinstance(loaded, Err):
            return loaded

        questions = self._job_posting_repo.get_question_set(
            job_posting_id=job_posting_id
        )
        if questions.total == 0:
            return Err(
                code=ErrorCode.VALIDATION_ERROR,
                message="No screening questions configured for this job posting",
            )

        candidates = self._invitation_repo.find_candidates(candidate_ids=requested)
        if not candidates:
            return Err(
                code=ErrorCode.VALIDATION_ERROR,
                message="No valid candidates found",
                details={"candidate_ids": requested},
            )

        invitations: list[InvitationDomain] = []
        for candidate in candidates:
            issued = self._issue_invitation.execute(
                job_posting_id=job_posting_id,
                candidate=candidate,
                validity_period=validity_period,
                message=message,
            )
            if isinstance(issued, Err):
                return issued
            invitations.append(issued.value)

        found = {c.id for c in candidates}
        skipped = [cid for cid in requested if cid not in found]
        if skipped:
            logger.info(
                "invitation_candidates_skipped job_posting=%s skipped=%s",
                job_posting_id,
                skipped,
            )

        return Ok(
            IssuedInvitations(
                job_posting_id=job_posting_id,
                invitations=invitations,
                skipped_candidate_ids=skipped,
                system_question_count=len(questions.system),
                custom_question_count=len(questions.custom),
            )
        )
