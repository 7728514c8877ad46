from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable

from common.application.result import Err, ErrorCode, Ok, Result
from django.utils import timezone
from invitation.application.expiry import expire_if_overdue
from invitation.domain.invitation import PENDING, VIEWED, InvitationDomain, StoredResponse
from invitation.ports.invitation_repo import InvitationRepositoryPort
from job_posting.domain.job_posting import JobPostingDomain
from job_posting.domain.screening import ScreeningQuestionSet
from job_posting.ports.job_posting_repo import JobPostingRepositoryPort

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResolvedInvitation:
    invitation: InvitationDomain
    job_posting: JobPostingDomain
    questions: ScreeningQuestionSet
    # "<question_type>_<question_id>" -> 저장된 답변
    responses: dict[str, StoredResponse]


class ResolveInvitationUseCase:
    """
    토큰으로 초대를 조회합니다 (비인증).

    - 만료 + COMPLETED 아님: EXPIRED 로 저장 후 EXPIRED 에러
    - PENDING: 최초 조회이므로 VIEWED 로 변경 (조건부 UPDATE)
    """

    def __init__(
        self,
        *,
        invitation_repo: InvitationRepositoryPort,
        job_posting_repo: JobPostingRepositoryPort,
        clock: Callable[[], datetime] = timezone.now,
    ):
        self._invitation_repo = invitation_repo
        self._job_posting_repo = job_posting_repo
        self._clock = clock

    def execute(self, *, token: str) -> Result[ResolvedInvitation]:
        invitation = self._invitation_repo.get_by_token(token=token)
        if invitation is None:
            return Err(code=ErrorCode.NOT_FOUND, message="Invitation not found")

        now = self._clock()
        expired = expire_if_overdue(
            invitation_repo=self._invitation_repo, invitation=invitation, now=now
        )
        if expired is not None:
            return expired

        if invitation.status == PENDING:
            if self._invitation_repo.mark_viewed(
                invitation_id=invitation.id, viewed_at=now
            ):
                invitation = replace(invitation, status=VIEWED, viewed_at=now)
                logger.info("invitation_viewed id=%s", invitation.id)
            else:
                invitation = self._invitation_repo.get_by_token(token=token) or invitation

        posting = self._job_posting_repo.get(job_posting_id=invitation.job_posting_id)
        if posting is None:
            return Err(code=ErrorCode.NOT_FOUND, message="Job posting not found")

        questions = self._job_posting_repo.get_question_set(job_posting_id=posting.id)
        responses = {
            r.key: r
            for r in self._invitation_repo.list_responses(invitation_id=invitation.id)
        }
        return Ok(
            ResolvedInvitation(
                invitation=invitation,
                job_posting=posting,
                questions=questions,
                responses=responses,
            )
        )
