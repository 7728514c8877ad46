from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional

from common.application.result import Err, ErrorCode, Ok, Result
from django.utils import timezone
from invitation.application.expiry import expire_if_overdue
from invitation.domain.answers import ScreeningSubmission
from invitation.domain.invitation import (
    COMPLETED,
    PENDING,
    VIEWED,
    StoredResponse,
)
from invitation.ports.invitation_repo import InvitationRepositoryPort
from job_posting.domain.screening import ScreeningQuestionSet
from job_posting.ports.job_posting_repo import JobPostingRepositoryPort
from pydantic import ValidationError

logger = logging.getLogger(__name__)

_CHOICE_TYPES = ("single", "multiple")


@dataclass(frozen=True, slots=True)
class SubmissionResult:
    invitation_id: int
    status: str
    response_count: int
    responded_at: datetime


def _validation_details(exc: ValidationError) -> dict:
    return {
        "errors": [
            {
                "loc": [str(p) for p in err.get("loc", ())],
                "msg": err.get("msg", ""),
                "type": err.get("type", ""),
            }
            for err in exc.errors()
        ]
    }


class SubmitScreeningResponsesUseCase:
    """
    스크리닝 답변 제출 (비인증, 토큰 기준).

    1) 입력 검증 (answer_type 별 tagged union)
    2) 만료 확인 (만료 후 제출은 항상 EXPIRED)
    3) COMPLETED 재제출 정책 (allow_resubmission=False 면 STATE_CONFLICT)
    4) 각 답변이 공고의 질문을 가리키는지, 중복/답변 형식 불일치가 없는지 확인
    5) row lock 하에서 기존 답변 전체 삭제 -> 일괄 저장 -> COMPLETED
    """

    def __init__(
        self,
        *,
        invitation_repo: InvitationRepositoryPort,
        job_posting_repo: JobPostingRepositoryPort,
        allow_resubmission: bool = True,
        clock: Callable[[], datetime] = timezone.now,
    ):
        self._invitation_repo = invitation_repo
        self._job_posting_repo = job_posting_repo
        self._allow_resubmission = allow_resubmission
        self._clock = clock

    def execute(
        self, *, token: str, responses: Optional[list[Any]]
    ) -> Result[SubmissionResult]:
        if not responses:
            return Err(
                code=ErrorCode.VALIDATION_ERROR,
                message="At least one response is required",
            )
        try:
            submission = ScreeningSubmission.model_validate({"responses": responses})
        except ValidationError as e:
            return Err(
                code=ErrorCode.VALIDATION_ERROR,
                message="Invalid screening responses",
                details=_validation_details(e),
            )

        invitation = self._invitation_repo.get_by_token(token=token)
        if invitation is None:
            return Err(code=ErrorCode.NOT_FOUND, message="Invitation not found")

        now = self._clock()
        expired = expire_if_overdue(
            invitation_repo=self._invitation_repo,
            invitation=invitation,
            now=now,
            message="Invitation has expired",
            include_completed=True,
        )
        if expired is not None:
            return expired

        if invitation.is_completed and not self._allow_resubmission:
            return Err(
                code=ErrorCode.STATE_CONFLICT,
                message="Screening responses have already been submitted",
                details={"status": invitation.status},
            )

        questions = self._job_posting_repo.get_question_set(
            job_posting_id=invitation.job_posting_id
        )
        stored = self._to_stored_responses(submission, questions)
        if isinstance(stored, Err):
            return stored

        allowed = {PENDING, VIEWED}
        if self._allow_resubmission:
            allowed.add(COMPLETED)
        count = self._invitation_repo.replace_responses(
            invitation_id=invitation.id,
            responses=stored,
            responded_at=now,
            allowed_statuses=frozenset(allowed),
        )
        if count is None:
            logger.warning(
                "invitation_submit_lost_race id=%s status=%s",
                invitation.id,
                invitation.status,
            )
            return Err(
                code=ErrorCode.STATE_CONFLICT,
                message="Invitation status was changed by another request",
            )

        logger.info(
            "invitation_completed id=%s job_posting=%s responses=%s resubmission=%s",
            invitation.id,
            invitation.job_posting_id,
            count,
            invitation.is_completed,
        )
        return Ok(
            SubmissionResult(
                invitation_id=invitation.id,
                status=COMPLETED,
                response_count=count,
                responded_at=now,
            )
        )

    def _to_stored_responses(
        self, submission: ScreeningSubmission, questions: ScreeningQuestionSet
    ) -> list[StoredResponse] | Err:
        stored: list[StoredResponse] = []
        seen: set[str] = set()
        for item in submission.responses:
            key = f"{item.question_type}_{item.question_id}"
            if key in seen:
                return Err(
                    code=ErrorCode.VALIDATION_ERROR,
                    message="Duplicate response for the same question",
                    details={"question": key},
                )
            seen.add(key)

            question = questions.find(item.question_type, item.question_id)
            if question is None:
                return Err(
                    code=ErrorCode.VALIDATION_ERROR,
                    message="Response references an unknown screening question",
                    details={"question": key},
                )
            if item.answer_type != question.answer_type:
                return Err(
                    code=ErrorCode.VALIDATION_ERROR,
                    message="Answer type does not match the question",
                    details={"question": key, "expected": question.answer_type},
                )
            if question.answer_type in _CHOICE_TYPES and question.options:
                chosen = item.answer if isinstance(item.answer, list) else [item.answer]
                invalid = [c for c in chosen if c not in question.options]
                if invalid:
                    return Err(
                        code=ErrorCode.VALIDATION_ERROR,
                        message="Answer is not one of the question options",
                        details={"question": key, "invalid": invalid},
                    )

            stored.append(
                StoredResponse(
                    question_type=item.question_type,
                    question_id=item.question_id,
                    question_text=question.question_text,
                    answer_type=item.answer_type,
                    answer=item.answer,
                    extra=dict(item.extra),
                )
            )
        return stored
