from __future__ import annotations

from datetime import datetime
from typing import Optional

from django.utils import timezone
from job_posting.domain.job_posting import JobPostingDomain
from job_posting.domain.lifecycle import PUBLISHED, Transition
from job_posting.domain.screening import (
    QUESTION_TYPE_CUSTOM,
    QUESTION_TYPE_SYSTEM,
    ScreeningQuestion,
    ScreeningQuestionSet,
    find_system_question,
)
from job_posting.models import CustomScreeningQuestion, JobPosting, SystemScreeningAnswer
from job_posting.ports.job_posting_repo import JobPostingRepositoryPort


def _to_domain(obj: JobPosting) -> JobPostingDomain:
    return JobPostingDomain(
        id=int(obj.id),
        owner_user_id=int(obj.owner_id),
        status=obj.status,
        job_title=obj.job_title,
        company_name=obj.company_name,
        experience_level=obj.experience_level,
        country_region=obj.country_region,
        work_type=obj.work_type,
    )


class DjangoJobPostingRepository(JobPostingRepositoryPort):
    def get(self, *, job_posting_id: int) -> Optional[JobPostingDomain]:
        obj = JobPosting.objects.filter(pk=job_posting_id).first()
        return _to_domain(obj) if obj is not None else None

    def apply_transition(self, *, job_posting_id: int, transition: Transition) -> bool:
        updated = JobPosting.objects.filter(
            pk=job_posting_id, status__in=list(transition.sources)
        ).update(status=transition.target, updated_at=timezone.now())
        return updated == 1

    def find_expired_published_ids(self, *, now: datetime, limit: int) -> list[int]:
        ids = (
            JobPosting.objects.filter(
                status=PUBLISHED,
                purchase__expires_at__isnull=False,
                purchase__expires_at__lt=now,
            )
            .order_by("purchase__expires_at", "id")
            .values_list("id", flat=True)[:limit]
        )
        return [int(i) for i in ids]

    def get_question_set(self, *, job_posting_id: int) -> ScreeningQuestionSet:
        system: list[ScreeningQuestion] = []
        for answer in SystemScreeningAnswer.objects.filter(
            job_posting_id=job_posting_id
        ).order_by("id"):
            definition = find_system_question(answer.question_id)
            system.append(
                ScreeningQuestion(
                    question_type=QUESTION_TYPE_SYSTEM,
                    question_id=answer.question_id,
                    question_text=(
                        definition.question if definition else answer.question_id
                    ),
                    answer_type=definition.answer_type if definition else "multiple",
                    options=list(definition.options) if definition else [],
                    requirement=answer.requirement,
                    expected_answers=list(answer.selected_answers or []),
                )
            )

        custom = [
            ScreeningQuestion(
                question_type=QUESTION_TYPE_CUSTOM,
                question_id=str(q.id),
                question_text=q.question_text,
                answer_type=q.answer_type,
                options=list(q.options or []),
                requirement=q.requirement,
                must_answer=q.must_answer,
            )
            for q in CustomScreeningQuestion.objects.filter(
                job_posting_id=job_posting_id
            )
        ]
        return ScreeningQuestionSet(system=system, custom=custom)
