from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from job_posting.domain.job_posting import JobPostingDomain
from job_posting.domain.lifecycle import Transition
from job_posting.domain.screening import ScreeningQuestionSet


class JobPostingRepositoryPort(Protocol):
    def get(self, *, job_posting_id: int) -> Optional[JobPostingDomain]: ...

    def apply_transition(self, *, job_posting_id: int, transition: Transition) -> bool:
        """
        status IN transition.sources 인 경우에만 target 으로 변경합니다.
        변경된 row 가 없으면 False (경합에서 밀림 또는 허용되지 않는 상태).
        """
        ...

    def find_expired_published_ids(self, *, now: datetime, limit: int) -> list[int]: ...

    def get_question_set(self, *, job_posting_id: int) -> ScreeningQuestionSet: ...
