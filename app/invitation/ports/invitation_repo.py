from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Protocol

from invitation.domain.invitation import (
    CandidateRef,
    InvitationDomain,
    InvitationReissuePatch,
    InvitationSummary,
    StoredResponse,
)


class InvitationRepositoryPort(Protocol):
    def get_by_token(self, *, token: str) -> Optional[InvitationDomain]: ...

    def find_candidates(self, *, candidate_ids: Iterable[int]) -> list[CandidateRef]: ...

    def upsert(
        self,
        *,
        job_posting_id: int,
        candidate: CandidateRef,
        patch: InvitationReissuePatch,
    ) -> InvitationDomain:
        """(job_posting, candidate) 기준으로 생성하거나 patch 로 재발송 상태를 덮어씁니다."""
        ...

    def mark_viewed(self, *, invitation_id: int, viewed_at: datetime) -> bool:
        """PENDING 인 경우에만 VIEWED 로 변경합니다."""
        ...

    def mark_expired(self, *, invitation_id: int) -> bool:
        """COMPLETED/EXPIRED 가 아닌 경우에만 EXPIRED 로 변경합니다."""
        ...

    def list_responses(self, *, invitation_id: int) -> list[StoredResponse]: ...

    def replace_responses(
        self,
        *,
        invitation_id: int,
        responses: list[StoredResponse],
        responded_at: datetime,
        allowed_statuses: frozenset[str],
    ) -> Optional[int]:
        """
        row lock 을 잡은 상태에서 답변 전체를 교체하고 COMPLETED 로 변경합니다.
        잠근 시점의 상태가 allowed_statuses 에 없으면 아무것도 바꾸지 않고 None.
        """
        ...

    def list_for_job_posting(self, *, job_posting_id: int) -> list[InvitationSummary]: ...
