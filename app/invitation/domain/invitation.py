from __future__ import annotations

import secrets
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, Optional

PENDING = "PENDING"
VIEWED = "VIEWED"
COMPLETED = "COMPLETED"
EXPIRED = "EXPIRED"


def generate_invitation_token() -> str:
    return secrets.token_urlsafe(32)


@dataclass(frozen=True, slots=True)
class CandidateRef:
    id: int
    email: str = ""
    name: str = ""


@dataclass(frozen=True, slots=True)
class InvitationDomain:
    id: int
    token: str
    job_posting_id: int
    candidate_id: int
    candidate_email: str
    candidate_name: str
    message: str
    status: str
    sent_at: datetime
    expires_at: datetime
    viewed_at: Optional[datetime] = None
    responded_at: Optional[datetime] = None

    def is_expired_at(self, now: datetime) -> bool:
        return now > self.expires_at

    @property
    def is_completed(self) -> bool:
        return self.status == COMPLETED


@dataclass(frozen=True, slots=True)
class InvitationReissuePatch:
    """
    발송/재발송 시 초대 row 에 덮어쓸 값.

    status 는 PENDING, viewed_at / responded_at 은 None 으로 초기화됩니다.
    기존 답변은 남겨 두며 다음 제출에서 전체 교체됩니다.
    """

    token: str
    message: str
    sent_at: datetime
    expires_at: datetime


@dataclass(frozen=True, slots=True)
class StoredResponse:
    question_type: str
    question_id: str
    question_text: str
    answer_type: str
    answer: Any
    extra: dict = field(default_factory=dict)

    @property
    def key(self) -> str:
        return f"{self.question_type}_{self.question_id}"


@dataclass(frozen=True, slots=True)
class InvitationSummary:
    id: int
    candidate_id: int
    candidate_email: str
    candidate_name: str
    status: str
    message: str
    sent_at: datetime
    expires_at: datetime
    viewed_at: Optional[datetime] = None
    responded_at: Optional[datetime] = None
    response_count: int = 0
    is_expired: bool = False


@dataclass(frozen=True, slots=True)
class InvitationStats:
    total: int
    pending: int
    viewed: int
    completed: int
    expired: int

    @classmethod
    def collect(
        cls, summaries: Iterable[InvitationSummary], *, now: datetime
    ) -> "InvitationStats":
        # expired 는 저장된 상태가 아니라 만료 시각 기준 (COMPLETED 제외)
        items = list(summaries)
        return cls(
            total=len(items),
            pending=sum(1 for s in items if s.status == PENDING),
            viewed=sum(1 for s in items if s.status == VIEWED),
            completed=sum(1 for s in items if s.status == COMPLETED),
            expired=sum(
                1 for s in items if now > s.expires_at and s.status != COMPLETED
            ),
        )
