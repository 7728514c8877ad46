"""
유스케이스 단위 테스트용 in-memory 포트 구현
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional

from job_posting.domain.job_posting import JobPostingDomain
from job_posting.domain.lifecycle import PUBLISHED, Transition
from job_posting.domain.screening import ScreeningQuestionSet
from organization.ports.capability_checker import CapabilityDecision
from purchase.domain.purchase import (
    PENDING,
    SUCCEEDED,
    PurchaseRecordDomain,
)

T0 = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)


class FixedClock:
    def __init__(self, now: datetime = T0):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class FakeJobPostingRepository:
    def __init__(self, postings: list[JobPostingDomain] | None = None):
        self.postings = {p.id: p for p in postings or []}
        self.expires_at: dict[int, datetime] = {}
        self.lose_next_race = False

    def get(self, *, job_posting_id: int) -> Optional[JobPostingDomain]:
        return self.postings.get(job_posting_id)

    def apply_transition(self, *, job_posting_id: int, transition: Transition) -> bool:
        if self.lose_next_race:
            self.lose_next_race = False
            return False
        posting = self.postings.get(job_posting_id)
        if posting is None or posting.status not in transition.sources:
            return False
        self.postings[job_posting_id] = replace(posting, status=transition.target)
        return True

    def find_expired_published_ids(self, *, now: datetime, limit: int) -> list[int]:
        ids = [
            pid
            for pid, posting in sorted(self.postings.items())
            if posting.status == PUBLISHED
            and pid in self.expires_at
            and self.expires_at[pid] < now
        ]
        return ids[:limit]

    def get_question_set(self, *, job_posting_id: int) -> ScreeningQuestionSet:
        return ScreeningQuestionSet(system=[], custom=[])


class FakePurchaseRepository:
    def __init__(self, records: list[PurchaseRecordDomain] | None = None):
        self.records = {r.job_posting_id: r for r in records or []}

    def get_by_job_posting(self, *, job_posting_id: int):
        return self.records.get(job_posting_id)

    def get_or_create_pending(
        self, *, job_posting_id, product_type, amount, currency, price_id
    ):
        record = self.records.get(job_posting_id)
        if record is None:
            record = PurchaseRecordDomain(
                id=len(self.records) + 1,
                job_posting_id=job_posting_id,
                payment_status=PENDING,
                product_type=product_type,
                amount=amount,
                currency=currency,
            )
            self.records[job_posting_id] = record
        return record

    def apply_session_patch(self, *, purchase_id, patch):
        for jp_id, record in self.records.items():
            if record.id == purchase_id:
                updated = replace(
                    record,
                    provider_session_id=patch.provider_session_id,
                    provider_customer_id=(
                        patch.provider_customer_id or record.provider_customer_id
                    ),
                )
                self.records[jp_id] = updated
                return updated
        raise KeyError(purchase_id)

    def apply_settlement(self, *, job_posting_id, patch) -> bool:
        record = self.records.get(job_posting_id)
        if record is None or record.payment_status == SUCCEEDED:
            return False
        self.records[job_posting_id] = replace(
            record,
            payment_status=SUCCEEDED,
            paid_at=patch.paid_at,
            expires_at=patch.expires_at,
        )
        return True

    def mark_failed(self, *, job_posting_id) -> bool:
        record = self.records.get(job_posting_id)
        if record is None or record.payment_status != PENDING:
            return False
        self.records[job_posting_id] = replace(record, payment_status="FAILED")
        return True

    def find_job_posting_id_by_session(self, *, session_id):
        for jp_id, record in self.records.items():
            if session_id and record.provider_session_id == session_id:
                return jp_id
        return None


class FakeCapabilityChecker:
    def __init__(self, allowed: bool = True, reason: str | None = None):
        self.allowed = allowed
        self.reason = reason
        self.calls: list[tuple[str, int, int]] = []

    def can_modify(self, *, actor_id: int, owner_user_id: int) -> CapabilityDecision:
        self.calls.append(("modify", actor_id, owner_user_id))
        if actor_id == owner_user_id:
            return CapabilityDecision(allowed=True)
        return CapabilityDecision(allowed=self.allowed, reason=self.reason)

    def can_view(self, *, actor_id: int, owner_user_id: int) -> CapabilityDecision:
        self.calls.append(("view", actor_id, owner_user_id))
        if actor_id == owner_user_id:
            return CapabilityDecision(allowed=True)
        return CapabilityDecision(allowed=self.allowed, reason=self.reason)


def make_posting(id: int = 1, status: str = "DRAFT", owner_user_id: int = 10):
    return JobPostingDomain(
        id=id,
        owner_user_id=owner_user_id,
        status=status,
        job_title="Backend Engineer",
        company_name="Acme",
        experience_level="JUNIOR",
    )


def make_purchase(
    job_posting_id: int = 1,
    payment_status: str = SUCCEEDED,
    paid_at: datetime | None = None,
    expires_at: datetime | None = None,
):
    return PurchaseRecordDomain(
        id=job_posting_id,
        job_posting_id=job_posting_id,
        payment_status=payment_status,
        product_type="JUNIOR",
        amount=3000,
        currency="aud",
        paid_at=paid_at,
        expires_at=expires_at,
    )
