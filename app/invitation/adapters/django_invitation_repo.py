from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Count
from django.utils import timezone
from invitation.domain.invitation import (
    COMPLETED,
    EXPIRED,
    PENDING,
    VIEWED,
    CandidateRef,
    InvitationDomain,
    InvitationReissuePatch,
    InvitationSummary,
    StoredResponse,
)
from invitation.models import CandidateInvitation, ScreeningResponse
from invitation.ports.invitation_repo import InvitationRepositoryPort


def _to_domain(obj: CandidateInvitation) -> InvitationDomain:
    return InvitationDomain(
        id=int(obj.id),
        token=obj.token,
        job_posting_id=int(obj.job_posting_id),
        candidate_id=int(obj.candidate_id),
        candidate_email=obj.candidate_email,
        candidate_name=obj.candidate_name,
        message=obj.message,
        status=obj.status,
        sent_at=obj.sent_at,
        expires_at=obj.expires_at,
        viewed_at=obj.viewed_at,
        responded_at=obj.responded_at,
    )


class DjangoInvitationRepository(InvitationRepositoryPort):
    def get_by_token(self, *, token: str) -> Optional[InvitationDomain]:
        if not token:
            return None
        obj = CandidateInvitation.objects.filter(token=token).first()
        return _to_domain(obj) if obj is not None else None

    def find_candidates(self, *, candidate_ids: Iterable[int]) -> list[CandidateRef]:
        User = get_user_model()
        users = User.objects.filter(id__in=list(candidate_ids)).order_by("id")
        return [
            CandidateRef(
                id=int(u.id),
                email=u.email or "",
                name=u.get_full_name() or u.get_username(),
            )
            for u in users
        ]

    def upsert(
        self,
        *,
        job_posting_id: int,
        candidate: CandidateRef,
        patch: InvitationReissuePatch,
    ) -> InvitationDomain:
        obj, _ = CandidateInvitation.objects.update_or_create(
            job_posting_id=job_posting_id,
            candidate_id=candidate.id,
            defaults={
                "token": patch.token,
                "candidate_email": candidate.email,
                "candidate_name": candidate.name,
                "message": patch.message,
                "status": PENDING,
                "sent_at": patch.sent_at,
                "expires_at": patch.expires_at,
                "viewed_at": None,
                "responded_at": None,
            },
        )
        return _to_domain(obj)

    def mark_viewed(self, *, invitation_id: int, viewed_at: datetime) -> bool:
        updated = CandidateInvitation.objects.filter(
            pk=invitation_id, status=PENDING
        ).update(status=VIEWED, viewed_at=viewed_at, updated_at=timezone.now())
        return updated == 1

    def mark_expired(self, *, invitation_id: int) -> bool:
        updated = CandidateInvitation.objects.filter(
            pk=invitation_id, status__in=[PENDING, VIEWED]
        ).update(status=EXPIRED, updated_at=timezone.now())
        return updated == 1

    def list_responses(self, *, invitation_id: int) -> list[StoredResponse]:
        return [
            StoredResponse(
                question_type=r.question_type,
                question_id=r.question_id,
                question_text=r.question_text,
                answer_type=r.answer_type,
                answer=r.answer,
                extra=r.extra or {},
            )
            for r in ScreeningResponse.objects.filter(invitation_id=invitation_id)
        ]

    def replace_responses(
        self,
        *,
        invitation_id: int,
        responses: list[StoredResponse],
        responded_at: datetime,
        allowed_statuses: frozenset[str],
    ) -> Optional[int]:
        with transaction.atomic():
            obj = (
                CandidateInvitation.objects.select_for_update()
                .filter(pk=invitation_id)
                .first()
            )
            if obj is None or obj.status not in allowed_statuses:
                return None

            ScreeningResponse.objects.filter(invitation_id=invitation_id).delete()
            created = ScreeningResponse.objects.bulk_create(
                [
                    ScreeningResponse(
                        invitation_id=invitation_id,
                        question_type=r.question_type,
                        question_id=r.question_id,
                        question_text=r.question_text,
                        answer_type=r.answer_type,
                        answer=r.answer,
                        extra=r.extra,
                    )
                    for r in responses
                ]
            )

            obj.status = COMPLETED
            obj.responded_at = responded_at
            obj.save(update_fields=["status", "responded_at", "updated_at"])
            return len(created)

    def list_for_job_posting(self, *, job_posting_id: int) -> list[InvitationSummary]:
        qs = (
            CandidateInvitation.objects.filter(job_posting_id=job_posting_id)
            .annotate(response_count=Count("responses"))
            .order_by("-sent_at", "-id")
        )
        return [
            InvitationSummary(
                id=int(obj.id),
                candidate_id=int(obj.candidate_id),
                candidate_email=obj.candidate_email,
                candidate_name=obj.candidate_name,
                status=obj.status,
                message=obj.message,
                sent_at=obj.sent_at,
                expires_at=obj.expires_at,
                viewed_at=obj.viewed_at,
                responded_at=obj.responded_at,
                response_count=int(obj.response_count),
            )
            for obj in qs
        ]
