from __future__ import annotations

from django.conf import settings
from invitation.adapters.django_invitation_repo import DjangoInvitationRepository
from invitation.application.usecases.issue_invitation import (
    IssueInvitationsUseCase,
    IssueInvitationUseCase,
)
from invitation.application.usecases.list_invitations import ListInvitationsUseCase
from invitation.application.usecases.resolve_invitation import ResolveInvitationUseCase
from invitation.application.usecases.submit_screening_responses import (
    SubmitScreeningResponsesUseCase,
)
from job_posting.adapters.django_job_posting_repo import DjangoJobPostingRepository
from organization.adapters.django_capability_checker import DjangoCapabilityChecker


def build_issue_invitations_usecase() -> IssueInvitationsUseCase:
    invitation_repo = DjangoInvitationRepository()
    return IssueInvitationsUseCase(
        job_posting_repo=DjangoJobPostingRepository(),
        invitation_repo=invitation_repo,
        capability_checker=DjangoCapabilityChecker(),
        issue_invitation=IssueInvitationUseCase(invitation_repo=invitation_repo),
    )


def build_list_invitations_usecase() -> ListInvitationsUseCase:
    return ListInvitationsUseCase(
        job_posting_repo=DjangoJobPostingRepository(),
        invitation_repo=DjangoInvitationRepository(),
        capability_checker=DjangoCapabilityChecker(),
    )


def build_resolve_invitation_usecase() -> ResolveInvitationUseCase:
    return ResolveInvitationUseCase(
        invitation_repo=DjangoInvitationRepository(),
        job_posting_repo=DjangoJobPostingRepository(),
    )


def build_submit_screening_responses_usecase() -> SubmitScreeningResponsesUseCase:
    return SubmitScreeningResponsesUseCase(
        invitation_repo=DjangoInvitationRepository(),
        job_posting_repo=DjangoJobPostingRepository(),
        allow_resubmission=bool(getattr(settings, "INVITATION_ALLOW_RESUBMISSION", True)),
    )
