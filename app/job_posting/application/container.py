from __future__ import annotations

from django.conf import settings
from job_posting.adapters.django_job_posting_repo import DjangoJobPostingRepository
from job_posting.application.usecases.get_job_posting_expiry import (
    GetJobPostingExpiryUseCase,
)
from job_posting.application.usecases.lifecycle_transitions import (
    ArchiveJobPostingUseCase,
    PublishJobPostingUseCase,
    RepublishJobPostingUseCase,
)
from job_posting.application.usecases.sweep_expired_job_postings import (
    SweepExpiredJobPostingsUseCase,
)
from organization.adapters.django_capability_checker import DjangoCapabilityChecker
from purchase.adapters.django_purchase_repo import DjangoPurchaseRepository


def build_publish_job_posting_usecase() -> PublishJobPostingUseCase:
    return PublishJobPostingUseCase(
        job_posting_repo=DjangoJobPostingRepository(),
        purchase_repo=DjangoPurchaseRepository(),
        capability_checker=DjangoCapabilityChecker(),
    )


def build_archive_job_posting_usecase() -> ArchiveJobPostingUseCase:
    return ArchiveJobPostingUseCase(
        job_posting_repo=DjangoJobPostingRepository(),
        purchase_repo=DjangoPurchaseRepository(),
        capability_checker=DjangoCapabilityChecker(),
    )


def build_republish_job_posting_usecase() -> RepublishJobPostingUseCase:
    return RepublishJobPostingUseCase(
        job_posting_repo=DjangoJobPostingRepository(),
        purchase_repo=DjangoPurchaseRepository(),
        capability_checker=DjangoCapabilityChecker(),
    )


def build_get_job_posting_expiry_usecase() -> GetJobPostingExpiryUseCase:
    return GetJobPostingExpiryUseCase(
        job_posting_repo=DjangoJobPostingRepository(),
        purchase_repo=DjangoPurchaseRepository(),
        capability_checker=DjangoCapabilityChecker(),
    )


def build_sweep_expired_job_postings_usecase() -> SweepExpiredJobPostingsUseCase:
    return SweepExpiredJobPostingsUseCase(
        job_posting_repo=DjangoJobPostingRepository(),
        default_limit=int(getattr(settings, "JOB_POSTING_SWEEP_LIMIT", 1000)),
    )
