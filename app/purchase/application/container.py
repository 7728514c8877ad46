from __future__ import annotations

from django.conf import settings
from job_posting.adapters.django_job_posting_repo import DjangoJobPostingRepository
from job_posting.application.container import build_publish_job_posting_usecase
from organization.adapters.django_capability_checker import DjangoCapabilityChecker
from purchase.adapters.django_purchase_repo import DjangoPurchaseRepository
from purchase.adapters.stripe_payment_provider import StripePaymentProvider
from purchase.application.usecases.confirm_payment import ConfirmPaymentUseCase
from purchase.application.usecases.get_purchase_status import GetPurchaseStatusUseCase
from purchase.application.usecases.handle_payment_webhook import (
    HandlePaymentWebhookUseCase,
)
from purchase.application.usecases.mark_payment_failed import MarkPaymentFailedUseCase
from purchase.application.usecases.purchase_job_posting import (
    PurchaseJobPostingUseCase,
)
from purchase.domain.products import load_products


def build_payment_provider() -> StripePaymentProvider:
    return StripePaymentProvider(
        secret_key=getattr(settings, "PAYMENT_PROVIDER_SECRET_KEY", ""),
        webhook_secret=getattr(settings, "PAYMENT_WEBHOOK_SECRET", ""),
        tolerance_seconds=int(getattr(settings, "PAYMENT_WEBHOOK_TOLERANCE_SECONDS", 300)),
    )


def build_purchase_job_posting_usecase() -> PurchaseJobPostingUseCase:
    return PurchaseJobPostingUseCase(
        job_posting_repo=DjangoJobPostingRepository(),
        purchase_repo=DjangoPurchaseRepository(),
        payment_provider=build_payment_provider(),
        capability_checker=DjangoCapabilityChecker(),
        products=load_products(getattr(settings, "PAYMENT_PRODUCTS", {})),
        success_url=getattr(settings, "PAYMENT_SUCCESS_URL", ""),
        cancel_url=getattr(settings, "PAYMENT_CANCEL_URL", ""),
    )


def build_get_purchase_status_usecase() -> GetPurchaseStatusUseCase:
    return GetPurchaseStatusUseCase(
        job_posting_repo=DjangoJobPostingRepository(),
        purchase_repo=DjangoPurchaseRepository(),
        capability_checker=DjangoCapabilityChecker(),
    )


def build_confirm_payment_usecase() -> ConfirmPaymentUseCase:
    return ConfirmPaymentUseCase(
        purchase_repo=DjangoPurchaseRepository(),
        validity_days=int(getattr(settings, "JOB_POSTING_VALIDITY_DAYS", 30)),
    )


def build_handle_payment_webhook_usecase() -> HandlePaymentWebhookUseCase:
    purchase_repo = DjangoPurchaseRepository()
    return HandlePaymentWebhookUseCase(
        payment_provider=build_payment_provider(),
        purchase_repo=purchase_repo,
        confirm_payment=build_confirm_payment_usecase(),
        mark_payment_failed=MarkPaymentFailedUseCase(purchase_repo=purchase_repo),
        publish_job_posting=build_publish_job_posting_usecase(),
        auto_publish=bool(
            getattr(settings, "JOB_POSTING_AUTO_PUBLISH_ON_SETTLEMENT", True)
        ),
    )
