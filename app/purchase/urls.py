from django.urls import path
from purchase.views import JobPostingPurchaseView, PaymentWebhookView

urlpatterns = [
    path(
        "job-postings/<int:job_posting_id>/purchase/",
        JobPostingPurchaseView.as_view(),
        name="job_posting_purchase",
    ),
    path("payments/webhook/", PaymentWebhookView.as_view(), name="payment_webhook"),
]
