from django.db import models


class PurchaseRecord(models.Model):
    """
    채용 공고 1건당 하나의 결제 기록 (job_posting unique).

    - 최초 구매 시도 시 PENDING 으로 생성
    - 결제 확정(settlement) 시 SUCCEEDED, paid_at / expires_at(= paid_at + 30일) 기록
    - 체크아웃 만료/비동기 결제 실패 시 FAILED (다음 구매 시도에서 PENDING 으로 재사용)
    """

    class PaymentStatus(models.TextChoices):
        PENDING = "PENDING", "Pending"
        SUCCEEDED = "SUCCEEDED", "Succeeded"
        FAILED = "FAILED", "Failed"

    class ProductType(models.TextChoices):
        JUNIOR = "JUNIOR", "Junior job posting"
        SENIOR = "SENIOR", "Senior job posting"

    job_posting = models.OneToOneField(
        "job_posting.JobPosting",
        on_delete=models.CASCADE,
        related_name="purchase",
    )
    payment_status = models.CharField(
        max_length=10,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
    )
    product_type = models.CharField(max_length=10, choices=ProductType.choices)
    amount = models.PositiveIntegerField(help_text="최소 통화 단위 (예: cents)")
    currency = models.CharField(max_length=3, default="aud")

    provider_price_id = models.CharField(max_length=255, blank=True, default="")
    provider_session_id = models.CharField(max_length=255, blank=True, default="")
    provider_customer_id = models.CharField(max_length=255, blank=True, default="")
    provider_payment_intent_id = models.CharField(
        max_length=255, blank=True, default=""
    )

    paid_at = models.DateTimeField(null=True, blank=True)
    expires_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "purchase_record"
        indexes = [
            models.Index(fields=["expires_at"], name="purchase_expires_at_idx"),
            models.Index(
                fields=["provider_session_id"], name="purchase_session_id_idx"
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"PurchaseRecord(job_posting={self.job_posting_id}, status={self.payment_status})"
