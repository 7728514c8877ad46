from django.contrib import admin
from purchase.models import PurchaseRecord


@admin.register(PurchaseRecord)
class PurchaseRecordAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "job_posting",
        "product_type",
        "payment_status",
        "paid_at",
        "expires_at",
    )
    list_filter = ("payment_status", "product_type")
    search_fields = ("provider_session_id", "provider_payment_intent_id")
    readonly_fields = ("payment_status", "paid_at", "expires_at")
