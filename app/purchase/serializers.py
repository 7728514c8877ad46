from rest_framework import serializers


class PurchaseRequestSerializer(serializers.Serializer):
    success_url = serializers.URLField(required=False)
    cancel_url = serializers.URLField(required=False)


class PaymentSessionSerializer(serializers.Serializer):
    purchase_id = serializers.IntegerField()
    session_id = serializers.CharField()
    session_url = serializers.CharField()
    amount = serializers.IntegerField()
    currency = serializers.CharField()
    product_type = serializers.CharField()
    status = serializers.CharField()


class PurchaseStatusSerializer(serializers.Serializer):
    purchase_id = serializers.IntegerField(source="id")
    job_posting_id = serializers.IntegerField()
    product_type = serializers.CharField()
    amount = serializers.IntegerField()
    currency = serializers.CharField()
    payment_status = serializers.CharField()
    paid_at = serializers.DateTimeField(allow_null=True)
    expires_at = serializers.DateTimeField(allow_null=True)
    created_at = serializers.DateTimeField(allow_null=True)
