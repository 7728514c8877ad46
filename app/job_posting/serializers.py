from rest_framework import serializers


class JobPostingTransitionSerializer(serializers.Serializer):
    id = serializers.IntegerField(source="job_posting_id")
    status = serializers.CharField()
    previous_status = serializers.CharField()


class JobPostingExpirySerializer(serializers.Serializer):
    job_posting_id = serializers.IntegerField()
    status = serializers.CharField()
    is_expired = serializers.BooleanField()
    days_remaining = serializers.IntegerField(allow_null=True)
    has_expiry = serializers.BooleanField()
    payment_status = serializers.CharField(allow_null=True)
    paid_at = serializers.DateTimeField(allow_null=True)
    expires_at = serializers.DateTimeField(allow_null=True)


class SweepRequestSerializer(serializers.Serializer):
    limit = serializers.IntegerField(required=False, min_value=1)


class SweepResultSerializer(serializers.Serializer):
    closed_count = serializers.IntegerField()
    closed_ids = serializers.ListField(child=serializers.IntegerField())
    scanned_count = serializers.IntegerField()
