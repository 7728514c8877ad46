from rest_framework import serializers


class TaskSubmitRequestSerializer(serializers.Serializer):
    payload = serializers.DictField(required=False)
    payloads = serializers.ListField(child=serializers.DictField(), required=False)

    def validate(self, attrs):
        if ("payload" in attrs) == ("payloads" in attrs):
            raise serializers.ValidationError(
                "Provide exactly one of 'payload' or 'payloads'."
            )
        return attrs


class TaskHandleSerializer(serializers.Serializer):
    task_id = serializers.CharField()
    query_url = serializers.CharField()


class BatchHandleSerializer(serializers.Serializer):
    batch_task_id = serializers.CharField()
    total_count = serializers.IntegerField()
    query_url = serializers.CharField()


class TaskStatusSerializer(serializers.Serializer):
    task_id = serializers.CharField()
    status = serializers.CharField()
    ready = serializers.BooleanField()
    result = serializers.JSONField(allow_null=True)
    error = serializers.CharField(allow_null=True)


class BatchStatusSerializer(serializers.Serializer):
    batch_task_id = serializers.CharField()
    total = serializers.IntegerField()
    completed = serializers.IntegerField()
    failed = serializers.IntegerField()
    ready = serializers.BooleanField()
    results = TaskStatusSerializer(many=True)


class CancelResultSerializer(serializers.Serializer):
    task_id = serializers.CharField()
    status = serializers.CharField()
