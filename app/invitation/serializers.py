from django.conf import settings
from rest_framework import serializers


class IssueInvitationsRequestSerializer(serializers.Serializer):
    candidate_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1), allow_empty=False
    )
    message = serializers.CharField(required=False, allow_blank=True, default="")
    validity_days = serializers.IntegerField(required=False, min_value=1)


class IssuedInvitationSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    token = serializers.CharField()
    candidate_id = serializers.IntegerField()
    candidate_email = serializers.CharField()
    candidate_name = serializers.CharField()
    status = serializers.CharField()
    expires_at = serializers.DateTimeField()
    invite_link = serializers.SerializerMethodField()

    def get_invite_link(self, obj) -> str:
        base = getattr(settings, "INVITATION_LINK_BASE_URL", "") or ""
        return f"{base.rstrip('/')}/invite/{obj.token}"


class QuestionCountSerializer(serializers.Serializer):
    system = serializers.IntegerField(source="system_question_count")
    custom = serializers.IntegerField(source="custom_question_count")


class IssuedInvitationsSerializer(serializers.Serializer):
    job_posting_id = serializers.IntegerField()
    invitations = IssuedInvitationSerializer(many=True)
    total_sent = serializers.IntegerField()
    skipped_candidate_ids = serializers.ListField(child=serializers.IntegerField())
    questions_count = QuestionCountSerializer(source="*")


class InvitationSummarySerializer(serializers.Serializer):
    id = serializers.IntegerField()
    candidate_id = serializers.IntegerField()
    candidate_email = serializers.CharField()
    candidate_name = serializers.CharField()
    status = serializers.CharField()
    message = serializers.CharField()
    sent_at = serializers.DateTimeField()
    viewed_at = serializers.DateTimeField(allow_null=True)
    responded_at = serializers.DateTimeField(allow_null=True)
    expires_at = serializers.DateTimeField()
    response_count = serializers.IntegerField()
    is_expired = serializers.BooleanField()


class InvitationStatsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    pending = serializers.IntegerField()
    viewed = serializers.IntegerField()
    completed = serializers.IntegerField()
    expired = serializers.IntegerField()


class InvitationListSerializer(serializers.Serializer):
    job_posting_id = serializers.IntegerField()
    invitations = InvitationSummarySerializer(many=True)
    stats = InvitationStatsSerializer()


class PublicInvitationSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    status = serializers.CharField()
    candidate_name = serializers.CharField()
    candidate_email = serializers.CharField()
    message = serializers.CharField()
    expires_at = serializers.DateTimeField()
    is_completed = serializers.BooleanField()


class PublicJobPostingSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    job_title = serializers.CharField()
    company_name = serializers.CharField()
    country_region = serializers.CharField()
    work_type = serializers.CharField()


class ScreeningQuestionSerializer(serializers.Serializer):
    # 기대 답변(expected_answers)은 후보자에게 노출하지 않음
    question_type = serializers.CharField()
    question_id = serializers.CharField()
    question_text = serializers.CharField()
    answer_type = serializers.CharField()
    options = serializers.ListField(child=serializers.CharField())
    requirement = serializers.CharField()
    must_answer = serializers.BooleanField()


class ScreeningQuestionSetSerializer(serializers.Serializer):
    system = ScreeningQuestionSerializer(many=True)
    custom = ScreeningQuestionSerializer(many=True)
    total = serializers.IntegerField()


class StoredResponseSerializer(serializers.Serializer):
    question_type = serializers.CharField()
    question_id = serializers.CharField()
    answer_type = serializers.CharField()
    answer = serializers.JSONField()
    extra = serializers.DictField()


class ResolvedInvitationSerializer(serializers.Serializer):
    invitation = PublicInvitationSerializer()
    job_posting = PublicJobPostingSerializer()
    questions = ScreeningQuestionSetSerializer()
    responses = serializers.SerializerMethodField()

    def get_responses(self, obj) -> dict:
        return {
            key: StoredResponseSerializer(resp).data
            for key, resp in obj.responses.items()
        }


class ScreeningSubmissionRequestSerializer(serializers.Serializer):
    # 답변 형식 검증은 유스케이스(pydantic)에서 수행
    responses = serializers.ListField(child=serializers.DictField(), allow_empty=True)


class SubmissionResultSerializer(serializers.Serializer):
    invitation_id = serializers.IntegerField()
    status = serializers.CharField()
    response_count = serializers.IntegerField()
    responded_at = serializers.DateTimeField()
