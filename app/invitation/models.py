from django.conf import settings
from django.db import models
from invitation.domain.invitation import generate_invitation_token


class CandidateInvitation(models.Model):
    """
    공고별 후보자 스크리닝 초대.

    토큰이 비인증 API 의 유일한 식별자입니다. (job_posting, candidate) 당 1건이며
    재발송 시 토큰을 교체하고 상태/시각을 초기화합니다.
    """

    class Status(models.TextChoices):
        PENDING = "PENDING", "Pending"
        VIEWED = "VIEWED", "Viewed"
        COMPLETED = "COMPLETED", "Completed"
        EXPIRED = "EXPIRED", "Expired"

    token = models.CharField(
        max_length=64, unique=True, default=generate_invitation_token
    )
    job_posting = models.ForeignKey(
        "job_posting.JobPosting",
        on_delete=models.CASCADE,
        related_name="invitations",
    )
    candidate = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="screening_invitations",
    )
    # 발송 시점 스냅샷
    candidate_email = models.EmailField(blank=True, default="")
    candidate_name = models.CharField(max_length=255, blank=True, default="")
    message = models.TextField(blank=True, default="")
    status = models.CharField(
        max_length=10, choices=Status.choices, default=Status.PENDING
    )
    sent_at = models.DateTimeField()
    viewed_at = models.DateTimeField(null=True, blank=True)
    responded_at = models.DateTimeField(null=True, blank=True)
    expires_at = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "candidate_invitation"
        constraints = [
            models.UniqueConstraint(
                fields=["job_posting", "candidate"],
                name="uniq_invitation_job_posting_candidate",
            )
        ]
        indexes = [
            models.Index(
                fields=["job_posting", "status"],
                name="invitation_posting_status_idx",
            ),
        ]

    def __str__(self):
        return f"Invitation {self.id} ({self.candidate_email}, {self.status})"


class ScreeningResponse(models.Model):
    """후보자의 스크리닝 질문 답변. 제출은 항상 전체 교체입니다."""

    invitation = models.ForeignKey(
        CandidateInvitation,
        on_delete=models.CASCADE,
        related_name="responses",
    )
    question_type = models.CharField(max_length=10)
    question_id = models.CharField(max_length=100)
    question_text = models.TextField()
    answer_type = models.CharField(max_length=20)
    answer = models.JSONField()
    extra = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "screening_response"
        constraints = [
            models.UniqueConstraint(
                fields=["invitation", "question_type", "question_id"],
                name="uniq_screening_response_question",
            )
        ]
        ordering = ["id"]

    def __str__(self):
        return f"{self.question_type}_{self.question_id}"
