from django.conf import settings
from django.db import models


class JobPosting(models.Model):
    """
    고용주가 작성한 채용 공고.

    status 는 lifecycle 유스케이스(publish/archive/republish/sweep)를 통해서만 변경됩니다.
    생성 시 DRAFT 이며, 이 서비스에서는 삭제하지 않습니다.
    """

    class Status(models.TextChoices):
        DRAFT = "DRAFT", "Draft"
        PUBLISHED = "PUBLISHED", "Published"
        CLOSED = "CLOSED", "Closed"
        ARCHIVED = "ARCHIVED", "Archived"

    class ExperienceLevel(models.TextChoices):
        INTERN = "INTERN", "Intern"
        JUNIOR = "JUNIOR", "Junior"
        MID_LEVEL = "MID_LEVEL", "Mid-level"
        SENIOR = "SENIOR", "Senior"
        LEAD = "LEAD", "Lead"
        PRINCIPAL = "PRINCIPAL", "Principal"

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="job_postings",
    )
    status = models.CharField(
        max_length=10, choices=Status.choices, default=Status.DRAFT
    )

    job_title = models.CharField(max_length=255)
    company_name = models.CharField(max_length=255)
    job_description = models.TextField(blank=True, default="")
    job_summary = models.TextField(blank=True, default="")
    experience_level = models.CharField(
        max_length=20,
        choices=ExperienceLevel.choices,
        default=ExperienceLevel.JUNIOR,
    )
    country_region = models.CharField(max_length=100, blank=True, default="")
    work_type = models.CharField(max_length=50, blank=True, default="")
    application_deadline = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "job_posting"
        indexes = [
            models.Index(fields=["status"], name="job_posting_status_idx"),
            models.Index(fields=["owner", "status"], name="job_posting_owner_status_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.company_name} - {self.job_title} ({self.status})"


class AnswerRequirement(models.TextChoices):
    MUST_HAVE = "must-have", "Must have"
    PREFERRED = "preferred", "Preferred"
    ACCEPT_ANY = "accept-any", "Accept any"


class AnswerType(models.TextChoices):
    SINGLE = "single", "Single choice"
    MULTIPLE = "multiple", "Multiple choice"
    YES_NO = "yes-no", "Yes / No"
    SHORT_TEXT = "short-text", "Short text"


class SystemScreeningAnswer(models.Model):
    """
    공고에 연결된 시스템 스크리닝 질문(카탈로그의 question_id)과 기대 답변.
    """

    job_posting = models.ForeignKey(
        JobPosting, on_delete=models.CASCADE, related_name="system_screening_answers"
    )
    question_id = models.CharField(max_length=64)
    requirement = models.CharField(
        max_length=20,
        choices=AnswerRequirement.choices,
        default=AnswerRequirement.ACCEPT_ANY,
    )
    selected_answers = models.JSONField(default=list, blank=True)

    class Meta:
        db_table = "job_posting_system_screening_answer"
        constraints = [
            models.UniqueConstraint(
                fields=["job_posting", "question_id"],
                name="uniq_system_answer_posting_question",
            ),
        ]


class CustomScreeningQuestion(models.Model):
    """
    고용주가 직접 작성한 스크리닝 질문.
    """

    job_posting = models.ForeignKey(
        JobPosting, on_delete=models.CASCADE, related_name="custom_screening_questions"
    )
    question_text = models.TextField()
    answer_type = models.CharField(max_length=20, choices=AnswerType.choices)
    options = models.JSONField(default=list, blank=True)
    must_answer = models.BooleanField(default=False)
    requirement = models.CharField(
        max_length=20,
        choices=AnswerRequirement.choices,
        default=AnswerRequirement.ACCEPT_ANY,
    )
    ideal_answer = models.JSONField(null=True, blank=True)
    disqualify_if_not_ideal = models.BooleanField(default=False)
    sort_order = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "job_posting_custom_screening_question"
        ordering = ["sort_order", "id"]
