from __future__ import annotations

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

_REQUIREMENT_CHOICES = [
    ("must-have", "Must have"),
    ("preferred", "Preferred"),
    ("accept-any", "Accept any"),
]


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="JobPosting",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("DRAFT", "Draft"),
                            ("PUBLISHED", "Published"),
                            ("CLOSED", "Closed"),
                            ("ARCHIVED", "Archived"),
                        ],
                        default="DRAFT",
                        max_length=10,
                    ),
                ),
                ("job_title", models.CharField(max_length=255)),
                ("company_name", models.CharField(max_length=255)),
                ("job_description", models.TextField(blank=True, default="")),
                ("job_summary", models.TextField(blank=True, default="")),
                (
                    "experience_level",
                    models.CharField(
                        choices=[
                            ("INTERN", "Intern"),
                            ("JUNIOR", "Junior"),
                            ("MID_LEVEL", "Mid-level"),
                            ("SENIOR", "Senior"),
                            ("LEAD", "Lead"),
                            ("PRINCIPAL", "Principal"),
                        ],
                        default="JUNIOR",
                        max_length=20,
                    ),
                ),
                (
                    "country_region",
                    models.CharField(blank=True, default="", max_length=100),
                ),
                ("work_type", models.CharField(blank=True, default="", max_length=50)),
                ("application_deadline", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "owner",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="job_postings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "job_posting",
                "indexes": [
                    models.Index(fields=["status"], name="job_posting_status_idx"),
                    models.Index(
                        fields=["owner", "status"],
                        name="job_posting_owner_status_idx",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="SystemScreeningAnswer",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("question_id", models.CharField(max_length=64)),
                (
                    "requirement",
                    models.CharField(
                        choices=_REQUIREMENT_CHOICES,
                        default="accept-any",
                        max_length=20,
                    ),
                ),
                ("selected_answers", models.JSONField(blank=True, default=list)),
                (
                    "job_posting",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="system_screening_answers",
                        to="job_posting.jobposting",
                    ),
                ),
            ],
            options={
                "db_table": "job_posting_system_screening_answer",
                "constraints": [
                    models.UniqueConstraint(
                        fields=("job_posting", "question_id"),
                        name="uniq_system_answer_posting_question",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="CustomScreeningQuestion",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("question_text", models.TextField()),
                (
                    "answer_type",
                    models.CharField(
                        choices=[
                            ("single", "Single choice"),
                            ("multiple", "Multiple choice"),
                            ("yes-no", "Yes / No"),
                            ("short-text", "Short text"),
                        ],
                        max_length=20,
                    ),
                ),
                ("options", models.JSONField(blank=True, default=list)),
                ("must_answer", models.BooleanField(default=False)),
                (
                    "requirement",
                    models.CharField(
                        choices=_REQUIREMENT_CHOICES,
                        default="accept-any",
                        max_length=20,
                    ),
                ),
                ("ideal_answer", models.JSONField(blank=True, null=True)),
                ("disqualify_if_not_ideal", models.BooleanField(default=False)),
                ("sort_order", models.PositiveIntegerField(default=0)),
                (
                    "job_posting",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="custom_screening_questions",
                        to="job_posting.jobposting",
                    ),
                ),
            ],
            options={
                "db_table": "job_posting_custom_screening_question",
                "ordering": ["sort_order", "id"],
            },
        ),
    ]
