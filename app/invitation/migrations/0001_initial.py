from __future__ import annotations

import django.db.models.deletion
import invitation.domain.invitation
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("job_posting", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="CandidateInvitation",
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
                    "token",
                    models.CharField(
                        default=invitation.domain.invitation.generate_invitation_token,
                        max_length=64,
                        unique=True,
                    ),
                ),
                (
                    "candidate_email",
                    models.EmailField(blank=True, default="", max_length=254),
                ),
                (
                    "candidate_name",
                    models.CharField(blank=True, default="", max_length=255),
                ),
                ("message", models.TextField(blank=True, default="")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("PENDING", "Pending"),
                            ("VIEWED", "Viewed"),
                            ("COMPLETED", "Completed"),
                            ("EXPIRED", "Expired"),
                        ],
                        default="PENDING",
                        max_length=10,
                    ),
                ),
                ("sent_at", models.DateTimeField()),
                ("viewed_at", models.DateTimeField(blank=True, null=True)),
                ("responded_at", models.DateTimeField(blank=True, null=True)),
                ("expires_at", models.DateTimeField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "candidate",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="screening_invitations",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "job_posting",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="invitations",
                        to="job_posting.jobposting",
                    ),
                ),
            ],
            options={
                "db_table": "candidate_invitation",
                "indexes": [
                    models.Index(
                        fields=["job_posting", "status"],
                        name="invitation_posting_status_idx",
                    )
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("job_posting", "candidate"),
                        name="uniq_invitation_job_posting_candidate",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="ScreeningResponse",
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
                ("question_type", models.CharField(max_length=10)),
                ("question_id", models.CharField(max_length=100)),
                ("question_text", models.TextField()),
                ("answer_type", models.CharField(max_length=20)),
                ("answer", models.JSONField()),
                ("extra", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "invitation",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="responses",
                        to="invitation.candidateinvitation",
                    ),
                ),
            ],
            options={
                "db_table": "screening_response",
                "ordering": ["id"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("invitation", "question_type", "question_id"),
                        name="uniq_screening_response_question",
                    )
                ],
            },
        ),
    ]
