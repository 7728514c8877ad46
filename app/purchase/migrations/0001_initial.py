from __future__ import annotations

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("job_posting", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="PurchaseRecord",
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
                    "payment_status",
                    models.CharField(
                        choices=[
                            ("PENDING", "Pending"),
                            ("SUCCEEDED", "Succeeded"),
                            ("FAILED", "Failed"),
                        ],
                        default="PENDING",
                        max_length=10,
                    ),
                ),
                (
                    "product_type",
                    models.CharField(
                        choices=[
                            ("JUNIOR", "Junior job posting"),
                            ("SENIOR", "Senior job posting"),
                        ],
                        max_length=10,
                    ),
                ),
                (
                    "amount",
                    models.PositiveIntegerField(help_text="최소 통화 단위 (예: cents)"),
                ),
                ("currency", models.CharField(default="aud", max_length=3)),
                (
                    "provider_price_id",
                    models.CharField(blank=True, default="", max_length=255),
                ),
                (
                    "provider_session_id",
                    models.CharField(blank=True, default="", max_length=255),
                ),
                (
                    "provider_customer_id",
                    models.CharField(blank=True, default="", max_length=255),
                ),
                (
                    "provider_payment_intent_id",
                    models.CharField(blank=True, default="", max_length=255),
                ),
                ("paid_at", models.DateTimeField(blank=True, null=True)),
                ("expires_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "job_posting",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="purchase",
                        to="job_posting.jobposting",
                    ),
                ),
            ],
            options={
                "db_table": "purchase_record",
                "indexes": [
                    models.Index(
                        fields=["expires_at"], name="purchase_expires_at_idx"
                    ),
                    models.Index(
                        fields=["provider_session_id"],
                        name="purchase_session_id_idx",
                    ),
                ],
            },
        ),
    ]
