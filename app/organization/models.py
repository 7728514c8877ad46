from django.conf import settings
from django.db import models


class Company(models.Model):
    """
    채용 공고를 공유하는 회사(조직) 단위.
    """

    company_name = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "organization_company"

    def __str__(self) -> str:  # pragma: no cover
        return self.company_name


class OrganizationMember(models.Model):
    """
    회사 멤버십. 역할(role)은 권한 판정(capability check)에만 사용됩니다.
    """

    class Role(models.TextChoices):
        OWNER = "OWNER", "Owner"
        ADMIN = "ADMIN", "Admin"
        MEMBER = "MEMBER", "Member"

    company = models.ForeignKey(
        Company, on_delete=models.CASCADE, related_name="members"
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="organization_memberships",
    )
    role = models.CharField(max_length=10, choices=Role.choices, default=Role.MEMBER)
    is_active = models.BooleanField(default=True)
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "organization_member"
        constraints = [
            models.UniqueConstraint(
                fields=["company", "user"], name="uniq_org_member_company_user"
            ),
        ]
        indexes = [
            models.Index(
                fields=["user", "is_active"], name="org_member_user_active_idx"
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"OrganizationMember(company={self.company_id}, user={self.user_id}, role={self.role})"
