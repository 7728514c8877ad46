from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from organization.models import OrganizationMember
from organization.ports.capability_checker import (
    CapabilityCheckerPort,
    CapabilityDecision,
)

_PRIVILEGED_ROLES = {OrganizationMember.Role.OWNER, OrganizationMember.Role.ADMIN}


@dataclass(frozen=True, slots=True)
class _CompanyContext:
    company_id: int
    role: str
    user_ids: frozenset[int]


class DjangoCapabilityChecker(CapabilityCheckerPort):
    """
    조직 멤버십 기반 권한 판정.

    - 본인 리소스는 항상 허용
    - 같은 회사의 다른 멤버 리소스: 조회는 허용, 수정은 OWNER/ADMIN 만 허용
    - 활성 멤버십이 여러 개면 가장 최근 가입한 회사를 기준으로 판정
    """

    def can_modify(self, *, actor_id: int, owner_user_id: int) -> CapabilityDecision:
        if int(actor_id) == int(owner_user_id):
            return CapabilityDecision(allowed=True)

        context = self._company_context(actor_id)
        if context is None:
            return CapabilityDecision(
                allowed=False, reason="No company membership found"
            )
        if int(owner_user_id) not in context.user_ids:
            return CapabilityDecision(
                allowed=False, reason="Job does not belong to your company"
            )
        if context.role in _PRIVILEGED_ROLES:
            return CapabilityDecision(allowed=True)
        return CapabilityDecision(
            allowed=False, reason="Insufficient permissions to modify this job"
        )

    def can_view(self, *, actor_id: int, owner_user_id: int) -> CapabilityDecision:
        if int(actor_id) == int(owner_user_id):
            return CapabilityDecision(allowed=True)

        context = self._company_context(actor_id)
        if context is None:
            return CapabilityDecision(
                allowed=False, reason="No company membership found"
            )
        if int(owner_user_id) not in context.user_ids:
            return CapabilityDecision(
                allowed=False, reason="Job does not belong to your company"
            )
        return CapabilityDecision(allowed=True)

    def _company_context(self, user_id: int) -> Optional[_CompanyContext]:
        membership = (
            OrganizationMember.objects.filter(user_id=user_id, is_active=True)
            .order_by("-joined_at", "-id")
            .first()
        )
        if membership is None:
            return None

        user_ids = OrganizationMember.objects.filter(
            company_id=membership.company_id, is_active=True
        ).values_list("user_id", flat=True)
        return _CompanyContext(
            company_id=int(membership.company_id),
            role=membership.role,
            user_ids=frozenset(int(uid) for uid in user_ids),
        )
