import hmac

from django.conf import settings
from rest_framework.permissions import BasePermission


class HasCronSecret(BasePermission):
    """
    외부 스케줄러(cron) 호출용. 'Authorization: Bearer <CRON_SECRET>' 헤더를 확인합니다.

    CRON_SECRET 이 비어 있으면 항상 거부합니다.
    """

    def has_permission(self, request, view):
        expected = getattr(settings, "CRON_SECRET", "")
        if not expected:
            return False
        provided = request.headers.get("Authorization", "")
        return hmac.compare_digest(provided, f"Bearer {expected}")
