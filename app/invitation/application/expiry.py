from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from common.application.result import Err, ErrorCode
from invitation.domain.invitation import COMPLETED, EXPIRED, InvitationDomain
from invitation.ports.invitation_repo import InvitationRepositoryPort

logger = logging.getLogger(__name__)


def expire_if_overdue(
    *,
    invitation_repo: InvitationRepositoryPort,
    invitation: InvitationDomain,
    now: datetime,
    message: str = "This invitation has expired",
    include_completed: bool = False,
) -> Optional[Err]:
    """
    만료 시각이 지났으면 EXPIRED 에러를 돌려줍니다. 아니면 None.

    COMPLETED 가 아닌 초대는 이 시점에 EXPIRED 로 저장합니다 (lazy 만료).
    include_completed=False 이면 COMPLETED 초대는 만료 후에도 에러 없이 통과합니다.
    """
    if not invitation.is_expired_at(now):
        return None
    if invitation.is_completed and not include_completed:
        return None

    status = invitation.status
    if not invitation.is_completed:
        if invitation_repo.mark_expired(invitation_id=invitation.id):
            logger.info(
                "invitation_expired id=%s job_posting=%s previous=%s",
                invitation.id,
                invitation.job_posting_id,
                invitation.status,
            )
        status = EXPIRED

    return Err(
        code=ErrorCode.EXPIRED,
        message=message,
        details={"status": status, "expires_at": invitation.expires_at.isoformat()},
    )
