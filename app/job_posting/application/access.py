from __future__ import annotations

from common.application.result import Err, ErrorCode, Ok, Result
from job_posting.domain.job_posting import JobPostingDomain
from job_posting.ports.job_posting_repo import JobPostingRepositoryPort
from organization.ports.capability_checker import CapabilityCheckerPort

MODE_MODIFY = "modify"
MODE_VIEW = "view"


def load_posting_for_actor(
    *,
    job_posting_repo: JobPostingRepositoryPort,
    capability_checker: CapabilityCheckerPort,
    job_posting_id: int,
    actor_id: int,
    mode: str = MODE_MODIFY,
) -> Result[JobPostingDomain]:
    """
    공고 조회 + 권한 판정. 없으면 NOT_FOUND, 권한이 없으면 FORBIDDEN.
    """
    posting = job_posting_repo.get(job_posting_id=job_posting_id)
    if posting is None:
        return Err(code=ErrorCode.NOT_FOUND, message="Job posting not found")

    if mode == MODE_VIEW:
        decision = capability_checker.can_view(
            actor_id=actor_id, owner_user_id=posting.owner_user_id
        )
    else:
        decision = capability_checker.can_modify(
            actor_id=actor_id, owner_user_id=posting.owner_user_id
        )
    if not decision.allowed:
        return Err(
            code=ErrorCode.FORBIDDEN,
            message="Not authorized for this job posting",
            details={"reason": decision.reason} if decision.reason else None,
        )
    return Ok(posting)
