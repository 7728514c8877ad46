from __future__ import annotations

from common.application.result import Err, ErrorCode, Ok, Result
from job_posting.application.access import MODE_VIEW, load_posting_for_actor
from job_posting.ports.job_posting_repo import JobPostingRepositoryPort
from organization.ports.capability_checker import CapabilityCheckerPort
from purchase.domain.purchase import PurchaseRecordDomain
from purchase.ports.purchase_repo import PurchaseRepositoryPort


class GetPurchaseStatusUseCase:
    def __init__(
        self,
        *,
        job_posting_repo: JobPostingRepositoryPort,
        purchase_repo: PurchaseRepositoryPort,
        capability_checker: CapabilityCheckerPort,
    ):
        self._job_posting_repo = job_posting_repo
        self._purchase_repo = purchase_repo
        self._capability_checker = capability_checker

    def execute(
        self, *, job_posting_id: int, actor_id: int
    ) -> Result[PurchaseRecordDomain]:
        loaded = load_posting_for_actor(
            job_posting_repo=self._job_posting_repo,
            capability_checker=self._capability_checker,
            job_posting_id=job_posting_id,
            actor_id=actor_id,
            mode=MODE_VIEW,
        )
        if isinstance(loaded, Err):
            return loaded

        record = self._purchase_repo.get_by_job_posting(job_posting_id=job_posting_id)
        if record is None:
            return Err(code=ErrorCode.NOT_FOUND, message="Purchase not found")
        return Ok(record)
