from __future__ import annotations

from typing import Optional, Protocol

from purchase.domain.purchase import (
    PurchaseRecordDomain,
    PurchaseSessionPatch,
    SettlementPatch,
)


class PurchaseRepositoryPort(Protocol):
    def get_by_job_posting(
        self, *, job_posting_id: int
    ) -> Optional[PurchaseRecordDomain]: ...

    def get_or_create_pending(
        self,
        *,
        job_posting_id: int,
        product_type: str,
        amount: int,
        currency: str,
        price_id: str,
    ) -> PurchaseRecordDomain: ...

    def apply_session_patch(
        self, *, purchase_id: int, patch: PurchaseSessionPatch
    ) -> PurchaseRecordDomain: ...

    def apply_settlement(self, *, job_posting_id: int, patch: SettlementPatch) -> bool: ...

    def mark_failed(self, *, job_posting_id: int) -> bool: ...

    def find_job_posting_id_by_session(self, *, session_id: str) -> Optional[int]: ...
