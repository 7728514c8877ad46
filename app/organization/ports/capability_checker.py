from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass(frozen=True, slots=True)
class CapabilityDecision:
    allowed: bool
    reason: Optional[str] = None


class CapabilityCheckerPort(Protocol):
    def can_modify(self, *, actor_id: int, owner_user_id: int) -> CapabilityDecision: ...

    def can_view(self, *, actor_id: int, owner_user_id: int) -> CapabilityDecision: ...
