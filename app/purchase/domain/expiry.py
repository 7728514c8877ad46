"""
결제 유효기간 계산 (순수 함수)

결제 기록이 없거나 expires_at 이 없으면 "만료되지 않음" 으로 취급합니다.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from purchase.domain.purchase import PurchaseRecordDomain

VALIDITY_DAYS = 30
_SECONDS_PER_DAY = 24 * 60 * 60


@dataclass(frozen=True, slots=True)
class ExpiryInfo:
    is_expired: bool
    days_remaining: Optional[int]
    has_expiry: bool


def compute_expires_at(paid_at: datetime, validity_days: int = VALIDITY_DAYS) -> datetime:
    return paid_at + timedelta(days=validity_days)


def is_expired(record: Optional[PurchaseRecordDomain], *, now: datetime) -> bool:
    if record is None or record.expires_at is None:
        return False
    return now > record.expires_at


def days_until_expiry(
    record: Optional[PurchaseRecordDomain], *, now: datetime
) -> Optional[int]:
    """
    남은 일수(올림). 만료되었으면 -1, 만료 정보가 없으면 None.
    """
    if record is None or record.expires_at is None:
        return None
    remaining = (record.expires_at - now).total_seconds()
    if remaining < 0:
        return -1
    return math.ceil(remaining / _SECONDS_PER_DAY)


def expiry_info(record: Optional[PurchaseRecordDomain], *, now: datetime) -> ExpiryInfo:
    return ExpiryInfo(
        is_expired=is_expired(record, now=now),
        days_remaining=days_until_expiry(record, now=now),
        has_expiry=bool(record is not None and record.expires_at is not None),
    )
