from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorCode:
    """
    유스케이스 실패 코드 (호출자에게 노출되는 안정적인 에러 종류).
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    STATE_CONFLICT = "STATE_CONFLICT"
    EXPIRED = "EXPIRED"
    PAYMENT_REQUIRED = "PAYMENT_REQUIRED"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"


@dataclass(frozen=True, slots=True)
class Err:
    """
    유스케이스 실패 결과.

    - code: ErrorCode 중 하나
    - message: 사용자/로그용 메시지
    - details: 호출자에게 함께 전달할 추가 정보(선택)
    """

    code: str
    message: str
    details: Optional[dict] = None


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """유스케이스 성공 결과."""

    value: T


Result = Ok[T] | Err
