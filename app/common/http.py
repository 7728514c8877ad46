"""
유스케이스 Err -> DRF Response 변환
"""

from __future__ import annotations

from typing import Mapping, Optional

from common.application.result import Err, ErrorCode
from rest_framework import status
from rest_framework.response import Response

ERROR_STATUS: dict[str, int] = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.STATE_CONFLICT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.EXPIRED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.PAYMENT_REQUIRED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.UPSTREAM_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def err_response(
    err: Err, *, status_overrides: Optional[Mapping[str, int]] = None
) -> Response:
    """
    Err 를 {"error_code", "error", "details"} 응답으로 변환합니다.

    같은 에러 코드라도 리소스에 따라 상태 코드가 다를 수 있어(예: 만료된 초대 = 410)
    status_overrides 로 덮어쓸 수 있습니다.
    """
    overrides = status_overrides or {}
    http_status = overrides.get(
        err.code,
        ERROR_STATUS.get(err.code, status.HTTP_500_INTERNAL_SERVER_ERROR),
    )
    body: dict = {"error_code": err.code, "error": err.message}
    if err.details:
        body["details"] = err.details
    return Response(body, status=http_status)
