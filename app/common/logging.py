from __future__ import annotations

import logging

from common.request_id import get_request_id


class RequestIdFilter(logging.Filter):
    """
    모든 로그 레코드에 request_id 속성을 채웁니다.

    Celery worker / management command 처럼 요청 밖에서 남기는 로그는 "-" 로 찍힙니다.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = get_request_id()  # type: ignore[attr-defined]
        return True
