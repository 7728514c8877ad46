from __future__ import annotations

import re

_SECRET_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"Bearer\s+[A-Za-z0-9\-\._~\+/]+=*", re.IGNORECASE),
    # 결제 대행사 키 (sk_live_..., rk_test_..., whsec_...)
    re.compile(r"\b(?:sk|rk|pk)_(?:live|test)_[A-Za-z0-9]+\b"),
    re.compile(r"\bwhsec_[A-Za-z0-9]+\b"),
    re.compile(
        r"\b(access_token|refresh_token|client_secret|api_key|secret_key)\b\s*[:=]\s*[^\s,&]+",
        re.IGNORECASE,
    ),
]

_MAX_LENGTH = 500


def mask_secrets(text: str) -> str:
    """
    업스트림(결제 대행사, 워커 API) 에러 문자열을 로그에 남기기 전에 마스킹합니다.
    """
    if not text:
        return text
    masked = text
    for pat in _SECRET_PATTERNS:
        masked = pat.sub("[REDACTED]", masked)
    if len(masked) > _MAX_LENGTH:
        masked = masked[:_MAX_LENGTH] + "...[TRUNCATED]"
    return masked
