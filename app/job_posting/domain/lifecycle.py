"""
채용 공고 상태 머신

허용되는 전이(edge)는 이 테이블에만 정의합니다.
저장소 어댑터는 여기서 계산한 source 상태 집합을 조건부 UPDATE 의 WHERE 절로 사용합니다.
"""

from __future__ import annotations

from dataclasses import dataclass

DRAFT = "DRAFT"
PUBLISHED = "PUBLISHED"
CLOSED = "CLOSED"
ARCHIVED = "ARCHIVED"

ALL_STATUSES = frozenset({DRAFT, PUBLISHED, CLOSED, ARCHIVED})


@dataclass(frozen=True, slots=True)
class Transition:
    action: str
    sources: frozenset[str]
    target: str


PUBLISH = Transition(action="publish", sources=frozenset({DRAFT}), target=PUBLISHED)
ARCHIVE = Transition(
    action="archive", sources=frozenset({PUBLISHED, CLOSED}), target=ARCHIVED
)
REPUBLISH = Transition(
    action="republish", sources=frozenset({ARCHIVED}), target=PUBLISHED
)
# 사용자 액션이 아니라 만료 sweep 에서만 사용
CLOSE = Transition(action="close", sources=frozenset({PUBLISHED}), target=CLOSED)

TRANSITIONS: dict[str, Transition] = {
    t.action: t for t in (PUBLISH, ARCHIVE, REPUBLISH, CLOSE)
}


def can_transition(transition: Transition, current_status: str) -> bool:
    return current_status in transition.sources


def is_valid_edge(from_status: str, to_status: str) -> bool:
    return any(
        from_status in t.sources and t.target == to_status
        for t in TRANSITIONS.values()
    )
