from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from task_gateway.domain.tasks import TaskKind


class _Payload(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class JdAnalyzePayload(_Payload):
    text: str = Field(min_length=1, description="채용 공고 본문")
    job_posting_id: Optional[int] = Field(default=None, description="분석 결과를 연결할 공고 ID")
    save_to_db: bool = Field(default=False, description="분석 결과 저장 여부")


class CvAnalyzePayload(_Payload):
    text: str = Field(min_length=1, description="이력서 본문")
    candidate_id: Optional[str] = Field(default=None, description="후보자 ID")
    create_user: bool = Field(default=False, description="후보자 계정 생성 여부")


class MatchingPayload(_Payload):
    candidate_id: str = Field(min_length=1, description="후보자 ID")
    job_posting_id: str = Field(min_length=1, description="공고 ID")
    cv_id: Optional[str] = Field(default=None, description="이력서 ID")
    skip_hard_gate: bool = Field(default=False, description="필수 조건 필터 생략 여부")


class RankingPayload(_Payload):
    job_posting_id: str = Field(min_length=1, description="순위를 계산할 공고 ID")


JD_ANALYZE = TaskKind(
    name="jd-analyze",
    single_path="/api/v1/tasks/jd/analyze-async",
    batch_path="/api/v1/tasks/jd/batch-analyze-async",
)
CV_ANALYZE = TaskKind(
    name="cv-analyze",
    single_path="/api/v1/tasks/cv/extract-async",
    batch_path="/api/v1/tasks/cv/batch-extract-async",
)
MATCHING = TaskKind(
    name="matching",
    single_path="/api/v1/tasks/matching/candidate-to-job",
    batch_path="/api/v1/tasks/matching/batch",
    batch_field="pairs",
)
RANKING = TaskKind(
    name="ranking",
    single_path="/api/v1/tasks/ranking/start",
)

PAYLOAD_MODELS: dict[str, type[BaseModel]] = {
    JD_ANALYZE.name: JdAnalyzePayload,
    CV_ANALYZE.name: CvAnalyzePayload,
    MATCHING.name: MatchingPayload,
    RANKING.name: RankingPayload,
}

TASK_KINDS: dict[str, TaskKind] = {
    k.name: k for k in (JD_ANALYZE, CV_ANALYZE, MATCHING, RANKING)
}
