"""
스크리닝 답변 입력 모델 (answer_type 기준 tagged union)

    single      -> str
    multiple    -> list[str]
    yes-no      -> bool
    short-text  -> str

모든 답변은 확장용 extra(dict) 를 가질 수 있습니다.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool

SHORT_TEXT_MAX_LENGTH = 2000


class _ResponseBase(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    question_type: Literal["system", "custom"] = Field(description="질문 종류")
    question_id: str = Field(min_length=1, max_length=100, description="질문 ID")
    extra: dict[str, Any] = Field(default_factory=dict, description="확장 필드")


class SingleChoiceResponse(_ResponseBase):
    answer_type: Literal["single"]
    answer: str = Field(min_length=1)


class MultipleChoiceResponse(_ResponseBase):
    answer_type: Literal["multiple"]
    answer: list[str] = Field(min_length=1)


class YesNoResponse(_ResponseBase):
    answer_type: Literal["yes-no"]
    answer: StrictBool


class ShortTextResponse(_ResponseBase):
    answer_type: Literal["short-text"]
    answer: str = Field(min_length=1, max_length=SHORT_TEXT_MAX_LENGTH)


ScreeningResponseInput = Annotated[
    Union[SingleChoiceResponse, MultipleChoiceResponse, YesNoResponse, ShortTextResponse],
    Field(discriminator="answer_type"),
]


class ScreeningSubmission(BaseModel):
    responses: list[ScreeningResponseInput] = Field(
        min_length=1, description="제출할 답변 목록 (전체 교체)"
    )
