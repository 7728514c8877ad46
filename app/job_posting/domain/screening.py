"""
스크리닝 질문 정의

- 시스템 질문: 코드에 고정된 카탈로그. 공고는 question_id 와 기대 답변만 저장합니다.
- 커스텀 질문: 공고별로 고용주가 작성한 질문.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

QUESTION_TYPE_SYSTEM = "system"
QUESTION_TYPE_CUSTOM = "custom"


@dataclass(frozen=True, slots=True)
class SystemQuestionDefinition:
    id: str
    question: str
    answer_type: str
    options: tuple[str, ...]


SYSTEM_SCREENING_QUESTIONS: tuple[SystemQuestionDefinition, ...] = (
    SystemQuestionDefinition(
        id="programming_languages",
        question="Programming Languages",
        answer_type="multiple",
        options=(
            "Python",
            "JavaScript",
            "TypeScript",
            "Java",
            "C++",
            "C#",
            "Go",
            "Rust",
            "Ruby",
            "PHP",
            "Swift",
            "Kotlin",
            "Scala",
            "R",
            "MATLAB",
            "SQL",
            "Other",
        ),
    ),
    SystemQuestionDefinition(
        id="english_proficiency",
        question="English Proficiency",
        answer_type="single",
        options=(
            "Native or bilingual proficiency",
            "Full professional proficiency",
            "Professional working proficiency",
            "Limited working proficiency",
            "Elementary proficiency",
            "No proficiency",
        ),
    ),
    SystemQuestionDefinition(
        id="engineering_qualification",
        question="Engineering Qualification",
        answer_type="single",
        options=(
            "PhD in Computer Science or related field",
            "Master's degree in Computer Science or related field",
            "Bachelor's degree in Computer Science or related field",
            "Bachelor's degree in other field",
            "Some college coursework",
            "High school diploma or equivalent",
            "Self-taught / Bootcamp graduate",
        ),
    ),
    SystemQuestionDefinition(
        id="ml_experience",
        question="Machine Learning Experience",
        answer_type="single",
        options=(
            "5+ years of hands-on ML experience",
            "3-5 years of hands-on ML experience",
            "1-3 years of hands-on ML experience",
            "Less than 1 year of hands-on ML experience",
            "Academic ML projects only",
            "No ML experience",
        ),
    ),
)

_CATALOG = {q.id: q for q in SYSTEM_SCREENING_QUESTIONS}


def find_system_question(question_id: str) -> Optional[SystemQuestionDefinition]:
    return _CATALOG.get(question_id)


@dataclass(frozen=True, slots=True)
class ScreeningQuestion:
    """
    후보자에게 노출되는 질문 하나 (시스템/커스텀 공통 형태).
    """

    question_type: str
    question_id: str
    question_text: str
    answer_type: str
    options: list[str] = field(default_factory=list)
    requirement: str = "accept-any"
    must_answer: bool = False
    expected_answers: Optional[list[Any]] = None

    @property
    def key(self) -> str:
        return f"{self.question_type}_{self.question_id}"


@dataclass(frozen=True, slots=True)
class ScreeningQuestionSet:
    system: list[ScreeningQuestion]
    custom: list[ScreeningQuestion]

    @property
    def total(self) -> int:
        return len(self.system) + len(self.custom)

    def find(self, question_type: str, question_id: str) -> Optional[ScreeningQuestion]:
        pool = self.system if question_type == QUESTION_TYPE_SYSTEM else self.custom
        for q in pool:
            if q.question_id == question_id:
                return q
        return None
