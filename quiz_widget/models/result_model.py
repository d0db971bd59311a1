"""
models/result_model.py

채점 결과 모델. 저장하지 않으며 제출된 세션에서 매번 다시 계산한다.
"""

import math
from typing import List, Optional

from pydantic import BaseModel, Field, computed_field


class ReviewEntry(BaseModel):
    """문제 하나에 대한 채점 결과 (오답 노트 한 줄)."""

    question_index: int
    is_correct: bool
    user_answer_index: Optional[int] = None
    correct_answer_index: int

    @computed_field
    @property
    def status(self) -> str:
        if self.user_answer_index is None:
            return "unanswered"
        return "correct" if self.is_correct else "incorrect"


class ResultsSummary(BaseModel):
    """
    최종 결과 요약.

    Attributes:
        correct_count / incorrect_count / unanswered_count:
            합계는 항상 전체 문제 수와 같다.
        time_taken_seconds: 제출 시점의 경과 시간 (초).
        review:             문제 순서대로의 ReviewEntry 리스트.
    """

    correct_count: int = Field(..., ge=0)
    incorrect_count: int = Field(..., ge=0)
    unanswered_count: int = Field(..., ge=0)
    time_taken_seconds: int = Field(..., ge=0)
    review: List[ReviewEntry] = Field(default_factory=list)

    @computed_field
    @property
    def total(self) -> int:
        return self.correct_count + self.incorrect_count + self.unanswered_count

    @computed_field
    @property
    def accuracy_percent(self) -> int:
        """정답률 (0.5 올림 반올림). 문제가 없으면 0."""
        if not self.total:
            return 0
        return math.floor(self.correct_count / self.total * 100 + 0.5)

    @computed_field
    @property
    def score_label(self) -> str:
        return f"{self.correct_count}/{self.total}"
