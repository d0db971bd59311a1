"""
models/session_state.py

퀴즈 진행 상태 관련 모델.
  - QuizPhase        : 세션 생명주기 (NOT_STARTED → IN_PROGRESS → SUBMITTED)
  - ProgressSnapshot : 이어풀기용 저장 스냅샷 (문제 목록, 제출 여부 제외)
  - SessionView      : 렌더러가 매 변경 후 읽어 가는 평범한 데이터 뷰
Pydantic BaseModel 기반 — 직렬화/역직렬화 및 타입 안전성 확보.
UI 코드 없음.
"""

from enum import Enum
from typing import Dict

from pydantic import BaseModel, Field


class QuizPhase(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    SUBMITTED = "submitted"


class ProgressSnapshot(BaseModel):
    """
    저장소에 기록되는 진행 상태 스냅샷.

    JSON 키는 기존 위젯과 호환되도록 camelCase 를 유지한다
    (userAnswers, currentIndex, elapsedSeconds, isStarted).

    Attributes:
        answers:         답안지. {문제 인덱스: 선택한 보기 인덱스}
        current_index:   현재 문제 인덱스 (0-based).
        elapsed_seconds: 경과 시간 (초).
        started:         시작 여부.
    """

    model_config = {"populate_by_name": True}

    answers: Dict[int, int] = Field(
        default_factory=dict,
        alias="userAnswers",
        description="답안지. key: 문제 인덱스, value: 선택한 보기 인덱스"
    )
    current_index: int = Field(
        default=0,
        ge=0,
        alias="currentIndex",
        description="현재 풀고 있는 문제 인덱스 (0-based)"
    )
    elapsed_seconds: int = Field(
        default=0,
        ge=0,
        alias="elapsedSeconds",
        description="경과 시간 (초)"
    )
    started: bool = Field(
        default=True,
        alias="isStarted",
        description="시작 여부. 저장 시점에는 항상 True"
    )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


class SessionView(BaseModel):
    """렌더러용 세션 상태 뷰. 읽기 전용 사본."""

    phase: QuizPhase
    current_index: int
    answers: Dict[int, int]
    elapsed_seconds: int
    started: bool
    submitted: bool
    total: int
    answered_count: int
    progress_percent: float
    has_previous: bool
    has_next: bool
