from typing import Iterator, Optional, Tuple
from pydantic import BaseModel, Field, RootModel, field_validator, model_validator

class Question(BaseModel):
    """
    객관식 퀴즈 문제 모델
    Pydantic v2 적용, 로드 이후 변경 불가 (frozen)
    """
    model_config = {"frozen": True, "populate_by_name": True}

    text: str = Field(
        ...,
        min_length=1,
        validation_alias="question",
        description="문제 내용"
    )
    options: Tuple[str, ...] = Field(
        ...,
        description="보기 리스트 (객관식 선지)"
    )
    correct_answer_index: int = Field(
        ...,
        ge=0,
        strict=True,
        validation_alias="correctAnswerIndex",
        description="정답 보기의 인덱스 (0-based)"
    )
    explanation: Optional[str] = Field(
        None,
        description="해설 (없으면 None)"
    )

    @field_validator('text')
    @classmethod
    def validate_text_not_blank(cls, v: str) -> str:
        """
        검증 로직 1: 공백만 있는 문제는 허용하지 않는다.
        """
        if not v.strip():
            raise ValueError("문제(question)가 비어 있습니다.")
        return v

    @field_validator('options')
    @classmethod
    def validate_options_length(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        """
        검증 로직 2: 보기는 최소 2개 이상이어야 한다.
        """
        if len(v) < 2:
            raise ValueError("보기(options)는 최소 2개 이상의 항목이 필요합니다.")
        return v

    @model_validator(mode='after')
    def validate_answer_in_range(self) -> 'Question':
        """
        검증 로직 3: 정답 인덱스는 반드시 보기 범위 안에 있어야 한다.
        """
        if self.correct_answer_index >= len(self.options):
            raise ValueError(
                f"정답 인덱스({self.correct_answer_index})가 보기 범위(0~{len(self.options) - 1})를 벗어났습니다."
            )
        return self


class QuestionSet(RootModel[Tuple[Question, ...]]):
    """
    검증이 끝난 불변 문제 목록. 시작 시 한 번 로드된다.
    비어 있는 목록은 허용하지 않는다.
    """
    model_config = {"frozen": True}

    @field_validator('root')
    @classmethod
    def validate_not_empty(cls, v: Tuple[Question, ...]) -> Tuple[Question, ...]:
        if not v:
            raise ValueError("문제 목록이 비어 있습니다.")
        return v

    def __len__(self) -> int:
        return len(self.root)

    def __iter__(self) -> Iterator[Question]:
        return iter(self.root)

    def __getitem__(self, index: int) -> Question:
        return self.root[index]

    def is_valid_index(self, index: int) -> bool:
        return isinstance(index, int) and not isinstance(index, bool) and 0 <= index < len(self.root)

    def is_valid_answer(self, index: int, option_index: int) -> bool:
        """index 문제에 대해 option_index가 유효한 보기 인덱스인지."""
        if not self.is_valid_index(index):
            return False
        if not isinstance(option_index, int) or isinstance(option_index, bool):
            return False
        return 0 <= option_index < len(self.root[index].options)
