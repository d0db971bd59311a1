"""
services/question_loader.py

외부 문제 데이터 → QuestionSet 로더/검증기.
Public API:
  - load_question_set(raw) -> QuestionSet            : 파이썬 값(list[dict]) 검증
  - load_question_set_from_json(text) -> QuestionSet : JSON 문자열
  - load_question_set_from_file(path) -> QuestionSet : UTF-8 JSON 파일

설계 원칙:
- 하나라도 잘못된 문제가 있으면 전체 로드 실패 (부분 퀴즈 없음)
- 텍스트 필드의 HTML 엔티티는 평문으로 디코딩 (평문은 그대로)
- 검증 외 부작용 없음
"""

import html
import json
import logging
from typing import Any, Dict, List

from pydantic import ValidationError

from quiz_widget.errors import InvalidDataError
from quiz_widget.models.question_model import Question, QuestionSet

logger = logging.getLogger(__name__)

_INPUT_KEYS = ("question", "options", "correctAnswerIndex", "explanation")


def load_question_set(raw: Any) -> QuestionSet:
    """
    임의의 외부 값 → QuestionSet.

    Raises:
        InvalidDataError: 비어 있지 않은 리스트가 아니거나, 어떤 문제라도 검증 실패.
    """
    if not isinstance(raw, (list, tuple)):
        raise InvalidDataError("문제 데이터가 없거나 형식이 올바르지 않습니다 (리스트 필요).")
    if not raw:
        raise InvalidDataError("문제 데이터가 비어 있습니다.")

    questions: List[Question] = []
    for idx, item in enumerate(raw):
        if not isinstance(item, dict):
            raise InvalidDataError(f"item[{idx}]: 문제 항목은 객체여야 합니다.")
        try:
            questions.append(Question.model_validate(_decode_item(item)))
        except ValidationError as e:
            raise InvalidDataError(f"item[{idx}]: Question 생성 실패 — {e}") from e

    logger.info(f"load_question_set: {len(questions)}개 문제 로드 완료")
    return QuestionSet(tuple(questions))


def load_question_set_from_json(text: str) -> QuestionSet:
    try:
        raw = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise InvalidDataError(f"문제 JSON 파싱 실패: {e}") from e
    return load_question_set(raw)


def load_question_set_from_file(path: str) -> QuestionSet:
    try:
        with open(path, encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidDataError(f"문제 파일을 읽을 수 없습니다: {path} ({e})") from e
    return load_question_set_from_json(text)


# ── 헬퍼 ─────────────────────────────────────────────────────────────────────

def decode_entities(value: Any) -> Any:
    """문자열이면 HTML 엔티티를 디코딩. 그 외 타입은 검증 단계에서 거르도록 그대로 반환."""
    if isinstance(value, str):
        return html.unescape(value)
    return value


def _decode_item(item: Dict[str, Any]) -> Dict[str, Any]:
    # 외부 입력 키만 통과 (파이썬 필드명 text 등은 입력으로 받지 않는다)
    decoded = {key: item[key] for key in _INPUT_KEYS if key in item}
    for key in ("question", "explanation"):
        if key in decoded:
            decoded[key] = decode_entities(decoded[key])
    options = decoded.get("options")
    if isinstance(options, (list, tuple)):
        decoded["options"] = [decode_entities(opt) for opt in options]
    return decoded
