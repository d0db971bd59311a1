"""
services/scoring_service.py

채점 및 결과 분석 비즈니스 로직.
순수 Python 함수로 구성 — UI 코드, 상태 변경 없음.
"""

from typing import TYPE_CHECKING, Dict, List, Optional

from quiz_widget.errors import PreconditionError
from quiz_widget.models.question_model import QuestionSet
from quiz_widget.models.result_model import ResultsSummary, ReviewEntry

if TYPE_CHECKING:
    from quiz_widget.services.quiz_session import QuizSession


def score(session: "QuizSession") -> ResultsSummary:
    """
    제출된 세션을 채점하여 결과 요약을 반환한다.

    정답 판정 기준: answers[i] == question.correct_answer_index
    응답하지 않은 문제(키 없음)는 미응답으로 따로 집계.

    Args:
        session: submitted == True 인 QuizSession.

    Returns:
        ResultsSummary. 정답 + 오답 + 미응답 = 전체 문제 수.

    Raises:
        PreconditionError: 제출되지 않은 세션.
    """
    if not session.submitted:
        raise PreconditionError("제출되지 않은 퀴즈는 채점할 수 없습니다.")
    return score_answers(session.questions, session.answers, session.elapsed_seconds)


def score_answers(
    questions: QuestionSet,
    answers: Dict[int, int],
    elapsed_seconds: int,
) -> ResultsSummary:
    correct = incorrect = unanswered = 0
    review: List[ReviewEntry] = []

    for idx, q in enumerate(questions):
        user_answer = answers.get(idx)
        is_correct = user_answer is not None and user_answer == q.correct_answer_index

        if user_answer is None:
            unanswered += 1
        elif is_correct:
            correct += 1
        else:
            incorrect += 1

        review.append(ReviewEntry(
            question_index=idx,
            is_correct=is_correct,
            user_answer_index=user_answer,
            correct_answer_index=q.correct_answer_index,
        ))

    return ResultsSummary(
        correct_count=correct,
        incorrect_count=incorrect,
        unanswered_count=unanswered,
        time_taken_seconds=elapsed_seconds,
        review=review,
    )


def option_label(index: int) -> str:
    """보기 인덱스 → 알파벳 라벨 (0 → "A")."""
    return chr(ord("A") + index)


def build_review_details(
    questions: QuestionSet,
    summary: ResultsSummary,
) -> List[Dict[str, object]]:
    """
    오답 노트용 상세 정보.

    Returns:
        [{"question_index", "status", "question", "user_answer", "correct_answer",
          "explanation"}, ...]  문제 순서 유지.
        user_answer 는 미응답이면 None, 아니면 "B) 보기 텍스트" 형식.
    """
    details = []
    for entry in summary.review:
        q = questions[entry.question_index]
        user_answer: Optional[str] = None
        if entry.user_answer_index is not None:
            user_answer = _format_option(q.options, entry.user_answer_index)
        details.append({
            "question_index": entry.question_index,
            "status": entry.status,
            "question": q.text,
            "user_answer": user_answer,
            "correct_answer": _format_option(q.options, entry.correct_answer_index),
            "explanation": q.explanation,
        })
    return details


def _format_option(options, index: int) -> str:
    return f"{option_label(index)}) {options[index]}"
