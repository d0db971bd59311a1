"""채점 테스트."""
import itertools

import pytest

from quiz_widget.errors import PreconditionError
from quiz_widget.models.result_model import ResultsSummary
from quiz_widget.services.scoring_service import (
    build_review_details,
    option_label,
    score,
    score_answers,
)


def _answer(session, answers):
    for q_idx, opt_idx in answers.items():
        session.navigate_to(q_idx)
        session.select_answer(opt_idx)


class TestScore:

    def test_mixed_results(self, make_session, scheduler):
        """정답 [1, 0, 2] 에 {0:1, 1:3} 로 답하고 2번은 건너뜀."""
        session = make_session()
        session.start()
        _answer(session, {0: 1, 1: 3})
        scheduler.fire(42)
        session.submit()

        result = score(session)

        assert result.correct_count == 1
        assert result.incorrect_count == 1
        assert result.unanswered_count == 1
        assert result.time_taken_seconds == 42

    def test_review_entries_in_order(self, make_session):
        session = make_session()
        session.start()
        _answer(session, {0: 1, 1: 3})
        session.submit()

        review = score(session).review

        assert [e.question_index for e in review] == [0, 1, 2]
        assert [e.is_correct for e in review] == [True, False, False]
        assert [e.user_answer_index for e in review] == [1, 3, None]
        assert [e.correct_answer_index for e in review] == [1, 0, 2]
        assert [e.status for e in review] == ["correct", "incorrect", "unanswered"]

    def test_not_submitted(self, make_session):
        session = make_session()
        with pytest.raises(PreconditionError):
            score(session)
        session.start()
        with pytest.raises(PreconditionError):
            score(session)

    def test_counts_always_sum_to_total(self, three_questions):
        """모든 답 조합에서 정답 + 오답 + 미응답 = 문제 수."""
        choices = [None, 0, 1, 2, 3]
        for combo in itertools.product(choices, repeat=len(three_questions)):
            answers = {i: c for i, c in enumerate(combo) if c is not None}
            result = score_answers(three_questions, answers, 0)

            assert result.correct_count + result.incorrect_count + result.unanswered_count == 3

    def test_resume_then_score_matches_direct(self, make_session, scheduler):
        """저장 후 이어풀기 → 바로 제출한 결과 == 떠나지 않고 제출한 결과."""
        direct = make_session()
        direct.start()
        scheduler.fire(5)
        _answer(direct, {2: 2, 0: 0})
        expected_answers = direct.answers
        direct.close()

        resumed = make_session()
        resumed.start(fresh=False)
        resumed.submit()

        assert resumed.answers == expected_answers
        assert score(resumed) == score_answers(direct.questions, expected_answers, 5)


class TestResultsSummary:

    def test_accuracy_and_label(self):
        summary = ResultsSummary(correct_count=1, incorrect_count=5, unanswered_count=2, time_taken_seconds=0)

        assert summary.total == 8
        assert summary.accuracy_percent == 13  # 12.5 → 13
        assert summary.score_label == "1/8"

    def test_accuracy_of_empty(self):
        summary = ResultsSummary(correct_count=0, incorrect_count=0, unanswered_count=0, time_taken_seconds=0)

        assert summary.accuracy_percent == 0


class TestReviewDetails:

    def test_details(self, make_session, three_questions):
        session = make_session()
        session.start()
        _answer(session, {0: 1, 1: 3})
        session.submit()

        details = build_review_details(three_questions, score(session))

        assert details[0]["user_answer"] == "B) b"
        assert details[0]["correct_answer"] == "B) b"
        assert details[1]["status"] == "incorrect"
        assert details[1]["user_answer"] == "D) d"
        assert details[2]["user_answer"] is None
        assert details[2]["explanation"] == "세 번째 보기"

    @pytest.mark.parametrize("index,label", [(0, "A"), (3, "D"), (25, "Z")])
    def test_option_label(self, index, label):
        assert option_label(index) == label
