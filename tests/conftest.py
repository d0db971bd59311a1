"""퀴즈 위젯 테스트 공통 픽스처."""
import pytest

from quiz_widget.models.question_model import Question, QuestionSet
from quiz_widget.services.progress_store import MemoryStorage, ProgressStore
from quiz_widget.services.quiz_session import QuizSession
from quiz_widget.services.timer_clock import TickHandle, TickScheduler


class ManualTickHandle(TickHandle):
    def __init__(self, interval, callback):
        self.interval = interval
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualTickScheduler(TickScheduler):
    """실제 시간 대신 fire() 호출로 틱을 발생시키는 스케줄러."""

    def __init__(self):
        self.handles = []

    def schedule(self, interval, callback):
        handle = ManualTickHandle(interval, callback)
        self.handles.append(handle)
        return handle

    @property
    def active(self):
        return [h for h in self.handles if not h.cancelled]

    def fire(self, times=1):
        for _ in range(times):
            for handle in self.active:
                handle.callback()


@pytest.fixture
def scheduler():
    return ManualTickScheduler()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage):
    return ProgressStore(storage)


@pytest.fixture
def three_questions():
    """보기 4개짜리 3문제, 정답 인덱스 [1, 0, 2]."""
    return QuestionSet((
        Question(text="Q1", options=("a", "b", "c", "d"), correct_answer_index=1),
        Question(text="Q2", options=("a", "b", "c", "d"), correct_answer_index=0),
        Question(text="Q3", options=("a", "b", "c", "d"), correct_answer_index=2,
                 explanation="세 번째 보기"),
    ))


@pytest.fixture
def make_session(three_questions, store, scheduler):
    """같은 저장소/스케줄러를 공유하는 QuizSession 팩토리 (새로고침 흉내)."""
    def _make(questions=None, observer=None):
        return QuizSession(questions or three_questions, store, scheduler=scheduler, observer=observer)
    return _make


@pytest.fixture
def raw_questions():
    """외부 입력 형식(camelCase)의 문제 데이터."""
    return [
        {
            "question": "2 &lt; 3 ?",
            "options": ["yes", "no"],
            "correctAnswerIndex": 0,
            "explanation": "Tom &amp; Jerry",
        },
        {
            "question": "Capital of France?",
            "options": ["Berlin", "Paris", "Rome"],
            "correctAnswerIndex": 1,
        },
    ]
