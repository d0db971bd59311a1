"""
services/quiz_session.py

퀴즈 세션 상태 머신.

상태: NOT_STARTED → IN_PROGRESS → SUBMITTED (종료)
  - start(fresh)         : 새로 시작 또는 저장된 스냅샷에서 이어풀기
  - select_answer(i)     : 현재 문제 답 기록 (마지막 선택만 유지) + 스냅샷 저장
  - navigate_to(i)       : 범위 밖 요청은 조용히 무시
  - submit(confirm)      : 타이머 정지, 제출 처리, 스냅샷 삭제
  - restart()            : 어느 상태에서든 NOT_STARTED 로 초기화 (문제 목록 유지)

잘못된 상태에서의 호출은 InvalidStateError 로 거부되며 상태를 바꾸지 않는다.
UI 코드 없음. 렌더러는 view() 를 읽는다.
"""

import logging
from typing import Callable, Dict, Optional

from quiz_widget.errors import AlreadySubmittedError, InvalidStateError
from quiz_widget.models.question_model import Question, QuestionSet
from quiz_widget.models.session_state import ProgressSnapshot, QuizPhase, SessionView
from quiz_widget.services.progress_store import ProgressStore
from quiz_widget.services.timer_clock import TickScheduler, TimerClock

logger = logging.getLogger(__name__)


class QuizSession:
    """
    위젯 인스턴스당 하나의 퀴즈 세션.

    Args:
        questions: 검증된 문제 목록 (공유, 읽기 전용).
        store:     진행 상태 저장소.
        scheduler: 타이머 틱 발생원. None 이면 스레드 기반 스케줄러.
        observer:  변경/틱마다 SessionView 를 받는 콜백 (렌더러).
    """

    def __init__(
        self,
        questions: QuestionSet,
        store: ProgressStore,
        scheduler: Optional[TickScheduler] = None,
        observer: Optional[Callable[[SessionView], None]] = None,
    ) -> None:
        self.questions = questions
        self._store = store
        self._observer = observer
        self._clock = TimerClock(scheduler, on_tick=self._on_tick)
        self._phase = QuizPhase.NOT_STARTED
        self._current_index = 0
        self._answers: Dict[int, int] = {}

    # ── 읽기 전용 상태 ─────────────────────────────────────────────────────

    @property
    def phase(self) -> QuizPhase:
        return self._phase

    @property
    def started(self) -> bool:
        return self._phase is not QuizPhase.NOT_STARTED

    @property
    def submitted(self) -> bool:
        return self._phase is QuizPhase.SUBMITTED

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def answers(self) -> Dict[int, int]:
        return dict(self._answers)

    @property
    def elapsed_seconds(self) -> int:
        return self._clock.elapsed_seconds

    @property
    def current_question(self) -> Question:
        return self.questions[self._current_index]

    @property
    def has_previous(self) -> bool:
        return self._current_index > 0

    @property
    def has_next(self) -> bool:
        return self._current_index < len(self.questions) - 1

    def has_saved_progress(self) -> bool:
        return self._store.exists()

    def view(self) -> SessionView:
        total = len(self.questions)
        answered = len(self._answers)
        return SessionView(
            phase=self._phase,
            current_index=self._current_index,
            answers=dict(self._answers),
            elapsed_seconds=self._clock.elapsed_seconds,
            started=self.started,
            submitted=self.submitted,
            total=total,
            answered_count=answered,
            progress_percent=answered / total * 100,
            has_previous=self.has_previous,
            has_next=self.has_next,
        )

    # ── 명령 ───────────────────────────────────────────────────────────────

    def start(self, fresh: bool = True) -> None:
        if self._phase is QuizPhase.SUBMITTED:
            raise AlreadySubmittedError("제출된 퀴즈입니다. restart() 후 다시 시작하세요.")
        if self._phase is QuizPhase.IN_PROGRESS:
            raise InvalidStateError("이미 진행 중인 퀴즈입니다.")

        self._reset_fields()
        if fresh:
            self._store.clear()
        else:
            snapshot = self._store.load()
            if snapshot is None:
                logger.info("저장된 진행 상태 없음 — 처음부터 시작")
            else:
                self._apply_snapshot(snapshot)

        self._phase = QuizPhase.IN_PROGRESS
        self._clock.start()
        logger.info(
            f"퀴즈 시작 (fresh={fresh}, index={self._current_index}, "
            f"answered={len(self._answers)}, elapsed={self._clock.elapsed_seconds}s)"
        )
        self._notify()

    def select_answer(self, option_index: int) -> bool:
        """현재 문제에 답을 기록. 범위 밖 보기는 무시하고 False 를 반환."""
        self._require_in_progress("select_answer")
        if not self.questions.is_valid_answer(self._current_index, option_index):
            logger.debug(f"Q{self._current_index}: 범위 밖 보기 무시 — {option_index!r}")
            return False

        self._answers[self._current_index] = option_index
        self._store.save(self._snapshot())
        self._notify()
        return True

    def navigate_to(self, index: int) -> bool:
        self._require_in_progress("navigate_to")
        if not self.questions.is_valid_index(index):
            return False
        self._current_index = index
        self._notify()
        return True

    def next_question(self) -> bool:
        self._require_in_progress("next_question")
        return self.navigate_to(self._current_index + 1)

    def previous_question(self) -> bool:
        self._require_in_progress("previous_question")
        return self.navigate_to(self._current_index - 1)

    def submit(self, confirm: Optional[Callable[[], bool]] = None) -> bool:
        """
        최종 제출.

        Args:
            confirm: UI 가 소유한 예/아니오 확인 콜백. False 를 돌려주면 아무 일도 일어나지 않는다.

        Returns:
            제출되었으면 True.
        """
        self._require_in_progress("submit")
        if confirm is not None and not confirm():
            return False

        # 타이머를 먼저 멈춰야 제출 시점의 경과 시간이 고정된다
        self._clock.stop()
        self._phase = QuizPhase.SUBMITTED
        self._store.clear()
        logger.info(
            f"퀴즈 제출 (answered={len(self._answers)}/{len(self.questions)}, "
            f"elapsed={self._clock.elapsed_seconds}s)"
        )
        self._notify()
        return True

    def restart(self) -> None:
        self._clock.reset()
        self._store.clear()
        self._reset_fields()
        self._phase = QuizPhase.NOT_STARTED
        self._notify()

    def close(self) -> None:
        """타이머만 정지. 상태와 저장된 스냅샷은 건드리지 않는다."""
        self._clock.stop()

    # ── 내부 ───────────────────────────────────────────────────────────────

    def _require_in_progress(self, operation: str) -> None:
        if self._phase is not QuizPhase.IN_PROGRESS:
            raise InvalidStateError(f"{operation}: 진행 중이 아닙니다 (현재 상태: {self._phase.value}).")

    def _reset_fields(self) -> None:
        self._current_index = 0
        self._answers = {}
        self._clock.reset()

    def _apply_snapshot(self, snapshot: ProgressSnapshot) -> None:
        """다른 크기의 문제 목록에서 저장된 스냅샷일 수 있으므로 범위를 맞춘다."""
        total = len(self.questions)
        self._current_index = min(max(snapshot.current_index, 0), total - 1)

        answers = {
            q_idx: opt_idx
            for q_idx, opt_idx in snapshot.answers.items()
            if self.questions.is_valid_answer(q_idx, opt_idx)
        }
        dropped = len(snapshot.answers) - len(answers)
        if dropped:
            logger.warning(f"범위 밖 저장 답안 {dropped}개 제외")
        self._answers = answers
        self._clock.restore(snapshot.elapsed_seconds)

    def _snapshot(self) -> ProgressSnapshot:
        return ProgressSnapshot(
            answers=dict(self._answers),
            current_index=self._current_index,
            elapsed_seconds=self._clock.elapsed_seconds,
            started=True,
        )

    def _on_tick(self, elapsed_seconds: int) -> None:
        self._notify()

    def _notify(self) -> None:
        if self._observer is not None:
            self._observer(self.view())
