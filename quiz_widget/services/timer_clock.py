"""
services/timer_clock.py

경과 시간 타이머 (초 단위, 드리프트 보정 없음).

틱 발생원은 TickScheduler 포트로 분리되어 있다.
  - ThreadTickScheduler : 데몬 스레드에서 interval 마다 콜백 호출 (실서비스)
  - 테스트는 수동 스케줄러로 틱을 동기적으로 발생시킨다
"""

import logging
import threading
import time
from typing import Callable, Optional

from config import TICK_INTERVAL_SECONDS

logger = logging.getLogger(__name__)


class TickHandle:
    """예약된 틱 발생원. cancel() 이후에는 콜백이 호출되지 않는다."""

    def cancel(self) -> None:
        raise NotImplementedError


class TickScheduler:
    """interval 초마다 콜백을 호출해 달라는 요청을 받는 포트."""

    def schedule(self, interval: float, callback: Callable[[], None]) -> TickHandle:
        raise NotImplementedError


class _ThreadTickHandle(TickHandle):
    def __init__(self, interval: float, callback: Callable[[], None]) -> None:
        self._interval = interval
        self._callback = callback
        self._stopped = threading.Event()
        self._thread = threading.Thread(target=self._loop, daemon=True)
        self._thread.start()

    def _loop(self) -> None:
        while not self._stopped.wait(self._interval):
            if self._stopped.is_set():
                break
            try:
                self._callback()
            except Exception:
                logger.exception("타이머 콜백 오류")

    def cancel(self) -> None:
        self._stopped.set()


class ThreadTickScheduler(TickScheduler):
    def schedule(self, interval: float, callback: Callable[[], None]) -> TickHandle:
        return _ThreadTickHandle(interval, callback)


class TimerClock:
    """
    start / stop / restore 를 지원하는 경과 시간 타이머.

    취소된 틱 발생원의 콜백이 늦게 도착해도 무시한다 (세대 번호로 구분).
    stop() 이 반환된 뒤에는 elapsed_seconds 가 바뀌지 않는다.

    Attributes:
        elapsed_seconds: 누적 경과 시간 (초). tick() 만 증가시킨다.
        started_at:      최초 start() 시각 (time.time() 기준 Unix timestamp).
    """

    def __init__(
        self,
        scheduler: Optional[TickScheduler] = None,
        on_tick: Optional[Callable[[int], None]] = None,
        interval: float = TICK_INTERVAL_SECONDS,
    ) -> None:
        self._scheduler = scheduler or ThreadTickScheduler()
        self._on_tick = on_tick
        self._interval = interval
        self._lock = threading.Lock()
        self._handle: Optional[TickHandle] = None
        self._generation = 0
        self.elapsed_seconds = 0
        self.started_at: Optional[float] = None

    @property
    def is_running(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        with self._lock:
            if self.started_at is None:
                self.started_at = time.time()
            # 기존 틱 발생원은 반드시 먼저 취소 (동시 틱 금지)
            self._cancel_handle()
            generation = self._generation
            self._handle = self._scheduler.schedule(
                self._interval, lambda: self._scheduled_tick(generation)
            )

    def tick(self) -> None:
        with self._lock:
            self.elapsed_seconds += 1
            elapsed = self.elapsed_seconds
        self._emit(elapsed)

    def stop(self) -> None:
        with self._lock:
            self._cancel_handle()

    def restore(self, seconds: int) -> None:
        if seconds < 0:
            raise ValueError(f"경과 시간은 음수일 수 없습니다: {seconds}")
        with self._lock:
            self.elapsed_seconds = int(seconds)

    def reset(self) -> None:
        with self._lock:
            self._cancel_handle()
            self.elapsed_seconds = 0
            self.started_at = None

    def _scheduled_tick(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._handle is None:
                return
            self.elapsed_seconds += 1
            elapsed = self.elapsed_seconds
        self._emit(elapsed)

    def _emit(self, elapsed: int) -> None:
        # 관찰자는 락 밖에서 호출 (관찰자가 stop() 을 불러도 교착 없음)
        if self._on_tick is not None:
            self._on_tick(elapsed)

    def _cancel_handle(self) -> None:
        self._generation += 1
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


def format_time(seconds: int) -> str:
    """초 → "MM:SS". 60분 이상이면 분이 그대로 늘어난다 (예: 75:03)."""
    minutes = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{minutes:02d}:{secs:02d}"
