"""
api/session.py — 브라우저별 인메모리 퀴즈 세션 (쿠키 기반)

각 사용자에게 UUID 세션 ID를 발급하고, 세션별로 독립된 QuizSession 을 유지.
진행 상태는 세션 ID 별 슬롯(quiz_progress_<sid>)에 저장되어 서버 재시작 후에도 이어풀 수 있다.
TTL(기본 1시간) 경과 시 자동 만료 — 타이머만 멈추고 저장된 스냅샷은 남긴다.
"""

import threading
import time
import uuid
from typing import Dict, Optional

from config import SESSION_TTL, STORAGE_KEY
from quiz_widget.models.question_model import QuestionSet
from quiz_widget.services.progress_store import KeyValueStorage, ProgressStore
from quiz_widget.services.quiz_session import QuizSession
from quiz_widget.services.timer_clock import TickScheduler


class SessionRegistry:
    def __init__(
        self,
        questions: QuestionSet,
        storage: KeyValueStorage,
        scheduler: Optional[TickScheduler] = None,
        ttl: float = SESSION_TTL,
    ) -> None:
        self.questions = questions
        self._storage = storage
        self._scheduler = scheduler
        self.ttl = ttl
        self._lock = threading.Lock()
        self._sessions: Dict[str, QuizSession] = {}
        self._timestamps: Dict[str, float] = {}

    def _new_quiz(self, sid: str) -> QuizSession:
        store = ProgressStore(self._storage, key=f"{STORAGE_KEY}_{sid}")
        return QuizSession(self.questions, store, scheduler=self._scheduler)

    def create_session(self, sid: Optional[str] = None) -> str:
        """새 세션을 생성하고 세션 ID를 반환. sid 를 주면 그 ID로 (쿠키 재사용) 생성."""
        sid = sid or uuid.uuid4().hex
        with self._lock:
            self._sessions[sid] = self._new_quiz(sid)
            self._timestamps[sid] = time.time()
        return sid

    def get_session(self, sid: str) -> Optional[QuizSession]:
        """세션 ID로 QuizSession 을 가져옴. 만료되었거나 없으면 None."""
        with self._lock:
            if sid not in self._sessions:
                return None
            if time.time() - self._timestamps[sid] > self.ttl:
                self._sessions.pop(sid).close()
                del self._timestamps[sid]
                return None
            self._timestamps[sid] = time.time()  # 접근 시 갱신
            return self._sessions[sid]

    def cleanup_expired(self) -> int:
        """만료된 세션을 정리. 제거된 수 반환."""
        now = time.time()
        removed = 0
        with self._lock:
            expired = [sid for sid, ts in self._timestamps.items() if now - ts > self.ttl]
            for sid in expired:
                self._sessions.pop(sid).close()
                del self._timestamps[sid]
                removed += 1
        return removed

    def close_all(self) -> None:
        with self._lock:
            for quiz in self._sessions.values():
                quiz.close()
            self._sessions.clear()
            self._timestamps.clear()
