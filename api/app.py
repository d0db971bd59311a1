"""
api/app.py — FastAPI 앱 인스턴스 + 세션 미들웨어
"""

import logging
import re
import threading
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from config import DATA_DIR, QUIZ_DATA_FILE, SESSION_CLEANUP_INTERVAL
from api.routes import router
from api.sample_questions import SAMPLE_QUESTIONS
from api.session import SessionRegistry
from quiz_widget.models.question_model import QuestionSet
from quiz_widget.services.progress_store import JsonFileStorage, KeyValueStorage
from quiz_widget.services.question_loader import load_question_set, load_question_set_from_file
from quiz_widget.services.timer_clock import TickScheduler

SESSION_COOKIE = "quiz_session"
_SID_PATTERN = re.compile(r"^[0-9a-f]{32}$")

logger = logging.getLogger(__name__)


def load_default_questions() -> QuestionSet:
    """QUIZ_DATA_FILE 이 설정되어 있으면 그 파일, 아니면 샘플 문제. 잘못된 데이터는 InvalidDataError."""
    if QUIZ_DATA_FILE:
        logger.info(f"문제 파일 로드: {QUIZ_DATA_FILE}")
        return load_question_set_from_file(QUIZ_DATA_FILE)
    return load_question_set(SAMPLE_QUESTIONS)


def create_app(
    question_set: Optional[QuestionSet] = None,
    storage: Optional[KeyValueStorage] = None,
    scheduler: Optional[TickScheduler] = None,
    cleanup_loop: bool = True,
) -> FastAPI:
    questions = question_set if question_set is not None else load_default_questions()
    registry = SessionRegistry(
        questions,
        storage if storage is not None else JsonFileStorage(DATA_DIR),
        scheduler=scheduler,
    )

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        yield
        registry.close_all()

    app = FastAPI(title="Quiz Widget", docs_url=None, redoc_url=None, lifespan=lifespan)
    app.state.registry = registry

    # CORS (위젯을 임베드하는 다양한 출처 허용)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 세션 미들웨어: 쿠키에서 세션 ID를 읽고, 없으면 새로 발급
    # 서버 재시작으로 사라진 세션은 같은 ID로 다시 만들어 저장된 진행 상태를 이어받는다
    @app.middleware("http")
    async def session_middleware(request: Request, call_next):
        sid = request.cookies.get(SESSION_COOKIE)
        if not sid or not _SID_PATTERN.match(sid):
            sid = registry.create_session()
        elif registry.get_session(sid) is None:
            registry.create_session(sid)

        request.state.session_id = sid
        response: Response = await call_next(request)
        response.set_cookie(
            key=SESSION_COOKIE,
            value=sid,
            httponly=True,
            samesite="lax",
            max_age=int(registry.ttl),
        )
        return response

    app.include_router(router)

    # 만료 세션 주기적 정리 (5분마다)
    if cleanup_loop:
        def _cleanup_loop():
            while True:
                time.sleep(SESSION_CLEANUP_INTERVAL)
                removed = registry.cleanup_expired()
                if removed:
                    logger.info(f"만료 세션 {removed}개 정리")

        t = threading.Thread(target=_cleanup_loop, daemon=True)
        t.start()

    return app
