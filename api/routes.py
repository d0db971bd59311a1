"""
api/routes.py — FastAPI 엔드포인트

렌더러(브라우저 위젯)는 변경 요청 후 응답으로 받은 상태를 그대로 다시 그린다.
"""

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from quiz_widget.errors import InvalidStateError, PreconditionError
from quiz_widget.models.question_model import Question
from quiz_widget.services.quiz_session import QuizSession
from quiz_widget.services.scoring_service import build_review_details, score
from quiz_widget.services.timer_clock import format_time

router = APIRouter()

# ── Pydantic request bodies ──────────────────────────────────────────────────

class StartBody(BaseModel):
    fresh: bool = True

class AnswerBody(BaseModel):
    option_index: int

class NavigateBody(BaseModel):
    index: int = 0

class SubmitBody(BaseModel):
    confirmed: bool = False


# ── 헬퍼 ─────────────────────────────────────────────────────────────────────

def _quiz(request: Request) -> QuizSession:
    quiz = request.app.state.registry.get_session(request.state.session_id)
    if quiz is None:
        raise HTTPException(status_code=404, detail="퀴즈 세션이 없습니다.")
    return quiz


def _question_to_dict(q: Question) -> dict:
    return {
        "question": q.text,
        "options": list(q.options),
        "explanation": q.explanation,
    }


def _state(quiz: QuizSession) -> dict:
    d = quiz.view().model_dump(mode="json")
    d["elapsed_display"] = format_time(quiz.elapsed_seconds)
    return d


# ── 엔드포인트 ───────────────────────────────────────────────────────────────

@router.get("/api/quiz-info")
async def quiz_info(request: Request):
    quiz = _quiz(request)
    return {
        "question_count": len(quiz.questions),
        "has_saved_progress": quiz.has_saved_progress(),
        "phase": quiz.phase.value,
    }


@router.post("/api/start")
async def start_quiz(body: StartBody, request: Request):
    quiz = _quiz(request)
    try:
        quiz.start(fresh=body.fresh)
    except InvalidStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _state(quiz)


@router.get("/api/state")
async def get_state(request: Request):
    return _state(_quiz(request))


@router.get("/api/question/{index}")
async def get_question(index: int, request: Request):
    quiz = _quiz(request)
    if not quiz.questions.is_valid_index(index):
        raise HTTPException(status_code=404, detail="문제를 찾을 수 없습니다.")

    d = _question_to_dict(quiz.questions[index])
    # 제출 전에는 정답을 노출하지 않는다
    if quiz.submitted:
        d["correct_answer_index"] = quiz.questions[index].correct_answer_index
    else:
        d.pop("explanation")
    d.update({
        "saved_answer": quiz.answers.get(index),
        "index": index,
        "total": len(quiz.questions),
    })
    return d


@router.post("/api/answer")
async def select_answer(body: AnswerBody, request: Request):
    quiz = _quiz(request)
    try:
        accepted = quiz.select_answer(body.option_index)
    except InvalidStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return {"accepted": accepted, **_state(quiz)}


@router.post("/api/navigate")
async def navigate(body: NavigateBody, request: Request):
    quiz = _quiz(request)
    try:
        quiz.navigate_to(body.index)
    except InvalidStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _state(quiz)


@router.post("/api/next")
async def next_question(request: Request):
    quiz = _quiz(request)
    try:
        quiz.next_question()
    except InvalidStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _state(quiz)


@router.post("/api/previous")
async def previous_question(request: Request):
    quiz = _quiz(request)
    try:
        quiz.previous_question()
    except InvalidStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _state(quiz)


@router.post("/api/submit")
async def submit_quiz(body: SubmitBody, request: Request):
    quiz = _quiz(request)
    try:
        quiz.submit(confirm=lambda: body.confirmed)
    except InvalidStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _state(quiz)


@router.get("/api/results")
async def get_results(request: Request):
    quiz = _quiz(request)
    try:
        summary = score(quiz)
    except PreconditionError as e:
        raise HTTPException(status_code=409, detail=str(e))

    d = summary.model_dump()
    d["time_taken_display"] = format_time(summary.time_taken_seconds)
    d["review_details"] = build_review_details(quiz.questions, summary)
    return d


@router.post("/api/restart")
async def restart_quiz(request: Request):
    quiz = _quiz(request)
    quiz.restart()
    return _state(quiz)
