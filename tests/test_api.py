"""HTTP 호스트 계층 테스트 (FastAPI TestClient)."""
import pytest
from fastapi.testclient import TestClient

from api.app import SESSION_COOKIE, create_app
from quiz_widget.services.progress_store import MemoryStorage


@pytest.fixture
def shared_storage():
    return MemoryStorage()


@pytest.fixture
def make_client(three_questions, shared_storage, scheduler):
    """같은 저장소를 쓰는 새 앱 (서버 재시작 흉내)."""
    def _make():
        app = create_app(
            question_set=three_questions,
            storage=shared_storage,
            scheduler=scheduler,
            cleanup_loop=False,
        )
        return TestClient(app)
    return _make


@pytest.fixture
def client(make_client):
    return make_client()


class TestQuizFlow:

    def test_quiz_info(self, client):
        resp = client.get("/api/quiz-info")

        assert resp.status_code == 200
        assert resp.json() == {"question_count": 3, "has_saved_progress": False, "phase": "not_started"}
        assert SESSION_COOKIE in resp.cookies

    def test_answer_before_start_is_conflict(self, client):
        assert client.post("/api/answer", json={"option_index": 0}).status_code == 409

    def test_full_flow(self, client, scheduler):
        assert client.post("/api/start", json={"fresh": True}).json()["phase"] == "in_progress"

        assert client.post("/api/answer", json={"option_index": 1}).json()["accepted"] is True
        client.post("/api/navigate", json={"index": 1})
        state = client.post("/api/answer", json={"option_index": 3}).json()
        assert state["answered_count"] == 2

        scheduler.fire(65)
        assert client.get("/api/state").json()["elapsed_display"] == "01:05"

        declined = client.post("/api/submit", json={"confirmed": False}).json()
        assert declined["submitted"] is False

        assert client.post("/api/submit", json={"confirmed": True}).json()["submitted"] is True

        results = client.get("/api/results").json()
        assert results["correct_count"] == 1
        assert results["incorrect_count"] == 1
        assert results["unanswered_count"] == 1
        assert results["time_taken_seconds"] == 65
        assert results["time_taken_display"] == "01:05"
        assert results["accuracy_percent"] == 33
        assert results["review_details"][1]["user_answer"] == "D) d"

    def test_out_of_range_answer_not_accepted(self, client):
        client.post("/api/start", json={"fresh": True})

        assert client.post("/api/answer", json={"option_index": 9}).json()["accepted"] is False

    def test_next_previous(self, client):
        client.post("/api/start", json={})

        assert client.post("/api/previous").json()["current_index"] == 0
        assert client.post("/api/next").json()["current_index"] == 1
        assert client.post("/api/navigate", json={"index": 7}).json()["current_index"] == 1

    def test_results_before_submit_is_conflict(self, client):
        client.post("/api/start", json={})

        assert client.get("/api/results").status_code == 409

    def test_second_submit_is_conflict(self, client):
        client.post("/api/start", json={})
        client.post("/api/submit", json={"confirmed": True})

        assert client.post("/api/submit", json={"confirmed": True}).status_code == 409

    def test_restart(self, client):
        client.post("/api/start", json={})
        client.post("/api/answer", json={"option_index": 1})
        client.post("/api/submit", json={"confirmed": True})

        state = client.post("/api/restart").json()

        assert state["phase"] == "not_started"
        assert client.get("/api/quiz-info").json()["has_saved_progress"] is False


class TestQuestionEndpoint:

    def test_hides_answer_until_submitted(self, client):
        client.post("/api/start", json={})

        before = client.get("/api/question/2").json()
        assert "correct_answer_index" not in before
        assert "explanation" not in before
        assert before["options"] == ["a", "b", "c", "d"]

        client.post("/api/submit", json={"confirmed": True})
        after = client.get("/api/question/2").json()
        assert after["correct_answer_index"] == 2
        assert after["explanation"] == "세 번째 보기"

    def test_unknown_index(self, client):
        assert client.get("/api/question/3").status_code == 404


class TestResume:

    def test_resume_after_server_restart(self, client, make_client):
        client.post("/api/start", json={"fresh": True})
        client.post("/api/navigate", json={"index": 2})
        client.post("/api/answer", json={"option_index": 2})
        sid = client.cookies.get(SESSION_COOKIE)

        restarted = make_client()
        restarted.cookies.set(SESSION_COOKIE, sid)

        assert restarted.get("/api/quiz-info").json()["has_saved_progress"] is True
        state = restarted.post("/api/start", json={"fresh": False}).json()
        assert state["current_index"] == 2
        assert state["answers"] == {"2": 2}

    def test_sessions_are_isolated(self, make_client):
        app_client = make_client()
        other = TestClient(app_client.app)

        app_client.post("/api/start", json={})
        app_client.post("/api/answer", json={"option_index": 1})

        assert other.get("/api/quiz-info").json()["has_saved_progress"] is False

    def test_malformed_cookie_gets_new_session(self, client):
        client.cookies.set(SESSION_COOKIE, "../../etc/passwd")
        resp = client.get("/api/quiz-info")

        assert resp.status_code == 200
        assert resp.cookies[SESSION_COOKIE] != "../../etc/passwd"
