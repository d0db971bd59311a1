"""
errors.py

퀴즈 코어 예외 계층.

  - InvalidDataError      : 입력 문제 데이터가 잘못됨 (초기화 중단)
  - InvalidStateError     : 현재 상태에서 허용되지 않는 호출 (호출자 버그)
  - AlreadySubmittedError : 제출 후 start() 호출
  - PreconditionError     : 제출 전 채점 요청

범위 밖 이동, 저장소 실패는 예외가 아니다 (호출 측에서 흡수).
"""


class QuizError(Exception):
    """퀴즈 코어 예외의 공통 부모."""


class InvalidDataError(QuizError, ValueError):
    """문제 데이터 형식 오류."""


class InvalidStateError(QuizError, RuntimeError):
    """잘못된 생명주기 상태에서의 호출. 상태는 변경되지 않는다."""


class AlreadySubmittedError(InvalidStateError):
    """제출 완료된 세션을 restart() 없이 다시 시작하려 함."""


class PreconditionError(QuizError):
    """제출되지 않은 세션에 대한 채점 요청."""
