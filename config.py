import os

# 기본 디렉토리 설정
BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# 경로 설정
LOG_FILE = os.path.join(BASE_DIR, "launch.log")
DATA_DIR = os.getenv("QUIZ_DATA_DIR", os.path.join(BASE_DIR, ".quiz_progress"))  # 진행 상태 스냅샷 보관
QUIZ_DATA_FILE = os.getenv("QUIZ_DATA_FILE") or None  # 문제 JSON (없으면 샘플 문제)

# 서버 설정
DEFAULT_HOST = os.getenv("HOST", "127.0.0.1")
DEFAULT_PORT = int(os.getenv("PORT", "8000"))

# 진행 상태 저장 설정
STORAGE_KEY = "quiz_progress"

# 타이머 설정
TICK_INTERVAL_SECONDS = 1.0

# 세션 설정
SESSION_TTL = 3600              # 1시간
SESSION_CLEANUP_INTERVAL = 300  # 만료 세션 정리 주기 (5분)
