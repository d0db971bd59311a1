"""
main.py — 퀴즈 위젯 서버 진입점
"""

import os
import sys
import logging

# ── 패키지 경로 설정 (반드시 최상단) ──────────────────────────────────────────
# 실행 경로를 BASE_DIR로 설정하고 quiz_widget 을 모듈 경로에 추가합니다.
_BASE_DIR = os.path.dirname(os.path.abspath(__file__))
if _BASE_DIR not in sys.path:
    sys.path.insert(0, _BASE_DIR)

from config import BASE_DIR, LOG_FILE, DEFAULT_HOST, DEFAULT_PORT

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    try:
        logging.basicConfig(
            level=logging.INFO,
            format='%(asctime)s [%(levelname)s] %(message)s',
            handlers=[
                logging.FileHandler(LOG_FILE, encoding='utf-8'),
                logging.StreamHandler(sys.stdout)
            ]
        )
    except PermissionError:
        # 로그 파일 점유 시 콘솔 출력만 사용
        logging.basicConfig(level=logging.INFO)


def main() -> None:
    _configure_logging()
    logger.info("=== Quiz Widget Server Started ===")
    os.chdir(BASE_DIR)

    import uvicorn
    from api.app import create_app
    from quiz_widget.errors import InvalidDataError

    try:
        app = create_app()
    except InvalidDataError as e:
        # 잘못된 문제 데이터로는 퀴즈를 시작하지 않는다
        logger.error(f"문제 데이터 오류: {e}")
        sys.exit(1)

    logger.info(f"Uvicorn 서버 시작 - http://{DEFAULT_HOST}:{DEFAULT_PORT}")
    try:
        uvicorn.run(app, host=DEFAULT_HOST, port=DEFAULT_PORT, log_level="warning")
    except KeyboardInterrupt:
        logger.info("사용자에 의해 종료되었습니다.")


if __name__ == "__main__":
    main()
