"""
services/progress_store.py

진행 상태 스냅샷 저장소 (이어풀기용).
Public API:
  - ProgressStore.save(snapshot) -> bool : 최선 노력 저장. 실패는 로그만 남기고 흡수
  - ProgressStore.load() -> Optional[ProgressSnapshot] : 없거나 손상되면 None
  - ProgressStore.clear()                : 멱등 삭제
  - ProgressStore.exists() -> bool       : "이어서 풀기" 표시 여부 판단용

실제 저장 매체는 KeyValueStorage 포트로 분리.
  - MemoryStorage   : 프로세스 메모리 (테스트, 임베딩)
  - JsonFileStorage : 디렉토리 내 키별 JSON 파일 (임시 파일 + os.replace 로 원자적 기록)
"""

import logging
import os
import re
import tempfile
import threading
from typing import Dict, Optional

from pydantic import ValidationError

from config import STORAGE_KEY
from quiz_widget.models.session_state import ProgressSnapshot

logger = logging.getLogger(__name__)

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class KeyValueStorage:
    """문자열 키-값 저장소 포트. 구현체는 실패 시 OSError 를 던질 수 있다."""

    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove_item(self, key: str) -> None:
        raise NotImplementedError


class MemoryStorage(KeyValueStorage):
    def __init__(self) -> None:
        self._items: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._items[key] = value

    def remove_item(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)


class JsonFileStorage(KeyValueStorage):
    """키 하나당 `<directory>/<key>.json` 파일 하나."""

    def __init__(self, directory: str) -> None:
        self.directory = directory

    def _path(self, key: str) -> str:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"사용할 수 없는 저장 키입니다: {key!r}")
        return os.path.join(self.directory, f"{key}.json")

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not os.path.exists(path):
            return None
        with open(path, encoding="utf-8") as f:
            return f.read()

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        os.makedirs(self.directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_path, path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def remove_item(self, key: str) -> None:
        path = self._path(key)
        try:
            os.remove(path)
        except FileNotFoundError:
            pass


class ProgressStore:
    """하나의 이름 붙은 슬롯에 ProgressSnapshot 을 JSON 으로 보관한다."""

    def __init__(self, storage: KeyValueStorage, key: str = STORAGE_KEY) -> None:
        self._storage = storage
        self.key = key

    def save(self, snapshot: ProgressSnapshot) -> bool:
        try:
            self._storage.set_item(self.key, snapshot.to_json())
            return True
        except (OSError, ValueError) as e:
            logger.warning(f"진행 상태 저장 실패 ({self.key}): {e}")
            return False

    def load(self) -> Optional[ProgressSnapshot]:
        try:
            raw = self._storage.get_item(self.key)
        except (OSError, ValueError, UnicodeDecodeError) as e:
            logger.warning(f"진행 상태 읽기 실패 ({self.key}): {e}")
            return None
        if raw is None:
            return None
        try:
            return ProgressSnapshot.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"손상된 진행 상태 무시 ({self.key}): {e.error_count()}개 오류")
            return None

    def clear(self) -> None:
        try:
            self._storage.remove_item(self.key)
        except (OSError, ValueError) as e:
            logger.warning(f"진행 상태 삭제 실패 ({self.key}): {e}")

    def exists(self) -> bool:
        try:
            return self._storage.get_item(self.key) is not None
        except (OSError, ValueError, UnicodeDecodeError) as e:
            logger.warning(f"진행 상태 확인 실패 ({self.key}): {e}")
            return False
