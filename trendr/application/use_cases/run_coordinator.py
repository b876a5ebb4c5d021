"""수집 실행 가드.

프로세스 안에서 동시에 하나의 수집만 돌도록 한다. 대기열이 아니라
즉시 실패하는 check-and-set이다.
"""

from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional

from trendr.domain.entities import CollectionRunState


class RunCoordinator:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._state = CollectionRunState()

    def try_acquire(self) -> bool:
        """가드 획득. 이미 실행 중이면 상태를 건드리지 않고 False."""
        with self._lock:
            if self._state.is_running:
                return False
            self._state.is_running = True
            self._state.last_error = None
            return True

    def release(self, error: Optional[str] = None) -> None:
        """가드 해제와 함께 마지막 실행 시각과 결과를 기록."""
        with self._lock:
            self._state.is_running = False
            self._state.last_run_at = datetime.now(timezone.utc)
            self._state.last_error = error

    def status(self) -> CollectionRunState:
        with self._lock:
            return replace(self._state)
