from __future__ import annotations

from typing import Any, Protocol


class CredentialProvider(Protocol):
    """플랫폼별 자격 증명과 수집 대상을 제공. 읽기 전용."""

    def get_credentials(self, platform: str) -> Any | None: ...

    def get_targets(self, platform: str) -> list[str]: ...
