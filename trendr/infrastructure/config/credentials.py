"""환경변수/YAML 설정 기반 CredentialProvider 구현."""

from __future__ import annotations

from typing import Any, Optional

from trendr.domain.value_objects.platform import REDDIT, X, YOUTUBE
from trendr.infrastructure.collectors.reddit_adapter import RedditCredentials
from trendr.infrastructure.collectors.x_adapter import XCredentials
from trendr.infrastructure.collectors.youtube_adapter import YouTubeCredentials
from trendr.infrastructure.config.settings import AppConfig, Settings


class SettingsCredentialProvider:
    """자격 증명은 Settings(.env)에서, 수집 대상은 AppConfig(YAML)에서 읽는다.

    필드 중 하나라도 비어 있으면 자격 증명이 없는 것으로 본다.
    """

    def __init__(self, settings: Settings, app_config: AppConfig):
        self._settings = settings
        self._app_config = app_config

    def get_credentials(self, platform: str) -> Optional[Any]:
        s = self._settings
        if platform == REDDIT:
            fields = (s.reddit_client_id, s.reddit_client_secret, s.reddit_username, s.reddit_password)
            if not all(f.strip() for f in fields):
                return None
            return RedditCredentials(*(f.strip() for f in fields))
        if platform == X:
            if not s.x_bearer_token.strip():
                return None
            return XCredentials(bearer_token=s.x_bearer_token.strip())
        if platform == YOUTUBE:
            if not s.youtube_api_key.strip():
                return None
            return YouTubeCredentials(api_key=s.youtube_api_key.strip())
        return None

    def get_targets(self, platform: str) -> list[str]:
        collector = self._app_config.collectors.get(platform)
        if collector is None:
            return []
        return [t.strip() for t in collector.targets if t.strip()]
