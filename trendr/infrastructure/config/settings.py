from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic_settings import BaseSettings

from trendr.domain.value_objects.platform import PLATFORMS
from trendr.infrastructure.config.defaults import DEFAULT_TARGETS, DEFAULT_TOPICS


# ──────────────────────────────────────────
# 환경변수 기반 시크릿 설정 (.env)
# ──────────────────────────────────────────
class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///trendr.db"
    log_level: str = "INFO"
    http_timeout_seconds: float = 15.0

    # Reddit (OAuth password grant)
    reddit_client_id: str = ""
    reddit_client_secret: str = ""
    reddit_username: str = ""
    reddit_password: str = ""

    # X API v2
    x_bearer_token: str = ""

    # YouTube Data API v3
    youtube_api_key: str = ""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


# ──────────────────────────────────────────
# YAML 기반 앱 설정 (config/settings.yaml)
# ──────────────────────────────────────────
class CollectorConfig:
    def __init__(self, data: dict[str, Any], default_targets: list[str] | None = None):
        self.enabled: bool = data.get("enabled", True)
        self.interval_minutes: int = data.get("interval_minutes", 30)
        targets = data.get("targets", default_targets or [])
        self.targets: list[str] = [str(t) for t in targets or []]


class TopicConfig:
    def __init__(self, data: dict[str, Any]):
        self.name: str = data["name"]
        self.keywords: list[str] = data.get("keywords", [])
        self.aliases: list[str] = data.get("aliases", [])
        self.parent: str | None = data.get("parent")


class WebConfig:
    def __init__(self, data: dict[str, Any]):
        self.host: str = data.get("host", "127.0.0.1")
        self.port: int = data.get("port", 8000)


class AppConfig:
    """YAML에서 로드된 전체 앱 설정."""

    def __init__(self, data: dict[str, Any]):
        self.name: str = data.get("app", {}).get("name", "Trendr")
        self.timezone: str = data.get("app", {}).get("timezone", "UTC")

        collection = data.get("collection", {}) or {}
        self.max_retries: int = collection.get("max_retries", 3)
        self.collectors: dict[str, CollectorConfig] = {
            platform: CollectorConfig(
                collection.get(platform, {}) or {},
                default_targets=DEFAULT_TARGETS.get(platform, []),
            )
            for platform in PLATFORMS
        }

        self.topics: list[TopicConfig] = [
            TopicConfig(t) for t in data.get("topics") or DEFAULT_TOPICS
        ]

        self.web = WebConfig(data.get("web", {}))


def load_app_config(path: str = "config/settings.yaml") -> AppConfig:
    """YAML 설정 파일을 로드하여 AppConfig를 반환."""
    config_path = Path(path)
    if not config_path.exists():
        return AppConfig({})
    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return AppConfig(data)
