import re
from datetime import datetime, timezone
from typing import Optional


def normalize_text(primary: str, secondary: Optional[str] = None) -> str:
    """제목과 본문을 빈 줄로 이어 붙이고 앞뒤 공백을 제거한다.

    본문이 없으면 빈 문자열로 취급하므로 끝에 빈 줄이 남지 않는다.
    """
    return f"{primary or ''}\n\n{secondary or ''}".strip()


def to_iso_utc(value: Optional[datetime]) -> Optional[str]:
    """datetime을 플랫폼과 무관한 ISO-8601 UTC 문자열(YYYY-MM-DDTHH:MM:SSZ)로."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    """'Z' 접미사와 소수 초를 포함한 ISO-8601 문자열을 aware datetime으로."""
    if not value:
        return None
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def slugify(text: str) -> str:
    """소문자화 후 영숫자가 아닌 문자를 '-' 하나로 접는다."""
    return "-".join(part for part in re.split(r"[\W_]+", text.lower()) if part)
