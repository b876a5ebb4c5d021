"""테스트용 RawItem 생성 헬퍼."""

from __future__ import annotations

from trendr.domain.entities import RawAuthor, RawItem


def make_item(
    platform_id: str = "p1",
    text: str = "hello world",
    platform: str = "reddit",
    author_id: str = "alice",
    **kwargs,
) -> RawItem:
    author = kwargs.pop("author", None) or RawAuthor(platform_id=author_id, username=author_id)
    return RawItem(
        platform=platform,
        platform_id=platform_id,
        content_type=kwargs.pop("content_type", "post"),
        author=author,
        primary_text=text,
        **kwargs,
    )
