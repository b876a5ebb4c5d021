"""REST API 라우트: 수동 수집 트리거, 실행 상태, 저장된 콘텐츠 조회."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from trendr.domain.entities import Content
from trendr.domain.exceptions import AlreadyRunningError, CollectionError, ConfigurationError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["api"])


def _get_container(request: Request):
    return request.app.state.container


def _unknown_platform(platform: str) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": f"'{platform}' 어댑터가 등록되지 않음"})


def _content_json(c: Content) -> dict:
    return {
        "id": c.id,
        "platform": c.platform,
        "platform_id": c.platform_id,
        "creator_id": c.creator_id,
        "content_type": c.content_type,
        "text_content": c.text_content[:300],
        "engagement": {
            "likes": c.engagement_likes,
            "comments": c.engagement_comments,
            "shares": c.engagement_shares,
            "views": c.engagement_views,
        },
        "published_at": c.published_at,
        "collected_at": c.collected_at.isoformat() if c.collected_at else None,
    }


@router.get("/collect/status")
async def collection_status(request: Request):
    """실행 상태 스냅샷."""
    c = _get_container(request)
    state = c.orchestrator.status()
    next_run = c.scheduler.next_run_at() if c.scheduler else None
    return {
        "is_running": state.is_running,
        "last_run_at": state.last_run_at.isoformat() if state.last_run_at else None,
        "last_error": state.last_error,
        "next_run_at": next_run.isoformat() if next_run else None,
    }


@router.post("/collect/{platform}")
async def trigger_collection(request: Request, platform: str):
    """수동 수집 트리거."""
    c = _get_container(request)
    if platform not in c.orchestrator.platforms:
        return _unknown_platform(platform)
    try:
        result = await c.orchestrator.run(platform)
        return {
            "posts_collected": result.posts_collected,
            "topics_extracted": result.topics_extracted,
        }
    except ConfigurationError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
    except AlreadyRunningError as e:
        return JSONResponse(status_code=409, content={"error": str(e)})
    except Exception as e:
        logger.exception(f"[{platform}] 수동 수집 실패")
        return JSONResponse(status_code=500, content={"error": str(e)})


@router.post("/connections/{platform}/test")
async def test_connection(request: Request, platform: str):
    """플랫폼 자격 증명 확인."""
    c = _get_container(request)
    if platform not in c.orchestrator.platforms:
        return _unknown_platform(platform)
    try:
        ok = await c.orchestrator.test_connection(platform)
        return {"ok": ok, "error": None}
    except (ConfigurationError, CollectionError) as e:
        return {"ok": False, "error": str(e)}


@router.get("/content")
async def recent_content(request: Request, limit: int = 50, offset: int = 0):
    """최근 수집된 콘텐츠."""
    c = _get_container(request)
    items = await c.content_repo.list_recent(limit=limit, offset=offset)
    return {"total": await c.content_repo.count(), "items": [_content_json(i) for i in items]}


@router.get("/topics")
async def list_topics(request: Request):
    c = _get_container(request)
    topics = await c.topic_repo.get_all()
    return [
        {
            "id": t.id,
            "name": t.name,
            "slug": t.slug,
            "parent_topic_id": t.parent_topic_id,
            "keywords": t.keywords,
        }
        for t in topics
    ]


@router.get("/topics/cooccurrences")
async def topic_cooccurrences(request: Request, limit: int = 50):
    """동시 출현 빈도 상위 토픽 쌍."""
    c = _get_container(request)
    pairs = await c.cooccurrence_repo.get_all()
    return [
        {
            "topic_a_id": p.topic_a_id,
            "topic_b_id": p.topic_b_id,
            "frequency": p.frequency,
            "last_seen": p.last_seen.isoformat() if p.last_seen else None,
        }
        for p in pairs[:limit]
    ]


@router.get("/topics/{topic_id}/content")
async def topic_content(request: Request, topic_id: str, limit: int = 20):
    c = _get_container(request)
    items = await c.content_repo.list_by_topic(topic_id, limit=limit)
    return [_content_json(i) for i in items]
