"""스케줄러 오케스트레이션.

APScheduler로 플랫폼별 주기 수집을 자동화한다.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from trendr.application.use_cases.orchestrator import CollectionOrchestrator
from trendr.domain.exceptions import AlreadyRunningError, ConfigurationError

logger = logging.getLogger(__name__)


class CollectionScheduler:
    """주기 수집 작업 스케줄러."""

    def __init__(
        self,
        orchestrator: CollectionOrchestrator,
        intervals: dict[str, int],
        timezone: str = "UTC",
    ):
        self._orchestrator = orchestrator
        self._intervals = intervals
        self._tz = ZoneInfo(timezone)
        self.scheduler = AsyncIOScheduler(timezone=self._tz)

    def setup_jobs(self) -> None:
        """활성화된 플랫폼마다 수집 작업을 등록."""
        for platform, minutes in self._intervals.items():
            if platform not in self._orchestrator.platforms:
                continue
            self.scheduler.add_job(
                self._run_collection,
                trigger=IntervalTrigger(minutes=minutes),
                args=[platform],
                id=f"collect_{platform}",
                name=f"Collect {platform}",
                max_instances=1,
                misfire_grace_time=300,
            )
            logger.info(f"수집 작업 등록: {platform} (매 {minutes}분)")

    def start(self) -> None:
        self.scheduler.start()
        logger.info("스케줄러 시작됨")

    def stop(self) -> None:
        self.scheduler.shutdown(wait=False)
        logger.info("스케줄러 종료됨")

    def next_run_at(self) -> Optional[datetime]:
        # 시작 전(pending) 작업에는 next_run_time이 없다
        times = [
            job.next_run_time
            for job in self.scheduler.get_jobs()
            if getattr(job, "next_run_time", None)
        ]
        return min(times) if times else None

    async def _run_collection(self, platform: str) -> None:
        logger.info(f"[scheduler] 수집 시작: {platform}")
        try:
            result = await self._orchestrator.run(platform)
            logger.info(
                f"[scheduler] 수집 완료: {platform}, "
                f"{result.posts_collected}건, 토픽 링크 {result.topics_extracted}개"
            )
        except AlreadyRunningError:
            logger.info(f"[scheduler] 다른 수집이 진행 중이라 건너뜀: {platform}")
        except ConfigurationError as e:
            logger.warning(f"[scheduler] {platform} 설정 오류: {e}")
        except Exception as e:
            logger.error(f"[scheduler] 수집 오류 {platform}: {e}")
