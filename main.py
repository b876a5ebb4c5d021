"""Trendr: 수집 & 토픽 태깅 파이프라인 엔트리포인트.

1. 설정 로드 (.env + config/settings.yaml)
2. 데이터베이스 초기화 (SQLAlchemy, 기본 aiosqlite)
3. 의존성 컨테이너 조립
4. 기본 토픽 시드
5. 스케줄러 시작
6. 웹 서버 시작
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import uvicorn

from trendr.domain.exceptions import DomainError
from trendr.domain.value_objects.platform import PLATFORMS
from trendr.infrastructure.config.container import Container
from trendr.infrastructure.config.settings import AppConfig, Settings, load_app_config
from trendr.infrastructure.database.engine import init_database
from trendr.presentation.web.app import create_app

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    Path("logs").mkdir(exist_ok=True)
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler("logs/app.log", encoding="utf-8"),
        ],
    )


async def build_container(settings: Settings, config: AppConfig) -> Container:
    """DB 초기화, 컨테이너 조립, 토픽 시드."""
    db = await init_database(settings.database_url)
    container = Container(settings=settings, app_config=config, db=db)
    await container.seed_topics_use_case().execute(container.topic_seeds())
    return container


async def run_server(settings: Settings, config: AppConfig, no_scheduler: bool = False) -> None:
    """메인 서버 실행."""
    container = await build_container(settings, config)

    # 스케줄러
    scheduler = None
    if not no_scheduler:
        scheduler = container.create_scheduler()
        scheduler.setup_jobs()
        scheduler.start()

    # 웹 서버
    app = create_app(container)
    server_config = uvicorn.Config(
        app,
        host=config.web.host,
        port=config.web.port,
        log_level="info",
    )
    server = uvicorn.Server(server_config)

    logger.info(
        f"서버 시작: http://{config.web.host}:{config.web.port} "
        f"(스케줄러: {'ON' if scheduler else 'OFF'})"
    )

    try:
        await server.serve()
    finally:
        if scheduler:
            scheduler.stop()
        await container.db.dispose()


async def run_collect_now(settings: Settings, config: AppConfig, platforms: list[str]) -> int:
    """지정한 플랫폼을 즉시 수집 실행. 실패한 플랫폼이 있으면 1 반환."""
    container = await build_container(settings, config)
    exit_code = 0
    try:
        for platform in platforms:
            if platform not in container.orchestrator.platforms:
                print(f"'{platform}' 어댑터가 등록되지 않았습니다 (비활성화 또는 알 수 없는 플랫폼).")
                exit_code = 1
                continue

            print(f"[{platform}] 수집 시작...")
            try:
                result = await container.orchestrator.run(platform)
                print(
                    f"[{platform}] 완료: 신규 {result.posts_collected}건, "
                    f"토픽 링크 {result.topics_extracted}개"
                )
            except DomainError as e:
                print(f"[{platform}] 오류: {e}")
                exit_code = 1
    finally:
        await container.db.dispose()
    return exit_code


async def run_test_connection(settings: Settings, config: AppConfig, platform: str) -> int:
    container = await build_container(settings, config)
    try:
        ok = await container.orchestrator.test_connection(platform)
        print(f"[{platform}] 연결 {'성공' if ok else '실패'}")
        return 0 if ok else 1
    except (ValueError, DomainError) as e:
        print(f"[{platform}] 연결 실패: {e}")
        return 1
    finally:
        await container.db.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Trendr 수집 & 토픽 태깅 파이프라인")
    subparsers = parser.add_subparsers(dest="command", help="실행 명령")

    # serve 명령
    serve_parser = subparsers.add_parser("serve", help="서버 시작 (스케줄 수집 + API)")
    serve_parser.add_argument("--no-scheduler", action="store_true", help="스케줄러 없이 시작 (API만)")

    # collect-now 명령
    collect_parser = subparsers.add_parser("collect-now", help="즉시 수집 실행")
    collect_parser.add_argument(
        "platforms", nargs="*", default=list(PLATFORMS),
        help="수집할 플랫폼 (기본: 전부)",
    )

    # test-connection 명령
    test_parser = subparsers.add_parser("test-connection", help="플랫폼 자격 증명 확인")
    test_parser.add_argument("platform", choices=list(PLATFORMS))

    args = parser.parse_args()

    settings = Settings()
    config = load_app_config()
    setup_logging(settings.log_level)

    if args.command == "serve":
        asyncio.run(run_server(settings, config, args.no_scheduler))
    elif args.command == "collect-now":
        sys.exit(asyncio.run(run_collect_now(settings, config, args.platforms)))
    elif args.command == "test-connection":
        sys.exit(asyncio.run(run_test_connection(settings, config, args.platform)))
    else:
        parser.print_help()
        print("\n사용 방법:")
        print("  1. .env에 플랫폼 자격 증명 설정 (.env.example 참고)")
        print("  2. config/settings.yaml에서 수집 대상과 주기 설정")
        print("  3. 시스템 시작:")
        print("     python main.py serve                    # 전체 시작")
        print("     python main.py collect-now              # 전체 즉시 수집")
        print("     python main.py collect-now reddit       # 레딧만 즉시 수집")
        print("     python main.py test-connection x        # X 자격 증명 확인")


if __name__ == "__main__":
    main()
