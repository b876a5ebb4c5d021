"""수집 오케스트레이터(설정 검증, 실행 가드, 상태 기록) 테스트."""

import asyncio

import pytest

from trendr.application.use_cases.ingest_content import IngestionResult
from trendr.application.use_cases.orchestrator import CollectionOrchestrator
from trendr.application.use_cases.run_coordinator import RunCoordinator
from trendr.domain.exceptions import AlreadyRunningError, ConfigurationError, NetworkError
from factories import make_item


class StaticCredentials:
    def __init__(self, credentials=None, targets=None):
        self._credentials = credentials or {}
        self._targets = targets or {}

    def get_credentials(self, platform):
        return self._credentials.get(platform)

    def get_targets(self, platform):
        return self._targets.get(platform, [])


class GatedAdapter:
    """gate가 열릴 때까지 fetch_page에서 대기한다."""

    def __init__(self, platform="reddit", items=None, prepare_error=None):
        self._platform = platform
        self._items = items or []
        self._prepare_error = prepare_error
        self.gate = asyncio.Event()
        self.gate.set()
        self.started = asyncio.Event()

    @property
    def platform(self):
        return self._platform

    @property
    def request_delay(self):
        return 0.0

    async def prepare(self, credentials):
        if self._prepare_error:
            raise self._prepare_error

    async def test_connection(self, credentials):
        return credentials == "ok"

    async def fetch_page(self, credentials, target):
        self.started.set()
        await self.gate.wait()
        return list(self._items)


class CountingIngest:
    async def execute(self, item):
        return IngestionResult(created=True, topics_linked=1)


def _orchestrator(adapters, credentials=None, targets=None, coordinator=None):
    return CollectionOrchestrator(
        adapters=adapters,
        credential_provider=StaticCredentials(credentials, targets),
        ingest=CountingIngest(),
        coordinator=coordinator or RunCoordinator(),
    )


@pytest.mark.asyncio
async def test_successful_run_records_state():
    adapter = GatedAdapter(items=[make_item("1"), make_item("2")])
    orch = _orchestrator({"reddit": adapter}, {"reddit": "ok"}, {"reddit": ["a"]})

    result = await orch.run_reddit()

    assert result.posts_collected == 2
    assert result.topics_extracted == 2
    state = orch.status()
    assert state.is_running is False
    assert state.last_run_at is not None
    assert state.last_error is None


@pytest.mark.asyncio
async def test_missing_credentials_fails_before_guard():
    coordinator = RunCoordinator()
    orch = _orchestrator({"x": GatedAdapter("x")}, {}, {"x": ["q"]}, coordinator)

    with pytest.raises(ConfigurationError):
        await orch.run_x()

    state = coordinator.status()
    assert state.is_running is False
    assert state.last_run_at is None


@pytest.mark.asyncio
async def test_empty_targets_fails_before_guard():
    coordinator = RunCoordinator()
    orch = _orchestrator({"youtube": GatedAdapter("youtube")}, {"youtube": "ok"}, {}, coordinator)

    with pytest.raises(ConfigurationError):
        await orch.run_youtube()
    assert coordinator.status().last_run_at is None


@pytest.mark.asyncio
async def test_unknown_platform():
    orch = _orchestrator({})
    with pytest.raises(ValueError):
        await orch.run("myspace")


@pytest.mark.asyncio
async def test_concurrent_run_rejected_without_touching_state():
    coordinator = RunCoordinator()
    coordinator.try_acquire()
    coordinator.release("earlier failure")
    before = coordinator.status()

    reddit = GatedAdapter("reddit", items=[make_item("1")])
    x = GatedAdapter("x")
    reddit.gate.clear()
    orch = _orchestrator(
        {"reddit": reddit, "x": x},
        {"reddit": "ok", "x": "ok"},
        {"reddit": ["a"], "x": ["q"]},
        coordinator,
    )

    running = asyncio.create_task(orch.run("reddit"))
    await reddit.started.wait()

    # 다른 플랫폼도 같은 전역 가드를 공유한다
    with pytest.raises(AlreadyRunningError):
        await orch.run("x")
    with pytest.raises(AlreadyRunningError):
        await orch.run("reddit")

    during = coordinator.status()
    assert during.is_running is True
    assert during.last_run_at == before.last_run_at

    reddit.gate.set()
    result = await running
    assert result.posts_collected == 1
    assert coordinator.status().is_running is False


@pytest.mark.asyncio
async def test_failed_prepare_releases_guard_and_records_error():
    adapter = GatedAdapter(prepare_error=NetworkError("[reddit] 토큰 발급 실패: HTTP 401"))
    orch = _orchestrator({"reddit": adapter}, {"reddit": "ok"}, {"reddit": ["a"]})

    with pytest.raises(NetworkError):
        await orch.run("reddit")

    state = orch.status()
    assert state.is_running is False
    assert state.last_run_at is not None
    assert "토큰 발급 실패" in state.last_error


@pytest.mark.asyncio
async def test_success_clears_previous_error():
    coordinator = RunCoordinator()
    coordinator.try_acquire()
    coordinator.release("old error")
    orch = _orchestrator(
        {"reddit": GatedAdapter()}, {"reddit": "ok"}, {"reddit": ["a"]}, coordinator
    )

    await orch.run("reddit")
    assert orch.status().last_error is None


@pytest.mark.asyncio
async def test_test_connection_delegates():
    orch = _orchestrator({"reddit": GatedAdapter()}, {"reddit": "ok"})
    assert await orch.test_connection("reddit") is True

    orch = _orchestrator({"reddit": GatedAdapter()}, {})
    with pytest.raises(ConfigurationError):
        await orch.test_connection("reddit")
