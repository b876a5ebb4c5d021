"""실행 가드 테스트."""

from trendr.application.use_cases.run_coordinator import RunCoordinator


def test_acquire_and_release():
    coordinator = RunCoordinator()
    assert coordinator.try_acquire() is True
    assert coordinator.status().is_running is True

    coordinator.release()
    state = coordinator.status()
    assert state.is_running is False
    assert state.last_run_at is not None
    assert state.last_error is None


def test_second_acquire_fails_without_touching_state():
    coordinator = RunCoordinator()
    coordinator.try_acquire()
    coordinator.release("previous failure")
    before = coordinator.status()

    assert coordinator.try_acquire() is True
    assert coordinator.try_acquire() is False

    during = coordinator.status()
    assert during.is_running is True
    assert during.last_run_at == before.last_run_at


def test_acquire_clears_last_error():
    coordinator = RunCoordinator()
    coordinator.try_acquire()
    coordinator.release("oops")
    assert coordinator.status().last_error == "oops"

    coordinator.try_acquire()
    assert coordinator.status().last_error is None


def test_status_is_a_snapshot():
    coordinator = RunCoordinator()
    snapshot = coordinator.status()
    coordinator.try_acquire()
    assert snapshot.is_running is False
