"""Tests for the sliding-window admission gate."""

import threading

from claim_verifier.domain.services.admission_gate import AdmissionGate

from helpers import FakeClock


def test_admits_up_to_limit_then_denies(clock: FakeClock):
    """Five requests in a window are admitted; the sixth is denied."""
    gate = AdmissionGate(max_requests=5, window_size_ms=60_000, clock=clock)

    for _ in range(5):
        assert gate.try_admit() is True
        clock.advance(1_000)

    assert gate.try_admit() is False
    assert len(gate) == 5


def test_readmits_once_oldest_leaves_window(clock: FakeClock):
    """A slot frees up when the oldest admission is a full window old."""
    gate = AdmissionGate(max_requests=5, window_size_ms=60_000, clock=clock)
    start = clock.now
    for _ in range(5):
        gate.try_admit()
        clock.advance(1_000)

    clock.now = start + 59_999
    assert gate.try_admit() is False

    clock.now = start + 60_000
    assert gate.try_admit() is True
    assert gate.try_admit() is False


def test_denied_request_is_not_recorded(clock: FakeClock):
    """Denials do not push the window forward."""
    gate = AdmissionGate(max_requests=1, window_size_ms=10_000, clock=clock)
    assert gate.try_admit()

    for _ in range(3):
        clock.advance(1_000)
        assert not gate.try_admit()

    clock.advance(7_000)
    assert gate.try_admit()


def test_time_until_next_slot(clock: FakeClock):
    """Wait time counts down from the oldest admitted request."""
    gate = AdmissionGate(max_requests=2, window_size_ms=60_000, clock=clock)
    assert gate.time_until_next_slot() == 0

    gate.try_admit()
    clock.advance(15_000)
    gate.try_admit()
    clock.advance(500)

    assert gate.time_until_next_slot() == 44_500
    assert gate.retry_after_seconds() == 45


def test_time_until_next_slot_never_negative(clock: FakeClock):
    """Wait time bottoms out at zero."""
    gate = AdmissionGate(max_requests=1, window_size_ms=1_000, clock=clock)
    gate.try_admit()
    clock.advance(5_000)

    assert gate.time_until_next_slot() == 0
    assert gate.retry_after_seconds() == 0


def test_defaults():
    """Default limits are five requests per minute."""
    gate = AdmissionGate()
    assert gate.max_requests == 5
    assert gate.window_size_ms == 60_000


def test_concurrent_admissions_respect_limit():
    """Simultaneous callers never admit more than the limit."""
    gate = AdmissionGate(max_requests=5, window_size_ms=60_000)
    barrier = threading.Barrier(50)
    results = []

    def worker():
        barrier.wait()
        results.append(gate.try_admit())

    threads = [threading.Thread(target=worker) for _ in range(50)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results.count(True) == 5
    assert results.count(False) == 45
    assert len(gate) == 5
