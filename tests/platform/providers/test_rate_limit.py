from __future__ import annotations

import threading
import time

import pytest

from tracksort.platform.providers.rate_limit import ProviderGate, RateLimiter


def test_rate_limiter_spaces_calls() -> None:
    limiter = RateLimiter(0.05)
    limiter.respect()
    started = time.monotonic()
    limiter.respect()
    assert time.monotonic() - started >= 0.04


def test_rate_limiter_without_interval_does_not_wait() -> None:
    limiter = RateLimiter(0.0)
    started = time.monotonic()
    for _ in range(5):
        limiter.respect()
    assert time.monotonic() - started < 0.5


def test_gate_rejects_zero_concurrency() -> None:
    with pytest.raises(ValueError):
        _ = ProviderGate(0)


def test_gate_blocks_instead_of_rejecting() -> None:
    gate = ProviderGate(1)
    entered = threading.Event()
    release = threading.Event()
    order: list[str] = []

    def holder() -> None:
        with gate.slot():
            order.append("holder")
            entered.set()
            _ = release.wait(2.0)

    def waiter() -> None:
        with gate.slot():
            order.append("waiter")

    first = threading.Thread(target=holder)
    first.start()
    assert entered.wait(2.0)
    second = threading.Thread(target=waiter)
    second.start()
    time.sleep(0.05)
    assert order == ["holder"]

    release.set()
    first.join()
    second.join()
    assert order == ["holder", "waiter"]


def test_gate_slot_can_be_released_from_another_thread() -> None:
    gate = ProviderGate(1)
    gate.acquire()

    releaser = threading.Thread(target=gate.release)
    releaser.start()
    releaser.join()

    with gate.slot():
        pass
