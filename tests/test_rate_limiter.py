from __future__ import annotations

import inspect
import threading

from app.services.rate_limiter import RateLimiter, contact_rate_limit


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_allows_up_to_limit_then_blocks():
    clock = FakeClock()
    limiter = RateLimiter(limit=3, window_seconds=60, clock=clock)

    assert limiter.hit("1.2.3.4") == (True, 2, 0)
    assert limiter.hit("1.2.3.4") == (True, 1, 0)
    assert limiter.hit("1.2.3.4") == (True, 0, 0)

    allowed, remaining, retry_after = limiter.hit("1.2.3.4")
    assert allowed is False
    assert remaining == 0
    assert retry_after == 61


def test_window_slides():
    clock = FakeClock()
    limiter = RateLimiter(limit=2, window_seconds=60, clock=clock)

    limiter.hit("ip")
    clock.now += 30
    limiter.hit("ip")
    assert limiter.hit("ip")[0] is False

    # First request leaves the window
    clock.now += 31
    assert limiter.hit("ip")[0] is True
    assert limiter.hit("ip")[0] is False


def test_identifiers_are_independent():
    limiter = RateLimiter(limit=1, window_seconds=60, clock=FakeClock())

    assert limiter.hit("a")[0] is True
    assert limiter.hit("b")[0] is True
    assert limiter.hit("a")[0] is False


def test_blocked_requests_do_not_extend_the_window():
    clock = FakeClock()
    limiter = RateLimiter(limit=1, window_seconds=60, clock=clock)

    limiter.hit("ip")
    clock.now += 50
    assert limiter.hit("ip")[0] is False
    clock.now += 11
    assert limiter.hit("ip")[0] is True


def test_cleanup_drops_idle_identifiers():
    clock = FakeClock()
    limiter = RateLimiter(limit=5, window_seconds=60, clock=clock)

    limiter.hit("idle")
    clock.now += 301
    limiter.hit("active")

    assert "idle" not in limiter.buckets
    assert "active" in limiter.buckets


def test_reset():
    limiter = RateLimiter(limit=1, window_seconds=60, clock=FakeClock())
    limiter.hit("a")
    limiter.hit("b")

    limiter.reset("a")
    assert limiter.hit("a")[0] is True
    assert limiter.hit("b")[0] is False

    limiter.reset()
    assert limiter.buckets == {}


def test_concurrent_hits_never_exceed_limit():
    limiter = RateLimiter(limit=50, window_seconds=60)
    results = []

    def worker():
        for _ in range(20):
            results.append(limiter.hit("shared")[0])

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results.count(True) == 50
    assert len(limiter.buckets["shared"]) == 50


def test_contact_dependency_runs_on_event_loop():
    assert inspect.iscoroutinefunction(contact_rate_limit)
