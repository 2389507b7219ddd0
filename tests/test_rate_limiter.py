from skills_analyzer.services.rate_limiter import RateLimiter


class SleepRecorder:
    def __init__(self):
        self.calls = []

    def __call__(self, seconds):
        self.calls.append(seconds)


def test_wait_decrements_without_sleeping():
    sleep = SleepRecorder()
    limiter = RateLimiter(limit=10, sleep=sleep)

    for _ in range(3):
        limiter.wait_if_needed()

    assert limiter.remaining == 7
    assert sleep.calls == []


def test_waits_and_resets_when_quota_exhausted():
    sleep = SleepRecorder()
    limiter = RateLimiter(limit=3, wait_seconds=60, sleep=sleep)

    limiter.wait_if_needed()
    limiter.wait_if_needed()
    assert limiter.remaining == 1
    limiter.wait_if_needed()

    assert sleep.calls == [60]
    assert limiter.remaining == 2


def test_wait_uses_reset_header_when_sooner():
    sleep = SleepRecorder()
    limiter = RateLimiter(limit=5000, wait_seconds=60, sleep=sleep, clock=lambda: 1000.0)
    limiter.update_from_headers({"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "1015"})

    limiter.wait_if_needed()

    assert sleep.calls == [15.0]
    assert limiter.remaining == 4999


def test_wait_is_capped_by_wait_seconds():
    sleep = SleepRecorder()
    limiter = RateLimiter(wait_seconds=60, sleep=sleep, clock=lambda: 0.0)
    limiter.update_from_headers({"X-RateLimit-Remaining": "1", "X-RateLimit-Reset": "3600"})

    limiter.wait_if_needed()

    assert sleep.calls == [60]


def test_malformed_headers_are_ignored():
    limiter = RateLimiter(limit=10)
    limiter.update_from_headers({"X-RateLimit-Remaining": "lots"})
    limiter.update_from_headers({})
    assert limiter.remaining == 10
