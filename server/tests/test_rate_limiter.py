import time
from unittest.mock import patch

from core.rate_limiter import RateLimiter


def test_under_limit():
    rl = RateLimiter(10)
    for _ in range(10):
        assert rl.is_allowed("alice") is True


def test_over_limit():
    rl = RateLimiter(10)
    for _ in range(10):
        rl.is_allowed("alice")
    assert rl.is_allowed("alice") is False


def test_independent_keys():
    rl = RateLimiter(10)
    for _ in range(10):
        rl.is_allowed("alice")
    assert rl.is_allowed("alice") is False
    assert rl.is_allowed("bob") is True


def test_window_expiry():
    rl = RateLimiter(10)
    base = time.monotonic()

    with patch("core.rate_limiter.time") as mock_time:
        mock_time.monotonic.return_value = base
        for _ in range(10):
            rl.is_allowed("alice")
        assert rl.is_allowed("alice") is False

        # Advance past the 60s window
        mock_time.monotonic.return_value = base + 61
        assert rl.is_allowed("alice") is True


def test_forget():
    rl = RateLimiter(2)
    rl.is_allowed("alice")
    rl.is_allowed("alice")
    assert rl.is_allowed("alice") is False
    rl.forget("alice")
    assert rl.is_allowed("alice") is True


def test_reset():
    rl = RateLimiter(10)
    for _ in range(10):
        rl.is_allowed("alice")
    assert rl.is_allowed("alice") is False
    rl.reset()
    assert rl.is_allowed("alice") is True


def test_expired_keys_are_dropped():
    rl = RateLimiter(10)
    base = time.monotonic()

    with patch("core.rate_limiter.time") as mock_time:
        mock_time.monotonic.return_value = base
        for i in range(100):
            rl.is_allowed(f"unknown-{i}")
        assert rl.tracked_keys() == 100

        mock_time.monotonic.return_value = base + 61
        rl.is_allowed("alice")
        assert rl.tracked_keys() == 1
