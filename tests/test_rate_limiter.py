from __future__ import annotations

from types import SimpleNamespace

import pytest

from catalog.core.config import Settings
from catalog.core.rate_limiter import RateLimiter, client_address
from catalog.domain.errors import RateLimitedError


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_limit_is_enforced_within_window_and_resets_after():
    clock = FakeClock()
    limiter = RateLimiter(clock=clock)
    for _ in range(3):
        limiter.hit("auth:login:1.2.3.4", limit=3, window_seconds=60)

    clock.now += 15
    with pytest.raises(RateLimitedError) as exc_info:
        limiter.hit("auth:login:1.2.3.4", limit=3, window_seconds=60)
    assert exc_info.value.retry_after == 45
    assert exc_info.value.status_code == 429

    # Other clients are counted separately.
    limiter.hit("auth:login:5.6.7.8", limit=3, window_seconds=60)

    clock.now += 45
    limiter.hit("auth:login:1.2.3.4", limit=3, window_seconds=60)


def test_client_address_prefers_first_forwarded_hop():
    forwarded = SimpleNamespace(headers={"x-forwarded-for": "10.0.0.1, 172.16.0.1"}, client=None)
    direct = SimpleNamespace(headers={}, client=SimpleNamespace(host="192.168.1.9"))
    anonymous = SimpleNamespace(headers={}, client=None)
    assert client_address(forwarded) == "10.0.0.1"
    assert client_address(direct) == "192.168.1.9"
    assert client_address(anonymous) == "unknown"


def test_settings_expose_limits_per_scope():
    settings = Settings(login_rate_limit=5, login_rate_window_seconds=30, register_rate_limit=2)
    assert settings.rate_limit("login") == (5, 30)
    assert settings.rate_limit("register") == (2, 300)
