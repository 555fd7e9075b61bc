import asyncio
import time
from types import SimpleNamespace
from unittest.mock import Mock, patch

import pytest
import redis
from fastapi import HTTPException

from weddingplanner import config, rate_limiter


@pytest.fixture(autouse=True)
def clean_cache():
    rate_limiter.memory_cache.clear()
    yield
    rate_limiter.memory_cache.clear()


class TestCheckRateLimit:
    def test_allows_up_to_limit_in_memory(self):
        results = [rate_limiter.check_rate_limit("k:memory", 2, 60)[0] for _ in range(3)]

        assert results == [True, True, False]

    def test_seeds_count_from_redis(self):
        redis_client = Mock()
        redis_client.get.return_value = "4"
        redis_client.ttl.return_value = 30

        allowed, count, ttl = rate_limiter.check_rate_limit("k:redis", 5, 60, redis_client)

        assert allowed is True
        assert count == 5
        assert 0 < ttl <= 30
        # first sight of a key counts as a fresh sync
        redis_client.set.assert_not_called()

    def test_redis_errors_fall_back_to_memory(self):
        redis_client = Mock()
        redis_client.get.side_effect = ConnectionError("redis down")
        redis_client.set.side_effect = ConnectionError("redis down")

        allowed, count, _ = rate_limiter.check_rate_limit("k:broken", 1, 60, redis_client)

        assert allowed is True
        assert count == 1


def _request(ip="10.0.0.1"):
    return SimpleNamespace(headers={}, client=SimpleNamespace(host=ip), state=SimpleNamespace())


class TestRateLimitDependency:
    def test_disabled_is_noop(self, monkeypatch):
        monkeypatch.setattr(config, "RATE_LIMIT_ENABLED", False)

        for _ in range(5):
            asyncio.run(rate_limiter.rate_limit_dependency(_request(), 1, 60, "t"))

    def test_exceeding_limit_raises_429(self, monkeypatch):
        monkeypatch.setattr(config, "RATE_LIMIT_ENABLED", True)
        with patch.object(rate_limiter, "get_redis_client", side_effect=ConnectionError("no redis")):
            asyncio.run(rate_limiter.rate_limit_dependency(_request(), 1, 60, "login"))
            with pytest.raises(HTTPException) as exc_info:
                asyncio.run(rate_limiter.rate_limit_dependency(_request(), 1, 60, "login"))

        assert exc_info.value.status_code == 429
        assert "Retry-After" in exc_info.value.headers

    def test_limits_are_per_ip(self, monkeypatch):
        monkeypatch.setattr(config, "RATE_LIMIT_ENABLED", True)
        with patch.object(rate_limiter, "get_redis_client", side_effect=ConnectionError("no redis")):
            asyncio.run(rate_limiter.rate_limit_dependency(_request("1.1.1.1"), 1, 60, "login"))
            asyncio.run(rate_limiter.rate_limit_dependency(_request("2.2.2.2"), 1, 60, "login"))


class TestRedisConnection:
    @pytest.fixture(autouse=True)
    def no_client(self, monkeypatch):
        monkeypatch.setattr(rate_limiter, "redis_client", None)
        monkeypatch.setattr(rate_limiter, "redis_failed_at", None)
        monkeypatch.setattr(config, "REDIS_URL", None)

    def test_failed_connect_is_not_retried_within_interval(self):
        unreachable = Mock()
        unreachable.ping.side_effect = redis.ConnectionError("connection refused")

        with patch.object(rate_limiter.redis, "Redis", return_value=unreachable) as factory:
            with pytest.raises(redis.ConnectionError):
                rate_limiter.get_redis_client()
            with pytest.raises(ConnectionError):
                rate_limiter.get_redis_client()

        assert factory.call_count == 1

    def test_reconnects_once_interval_passes(self, monkeypatch):
        monkeypatch.setattr(
            rate_limiter,
            "redis_failed_at",
            time.time() - rate_limiter.MEMORY_CACHE_SYNC_INTERVAL - 1,
        )
        healthy = Mock()

        with patch.object(rate_limiter.redis, "Redis", return_value=healthy) as factory:
            assert rate_limiter.get_redis_client() is healthy

        factory.assert_called_once()
        assert rate_limiter.redis_failed_at is None
