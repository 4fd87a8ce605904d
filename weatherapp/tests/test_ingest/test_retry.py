"""Tests for the explicit bounded retry wrapper."""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from weatherapp.config.schema import ApiConfig
from weatherapp.ingest.retry import RetryingApiClient, RetryPolicy
from weatherapp.models.errors import ErrorInfo, ErrorKind
from weatherapp.models.result import Failure, Success

SERVER_DOWN = Failure(ErrorInfo(ErrorKind.SERVER, "HTTP 503", status_code=503))
OFFLINE = Failure(ErrorInfo(ErrorKind.NETWORK, "Could not connect"))
FORBIDDEN = Failure(ErrorInfo(ErrorKind.CLIENT, "HTTP 403", status_code=403))


def make_client(*results, **kwargs) -> tuple[RetryingApiClient, AsyncMock]:
    inner = AsyncMock()
    inner.fetch.side_effect = list(results)
    policy = kwargs.pop("policy", RetryPolicy(base_delay=0.0))
    return RetryingApiClient(inner, policy, **kwargs), inner


class TestRetryPolicy:
    def test_defaults(self):
        p = RetryPolicy()
        assert p.max_retries == 2
        assert p.retry_on == {ErrorKind.NETWORK, ErrorKind.SERVER}

    def test_more_than_two_retries_rejected(self):
        with pytest.raises(ValueError):
            RetryPolicy(max_retries=3)

    def test_exponential_delay(self):
        p = RetryPolicy(base_delay=0.5)
        assert [p.delay_for(a) for a in range(3)] == [0.5, 1.0, 2.0]

    def test_from_config(self):
        p = RetryPolicy.from_config(ApiConfig(max_retries=1, retry_base_delay_s=0.2))
        assert p.max_retries == 1
        assert p.base_delay == 0.2


class TestRetryingApiClient:
    def test_success_first_try(self):
        client, inner = make_client(Success([]))
        assert asyncio.run(client.fetch("/WeatherForecast")) == Success([])
        assert inner.fetch.await_count == 1
        assert client.last_attempts == 1

    def test_retries_server_error_then_succeeds(self):
        client, inner = make_client(SERVER_DOWN, Success([1]))
        assert asyncio.run(client.fetch("/WeatherForecast")) == Success([1])
        assert client.last_attempts == 2

    def test_at_most_two_additional_attempts(self):
        client, inner = make_client(OFFLINE, OFFLINE, OFFLINE, Success([]))
        result = asyncio.run(client.fetch("/WeatherForecast"))
        assert result == OFFLINE
        assert inner.fetch.await_count == 3
        assert client.last_attempts == 3

    def test_client_errors_not_retried(self):
        client, inner = make_client(FORBIDDEN, Success([]))
        assert asyncio.run(client.fetch("/WeatherForecast")) == FORBIDDEN
        assert inner.fetch.await_count == 1

    def test_zero_retries(self):
        client, inner = make_client(
            SERVER_DOWN, Success([]), policy=RetryPolicy(max_retries=0)
        )
        assert asyncio.run(client.fetch("/WeatherForecast")) == SERVER_DOWN
        assert inner.fetch.await_count == 1

    def test_on_retry_callback(self):
        seen = []
        client, _ = make_client(
            OFFLINE, SERVER_DOWN, Success([]),
            on_retry=lambda attempt, err: seen.append((attempt, err.kind)),
        )
        asyncio.run(client.fetch("/WeatherForecast"))
        assert seen == [(1, ErrorKind.NETWORK), (2, ErrorKind.SERVER)]

    def test_backoff_sleeps(self):
        client, _ = make_client(
            OFFLINE, OFFLINE, Success([]), policy=RetryPolicy(base_delay=1.0)
        )
        with patch("weatherapp.ingest.retry.asyncio.sleep", new=AsyncMock()) as sleep:
            asyncio.run(client.fetch("/WeatherForecast"))
        assert [c.args[0] for c in sleep.await_args_list] == [1.0, 2.0]

    def test_passes_path_and_params(self):
        client, inner = make_client(Success([]))
        asyncio.run(client.fetch("/WeatherForecast", {"days": 3}))
        inner.fetch.assert_awaited_once_with("/WeatherForecast", {"days": 3})
