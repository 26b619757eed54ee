"""Tests for error classification and retries."""

import asyncio

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from pageinsight.error_handler import ErrorHandler, ErrorType, RetryConfig
from pageinsight.errors import ExtractionError, FetchError


@pytest.fixture
def handler():
    return ErrorHandler(RetryConfig(max_retries=2, base_delay=0, jitter=False))


class TestClassifyError:

    @pytest.mark.parametrize("error,expected", [
        (asyncio.TimeoutError(), ErrorType.NAVIGATION_TIMEOUT),
        (PlaywrightTimeoutError("Timeout 30000ms exceeded"), ErrorType.NAVIGATION_TIMEOUT),
        (ExtractionError("DOM read failed"), ErrorType.EXTRACTION_ERROR),
        (FetchError("HTTP 404", status=404), ErrorType.HTTP_CLIENT_ERROR),
        (FetchError("HTTP 429", status=429), ErrorType.RATE_LIMITED),
        (FetchError("HTTP 503", status=503), ErrorType.HTTP_SERVER_ERROR),
        (FetchError("net::ERR_NAME_NOT_RESOLVED"), ErrorType.NAVIGATION_ERROR),
        (ValueError("odd"), ErrorType.UNKNOWN_ERROR),
    ])
    def test_classification(self, handler, error, expected):
        assert handler.classify_error(error, getattr(error, "status", None)) == expected


class TestExecuteWithRetry:

    @pytest.mark.asyncio
    async def test_succeeds_after_retry(self, handler):
        attempts = []

        async def flaky():
            attempts.append(1)
            if len(attempts) < 2:
                raise FetchError("HTTP 503", status=503)
            return "ok"

        assert await handler.execute_with_retry(flaky, "https://example.com") == "ok"
        assert len(attempts) == 2
        assert handler.get_failed_urls() == []

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self, handler):
        attempts = []

        async def always_times_out():
            attempts.append(1)
            raise asyncio.TimeoutError()

        with pytest.raises(asyncio.TimeoutError):
            await handler.execute_with_retry(always_times_out, "https://example.com")

        assert len(attempts) == 3
        assert handler.get_error_summary()["error_types"] == {"navigation_timeout": 3}

    @pytest.mark.asyncio
    async def test_client_errors_are_not_retried(self, handler):
        attempts = []

        async def not_found():
            attempts.append(1)
            raise FetchError("HTTP 404", status=404)

        with pytest.raises(FetchError):
            await handler.execute_with_retry(not_found, "https://example.com/missing")

        assert len(attempts) == 1
        assert handler.get_failed_urls() == ["https://example.com/missing"]


def test_backoff_grows_and_is_capped():
    handler = ErrorHandler(RetryConfig(base_delay=1.0, max_delay=3.0, jitter=False))

    assert handler.calculate_delay(1, ErrorType.NAVIGATION_TIMEOUT) == 1.0
    assert handler.calculate_delay(2, ErrorType.NAVIGATION_TIMEOUT) == 2.0
    assert handler.calculate_delay(3, ErrorType.NAVIGATION_TIMEOUT) == 3.0
    assert handler.calculate_delay(1, ErrorType.RATE_LIMITED) == 2.0
