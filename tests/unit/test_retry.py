"""Unit tests for the retry policy and with_retry."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from placetopay.core.retry import (
    DEFAULT_RETRY_POLICY,
    RetryPolicy,
    compute_backoff_ms,
    is_retryable,
    with_retry,
)
from placetopay.models.exceptions import (
    HttpError,
    InvalidResponseError,
    NetworkError,
    ValidationError,
)


def failing_then(results):
    """Async callable that raises/returns the queued results in order."""
    calls = []

    async def fn(attempt):
        calls.append(attempt)
        result = results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    fn.calls = calls
    return fn


class TestComputeBackoff:
    def test_lower_jitter_bound(self):
        assert compute_backoff_ms(DEFAULT_RETRY_POLICY, 1, rng=lambda: 0.0) == pytest.approx(175)

    def test_upper_jitter_bound(self):
        assert compute_backoff_ms(DEFAULT_RETRY_POLICY, 1, rng=lambda: 1.0) == pytest.approx(325)

    def test_exponential_growth(self):
        assert compute_backoff_ms(DEFAULT_RETRY_POLICY, 3, rng=lambda: 0.5) == pytest.approx(1000)

    def test_capped_at_max_delay(self):
        delay = compute_backoff_ms(DEFAULT_RETRY_POLICY, 10, rng=lambda: 1.0)
        assert delay == pytest.approx(2000 * 1.3)

    def test_delay_within_bounds_with_random_jitter(self):
        for attempt in range(1, 8):
            ceiling = min(250 * 2 ** (attempt - 1), 2000)
            delay = compute_backoff_ms(DEFAULT_RETRY_POLICY, attempt)
            assert ceiling * 0.7 <= delay <= ceiling * 1.3


class TestIsRetryable:
    @pytest.mark.parametrize("status", [502, 503, 504])
    def test_transient_statuses(self, status):
        assert is_retryable(HttpError("boom", status), DEFAULT_RETRY_POLICY)

    @pytest.mark.parametrize("status", [400, 401, 404, 500])
    def test_other_statuses(self, status):
        assert not is_retryable(HttpError("boom", status), DEFAULT_RETRY_POLICY)

    def test_non_http_errors(self):
        assert not is_retryable(NetworkError("down"), DEFAULT_RETRY_POLICY)
        assert not is_retryable(InvalidResponseError("bad", 502), DEFAULT_RETRY_POLICY)
        assert not is_retryable(ValidationError("bad"), DEFAULT_RETRY_POLICY)

    def test_custom_status_list(self):
        policy = RetryPolicy(retry_on_http_statuses=(500,))
        assert is_retryable(HttpError("boom", 500), policy)
        assert not is_retryable(HttpError("boom", 503), policy)


class TestWithRetry:
    @pytest.mark.asyncio
    async def test_returns_first_success(self):
        fn = failing_then(["ok"])

        with patch("placetopay.core.retry.asyncio.sleep", new_callable=AsyncMock) as sleep:
            assert await with_retry(fn) == "ok"

        assert fn.calls == [1]
        sleep.assert_not_called()

    @pytest.mark.asyncio
    async def test_retries_transient_status_then_succeeds(self):
        fn = failing_then([HttpError("busy", 503), HttpError("busy", 502), {"status": "OK"}])

        with patch("placetopay.core.retry.asyncio.sleep", new_callable=AsyncMock) as sleep:
            result = await with_retry(fn)

        assert result == {"status": "OK"}
        assert fn.calls == [1, 2, 3]
        assert sleep.await_count == 2

    @pytest.mark.asyncio
    async def test_exhausted_attempts_reraise_last_error_unchanged(self):
        last = HttpError("still busy", 503, {"status": {"status": "FAILED"}})
        fn = failing_then([HttpError("busy", 503), HttpError("busy", 504), last])

        with patch("placetopay.core.retry.asyncio.sleep", new_callable=AsyncMock):
            with pytest.raises(HttpError) as exc_info:
                await with_retry(fn)

        assert exc_info.value is last
        assert fn.calls == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_non_retryable_status_fails_fast(self):
        fn = failing_then([HttpError("bad request", 400)])

        with patch("placetopay.core.retry.asyncio.sleep", new_callable=AsyncMock) as sleep:
            with pytest.raises(HttpError):
                await with_retry(fn)

        assert fn.calls == [1]
        sleep.assert_not_called()

    @pytest.mark.asyncio
    async def test_network_error_not_retried(self):
        fn = failing_then([NetworkError("connection refused"), "ok"])

        with pytest.raises(NetworkError):
            await with_retry(fn)
        assert fn.calls == [1]

    @pytest.mark.asyncio
    async def test_invalid_response_not_retried_even_with_transient_status(self):
        fn = failing_then([InvalidResponseError("not json", 502), "ok"])

        with pytest.raises(InvalidResponseError):
            await with_retry(fn)
        assert fn.calls == [1]

    @pytest.mark.asyncio
    async def test_sleeps_for_backoff_in_seconds(self):
        fn = failing_then([HttpError("busy", 503), "ok"])

        with (
            patch("placetopay.core.retry.asyncio.sleep", new_callable=AsyncMock) as sleep,
            patch("placetopay.core.retry.compute_backoff_ms", return_value=300),
        ):
            await with_retry(fn)

        sleep.assert_awaited_once_with(0.3)

    @pytest.mark.asyncio
    async def test_zero_max_attempts_still_calls_once(self):
        fn = failing_then([HttpError("busy", 503)])

        with pytest.raises(HttpError):
            await with_retry(fn, RetryPolicy(max_attempts=0))
        assert fn.calls == [1]

    @pytest.mark.asyncio
    async def test_logs_scheduled_retry(self):
        fn = failing_then([HttpError("busy", 503), "ok"])
        log = MagicMock()

        with patch("placetopay.core.retry.asyncio.sleep", new_callable=AsyncMock):
            await with_retry(fn, log=log)

        (event,), fields = log.warning.call_args
        assert event == "placetopay_retry_scheduled"
        assert fields["http_status"] == 503
        assert fields["next_attempt"] == 2
