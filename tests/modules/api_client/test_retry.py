"""Tests for the retry policy."""

import pytest

from tourline.modules.api_client import ApiError, NetworkError, RetryContext, RetryPolicy
from tourline.shared.config import Settings


def api_error(status: int) -> ApiError:
    return ApiError(f"status {status}", status_code=status, method="GET", url="/x")


class TestRetryPolicy:
    def test_from_settings(self, settings):
        """Policy values should come from settings."""
        policy = RetryPolicy.from_settings(settings)
        assert policy.max_retries == settings.max_retries
        assert policy.base_delay == settings.retry_base_delay
        assert policy.jitter == settings.retry_jitter
        assert policy.retryable_status_codes == frozenset({408, 429, 500, 502, 503, 504})

    @pytest.mark.parametrize("status", [408, 429, 500, 502, 503, 504])
    def test_transient_statuses_are_retryable(self, status):
        assert RetryPolicy().is_retryable(api_error(status)) is True

    @pytest.mark.parametrize("status", [400, 401, 403, 404, 409, 422])
    def test_client_errors_are_not_retryable(self, status):
        """Client errors are never retried."""
        assert RetryPolicy().is_retryable(api_error(status)) is False

    def test_network_error_is_retryable(self):
        assert RetryPolicy().is_retryable(NetworkError("Network Error")) is True

    def test_other_exceptions_are_not_retryable(self):
        assert RetryPolicy().is_retryable(ValueError("boom")) is False

    def test_should_retry_respects_ceiling(self):
        """No retry once max_retries retries have been made."""
        policy = RetryPolicy(max_retries=2)
        error = api_error(503)
        assert policy.should_retry(error, RetryContext(attempt=0))
        assert policy.should_retry(error, RetryContext(attempt=1))
        assert not policy.should_retry(error, RetryContext(attempt=2))

    def test_zero_retries_disables_retrying(self):
        policy = RetryPolicy(max_retries=0)
        assert not policy.should_retry(NetworkError("down"), RetryContext())

    def test_delays_grow_exponentially(self):
        """Delay doubles per attempt, scaled by the jitter factor."""
        policy = RetryPolicy(base_delay=1.0, jitter=0.1, random_source=lambda: 0.5)
        assert policy.compute_delay(0) == pytest.approx(1.05)
        assert policy.compute_delay(1) == pytest.approx(2.10)
        assert policy.compute_delay(2) == pytest.approx(4.20)

    def test_delays_strictly_increase_at_jitter_extremes(self):
        """Worst-case jitter still yields strictly increasing delays."""
        high = RetryPolicy(jitter=0.1, random_source=lambda: 0.999999)
        low = RetryPolicy(jitter=0.1, random_source=lambda: 0.0)
        for attempt in range(5):
            assert low.compute_delay(attempt + 1) > high.compute_delay(attempt)

    def test_next_context_does_not_mutate(self):
        """Contexts are immutable; next_context returns a new one."""
        policy = RetryPolicy(random_source=lambda: 0.0)
        first = RetryContext()
        second = policy.next_context(first)

        assert first.attempt == 0
        assert first.is_retry is False
        assert second.attempt == 1
        assert second.is_retry is True
        assert second.delay == pytest.approx(1.0)

    def test_custom_status_codes_from_settings(self):
        settings = Settings(_env_file=None, retryable_status_codes=[503])
        policy = RetryPolicy.from_settings(settings)
        assert policy.is_retryable(api_error(503))
        assert not policy.is_retryable(api_error(500))
