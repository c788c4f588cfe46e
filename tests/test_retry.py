"""
Tests for caller-side retry of client Results.
"""

import pytest

from hhvacancies.result import (
    ClientNetworkUnavailable,
    RemoteError,
    Success,
    TransportErrorKind,
    TransportException,
)
from hhvacancies.retry import (
    RetryError,
    is_transient_result,
    retry_result,
    should_retry_http_status,
)

TIMEOUT = TransportException(TransportErrorKind.TIMEOUT)


def sequence(*results):
    """Operation returning the given results in turn; counts calls."""
    calls = []

    def operation():
        calls.append(1)
        return results[min(len(calls), len(results)) - 1]

    operation.calls = calls
    return operation


class TestRetryResult:
    """Test exponential backoff over Results."""

    def test_success_on_first_try(self):
        op = sequence(Success("ok"))
        assert retry_result(op, max_retries=3, base_delay=0.01) == Success("ok")
        assert len(op.calls) == 1

    def test_retry_then_succeed(self):
        op = sequence(TIMEOUT, RemoteError(503), Success("ok"))
        assert retry_result(op, max_retries=3, base_delay=0.01) == Success("ok")
        assert len(op.calls) == 3

    def test_exhausted_returns_last_result(self):
        op = sequence(TIMEOUT)
        assert retry_result(op, max_retries=2, base_delay=0.01) == TIMEOUT
        assert len(op.calls) == 3  # Initial + 2 retries

    def test_zero_retries_runs_once(self):
        op = sequence(TIMEOUT)
        assert retry_result(op, max_retries=0, base_delay=0.01) == TIMEOUT
        assert len(op.calls) == 1

    def test_negative_retries_rejected(self):
        op = sequence(Success("ok"))
        with pytest.raises(ValueError, match="max_retries"):
            retry_result(op, max_retries=-1)
        assert op.calls == []

    def test_exhausted_raises_when_asked(self):
        op = sequence(RemoteError(502))
        with pytest.raises(RetryError) as exc_info:
            retry_result(op, max_retries=1, base_delay=0.01, raise_on_exhaustion=True)
        assert exc_info.value.last_result == RemoteError(502)

    def test_permanent_error_not_retried(self):
        op = sequence(RemoteError(404), Success("never"))
        assert retry_result(op, max_retries=3, base_delay=0.01) == RemoteError(404)
        assert len(op.calls) == 1

    def test_offline_not_retried(self):
        op = sequence(ClientNetworkUnavailable(), Success("never"))
        assert retry_result(op, max_retries=3, base_delay=0.01) == ClientNetworkUnavailable()
        assert len(op.calls) == 1

    def test_exponential_delay(self):
        delays = []

        def on_retry_callback(attempt, result, delay):
            delays.append(delay)

        retry_result(sequence(TIMEOUT), max_retries=3, base_delay=0.01,
                     exponential_base=2.0, on_retry=on_retry_callback)

        assert delays == [0.01, 0.02, 0.04]

    def test_max_delay_cap(self, monkeypatch):
        delays = []
        monkeypatch.setattr("hhvacancies.retry.time.sleep", lambda s: None)

        retry_result(sequence(TIMEOUT), max_retries=5, base_delay=1.0, max_delay=2.0,
                     exponential_base=3.0, on_retry=lambda a, r, d: delays.append(d))

        assert all(d <= 2.0 for d in delays)


class TestTransientDetection:
    """Test which Results count as transient."""

    def test_transport_errors(self):
        assert is_transient_result(TIMEOUT)
        assert is_transient_result(TransportException(TransportErrorKind.IO))

    def test_remote_errors(self):
        assert is_transient_result(RemoteError(429))
        assert is_transient_result(RemoteError(500))
        assert not is_transient_result(RemoteError(404))
        assert not is_transient_result(RemoteError(200))

    def test_success_and_offline(self):
        assert not is_transient_result(Success(None))
        assert not is_transient_result(ClientNetworkUnavailable())

    def test_http_status_retry_logic(self):
        # Retryable
        assert should_retry_http_status(408)
        assert should_retry_http_status(429)
        assert should_retry_http_status(500)
        assert should_retry_http_status(502)
        assert should_retry_http_status(503)

        # Not retryable
        assert not should_retry_http_status(200)
        assert not should_retry_http_status(404)
        assert not should_retry_http_status(403)
        assert not should_retry_http_status(-1)
