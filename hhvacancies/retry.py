"""
Caller-side retry with exponential backoff for client operations.

HhClient never retries on its own. Callers that want retries wrap an
operation with retry_result(), which re-runs it while the Result it returns
looks transient (timeouts, I/O failures, throttling, 5xx).
"""

import time
from typing import Callable, Optional

from .result import ClientNetworkUnavailable, RemoteError, Result, TransportException


class RetryError(Exception):
    """Raised when all retry attempts are exhausted and the caller asked for it."""

    def __init__(self, message: str, last_result: Result):
        super().__init__(message)
        self.last_result = last_result


def should_retry_http_status(status_code: int) -> bool:
    """
    Check if HTTP status code indicates a retryable error.

    Args:
        status_code: HTTP status code

    Returns:
        True if should retry
    """
    retryable_codes = {
        408,  # Request Timeout
        429,  # Too Many Requests
        500,  # Internal Server Error
        502,  # Bad Gateway
        503,  # Service Unavailable
        504,  # Gateway Timeout
    }

    return status_code in retryable_codes


def is_transient_result(result: Result) -> bool:
    """
    Determine if a Result is worth retrying.

    ClientNetworkUnavailable is not: no attempt was made and the connectivity
    check already said there is no route.
    """
    if isinstance(result, ClientNetworkUnavailable):
        return False
    if isinstance(result, TransportException):
        return True
    if isinstance(result, RemoteError):
        return should_retry_http_status(result.status_code)
    return False


def retry_result(
    operation: Callable[[], Result],
    max_retries: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 60.0,
    exponential_base: float = 2.0,
    on_retry: Optional[Callable] = None,
    raise_on_exhaustion: bool = False,
) -> Result:
    """
    Run `operation` until it returns a non-transient Result.

    Args:
        operation: Zero-argument callable returning a Result,
            e.g. lambda: client.get_vacancy(42)
        max_retries: Maximum number of retry attempts (0 = no retries)
        base_delay: Initial delay in seconds
        max_delay: Maximum delay between retries in seconds
        exponential_base: Base for exponential calculation (delay *= base)
        on_retry: Optional callback function(attempt, result, delay)
        raise_on_exhaustion: Raise RetryError instead of returning the
            last transient Result

    Raises:
        ValueError: If max_retries is negative
        RetryError: If raise_on_exhaustion is set and every attempt was transient

    Example:
        result = retry_result(lambda: client.search_vacancies(flt), max_retries=2)
    """
    if max_retries < 0:
        raise ValueError(f"max_retries must be >= 0, got {max_retries}")
    delay = base_delay

    for attempt in range(max_retries + 1):
        result = operation()
        if not is_transient_result(result):
            return result

        # Don't sleep after the last attempt
        if attempt < max_retries:
            current_delay = min(delay, max_delay)
            if on_retry:
                on_retry(attempt + 1, result, current_delay)
            time.sleep(current_delay)
            delay *= exponential_base

    if raise_on_exhaustion:
        raise RetryError(f"Failed after {max_retries + 1} attempts: {result!r}", result)
    return result
