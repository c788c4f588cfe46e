"""
Result envelope returned by every client operation.

A Result is exactly one of Success, ClientNetworkUnavailable, RemoteError or
TransportException. Values are immutable; callers dispatch with isinstance().
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

# Status reported when the HTTP exchange never produced one.
NO_STATUS = -1


class TransportErrorKind(str, Enum):
    TIMEOUT = "timeout"
    IO = "io"


@dataclass(frozen=True)
class Success:
    payload: Any


@dataclass(frozen=True)
class ClientNetworkUnavailable:
    """No network path; the request was never attempted."""


@dataclass(frozen=True)
class RemoteError:
    """A response arrived but was rejected (non-2xx or unusable body)."""

    status_code: int

    @property
    def has_status(self) -> bool:
        return self.status_code != NO_STATUS


@dataclass(frozen=True)
class TransportException:
    """The request was attempted but no response came back."""

    kind: TransportErrorKind

    @property
    def is_timeout(self) -> bool:
        return self.kind is TransportErrorKind.TIMEOUT


Result = Union[Success, ClientNetworkUnavailable, RemoteError, TransportException]


def is_success(result: Result) -> bool:
    return isinstance(result, Success)


def describe(result: Result) -> str:
    """Short human-readable label for logs and the CLI."""
    if isinstance(result, Success):
        return "success"
    if isinstance(result, ClientNetworkUnavailable):
        return "network unavailable"
    if isinstance(result, RemoteError):
        if result.has_status:
            return f"remote error ({result.status_code})"
        return "remote error (no status)"
    if isinstance(result, TransportException):
        return f"transport error ({result.kind.value})"
    raise TypeError(f"Not a Result: {result!r}")
