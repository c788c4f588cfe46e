"""
HTTP gateway for the hh.ru API.

Each fetch_* call issues exactly one GET and reports what happened as a
RawOutcome; exceptions from the HTTP stack never leave this module.
There is no retry here: see retry.retry_result for the caller-side helper.
"""

import socket
from dataclasses import dataclass
from typing import Optional

import requests
import urllib3

from .config import ClientConfig
from .logger import get_logger
from .result import NO_STATUS, TransportErrorKind
from .schema import LookupKind
from .search import QuerySet

logger = get_logger()


@dataclass(frozen=True)
class RawOutcome:
    """One HTTP exchange before classification."""

    status: int = NO_STATUS
    body: Optional[str] = None
    error: Optional[TransportErrorKind] = None

    @classmethod
    def failed(cls, kind: TransportErrorKind) -> "RawOutcome":
        return cls(status=NO_STATUS, body=None, error=kind)


def _is_timeout(error: BaseException) -> bool:
    """
    True for connect/read timeouts, including a read timeout while the body
    downloads, which requests reports as ConnectionError(ReadTimeoutError).
    """
    seen = set()
    while error is not None and id(error) not in seen:
        seen.add(id(error))
        # urllib3 derives NewConnectionError (refused, DNS) from ConnectTimeoutError
        if isinstance(error, urllib3.exceptions.NewConnectionError):
            return False
        if isinstance(error, (requests.exceptions.Timeout, urllib3.exceptions.TimeoutError, socket.timeout)):
            return True
        if isinstance(error, urllib3.exceptions.MaxRetryError) and error.reason is not None:
            error = error.reason
            continue
        wrapped = error.args[0] if error.args and isinstance(error.args[0], BaseException) else None
        error = wrapped or error.__cause__ or error.__context__
    return False


class HhGateway:
    """Executes single requests against the configured API base URL."""

    def __init__(self, config: ClientConfig, session: Optional[requests.Session] = None):
        self.config = config
        self._owns_session = session is None
        self.session = session or requests.Session()
        # sent per request; an injected session is left untouched
        self.headers = config.headers()

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def fetch_vacancy_page(self, query: QuerySet) -> RawOutcome:
        return self._get("vacancies", params=dict(query), operation="vacancy_page")

    def fetch_vacancy_detail(self, vacancy_id) -> RawOutcome:
        return self._get(f"vacancies/{vacancy_id}", operation="vacancy_detail")

    def fetch_lookup_list(self, kind: LookupKind, area_id: Optional[str] = None) -> RawOutcome:
        if kind is LookupKind.INDUSTRIES:
            return self._get("industries", operation="industries")
        if area_id is not None:
            return self._get(f"areas/{area_id}", operation="area")
        return self._get("areas", operation="areas")

    def _get(self, path: str, operation: str, params: Optional[dict] = None) -> RawOutcome:
        url = self.config.url(path)
        logger.metrics.attempt(operation)
        logger.debug("GET", url=url, params=params or {})

        try:
            # The with block releases the connection before we return
            with self.session.get(url, params=params, headers=self.headers,
                                  timeout=self.config.timeout) as resp:
                status = resp.status_code
                body = resp.text
        except (requests.exceptions.RequestException, OSError) as e:
            if _is_timeout(e):
                logger.metrics.failed(operation, "Timeout")
                logger.warning("Request timed out", url=url, timeout=self.config.timeout)
                return RawOutcome.failed(TransportErrorKind.TIMEOUT)
            logger.metrics.failed(operation, type(e).__name__)
            logger.error("Request error", url=url, error=str(e))
            return RawOutcome.failed(TransportErrorKind.IO)

        if 200 <= status < 300:
            logger.metrics.succeeded(operation)
        else:
            logger.metrics.failed(operation, f"HTTPError_{status}")
            if status == 404:
                logger.warning("Resource not found", url=url, status=404)
            else:
                logger.error("Request failed", url=url, status=status)
        return RawOutcome(status=status, body=body)
