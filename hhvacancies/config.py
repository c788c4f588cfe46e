"""
Client configuration.

All settings the data-access layer needs are injected through a single
immutable ClientConfig value; nothing is read from globals at call time.
"""

import os
from dataclasses import dataclass, replace
from typing import Optional

from . import __version__

DEFAULT_BASE_URL = "https://api.hh.ru"
DEFAULT_TIMEOUT = 15.0


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for the hh.ru API."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    access_token: Optional[str] = None
    user_agent: str = f"hhvacancies/{__version__}"
    check_host: str = "api.hh.ru"
    check_port: int = 443
    check_timeout: float = 3.0

    def __post_init__(self):
        if not self.base_url:
            raise ValueError("base_url must be a non-empty URL")
        if self.timeout is None or self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout!r}")
        if self.check_timeout <= 0:
            raise ValueError(f"check_timeout must be positive, got {self.check_timeout!r}")
        # Normalise once so endpoint joins never produce '//'
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def headers(self) -> dict:
        """Default request headers, including auth when a token is set."""
        headers = {
            "Accept": "application/json",
            "User-Agent": self.user_agent,
            "HH-User-Agent": self.user_agent,
        }
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def with_overrides(self, **changes) -> "ClientConfig":
        """Return a copy with the given non-None fields replaced."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """
        Build a config from HH_* environment variables.

        Call env.load_env() first to pick up a project .env file.

        Raises:
            ValueError: If a numeric variable cannot be parsed
        """
        defaults = cls()
        try:
            timeout = float(os.getenv("HH_TIMEOUT", defaults.timeout))
            check_port = int(os.getenv("HH_CHECK_PORT", defaults.check_port))
        except ValueError as e:
            raise ValueError(f"Invalid numeric HH_* setting: {e}") from e

        return cls(
            base_url=os.getenv("HH_BASE_URL", defaults.base_url),
            timeout=timeout,
            access_token=os.getenv("HH_ACCESS_TOKEN") or None,
            user_agent=os.getenv("HH_USER_AGENT", defaults.user_agent),
            check_host=os.getenv("HH_CHECK_HOST", defaults.check_host),
            check_port=check_port,
        )
