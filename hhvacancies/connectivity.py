"""Network availability checks run before connectivity-sensitive requests."""

import socket

from .config import ClientConfig
from .logger import get_logger

logger = get_logger()


class ConnectionChecker:
    """
    Reports whether the API host is reachable by opening a TCP connection.

    is_connected() never raises: anything that prevents a decision counts
    as "not connected".
    """

    def __init__(self, host: str, port: int = 443, timeout: float = 3.0):
        self.host = host
        self.port = port
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: ClientConfig) -> "ConnectionChecker":
        return cls(config.check_host, config.check_port, config.check_timeout)

    def is_connected(self) -> bool:
        try:
            with socket.create_connection((self.host, self.port), timeout=self.timeout):
                return True
        except (OSError, ValueError) as e:
            # OSError covers DNS failures, refusals and socket timeouts
            logger.debug("Connectivity check failed", host=self.host, port=self.port, error=str(e))
            return False


class StaticConnectionChecker:
    """Fixed answer; for offline tooling and tests."""

    def __init__(self, connected: bool = True):
        self.connected = connected

    def is_connected(self) -> bool:
        return self.connected
