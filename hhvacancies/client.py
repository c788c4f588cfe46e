"""
Public client for the hh.ru vacancy API.

HhClient is the only entry point other layers use. Every method returns a
Result (see result.py) and never raises for network or response problems.
"""

from enum import Enum
from typing import Dict, Optional, Protocol

from .config import ClientConfig
from .connectivity import ConnectionChecker
from .logger import get_logger
from .normalize import network_unavailable, normalize
from .result import Result, describe
from .schema import LookupKind, PayloadKind
from .search import SearchFilter, build_query
from .transport import HhGateway

logger = get_logger()

DEFAULT_PER_PAGE = 20


def _numeric_id(value, what: str) -> str:
    """Return value as a digit string, or raise ValueError."""
    if isinstance(value, bool):
        raise ValueError(f"{what} must be numeric, got {value!r}")
    text = str(value).strip() if value is not None else ""
    if not (text.isascii() and text.isdigit()):
        raise ValueError(f"{what} must be numeric, got {value!r}")
    return text


class Operation(str, Enum):
    SEARCH_VACANCIES = "search_vacancies"
    GET_VACANCY = "get_vacancy"
    GET_INDUSTRIES = "get_industries"
    GET_AREAS = "get_areas"
    GET_AREAS_BY_ID = "get_areas_by_id"


class Connectivity(Protocol):
    def is_connected(self) -> bool: ...


class ConnectivityPolicy:
    """
    Which operations check connectivity before calling the API.

    The default matches the long-standing behaviour: searches and vacancy
    details are checked, lookup lists are not. Whether lookups should be
    checked too is still open with the product owner; use strict() to
    check everything.
    """

    DEFAULT_CHECKED = frozenset({Operation.SEARCH_VACANCIES, Operation.GET_VACANCY})

    def __init__(self, checked: Optional[Dict[Operation, bool]] = None):
        self.checked = {op: op in self.DEFAULT_CHECKED for op in Operation}
        if checked:
            self.checked.update(checked)

    @classmethod
    def strict(cls) -> "ConnectivityPolicy":
        return cls({op: True for op in Operation})

    @classmethod
    def never(cls) -> "ConnectivityPolicy":
        return cls({op: False for op in Operation})

    def requires_check(self, operation: Operation) -> bool:
        return self.checked.get(operation, True)


class HhClient:
    """
    Facade over connectivity checker, query builder, gateway and normalizer.

    Args:
        config: Connection settings (base URL, timeout, auth)
        connection_checker: Checker used before connectivity-sensitive calls
        gateway: Transport; built from config when omitted
        policy: Per-operation connectivity policy
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        connection_checker: Optional[Connectivity] = None,
        gateway: Optional[HhGateway] = None,
        policy: Optional[ConnectivityPolicy] = None,
    ):
        self.config = config or ClientConfig()
        self.connection_checker = connection_checker or ConnectionChecker.from_config(self.config)
        self.gateway = gateway or HhGateway(self.config)
        self.policy = policy or ConnectivityPolicy()

    def close(self) -> None:
        self.gateway.close()

    def __enter__(self) -> "HhClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def search_vacancies(
        self,
        search_filter: SearchFilter,
        page: int = 0,
        per_page: int = DEFAULT_PER_PAGE,
    ) -> Result:
        """
        Fetch one page of vacancies matching the filter.

        Raises:
            ValueError: If page is negative or per_page is not positive
        """
        if page < 0:
            raise ValueError(f"page must be non-negative, got {page}")
        if per_page <= 0:
            raise ValueError(f"per_page must be positive, got {per_page}")

        if not self._connected(Operation.SEARCH_VACANCIES):
            return network_unavailable()
        query = build_query(search_filter, page, per_page)
        outcome = self.gateway.fetch_vacancy_page(query)
        return self._finish(Operation.SEARCH_VACANCIES, normalize(outcome, PayloadKind.VACANCY_PAGE))

    def get_vacancy(self, vacancy_id) -> Result:
        """
        Fetch the full record for one vacancy.

        Raises:
            ValueError: If vacancy_id is not a non-negative integer or digit string
        """
        vacancy_id = _numeric_id(vacancy_id, "vacancy_id")
        if not self._connected(Operation.GET_VACANCY):
            return network_unavailable()
        outcome = self.gateway.fetch_vacancy_detail(vacancy_id)
        return self._finish(Operation.GET_VACANCY, normalize(outcome, PayloadKind.VACANCY_DETAIL))

    def get_industries(self) -> Result:
        if not self._connected(Operation.GET_INDUSTRIES):
            return network_unavailable()
        outcome = self.gateway.fetch_lookup_list(LookupKind.INDUSTRIES)
        return self._finish(Operation.GET_INDUSTRIES, normalize(outcome, PayloadKind.INDUSTRIES))

    def get_areas(self) -> Result:
        if not self._connected(Operation.GET_AREAS):
            return network_unavailable()
        outcome = self.gateway.fetch_lookup_list(LookupKind.AREAS)
        return self._finish(Operation.GET_AREAS, normalize(outcome, PayloadKind.AREAS))

    def get_areas_by_id(self, area_id: str) -> Result:
        """Fetch one area with its nested sub-areas."""
        area_id = _numeric_id(area_id, "area_id")
        if not self._connected(Operation.GET_AREAS_BY_ID):
            return network_unavailable()
        outcome = self.gateway.fetch_lookup_list(LookupKind.AREAS, area_id=area_id)
        return self._finish(Operation.GET_AREAS_BY_ID, normalize(outcome, PayloadKind.AREA))

    def _connected(self, operation: Operation) -> bool:
        if not self.policy.requires_check(operation):
            return True
        if self.connection_checker.is_connected():
            return True
        logger.warning("No network connection, request skipped", operation=operation.value)
        return False

    def _finish(self, operation: Operation, result: Result) -> Result:
        logger.debug("Operation finished", operation=operation.value, result=describe(result))
        return result
