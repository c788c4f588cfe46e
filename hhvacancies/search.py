from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

QuerySet = Mapping[str, str]


class HhApiQuery(str, Enum):
    """Query parameter names understood by GET /vacancies."""

    PAGE = "page"
    PER_PAGE = "per_page"
    SEARCH_TEXT = "text"
    SALARY_FILTER = "salary"
    INDUSTRY_FILTER = "industry"
    REGION_FILTER = "area"
    ONLY_WITH_SALARY_FILTER = "only_with_salary"


@dataclass(frozen=True)
class SearchFilter:
    """Filters for one vacancy search. Empty strings mean "not set"."""

    text: str = ""
    salary: str = ""
    industry_id: str = ""
    region_id: str = ""
    only_with_salary: bool = False


def _filter_params(search_filter: SearchFilter) -> dict[str, str]:
    params: dict[str, str] = {}
    if search_filter.salary:
        params[HhApiQuery.SALARY_FILTER.value] = search_filter.salary
    if search_filter.industry_id:
        params[HhApiQuery.INDUSTRY_FILTER.value] = search_filter.industry_id
    if search_filter.region_id:
        params[HhApiQuery.REGION_FILTER.value] = search_filter.region_id
    if search_filter.only_with_salary:
        # absence means false; "false" is never sent
        params[HhApiQuery.ONLY_WITH_SALARY_FILTER.value] = "true"
    return params


def build_query(search_filter: SearchFilter, page: int, per_page: int) -> QuerySet:
    """
    Returns the read-only query parameter set for one search page.

    page, per_page and text are always present; text may be empty, which
    the API treats as "match everything". Optional filters are included
    only when set.
    """
    params = {
        HhApiQuery.PAGE.value: str(page),
        HhApiQuery.PER_PAGE.value: str(per_page),
        HhApiQuery.SEARCH_TEXT.value: search_filter.text,
    }
    params.update(_filter_params(search_filter))
    return MappingProxyType(params)


def filter_from_query(query: QuerySet) -> SearchFilter:
    """Rebuild a SearchFilter from the recognized keys of a query set."""
    return SearchFilter(
        text=query.get(HhApiQuery.SEARCH_TEXT.value, ""),
        salary=query.get(HhApiQuery.SALARY_FILTER.value, ""),
        industry_id=query.get(HhApiQuery.INDUSTRY_FILTER.value, ""),
        region_id=query.get(HhApiQuery.REGION_FILTER.value, ""),
        only_with_salary=query.get(HhApiQuery.ONLY_WITH_SALARY_FILTER.value) == "true",
    )
