"""
Payload types for hh.ru API responses and the parsers that build them.

Parsers take the decoded JSON body and raise PayloadError when it does not
have the shape an endpoint promises. Only fields the client exposes are
checked; everything else stays available under `raw`.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from bs4 import BeautifulSoup


class PayloadError(ValueError):
    """Response body does not match the expected payload shape."""


class PayloadKind(str, Enum):
    VACANCY_PAGE = "vacancy_page"
    VACANCY_DETAIL = "vacancy_detail"
    AREAS = "areas"
    AREA = "area"
    INDUSTRIES = "industries"


class LookupKind(str, Enum):
    AREAS = "areas"
    INDUSTRIES = "industries"


@dataclass
class Salary:
    salary_from: Optional[int] = None
    salary_to: Optional[int] = None
    currency: Optional[str] = None
    gross: Optional[bool] = None


@dataclass
class Area:
    id: str
    name: str
    parent_id: Optional[str] = None
    areas: List["Area"] = field(default_factory=list)


@dataclass
class Industry:
    id: str
    name: str
    industries: List["Industry"] = field(default_factory=list)


@dataclass
class VacancyShort:
    id: str
    name: str
    area: Optional[Area] = None
    employer_name: Optional[str] = None
    salary: Optional[Salary] = None
    url: Optional[str] = None


@dataclass
class VacancyPage:
    items: List[VacancyShort]
    found: int
    pages: int
    page: int
    per_page: int
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass
class VacancyDetail:
    id: str
    name: str
    area: Optional[Area] = None
    employer_name: Optional[str] = None
    salary: Optional[Salary] = None
    experience: Optional[str] = None
    employment: Optional[str] = None
    schedule: Optional[str] = None
    description: Optional[str] = None
    key_skills: List[str] = field(default_factory=list)
    url: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    def description_text(self) -> str:
        """Description with HTML markup stripped."""
        if not self.description:
            return ""
        soup = BeautifulSoup(self.description, "html.parser")
        return soup.get_text("\n", strip=True)


@dataclass
class LookupList:
    kind: LookupKind
    items: Union[List[Area], List[Industry]]
    raw: Any = field(default=None, repr=False)


# ---------- helpers ----------

def _require_dict(data: Any, what: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise PayloadError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


def _require_list(data: Any, what: str) -> List[Any]:
    if not isinstance(data, list):
        raise PayloadError(f"{what} must be a JSON array, got {type(data).__name__}")
    return data


def _require_id(data: Dict[str, Any], what: str) -> str:
    value = data.get("id")
    if value is None or isinstance(value, (dict, list, bool)) or str(value).strip() == "":
        raise PayloadError(f"{what}: missing or invalid 'id'")
    return str(value)


def _require_str(data: Dict[str, Any], key: str, what: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise PayloadError(f"{what}: field '{key}' must be a string")
    return value


def _require_int(data: Dict[str, Any], key: str, what: str) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise PayloadError(f"{what}: field '{key}' must be an integer")
    return value


def _optional_name(data: Dict[str, Any], key: str) -> Optional[str]:
    """Name of a nested {id, name} dictionary entry, if present."""
    value = data.get(key)
    if isinstance(value, dict) and isinstance(value.get("name"), str):
        return value["name"]
    return None


def _optional_str(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    return value if isinstance(value, str) else None


# ---------- parsers ----------

def parse_salary(data: Any) -> Optional[Salary]:
    if data is None:
        return None
    data = _require_dict(data, "salary")
    return Salary(
        salary_from=data.get("from"),
        salary_to=data.get("to"),
        currency=data.get("currency"),
        gross=data.get("gross"),
    )


def parse_area(data: Any) -> Area:
    data = _require_dict(data, "area")
    parent = data.get("parent_id")
    return Area(
        id=_require_id(data, "area"),
        name=_require_str(data, "name", "area"),
        parent_id=str(parent) if parent is not None else None,
        areas=[parse_area(a) for a in _require_list(data.get("areas", []), "area.areas")],
    )


def parse_industry(data: Any) -> Industry:
    data = _require_dict(data, "industry")
    return Industry(
        id=_require_id(data, "industry"),
        name=_require_str(data, "name", "industry"),
        industries=[
            parse_industry(i)
            for i in _require_list(data.get("industries", []), "industry.industries")
        ],
    )


def parse_vacancy_short(data: Any) -> VacancyShort:
    data = _require_dict(data, "vacancy")
    area = data.get("area")
    employer = data.get("employer")
    return VacancyShort(
        id=_require_id(data, "vacancy"),
        name=_require_str(data, "name", "vacancy"),
        area=parse_area(area) if area is not None else None,
        employer_name=employer.get("name") if isinstance(employer, dict) else None,
        salary=parse_salary(data.get("salary")),
        url=_optional_str(data, "alternate_url"),
    )


def parse_vacancy_page(data: Any) -> VacancyPage:
    data = _require_dict(data, "vacancy page")
    items = _require_list(data.get("items"), "vacancy page items")
    return VacancyPage(
        items=[parse_vacancy_short(item) for item in items],
        found=_require_int(data, "found", "vacancy page"),
        pages=_require_int(data, "pages", "vacancy page"),
        page=_require_int(data, "page", "vacancy page"),
        per_page=_require_int(data, "per_page", "vacancy page"),
        raw=data,
    )


def parse_vacancy_detail(data: Any) -> VacancyDetail:
    data = _require_dict(data, "vacancy detail")
    area = data.get("area")
    employer = data.get("employer")
    skills = []
    for skill in _require_list(data.get("key_skills", []), "vacancy key_skills"):
        if isinstance(skill, dict) and isinstance(skill.get("name"), str):
            skills.append(skill["name"])
    return VacancyDetail(
        id=_require_id(data, "vacancy detail"),
        name=_require_str(data, "name", "vacancy detail"),
        area=parse_area(area) if area is not None else None,
        employer_name=employer.get("name") if isinstance(employer, dict) else None,
        salary=parse_salary(data.get("salary")),
        experience=_optional_name(data, "experience"),
        employment=_optional_name(data, "employment"),
        schedule=_optional_name(data, "schedule"),
        description=_optional_str(data, "description"),
        key_skills=skills,
        url=_optional_str(data, "alternate_url"),
        raw=data,
    )


def parse_areas(data: Any) -> LookupList:
    items = _require_list(data, "areas")
    return LookupList(kind=LookupKind.AREAS, items=[parse_area(a) for a in items], raw=data)


def parse_area_subtree(data: Any) -> LookupList:
    """GET /areas/{id} returns one area object; expose it as a one-item list."""
    return LookupList(kind=LookupKind.AREAS, items=[parse_area(data)], raw=data)


def parse_industries(data: Any) -> LookupList:
    items = _require_list(data, "industries")
    return LookupList(
        kind=LookupKind.INDUSTRIES, items=[parse_industry(i) for i in items], raw=data
    )


PARSERS = {
    PayloadKind.VACANCY_PAGE: parse_vacancy_page,
    PayloadKind.VACANCY_DETAIL: parse_vacancy_detail,
    PayloadKind.AREAS: parse_areas,
    PayloadKind.AREA: parse_area_subtree,
    PayloadKind.INDUSTRIES: parse_industries,
}


def parse_payload(kind: PayloadKind, data: Any):
    """Dispatch to the parser registered for `kind`."""
    return PARSERS[kind](data)
