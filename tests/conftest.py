"""
Pytest configuration and shared fixtures.
"""

import json
from typing import Any, Dict, List
from unittest.mock import MagicMock

import pytest

from hhvacancies.logger import get_logger

# Quiet shared logger for the whole session; must run before client modules bind it
get_logger(enable_console=False)

from hhvacancies.config import ClientConfig  # noqa: E402
from hhvacancies.connectivity import StaticConnectionChecker  # noqa: E402
from hhvacancies.transport import HhGateway  # noqa: E402


def make_response(status: int, body: str = "") -> MagicMock:
    """Response double usable as a context manager, like requests.Response."""
    resp = MagicMock()
    resp.status_code = status
    resp.text = body
    resp.__enter__.return_value = resp
    return resp


@pytest.fixture
def response():
    """Factory fixture: response(status, body)."""
    return make_response


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(base_url="https://api.example.test", timeout=5.0, access_token="secret")


@pytest.fixture
def session() -> MagicMock:
    """requests.Session double; set session.get.return_value / side_effect per test."""
    s = MagicMock()
    s.headers = {}
    return s


@pytest.fixture
def gateway(config, session) -> HhGateway:
    return HhGateway(config, session=session)


@pytest.fixture
def online() -> StaticConnectionChecker:
    return StaticConnectionChecker(True)


@pytest.fixture
def offline() -> StaticConnectionChecker:
    return StaticConnectionChecker(False)


@pytest.fixture
def vacancy_page_body() -> Dict[str, Any]:
    """Sample GET /vacancies body."""
    return {
        "items": [
            {
                "id": "93354023",
                "name": "Python developer",
                "area": {"id": "1", "name": "Москва", "url": "https://api.hh.ru/areas/1"},
                "salary": {"from": 150000, "to": 250000, "currency": "RUR", "gross": False},
                "employer": {"id": "3529", "name": "Acme"},
                "alternate_url": "https://hh.ru/vacancy/93354023",
            },
            {
                "id": "93354024",
                "name": "Data engineer",
                "area": {"id": "2", "name": "Санкт-Петербург"},
                "salary": None,
                "employer": {"id": "1740", "name": "Beta"},
                "alternate_url": "https://hh.ru/vacancy/93354024",
            },
        ],
        "found": 2,
        "pages": 1,
        "page": 0,
        "per_page": 20,
    }


@pytest.fixture
def vacancy_detail_body() -> Dict[str, Any]:
    """Sample GET /vacancies/{id} body."""
    return {
        "id": "93354023",
        "name": "Python developer",
        "area": {"id": "1", "name": "Москва"},
        "salary": {"from": 150000, "to": None, "currency": "RUR", "gross": True},
        "employer": {"id": "3529", "name": "Acme"},
        "experience": {"id": "between1And3", "name": "От 1 года до 3 лет"},
        "employment": {"id": "full", "name": "Полная занятость"},
        "schedule": {"id": "remote", "name": "Удаленная работа"},
        "description": "<p>We build <strong>APIs</strong>.</p><ul><li>Python</li><li>SQL</li></ul>",
        "key_skills": [{"name": "Python"}, {"name": "PostgreSQL"}],
        "alternate_url": "https://hh.ru/vacancy/93354023",
    }


@pytest.fixture
def industries_body() -> List[Dict[str, Any]]:
    """Sample GET /industries body."""
    return [
        {
            "id": "7",
            "name": "Информационные технологии",
            "industries": [
                {"id": "7.540", "name": "Разработка программного обеспечения"},
                {"id": "7.541", "name": "Системная интеграция"},
            ],
        },
        {"id": "9", "name": "Телекоммуникации", "industries": []},
    ]


@pytest.fixture
def areas_body() -> List[Dict[str, Any]]:
    """Sample GET /areas body."""
    return [
        {
            "id": "113",
            "parent_id": None,
            "name": "Россия",
            "areas": [
                {"id": "1", "parent_id": "113", "name": "Москва", "areas": []},
                {"id": "2", "parent_id": "113", "name": "Санкт-Петербург", "areas": []},
            ],
        }
    ]


@pytest.fixture
def as_json():
    return lambda data: json.dumps(data, ensure_ascii=False)
