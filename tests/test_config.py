"""
Tests for client configuration and .env loading.
"""

import pytest

from hhvacancies.config import DEFAULT_BASE_URL, ClientConfig
from hhvacancies.env import load_env

HH_VARS = ["HH_BASE_URL", "HH_TIMEOUT", "HH_ACCESS_TOKEN", "HH_USER_AGENT", "HH_CHECK_HOST", "HH_CHECK_PORT"]


@pytest.fixture
def clean_env(monkeypatch):
    # setenv first so monkeypatch also undoes values load_dotenv writes
    for name in HH_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


class TestClientConfig:
    """Test config validation and helpers."""

    def test_defaults(self):
        config = ClientConfig()
        assert config.base_url == DEFAULT_BASE_URL
        assert config.timeout > 0
        assert config.access_token is None

    def test_trailing_slash_stripped(self):
        config = ClientConfig(base_url="https://api.hh.ru/")
        assert config.url("/vacancies/1") == "https://api.hh.ru/vacancies/1"

    @pytest.mark.parametrize("timeout", [0, -1, None])
    def test_timeout_required(self, timeout):
        with pytest.raises(ValueError, match="timeout"):
            ClientConfig(timeout=timeout)

    def test_empty_base_url(self):
        with pytest.raises(ValueError):
            ClientConfig(base_url="")

    def test_headers_without_token(self):
        headers = ClientConfig(user_agent="app/1.0 (dev@example.com)").headers()
        assert headers["HH-User-Agent"] == "app/1.0 (dev@example.com)"
        assert "Authorization" not in headers

    def test_headers_with_token(self):
        assert ClientConfig(access_token="abc").headers()["Authorization"] == "Bearer abc"

    def test_with_overrides_ignores_none(self):
        config = ClientConfig(timeout=3.0).with_overrides(timeout=None, base_url="https://mock.test")
        assert config.timeout == 3.0
        assert config.base_url == "https://mock.test"


class TestFromEnv:
    """Test reading HH_* variables."""

    def test_reads_variables(self, clean_env):
        clean_env.setenv("HH_BASE_URL", "https://mock.test/")
        clean_env.setenv("HH_TIMEOUT", "2.5")
        clean_env.setenv("HH_ACCESS_TOKEN", "tok")
        clean_env.setenv("HH_CHECK_PORT", "80")

        config = ClientConfig.from_env()

        assert config.base_url == "https://mock.test"
        assert config.timeout == 2.5
        assert config.access_token == "tok"
        assert config.check_port == 80

    def test_defaults_when_unset(self, clean_env):
        assert ClientConfig.from_env() == ClientConfig()

    def test_bad_number(self, clean_env):
        clean_env.setenv("HH_TIMEOUT", "soon")
        with pytest.raises(ValueError, match="HH_"):
            ClientConfig.from_env()


class TestLoadEnv:
    def test_missing_file(self, tmp_path):
        assert load_env(tmp_path / ".env") is False

    def test_loads_file(self, tmp_path, clean_env):
        env_file = tmp_path / ".env"
        env_file.write_text("HH_ACCESS_TOKEN=from-file\nHH_TIMEOUT=7\n")

        assert load_env(env_file) is True
        assert ClientConfig.from_env().access_token == "from-file"

    def test_process_env_wins(self, tmp_path, clean_env):
        env_file = tmp_path / ".env"
        env_file.write_text("HH_ACCESS_TOKEN=from-file\n")
        clean_env.setenv("HH_ACCESS_TOKEN", "from-env")

        load_env(env_file)

        assert ClientConfig.from_env().access_token == "from-env"
