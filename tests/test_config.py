"""Tests for environment configuration and the connection profile."""
import pytest
from pydantic import ValidationError

from jira_mcp.config import (
    BasicAuth,
    ConfigurationError,
    ConnectionProfile,
    TokenAuth,
    load_settings,
)

JIRA_VARS = [
    "JIRA_BASE_URL",
    "JIRA_AUTH_TYPE",
    "JIRA_PAT",
    "JIRA_USERNAME",
    "JIRA_PASSWORD",
    "JIRA_TIMEOUT",
    "JIRA_MCP_DEBUG",
    "JIRA_LOG_DIR",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in JIRA_VARS:
        monkeypatch.delenv(name, raising=False)


class TestLoadSettings:
    """Test resolving settings from the environment."""

    def test_pat_is_default_auth_type(self, monkeypatch):
        monkeypatch.setenv("JIRA_BASE_URL", "https://jira.example.com/")
        monkeypatch.setenv("JIRA_PAT", "token-abc")

        settings = load_settings(env_file=None)
        profile = settings.connection_profile()

        assert settings.auth_type == "pat"
        assert profile.base_url == "https://jira.example.com"
        assert isinstance(profile.auth, TokenAuth)
        assert profile.auth.token.get_secret_value() == "token-abc"
        assert settings.timeout == 30.0
        assert settings.mcp_debug is False

    def test_basic_auth(self, monkeypatch):
        monkeypatch.setenv("JIRA_BASE_URL", "http://localhost:8080")
        monkeypatch.setenv("JIRA_AUTH_TYPE", "basic")
        monkeypatch.setenv("JIRA_USERNAME", "admin")
        monkeypatch.setenv("JIRA_PASSWORD", "hunter2")

        profile = load_settings(env_file=None).connection_profile()

        assert isinstance(profile.auth, BasicAuth)
        assert profile.auth.username == "admin"
        assert profile.auth.password.get_secret_value() == "hunter2"

    def test_missing_base_url(self, monkeypatch):
        monkeypatch.setenv("JIRA_PAT", "token-abc")

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(env_file=None)

        assert "JIRA_BASE_URL environment variable is required" in str(exc_info.value)

    def test_missing_pat(self, monkeypatch):
        monkeypatch.setenv("JIRA_BASE_URL", "https://jira.example.com")

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(env_file=None)

        assert "JIRA_PAT environment variable is required" in str(exc_info.value)

    def test_empty_pat_is_missing(self, monkeypatch):
        monkeypatch.setenv("JIRA_BASE_URL", "https://jira.example.com")
        monkeypatch.setenv("JIRA_PAT", "")

        with pytest.raises(ConfigurationError):
            load_settings(env_file=None)

    def test_basic_requires_password(self, monkeypatch):
        monkeypatch.setenv("JIRA_BASE_URL", "https://jira.example.com")
        monkeypatch.setenv("JIRA_AUTH_TYPE", "basic")
        monkeypatch.setenv("JIRA_USERNAME", "admin")

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(env_file=None)

        assert "JIRA_USERNAME and JIRA_PASSWORD are required" in str(exc_info.value)

    def test_invalid_auth_type(self, monkeypatch):
        monkeypatch.setenv("JIRA_BASE_URL", "https://jira.example.com")
        monkeypatch.setenv("JIRA_AUTH_TYPE", "oauth")
        monkeypatch.setenv("JIRA_PAT", "token-abc")

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(env_file=None)

        assert 'Must be "pat" or "basic"' in str(exc_info.value)

    def test_invalid_timeout(self, monkeypatch):
        monkeypatch.setenv("JIRA_BASE_URL", "https://jira.example.com")
        monkeypatch.setenv("JIRA_PAT", "token-abc")
        monkeypatch.setenv("JIRA_TIMEOUT", "0")

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(env_file=None)

        assert "JIRA_TIMEOUT" in str(exc_info.value)

    def test_error_does_not_echo_secrets(self, monkeypatch):
        monkeypatch.setenv("JIRA_AUTH_TYPE", "basic")
        monkeypatch.setenv("JIRA_USERNAME", "admin")
        monkeypatch.setenv("JIRA_PASSWORD", "hunter2")

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(env_file=None)

        assert "hunter2" not in str(exc_info.value)

    def test_secrets_hidden_from_repr(self, monkeypatch):
        monkeypatch.setenv("JIRA_BASE_URL", "https://jira.example.com")
        monkeypatch.setenv("JIRA_PAT", "token-abc")

        settings = load_settings(env_file=None)

        assert "token-abc" not in repr(settings)
        assert "token-abc" not in repr(settings.connection_profile())

    @pytest.mark.parametrize("value, enabled", [
        ("", False),
        ("   ", False),
        ("1", True),
        ("debug", True),
        ("true", True),
    ])
    def test_debug_flag_enabled_by_any_non_empty_value(self, monkeypatch, value, enabled):
        monkeypatch.setenv("JIRA_BASE_URL", "https://jira.example.com")
        monkeypatch.setenv("JIRA_PAT", "token-abc")
        monkeypatch.setenv("JIRA_MCP_DEBUG", value)

        settings = load_settings(env_file=None)

        assert settings.mcp_debug is enabled

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("JIRA_BASE_URL=https://jira.internal\nJIRA_PAT=from-file\n")

        settings = load_settings(env_file=env_file)

        assert settings.base_url == "https://jira.internal"
        assert settings.pat.get_secret_value() == "from-file"


class TestConnectionProfile:
    """Test the immutable connection profile."""

    def test_strips_single_trailing_slash(self):
        profile = ConnectionProfile(base_url="https://jira.example.com/", auth=TokenAuth(token="t"))
        assert profile.base_url == "https://jira.example.com"

    def test_is_frozen(self):
        profile = ConnectionProfile(base_url="https://jira.example.com", auth=TokenAuth(token="t"))
        with pytest.raises(ValidationError):
            profile.base_url = "https://elsewhere.example.com"

    def test_auth_discriminated_by_type(self):
        profile = ConnectionProfile.model_validate({
            "base_url": "https://jira.example.com",
            "auth": {"type": "basic", "username": "admin", "password": "pw"},
        })
        assert isinstance(profile.auth, BasicAuth)

    def test_basic_auth_requires_password(self):
        with pytest.raises(ValidationError):
            ConnectionProfile.model_validate({
                "base_url": "https://jira.example.com",
                "auth": {"type": "basic", "username": "admin"},
            })
