import pytest

from jira_app.core.config import DEFAULT_PORT, TIMEZONE, ConfigError, load_settings


def test_load_settings_primary_names():
    settings = load_settings(
        {
            "JIRA_BASE_URL": "https://example.atlassian.net/",
            "JIRA_EMAIL": "me@example.com",
            "JIRA_API_TOKEN": "secret",
            "PORT": "4000",
            "LOG_LEVEL": "debug",
        }
    )
    assert settings.server == "https://example.atlassian.net"
    assert settings.port == 4000
    assert settings.log_level == "DEBUG"
    assert settings.timezone == TIMEZONE
    assert settings.is_complete


def test_load_settings_aliases_and_defaults():
    settings = load_settings({"JIRA_SERVER": "https://x", "JIRA_TOKEN": "t", "JIRA_TIMEZONE": "UTC"})
    assert settings.server == "https://x"
    assert settings.token == "t"
    assert settings.timezone == "UTC"
    assert settings.port == DEFAULT_PORT
    assert not settings.is_complete


def test_require_lists_missing():
    with pytest.raises(ConfigError, match="JIRA_EMAIL, JIRA_API_TOKEN"):
        load_settings({"JIRA_BASE_URL": "https://x"}).require()


def test_bad_port():
    with pytest.raises(ConfigError):
        load_settings({"PORT": "abc"})
