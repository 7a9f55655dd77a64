"""Tests for configuration loading."""

from pathlib import Path

import pytest
import yaml

from card_counter.config import Settings, get_settings, save_settings
from card_counter.errors import ConfigError

ENV_VARS = [
    "TRELLO_API_KEY",
    "TRELLO_API_TOKEN",
    "JIRA_USERNAME",
    "JIRA_API_TOKEN",
    "JIRA_URL",
    "SLACK_WEBHOOK_URL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def write_config(path: Path, data: dict) -> Path:
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


def test_defaults_without_file(tmp_path: Path) -> None:
    """Test a missing config file yields default settings."""
    settings = get_settings(tmp_path / "missing.yaml")

    assert settings.kanban.kind == "trello"
    assert settings.storage.database == "local"
    assert settings.burndown.filter is None
    assert settings.slack_webhook_url is None


def test_yaml_sections_are_applied(tmp_path: Path) -> None:
    config_path = write_config(tmp_path / "card-counter.yaml", {
        "kanban": {"kind": "jira"},
        "jira": {"username": "me", "api_token": "t", "url": "https://jira"},
        "storage": {"database": "memory", "storage_dir": str(tmp_path / "snaps")},
        "burndown": {"filter": "NoBurn", "ascii_width": 60},
    })

    settings = get_settings(config_path)

    assert settings.kanban.kind == "jira"
    assert settings.require_jira_auth().url == "https://jira"
    assert settings.storage_dir == tmp_path / "snaps"
    assert settings.storage.database == "memory"
    assert settings.burndown.filter == "NoBurn"
    assert settings.burndown.ascii_width == 60


def test_environment_overrides_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test credentials from the environment win over the file."""
    config_path = write_config(tmp_path / "card-counter.yaml", {"trello": {"key": "file-key", "token": "file-token"}})
    monkeypatch.setenv("TRELLO_API_KEY", "env-key")
    monkeypatch.setenv("SLACK_WEBHOOK_URL", "https://hooks.slack.com/services/test")

    settings = get_settings(config_path)

    assert settings.trello.key == "env-key"
    assert settings.trello.token == "file-token"
    assert settings.slack_webhook_url == "https://hooks.slack.com/services/test"

    file_only = get_settings(config_path, use_env=False)
    assert file_only.trello.key == "file-key"


def test_unknown_kanban(tmp_path: Path) -> None:
    config_path = write_config(tmp_path / "card-counter.yaml", {"kanban": {"kind": "asana"}})

    with pytest.raises(ConfigError, match="Unknown kanban board: asana"):
        get_settings(config_path)


def test_unknown_option(tmp_path: Path) -> None:
    config_path = write_config(tmp_path / "card-counter.yaml", {"storage": {"bucket": "x"}})

    with pytest.raises(ConfigError, match="storage.bucket"):
        get_settings(config_path)


def test_invalid_yaml(tmp_path: Path) -> None:
    config_path = tmp_path / "card-counter.yaml"
    config_path.write_text("kanban: [", encoding="utf-8")

    with pytest.raises(ConfigError, match="Unable to parse"):
        get_settings(config_path)


def test_require_trello_auth() -> None:
    """Test missing Trello credentials explain where to get them."""
    settings = Settings()

    with pytest.raises(ConfigError, match="TRELLO_API_KEY"):
        settings.require_trello_auth()

    settings.trello.key = "abc"
    with pytest.raises(ConfigError, match="key=abc"):
        settings.require_trello_auth()

    settings.trello.token = "def"
    assert settings.require_trello_auth().token == "def"


def test_require_jira_auth_lists_missing() -> None:
    settings = Settings()
    settings.jira.username = "me"

    with pytest.raises(ConfigError, match="JIRA_API_TOKEN, JIRA_URL"):
        settings.require_jira_auth()


def test_save_and_reload(tmp_path: Path) -> None:
    """Test saved settings load back unchanged."""
    config_path = tmp_path / "nested" / "card-counter.yaml"
    settings = Settings()
    settings.kanban.kind = "jira"
    settings.storage.storage_dir = tmp_path / "snaps"
    settings.burndown.filter = "NoBurn"

    save_settings(settings, config_path)
    reloaded = get_settings(config_path)

    assert reloaded.kanban.kind == "jira"
    assert reloaded.storage_dir == tmp_path / "snaps"
    assert reloaded.burndown.filter == "NoBurn"
