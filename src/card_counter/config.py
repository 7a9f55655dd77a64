"""Configuration management."""

import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from card_counter.errors import ConfigError

CONFIG_DIR = Path.home() / ".card-counter"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "card-counter.yaml"

KANBAN_KINDS = ("trello", "jira")
DATABASE_KINDS = ("local", "memory")


@dataclass
class KanbanConfig:
    """Which board service to read from."""
    kind: str = "trello"


@dataclass
class TrelloConfig:
    """Trello API credentials."""
    key: str = ""
    token: str = ""


@dataclass
class JiraConfig:
    """Jira API credentials."""
    username: str = ""
    api_token: str = ""
    url: str = ""


@dataclass
class StorageConfig:
    """Snapshot storage settings."""
    database: str = "local"
    storage_dir: Path = CONFIG_DIR / "snapshots"


@dataclass
class BurndownConfig:
    """Burndown rendering settings."""
    filter: Optional[str] = None
    ascii_width: int = 100
    ascii_height: int = 30
    svg_width: int = 800
    svg_height: int = 400


@dataclass
class SlackConfig:
    """Slack settings."""
    webhook_url: Optional[str] = None


@dataclass
class Settings:
    """Application settings."""

    kanban: KanbanConfig = field(default_factory=KanbanConfig)
    trello: TrelloConfig = field(default_factory=TrelloConfig)
    jira: JiraConfig = field(default_factory=JiraConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    burndown: BurndownConfig = field(default_factory=BurndownConfig)
    slack: SlackConfig = field(default_factory=SlackConfig)

    @property
    def storage_dir(self) -> Path:
        return self.storage.storage_dir

    @property
    def slack_webhook_url(self) -> Optional[str]:
        return self.slack.webhook_url

    def require_trello_auth(self) -> TrelloConfig:
        """Return Trello credentials or explain how to get them."""
        if not self.trello.key:
            raise ConfigError(
                "Trello API key not found. Please visit https://trello.com/app-key "
                "and set it as the environment variable \"TRELLO_API_KEY\""
            )
        if not self.trello.token:
            raise ConfigError(
                "Trello API token is missing. Please visit "
                "https://trello.com/1/authorize?expiration=1day&name=card-counter&scope=read"
                f"&response_type=token&key={self.trello.key}\n"
                "and set the token as the environment variable TRELLO_API_TOKEN"
            )
        return self.trello

    def require_jira_auth(self) -> JiraConfig:
        """Return Jira credentials or name the missing variable."""
        missing = [
            name
            for name, value in (
                ("JIRA_USERNAME", self.jira.username),
                ("JIRA_API_TOKEN", self.jira.api_token),
                ("JIRA_URL", self.jira.url),
            )
            if not value
        ]
        if missing:
            raise ConfigError(
                f"Jira settings missing: {', '.join(missing)}. Set them as environment variables "
                "or in the jira section of the config file."
            )
        return self.jira


def load_config(config_path: Path = DEFAULT_CONFIG_PATH) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        try:
            return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Unable to parse {config_path} as YAML: {e}") from e


def get_settings(config_path: Path = DEFAULT_CONFIG_PATH, use_env: bool = True) -> Settings:
    """Get application settings from YAML config and environment.

    Args:
        config_path: YAML config file, missing file means defaults
        use_env: Apply credential overrides from environment variables
    """
    # Load YAML config
    config = load_config(config_path)

    settings = Settings()

    # Apply YAML config
    for section in ("kanban", "trello", "jira", "burndown", "slack"):
        for key, value in (config.get(section) or {}).items():
            _apply(settings, section, key, value)

    for key, value in (config.get("storage") or {}).items():
        if key == "storage_dir":
            value = Path(value).expanduser()
        _apply(settings, "storage", key, value)

    # Environment wins over the file
    env_overrides = {
        ("trello", "key"): "TRELLO_API_KEY",
        ("trello", "token"): "TRELLO_API_TOKEN",
        ("jira", "username"): "JIRA_USERNAME",
        ("jira", "api_token"): "JIRA_API_TOKEN",
        ("jira", "url"): "JIRA_URL",
        ("slack", "webhook_url"): "SLACK_WEBHOOK_URL",
    }
    for (section, key), variable in env_overrides.items():
        value = os.getenv(variable) if use_env else None
        if value:
            setattr(getattr(settings, section), key, value)

    validate_settings(settings)
    return settings


def _apply(settings: Settings, section: str, key: str, value: object) -> None:
    target = getattr(settings, section)
    if not hasattr(target, key):
        raise ConfigError(f"Unknown config option {section}.{key}")
    setattr(target, key, value)


def validate_settings(settings: Settings) -> None:
    """Reject unknown kanban and database kinds."""
    if settings.kanban.kind not in KANBAN_KINDS:
        raise ConfigError(
            f"Unknown kanban board: {settings.kanban.kind} (expected one of {', '.join(KANBAN_KINDS)})"
        )
    if settings.storage.database not in DATABASE_KINDS:
        raise ConfigError(
            f"Unknown database: {settings.storage.database} (expected one of {', '.join(DATABASE_KINDS)})"
        )


def save_settings(settings: Settings, config_path: Path = DEFAULT_CONFIG_PATH) -> None:
    """Write settings back to the YAML config file."""
    data = asdict(settings)
    data["storage"]["storage_dir"] = str(settings.storage.storage_dir)

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, allow_unicode=True, default_flow_style=False, sort_keys=False)
