"""Error types raised by card-counter."""


class CardCounterError(Exception):
    """Base error for everything card-counter raises on purpose."""


class ClockError(CardCounterError):
    """Host clock reports a time before the unix epoch."""


class EmptySeriesError(CardCounterError):
    """An accessor that needs at least one burndown point got none."""


class ConfigError(CardCounterError):
    """Missing credentials or an unknown configuration value."""


class StorageError(CardCounterError):
    """Snapshot storage could not be read or written."""


class BoardSourceError(CardCounterError):
    """A board API returned an error or could not be reached."""


class AuthError(BoardSourceError):
    """A board API rejected our credentials (HTTP 401)."""

    HINTS = {
        "trello": (
            "Please regenerate your Trello API token and set it as TRELLO_API_TOKEN\n"
            "https://trello.com/1/authorize?expiration=1day&name=card-counter"
            "&scope=read&response_type=token&key={key}"
        ),
        "jira": (
            "Check JIRA_USERNAME and JIRA_API_TOKEN\n"
            "https://support.atlassian.com/atlassian-account/docs/manage-api-tokens-for-your-atlassian-account/"
        ),
    }

    def __init__(self, service: str, key: str = "") -> None:
        self.service = service
        hint = self.HINTS.get(service, "").format(key=key)
        super().__init__(f"401 Unauthorized request to {service.title()} API\n{hint}".rstrip())
