"""Board source adapters."""

from card_counter.adapters.kanban.jira_source import JiraSource
from card_counter.adapters.kanban.trello_source import TrelloSource

__all__ = ["JiraSource", "TrelloSource"]
