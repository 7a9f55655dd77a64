"""Notification adapters."""

from card_counter.adapters.notifications.slack_notifier import SlackNotifier

__all__ = ["SlackNotifier"]
