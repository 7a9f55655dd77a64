"""Slack notification adapter."""

from typing import Optional

import httpx

from card_counter.core import Burndown
from card_counter.core.interfaces import NotificationService


class SlackNotifier(NotificationService):
    """Send burndown summaries to Slack via webhook."""

    def __init__(self, webhook_url: Optional[str] = None) -> None:
        """Initialize Slack notifier.

        Args:
            webhook_url: Slack webhook URL. If None, notifications are skipped.
        """
        self.webhook_url = webhook_url

    def format_message(self, board_name: str, burndown: Burndown) -> str:
        """Build a mrkdwn message with the latest totals and the CSV rows."""
        lines = [f"📉 *Burndown — {board_name}*"]

        if burndown.points:
            latest = burndown.points[-1]
            start = burndown.min_date().strftime("%d.%m.%Y")
            end = burndown.max_date().strftime("%d.%m.%Y")
            lines.append(f"{start} – {end}")
            lines.append(
                f"Incomplete: *{latest.incomplete_total}*  Complete: *{latest.complete_total}*"
            )
        else:
            lines.append("No snapshots found for this range.")

        lines.append("```")
        lines.extend(burndown.as_csv())
        lines.append("```")
        return "\n".join(lines)

    async def send_burndown(self, board_name: str, burndown: Burndown) -> None:
        """Send burndown summary to Slack."""
        if not self.webhook_url:
            # Silently skip if no webhook configured
            return

        payload = {
            "text": self.format_message(board_name, burndown),
            "mrkdwn": True,
        }

        async with httpx.AsyncClient(timeout=30.0) as client:
            try:
                response = await client.post(self.webhook_url, json=payload)
                response.raise_for_status()
                print("✓ Burndown sent to Slack")
            except httpx.HTTPError as e:
                print(f"⚠️  Failed to send burndown to Slack: {e}")
