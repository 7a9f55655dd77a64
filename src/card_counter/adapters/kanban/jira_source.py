"""Jira agile board source."""

from typing import Any

import httpx

from card_counter.core import Board, Card, KanbanList, KanbanSource
from card_counter.errors import AuthError, BoardSourceError


class JiraSource(KanbanSource):
    """Read boards, columns and issues from the Jira agile REST API.

    Jira has no lists: every column of the board configuration becomes a
    list whose id is the column name, and issues are attached to the list
    named after their status.
    """

    emoji = "🧩"
    name = "Jira"

    def __init__(
        self,
        username: str,
        api_token: str,
        base_url: str,
        page_size: int = 50,
        timeout: float = 30.0,
    ) -> None:
        self.username = username
        self.api_token = api_token
        self.base_url = base_url.rstrip("/")
        self.page_size = page_size
        self.timeout = timeout

    async def get_board(self, board_id: str) -> Board:
        data = await self._get(f"/board/{board_id}")
        return Board(id=str(data["id"]), name=data["name"])

    async def list_boards(self) -> list[Board]:
        data = await self._get("/board")
        return [Board(id=str(board["id"]), name=board["name"]) for board in data.get("values", [])]

    async def get_lists(self, board_id: str) -> list[KanbanList]:
        """Turn the board's column configuration into lists."""
        data = await self._get(f"/board/{board_id}/configuration")
        columns = data.get("columnConfig", {}).get("columns", [])
        return [
            KanbanList(id=column["name"], name=column["name"], board_id=str(data.get("id", board_id)))
            for column in columns
        ]

    async def get_cards(self, board_id: str) -> list[Card]:
        """Fetch every issue on the board, following pagination."""
        cards: list[Card] = []
        start_at = 0

        while True:
            data = await self._get(
                f"/board/{board_id}/issue",
                params={"startAt": start_at, "maxResults": self.page_size},
            )
            issues = data.get("issues", [])
            for issue in issues:
                fields = issue["fields"]
                cards.append(Card(name=fields["summary"], parent_list=fields["status"]["name"]))

            start_at += len(issues)
            if not issues or start_at >= data.get("total", 0):
                break

        return cards

    async def _get(self, route: str, params: dict[str, Any] | None = None) -> Any:
        """Perform a basic-auth GET against the agile API."""
        url = f"{self.base_url}/rest/agile/1.0{route}"

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.get(
                    url,
                    params=params,
                    auth=(self.username, self.api_token),
                    headers={"Accept": "application/json"},
                )
            except httpx.HTTPError as e:
                raise BoardSourceError(f"Unable to reach Jira: {e}") from e

        if response.status_code == 401:
            raise AuthError("jira")
        if response.status_code != 200:
            raise BoardSourceError(f"Jira API error: {response.status_code} for {route}")

        try:
            return response.json()
        except ValueError as e:
            raise BoardSourceError(f"Unable to parse response from {route} as JSON.") from e
