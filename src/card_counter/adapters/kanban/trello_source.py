"""Trello board source."""

from typing import Any

import httpx

from card_counter.core import Board, Card, KanbanList, KanbanSource
from card_counter.errors import AuthError, BoardSourceError


class TrelloSource(KanbanSource):
    """Read boards, lists and cards from the Trello REST API."""

    emoji = "📋"
    name = "Trello"

    def __init__(
        self,
        key: str,
        token: str,
        api_base: str = "https://api.trello.com/1",
        timeout: float = 30.0,
    ) -> None:
        self.key = key
        self.token = token
        self.api_base = api_base
        self.timeout = timeout

    async def get_board(self, board_id: str) -> Board:
        """Retrieve the name of a board given its id."""
        data = await self._get(f"/boards/{board_id}")
        return Board(id=data["id"], name=data["name"])

    async def list_boards(self) -> list[Board]:
        """Retrieve all boards of the token's owner."""
        data = await self._get("/members/me/boards")
        return [Board(id=board["id"], name=board["name"]) for board in data]

    async def get_lists(self, board_id: str) -> list[KanbanList]:
        data = await self._get(f"/boards/{board_id}/lists")
        return [
            KanbanList(id=item["id"], name=item["name"], board_id=item.get("idBoard", board_id))
            for item in data
        ]

    async def get_cards(self, board_id: str) -> list[Card]:
        """Return all cards associated with a board."""
        data = await self._get(
            f"/boards/{board_id}/cards", params={"card_fields": "name,idList"}
        )
        return [Card(name=card["name"], parent_list=card["idList"]) for card in data]

    async def _get(self, route: str, params: dict[str, str] | None = None) -> Any:
        """Perform an authenticated GET and decode the JSON body."""
        query = {"key": self.key, "token": self.token}
        query.update(params or {})

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.get(f"{self.api_base}{route}", params=query)
            except httpx.HTTPError as e:
                raise BoardSourceError(f"Unable to reach Trello: {e}") from e

        if response.status_code == 401:
            raise AuthError("trello", key=self.key)
        if response.status_code != 200:
            raise BoardSourceError(f"Trello API error: {response.status_code} for {route}")

        try:
            return response.json()
        except ValueError as e:
            raise BoardSourceError(f"Unable to parse response from {route} as JSON.") from e
