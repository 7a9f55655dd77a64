"""Tests for Trello and Jira board sources."""

from unittest.mock import AsyncMock, Mock, patch

import httpx
import pytest

from card_counter.adapters.kanban import JiraSource, TrelloSource
from card_counter.core import Board, Card, KanbanList
from card_counter.errors import AuthError, BoardSourceError


def json_response(data, status_code: int = 200) -> Mock:
    response = Mock()
    response.status_code = status_code
    response.json = Mock(return_value=data)
    return response


@pytest.fixture
def trello() -> TrelloSource:
    return TrelloSource(key="test-key", token="test-token")


@pytest.fixture
def jira() -> JiraSource:
    return JiraSource(username="me@example.com", api_token="secret", base_url="https://example.atlassian.net/")


@pytest.mark.asyncio
async def test_trello_get_board(trello: TrelloSource) -> None:
    """Test fetching a board passes credentials as query params."""
    with patch("httpx.AsyncClient") as mock_client:
        mock_get = AsyncMock(return_value=json_response({"id": "abc123", "name": "Sprint"}))
        mock_client.return_value.__aenter__.return_value.get = mock_get

        board = await trello.get_board("abc123")

        assert board == Board(id="abc123", name="Sprint")
        call_args = mock_get.call_args
        assert call_args.args[0] == "https://api.trello.com/1/boards/abc123"
        assert call_args.kwargs["params"]["key"] == "test-key"
        assert call_args.kwargs["params"]["token"] == "test-token"


@pytest.mark.asyncio
async def test_trello_lists_and_cards(trello: TrelloSource) -> None:
    """Test Trello field names map onto lists and cards."""
    lists = [{"id": "l1", "name": "To Do", "idBoard": "abc123", "color": None}]
    cards = [{"name": "Login page (3)", "idList": "l1", "idBoard": "abc123"}]

    with patch("httpx.AsyncClient") as mock_client:
        mock_get = AsyncMock(side_effect=[json_response(lists), json_response(cards)])
        mock_client.return_value.__aenter__.return_value.get = mock_get

        assert await trello.get_lists("abc123") == [KanbanList(id="l1", name="To Do", board_id="abc123")]
        assert await trello.get_cards("abc123") == [Card(name="Login page (3)", parent_list="l1")]

        assert mock_get.call_args.kwargs["params"]["card_fields"] == "name,idList"


@pytest.mark.asyncio
async def test_trello_list_boards(trello: TrelloSource) -> None:
    with patch("httpx.AsyncClient") as mock_client:
        mock_client.return_value.__aenter__.return_value.get = AsyncMock(
            return_value=json_response([{"id": "1", "name": "A"}, {"id": "2", "name": "B"}])
        )

        found = await trello.list_boards()

        assert [board.name for board in found] == ["A", "B"]


@pytest.mark.asyncio
async def test_trello_unauthorized(trello: TrelloSource) -> None:
    """Test a 401 becomes AuthError with a token hint."""
    with patch("httpx.AsyncClient") as mock_client:
        mock_client.return_value.__aenter__.return_value.get = AsyncMock(
            return_value=json_response({}, status_code=401)
        )

        with pytest.raises(AuthError, match="key=test-key"):
            await trello.get_board("abc123")


@pytest.mark.asyncio
async def test_trello_server_error(trello: TrelloSource) -> None:
    with patch("httpx.AsyncClient") as mock_client:
        mock_client.return_value.__aenter__.return_value.get = AsyncMock(
            return_value=json_response({}, status_code=500)
        )

        with pytest.raises(BoardSourceError, match="500"):
            await trello.get_cards("abc123")


@pytest.mark.asyncio
async def test_trello_network_error(trello: TrelloSource) -> None:
    with patch("httpx.AsyncClient") as mock_client:
        mock_client.return_value.__aenter__.return_value.get = AsyncMock(
            side_effect=httpx.ConnectError("boom")
        )

        with pytest.raises(BoardSourceError, match="Unable to reach Trello"):
            await trello.get_lists("abc123")


@pytest.mark.asyncio
async def test_jira_columns_become_lists(jira: JiraSource) -> None:
    """Test board columns map to lists keyed by name."""
    configuration = {
        "id": 7,
        "name": "Team board",
        "columnConfig": {"columns": [{"name": "To Do"}, {"name": "Done"}]},
    }

    with patch("httpx.AsyncClient") as mock_client:
        mock_get = AsyncMock(return_value=json_response(configuration))
        mock_client.return_value.__aenter__.return_value.get = mock_get

        lists = await jira.get_lists("7")

        assert lists == [
            KanbanList(id="To Do", name="To Do", board_id="7"),
            KanbanList(id="Done", name="Done", board_id="7"),
        ]
        call_args = mock_get.call_args
        assert call_args.args[0] == "https://example.atlassian.net/rest/agile/1.0/board/7/configuration"
        assert call_args.kwargs["auth"] == ("me@example.com", "secret")


@pytest.mark.asyncio
async def test_jira_issues_are_paginated(jira: JiraSource) -> None:
    """Test issues are fetched page by page until total is reached."""
    jira.page_size = 2

    def issue(summary: str, status: str) -> dict:
        return {"id": summary, "fields": {"summary": summary, "status": {"id": "1", "name": status}}}

    first_page = {"startAt": 0, "maxResults": 2, "total": 3, "issues": [issue("A (1)", "To Do"), issue("B", "Done")]}
    second_page = {"startAt": 2, "maxResults": 2, "total": 3, "issues": [issue("C [2]", "Done")]}

    with patch("httpx.AsyncClient") as mock_client:
        mock_get = AsyncMock(side_effect=[json_response(first_page), json_response(second_page)])
        mock_client.return_value.__aenter__.return_value.get = mock_get

        cards = await jira.get_cards("7")

        assert cards == [
            Card(name="A (1)", parent_list="To Do"),
            Card(name="B", parent_list="Done"),
            Card(name="C [2]", parent_list="Done"),
        ]
        assert mock_get.call_count == 2
        assert mock_get.call_args.kwargs["params"] == {"startAt": 2, "maxResults": 2}


@pytest.mark.asyncio
async def test_jira_boards(jira: JiraSource) -> None:
    paged = {"startAt": 0, "maxResults": 50, "total": 1, "values": [{"id": 7, "name": "Team board"}]}

    with patch("httpx.AsyncClient") as mock_client:
        mock_client.return_value.__aenter__.return_value.get = AsyncMock(
            side_effect=[json_response(paged), json_response({"id": 7, "name": "Team board"})]
        )

        assert await jira.list_boards() == [Board(id="7", name="Team board")]
        assert await jira.get_board("7") == Board(id="7", name="Team board")


@pytest.mark.asyncio
async def test_jira_unauthorized(jira: JiraSource) -> None:
    with patch("httpx.AsyncClient") as mock_client:
        mock_client.return_value.__aenter__.return_value.get = AsyncMock(
            return_value=json_response({}, status_code=401)
        )

        with pytest.raises(AuthError, match="Jira"):
            await jira.get_board("7")
