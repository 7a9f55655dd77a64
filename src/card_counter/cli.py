"""CLI entry point for card-counter."""

import asyncio
from datetime import date, timedelta
from enum import Enum
from pathlib import Path
from typing import Coroutine, Optional

import typer

from card_counter.adapters.kanban import JiraSource, TrelloSource
from card_counter.adapters.notifications import SlackNotifier
from card_counter.adapters.render import render_decks, render_delta
from card_counter.adapters.storage import MemorySnapshotStore, YamlSnapshotStore
from card_counter.config import (
    DEFAULT_CONFIG_PATH,
    Settings,
    get_settings,
    save_settings,
    validate_settings,
)
from card_counter.core import DateRange, KanbanSource, SnapshotStore, sum_decks
from card_counter.errors import CardCounterError
from card_counter.use_cases import BurndownService, ScoreService

cli = typer.Typer(
    help="A CLI for quickly summarizing story points in kanban lists.",
    no_args_is_help=True,
)


class OutputFormat(str, Enum):
    """Burndown output mode."""

    CSV = "csv"
    ASCII = "ascii"
    SVG = "svg"


ConfigOption = typer.Option(DEFAULT_CONFIG_PATH, "--config", help="Path to the YAML config file")
BoardOption = typer.Option(..., "--board-id", "-b", help="The ID of the board to count cards on")
FilterOption = typer.Option(
    None, "--filter", "-f", help="Filters out all lists with a name that contains the substring FILTER"
)
KanbanOption = typer.Option(None, "--kanban", "-k", help="Board service to use: trello or jira")
DatabaseOption = typer.Option(None, "--database", "-d", help="Snapshot database: local or memory")


def build_source(settings: Settings) -> KanbanSource:
    """Create the board source selected in settings."""
    if settings.kanban.kind == "jira":
        auth = settings.require_jira_auth()
        return JiraSource(username=auth.username, api_token=auth.api_token, base_url=auth.url)

    auth = settings.require_trello_auth()
    return TrelloSource(key=auth.key, token=auth.token)


def build_store(settings: Settings) -> SnapshotStore:
    """Create the snapshot store selected in settings."""
    if settings.storage.database == "memory":
        return MemorySnapshotStore()
    return YamlSnapshotStore(settings.storage_dir)


def load_settings(config: Path, kanban: Optional[str] = None, database: Optional[str] = None) -> Settings:
    """Load settings and apply command line overrides."""
    settings = get_settings(config)
    if kanban:
        settings.kanban.kind = kanban
    if database:
        settings.storage.database = database
    validate_settings(settings)
    return settings


def _run(coroutine: Coroutine) -> None:
    """Run a command coroutine, turning card-counter errors into exit code 1."""
    try:
        asyncio.run(coroutine)
    except CardCounterError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=1)


@cli.command()
def count(
    board_id: str = BoardOption,
    list_filter: Optional[str] = FilterOption,
    save: bool = typer.Option(True, "--save/--no-save", help="Save the current entry in the database"),
    compare: bool = typer.Option(False, "--compare", "-c", help="Compare with the latest saved entry"),
    compare_at: Optional[int] = typer.Option(
        None, "--compare-at", help="Compare with the saved entry at this unix timestamp"
    ),
    kanban: Optional[str] = KanbanOption,
    database: Optional[str] = DatabaseOption,
    config: Path = ConfigOption,
) -> None:
    """Score every list on a board and print a summary table."""
    compare = compare or compare_at is not None
    _run(async_count(board_id, list_filter, save, compare, compare_at, kanban, database, config))


async def async_count(
    board_id: str,
    list_filter: Optional[str],
    save: bool,
    compare: bool,
    compare_at: Optional[int],
    kanban: Optional[str],
    database: Optional[str],
    config: Path,
) -> None:
    """Async implementation of count command."""
    settings = load_settings(config, kanban, database)
    service = ScoreService(source=build_source(settings), store=build_store(settings))

    board, decks = await service.collect_decks(board_id)

    old_decks = service.previous_decks(board.id, compare_at) if compare else None
    if compare and old_decks is None:
        print("Unable to retrieve any decks from the database.")

    if old_decks is not None:
        print(render_delta(decks, old_decks, board.name, list_filter))
    else:
        print(render_decks(decks, board.name, list_filter))

    if save:
        entry = service.save_snapshot(board, decks)
        print(f"\n✓ Snapshot saved ({service.store.name}, {entry.created_at.strftime('%Y-%m-%d %H:%M UTC')})")


@cli.command()
def burndown(
    board_id: str = BoardOption,
    start: Optional[str] = typer.Option(None, "--start", "-s", help="Start of the date range (yyyy-mm-dd)"),
    end: Optional[str] = typer.Option(None, "--end", "-e", help="End of the date range (yyyy-mm-dd)"),
    list_filter: Optional[str] = FilterOption,
    output: OutputFormat = typer.Option(OutputFormat.CSV, "--output", "-o", help="Output format"),
    slack: bool = typer.Option(False, "--slack", help="Also post the burndown to the Slack webhook"),
    database: Optional[str] = DatabaseOption,
    config: Path = ConfigOption,
) -> None:
    """Print a burndown chart built from saved snapshots."""
    try:
        date_range = parse_date_range(start, end)
    except ValueError as e:
        raise typer.BadParameter(f"Unable to parse date: {e}")

    _run(async_burndown(board_id, date_range, list_filter, output, slack, database, config))


def parse_date_range(start: Optional[str], end: Optional[str], today: Optional[date] = None) -> DateRange:
    """
    Build the query range for the burndown command.

    Missing bounds default to the last two weeks. The end date is inclusive,
    so the range stretches to the last second of that day.
    """
    today = today or date.today()
    start = start or (today - timedelta(days=14)).isoformat()
    end = end or today.isoformat()

    date_range = DateRange.from_strs(start, end)
    return DateRange(start=date_range.start, end=date_range.end + 24 * 3600 - 1)


async def async_burndown(
    board_id: str,
    date_range: DateRange,
    list_filter: Optional[str],
    output: OutputFormat,
    slack: bool,
    database: Optional[str],
    config: Path,
) -> None:
    """Async implementation of burndown command."""
    settings = load_settings(config, database=database)
    list_filter = list_filter if list_filter is not None else settings.burndown.filter

    notifier = SlackNotifier(settings.slack_webhook_url) if slack else None
    if slack and not settings.slack_webhook_url:
        print("⚠️  SLACK_WEBHOOK_URL not set, skipping Slack")

    service = BurndownService(store=build_store(settings), notification_service=notifier)
    result = service.build(board_id, date_range, list_filter)

    if output is OutputFormat.CSV:
        print(service.render(result, "csv"))
    elif not result.points:
        print("No snapshots found in this date range.")
    elif output is OutputFormat.ASCII:
        print(service.render(result, "ascii", settings.burndown.ascii_width, settings.burndown.ascii_height))
    else:
        print(service.render(result, "svg", settings.burndown.svg_width, settings.burndown.svg_height))

    await service.send_notification(board_id, result)


@cli.command()
def boards(
    kanban: Optional[str] = KanbanOption,
    config: Path = ConfigOption,
) -> None:
    """List the boards available to the configured account."""
    _run(async_boards(kanban, config))


async def async_boards(kanban: Optional[str], config: Path) -> None:
    settings = load_settings(config, kanban)
    source = build_source(settings)

    found = await source.list_boards()

    emoji = getattr(source, "emoji", "•")
    name = getattr(source, "name", source.__class__.__name__)
    print(f"{emoji} {name} boards:")
    for board in sorted(found, key=lambda b: b.name):
        print(f"  {board.id}  {board.name}")


@cli.command()
def history(
    board_id: str = BoardOption,
    database: Optional[str] = DatabaseOption,
    config: Path = ConfigOption,
) -> None:
    """List the snapshots saved for a board, newest first."""
    _run(async_history(board_id, database, config))


async def async_history(board_id: str, database: Optional[str], config: Path) -> None:
    settings = load_settings(config, database=database)
    entries = build_store(settings).all_entries(board_id)

    if not entries:
        print(f"No snapshots saved for {board_id}.")
        return

    for entry in reversed(entries):
        total = sum_decks(entry.decks)
        print(
            f"{entry.time_stamp}  {entry.created_at.strftime('%b %d, %H:%M UTC')}  "
            f"score {total.score}  cards {total.size}"
        )


@cli.command("config")
def configure(
    kanban: Optional[str] = typer.Option(None, "--kanban", help="Board service: trello or jira"),
    database: Optional[str] = typer.Option(None, "--database", help="Snapshot database: local or memory"),
    storage_dir: Optional[Path] = typer.Option(None, "--storage-dir", help="Directory for local snapshots"),
    list_filter: Optional[str] = typer.Option(None, "--filter", help="Default burndown list filter"),
    config: Path = ConfigOption,
) -> None:
    """Update and save card-counter settings."""
    try:
        settings = get_settings(config, use_env=False)
        if kanban:
            settings.kanban.kind = kanban
        if database:
            settings.storage.database = database
        if storage_dir:
            settings.storage.storage_dir = storage_dir.expanduser()
        if list_filter is not None:
            settings.burndown.filter = list_filter
        validate_settings(settings)
    except CardCounterError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=1)

    save_settings(settings, config)
    print(f"✓ Config saved to {config}")


def app() -> None:
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    app()
