"""Dialy CLI - one diary entry per day, compared across years."""

import asyncio
import json
import logging
import sys
from datetime import date, datetime

import click

from .adapters.file_kv import FileKeyValueStore
from .adapters.kv_diary_repo import KeyValueDiaryRepository
from .config import Config, load_config
from .core.date_value import DateValue
from .core.diary import build_previews
from .core.entry import DiaryEntry
from .errors import AppError, is_retryable
from .use_cases import (
    CreateDiaryEntry,
    DeleteDiaryEntry,
    GetDiaryEntry,
    GetEntriesBySameDate,
    UpdateDiaryEntry,
)

DATE_TYPE = click.DateTime(formats=["%Y-%m-%d"])


def get_repository(config: Config) -> KeyValueDiaryRepository:
    """Build the file-backed repository described by config."""
    store = FileKeyValueStore(config.resolved_data_dir())
    return KeyValueDiaryRepository(store, key=config.storage_key)


def _run(coro):
    """Run a use case, turning application errors into a clean exit."""
    try:
        return asyncio.run(coro)
    except AppError as e:
        hint = " (try again)" if is_retryable(e) else ""
        click.echo(f"Error: {e.message}{hint}", err=True)
        sys.exit(1)


def _target_date(value: datetime | None) -> date:
    return value.date() if value else date.today()


def _entry_to_dict(entry: DiaryEntry) -> dict:
    return {
        "id": entry.id,
        "date": entry.date.isoformat(),
        "content": entry.content,
        "created_at": entry.created_at.isoformat(),
        "updated_at": entry.updated_at.isoformat(),
    }


def _heading(entry: DiaryEntry) -> str:
    value = DateValue(entry.date)
    return f"{value.format_iso()} {value.format_with_weekday()}"


@click.group()
@click.version_option(package_name="dialy")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, debug: bool):
    """Dialy - a diary that looks back on the same day in past years."""
    config = load_config()
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if debug else getattr(logging, config.log_level, logging.WARNING),
    )
    ctx.obj = config


async def _write(repository: KeyValueDiaryRepository, target: date, content: str) -> tuple[DiaryEntry, bool]:
    existing = await GetDiaryEntry(repository).execute(target)
    if existing is None:
        return await CreateDiaryEntry(repository).execute(target, content), True
    return await UpdateDiaryEntry(repository).execute(existing.id, content), False


@main.command()
@click.option("--date", "-d", "target_date", type=DATE_TYPE, default=None,
              help="Entry date (YYYY-MM-DD), defaults to today")
@click.argument("content", required=False)
@click.pass_obj
def write(config: Config, target_date: datetime | None, content: str | None):
    """Write the entry for a day. Reads stdin when CONTENT is omitted."""
    if content is None:
        content = click.get_text_stream("stdin").read()

    repository = get_repository(config)
    entry, created = _run(_write(repository, _target_date(target_date), content))

    action = "Created" if created else "Updated"
    click.echo(f"{action} entry for {_heading(entry)} ({entry.character_count} chars)")


@main.command()
@click.option("--date", "-d", "target_date", type=DATE_TYPE, default=None,
              help="Entry date (YYYY-MM-DD), defaults to today")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def show(config: Config, target_date: datetime | None, as_json: bool):
    """Show the entry for a day."""
    target = _target_date(target_date)
    entry = _run(GetDiaryEntry(get_repository(config)).execute(target))

    if as_json:
        click.echo(json.dumps(_entry_to_dict(entry) if entry else None, indent=2, ensure_ascii=False))
        return

    if entry is None:
        click.echo(f"No entry for {DateValue(target).format_iso()}.")
        return

    click.echo(_heading(entry))
    click.echo()
    click.echo(entry.content)


@main.command()
@click.option("--date", "-d", "target_date", type=DATE_TYPE, default=None,
              help="Reference date (YYYY-MM-DD), defaults to today")
@click.option("--years", "-y", type=int, default=None, help="How many years to look back")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def past(config: Config, target_date: datetime | None, years: int | None, as_json: bool):
    """Show entries written on this day in previous years."""
    target = _target_date(target_date)
    years = years if years is not None else config.past_years
    entries = _run(GetEntriesBySameDate(get_repository(config)).execute(target, years))
    previews = build_previews(entries, config.preview_length)

    if as_json:
        click.echo(
            json.dumps(
                [
                    {
                        "id": p.id,
                        "year": p.year,
                        "preview": p.preview,
                        "character_count": p.character_count,
                    }
                    for p in previews
                ],
                indent=2,
                ensure_ascii=False,
            )
        )
        return

    if not previews:
        click.echo(f"Nothing written on {DateValue(target).format_with_weekday()} in the last {years} years.")
        return

    for preview in previews:
        click.echo(f"{preview.year}  ({preview.character_count} chars)")
        click.echo(f"  {preview.preview}")


@main.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def list_entries(config: Config, as_json: bool):
    """List all entries, newest first."""
    entries = _run(get_repository(config).find_all())

    if as_json:
        click.echo(json.dumps([_entry_to_dict(e) for e in entries], indent=2, ensure_ascii=False))
        return

    if not entries:
        click.echo("No entries yet.")
        return

    for entry in entries:
        click.echo(f"{_heading(entry)}  {entry.preview_text(40)}")


@main.command()
@click.argument("entry_id")
@click.pass_obj
def delete(config: Config, entry_id: str):
    """Delete an entry by id."""
    _run(DeleteDiaryEntry(get_repository(config)).execute(entry_id))
    click.echo(f"Deleted {entry_id}")
