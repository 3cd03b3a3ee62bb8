#!/usr/bin/env python3
"""
Countdown CLI
-------------

Terminal front-end for the deadline board.

Commands:
    - show: Render the ordered, filtered board
    - add: Add a deadline to the local store
    - remove: Remove a local deadline by index
    - list-local: List local deadlines with their indexes
    - tags: List filterable tags and their state
    - toggle: Check/uncheck a tag filter

Usage:
    countdown show
    countdown show --api-url https://ddl.example.org --token "$TOKEN"
    countdown add "Thesis draft" "2026-05-01 09:30" --tag writing
    countdown toggle nlp
"""
from __future__ import annotations

import asyncio
from datetime import datetime, timezone as dt_timezone
from pathlib import Path
from typing import Optional, Tuple

import click

from countdown.core.cli import setup_logger
from countdown.core.exceptions import ConfigError, ParseError, StorageError
from countdown.core.logging_manager import CountdownLogger, handle_cli_error
from countdown.core.settings import Settings, get_settings
from countdown.deadlines.board import DeadlineBoard
from countdown.deadlines.config import load_tag_types
from countdown.deadlines.normalizer import parse_user_datetime
from countdown.deadlines.render import render_entry
from countdown.deadlines.sources import LocalDeadlineStore
from countdown.deadlines.tags import TagSelectionStore
from countdown.deadlines.timeparse import parse_timestamp, resolve_zone
from countdown.storage.store import KeyValueStore


@click.group()
@click.option("--log-dir", type=click.Path(), default=None, help="Directory for log files")
@click.option("--data-dir", type=click.Path(), default=None, help="Directory with conferences.yml and types.yml")
@click.option("--store", "store_path", type=click.Path(), default=None, help="SQLite file for local state")
@click.option("--namespace", default=None, help="Namespace for local storage keys")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(
    ctx: click.Context,
    log_dir: Optional[str],
    data_dir: Optional[str],
    store_path: Optional[str],
    namespace: Optional[str],
    verbose: bool,
) -> None:
    """Countdown - conference and personal deadline board"""
    ctx.ensure_object(dict)
    settings = get_settings().with_overrides(
        log_dir=Path(log_dir) if log_dir else None,
        data_dir=Path(data_dir) if data_dir else None,
        store_path=Path(store_path) if store_path else None,
        namespace=namespace or None,
    )

    ctx.obj["settings"] = settings
    ctx.obj["verbose"] = verbose
    ctx.obj["logger"] = setup_logger(settings.log_dir, "cli")


def _open_store(ctx: click.Context) -> KeyValueStore:
    if "store" not in ctx.obj:
        settings: Settings = ctx.obj["settings"]
        try:
            ctx.obj["store"] = KeyValueStore(settings.store_path, ctx.obj["logger"])
        except StorageError as e:
            handle_cli_error(ctx, e, "open_store", {"store": str(settings.store_path)})
    return ctx.obj["store"]


def _all_tags(settings: Settings) -> list:
    if not settings.types_path.is_file():
        return []
    return [tag_type.tag for tag_type in load_tag_types(settings.types_path)]


@cli.command()
@click.option("--api-url", default=None, help="Remote deadline store URL (overrides COUNTDOWN_API_URL)")
@click.option("--token", default=None, help="Bearer token for the remote store")
@click.option("--tz", "tz_name", default=None, help="Zone for naive personal deadlines and display")
@click.option("--all", "show_all", is_flag=True, help="Ignore the tag filter")
@click.option("--now", "now_text", default=None, help="Reference time (ISO-8601), default: current time")
@click.pass_context
def show(
    ctx: click.Context,
    api_url: Optional[str],
    token: Optional[str],
    tz_name: Optional[str],
    show_all: bool,
    now_text: Optional[str],
) -> None:
    """Render the deadline board."""
    settings: Settings = ctx.obj["settings"].with_overrides(
        api_url=api_url.rstrip("/") if api_url else None,
        api_token=token or None,
        timezone=tz_name or None,
    )
    logger: CountdownLogger = ctx.obj["logger"]

    try:
        zone = resolve_zone(settings.timezone) if settings.timezone else None
        now = parse_timestamp(now_text) if now_text else datetime.now(dt_timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=zone) if zone else now.astimezone()
    except ParseError as e:
        raise click.BadParameter(str(e))

    try:
        board = DeadlineBoard.from_settings(settings, _open_store(ctx), logger)
        view = asyncio.run(board.refresh(now=now, apply_filter=not show_all))
    except ConfigError as e:
        handle_cli_error(ctx, e, "show", {"data_dir": str(settings.data_dir)})
        return

    if view is None:
        return

    checked = [tag for tag, on in view.selection.items() if on]
    if checked and not show_all:
        click.echo(f"🏷️  Filter: {', '.join(checked)}\n")

    for entry in view.entries:
        for index, line in enumerate(render_entry(entry, view.now, zone)):
            if index == 0:
                line = click.style(line, bold=True, dim=entry.is_past(view.now))
            elif entry.is_past(view.now):
                line = click.style(line, dim=True)
            click.echo(line)
        click.echo("")

    click.echo(f"📅 {view.stats.summary()}")


@cli.command()
@click.argument("name")
@click.argument("when")
@click.option("--details", default=None, help="Free-text details")
@click.option("--tag", "tags", multiple=True, help="Tag (repeatable)")
@click.pass_context
def add(
    ctx: click.Context, name: str, when: str, details: Optional[str], tags: Tuple[str, ...]
) -> None:
    """Add a personal deadline (WHEN as 'YYYY-MM-DD HH:MM')."""
    settings: Settings = ctx.obj["settings"]
    when = when.strip()
    if parse_user_datetime(when, settings.timezone) is None:
        raise click.BadParameter(f"Not a date/time: {when!r}", param_hint="WHEN")

    local = LocalDeadlineStore(_open_store(ctx), settings.namespace, ctx.obj["logger"])
    try:
        index = local.append(
            {"name": name, "details": details, "datetime": when, "tags": list(tags)}
        )
    except StorageError as e:
        handle_cli_error(ctx, e, "add", {"name": name})
        return

    click.echo(f"✅ Added #{index}: {name} ({when})")


@cli.command()
@click.argument("index", type=int)
@click.pass_context
def remove(ctx: click.Context, index: int) -> None:
    """Remove a personal deadline by its index (see list-local)."""
    settings: Settings = ctx.obj["settings"]
    local = LocalDeadlineStore(_open_store(ctx), settings.namespace, ctx.obj["logger"])
    try:
        removed = local.remove(index)
    except IndexError as e:
        raise click.BadParameter(str(e), param_hint="INDEX")
    except StorageError as e:
        handle_cli_error(ctx, e, "remove", {"index": index})
        return

    click.echo(f"🗑️  Removed #{index}: {removed.get('name') or 'Untitled'}")


@cli.command("list-local")
@click.pass_context
def list_local(ctx: click.Context) -> None:
    """List personal deadlines stored locally."""
    settings: Settings = ctx.obj["settings"]
    local = LocalDeadlineStore(_open_store(ctx), settings.namespace, ctx.obj["logger"])
    result = local.load()
    if result.is_err():
        click.echo(f"⚠️  Local deadlines unreadable: {result.error}", err=True)
        return
    if not result.records:
        click.echo("No local deadlines.")
        return
    for index, record in enumerate(result.records):
        click.echo(f"#{index}  {record.get('name') or 'Untitled'}  {record.get('datetime') or 'TBA'}")


@cli.command()
@click.pass_context
def tags(ctx: click.Context) -> None:
    """List filterable tags with their checked state."""
    settings: Settings = ctx.obj["settings"]
    try:
        tag_types = load_tag_types(settings.types_path)
    except ConfigError as e:
        handle_cli_error(ctx, e, "tags")
        return

    all_tags = [tag_type.tag for tag_type in tag_types]
    selection = TagSelectionStore(
        _open_store(ctx), settings.namespace, ctx.obj["logger"]
    ).load(all_tags)
    for tag_type in tag_types:
        mark = "x" if selection.get(tag_type.tag) else " "
        click.echo(f"[{mark}] {tag_type.tag:<12} {tag_type.name}")


@cli.command()
@click.argument("tag")
@click.pass_context
def toggle(ctx: click.Context, tag: str) -> None:
    """Check or uncheck a tag filter."""
    settings: Settings = ctx.obj["settings"]
    try:
        all_tags = _all_tags(settings)
    except ConfigError as e:
        handle_cli_error(ctx, e, "toggle", {"tag": tag})
        return

    selections = TagSelectionStore(_open_store(ctx), settings.namespace, ctx.obj["logger"])
    try:
        selection = selections.toggle(tag, all_tags)
    except KeyError:
        raise click.BadParameter(f"Unknown tag: {tag!r}", param_hint="TAG")

    state = "checked" if selection[tag] else "unchecked"
    click.echo(f"🏷️  {tag} {state}")


if __name__ == "__main__":
    cli(obj={})
