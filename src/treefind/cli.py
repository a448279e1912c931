"""CLI entrypoint for treefind."""

from __future__ import annotations

import json
import queue
import threading
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError

from treefind.app import TreeFindApp
from treefind.config.store import SettingsStore
from treefind.errors import CompileError
from treefind.paths import settings_path
from treefind.runtime_logging import configure_runtime_logging
from treefind.search.channel import DeliveryChannel, SearchFailed
from treefind.search.pattern import compile_pattern
from treefind.search.task import SearchRequest, SearchTask
from treefind.version import __version__

_LOG_LEVELS = click.Choice(["off", "error", "warning", "info", "debug"], case_sensitive=False)


@click.group(invoke_without_command=True, context_settings={"help_option_names": ["-h", "--help"]})
@click.pass_context
def main(ctx: click.Context) -> None:
    """treefind: find files and folders by name."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


@main.command()
@click.argument("root", required=False, default=None)
@click.option("--pattern", "-p", default=None, help="Run this search on startup")
@click.option("--log-level", type=_LOG_LEVELS, default=None)
@click.option("--log-file", type=click.Path(dir_okay=False), default=None)
def run(root: str | None, pattern: str | None, log_level: str | None, log_file: str | None) -> None:
    """Run the treefind TUI."""
    app = TreeFindApp(
        root=Path(root) if root else None,
        initial_pattern=pattern,
        log_level=log_level,
        log_file=log_file,
    )
    app.run()


@main.command()
@click.argument("root")
@click.argument("pattern")
@click.option("--json", "as_json", is_flag=True, help="Print a JSON object instead of one path per line")
@click.option("--follow-symlinks", is_flag=True, help="Descend into symlinked directories")
@click.option("--timeout", type=float, default=None, help="Seconds to wait for the scan")
@click.option("--log-level", type=_LOG_LEVELS, default=None)
def search(
    root: str,
    pattern: str,
    as_json: bool,
    follow_symlinks: bool,
    timeout: float | None,
    log_level: str | None,
) -> None:
    """Search ROOT for names matching PATTERN without starting the TUI."""
    logger = configure_runtime_logging(level=log_level)
    try:
        matcher = compile_pattern(pattern)
    except CompileError as exc:
        raise click.ClickException(str(exc))

    channel = DeliveryChannel()
    request = SearchRequest(request_id=1, root_path=root, pattern=pattern)
    task = SearchTask(request, matcher, channel, follow_symlinks=follow_symlinks)
    # A daemon worker lets the process exit when --timeout gives up on it.
    worker = threading.Thread(target=task.run, name="treefind-search-cli", daemon=True)
    worker.start()

    try:
        outcome = channel.get(timeout=timeout)
    except queue.Empty:
        logger.warning("cli.search.timeout", root=root, pattern=pattern, timeout=timeout)
        raise click.ClickException(f"Search did not finish within {timeout}s")

    if isinstance(outcome, SearchFailed):
        raise click.ClickException(f"Search failed: {outcome.error}")

    result = outcome.result
    if as_json:
        payload = {
            "request_id": request.request_id,
            "root": result.root,
            "pattern": result.pattern,
            "root_readable": result.root_readable,
            "unreadable_directories": result.unreadable_directories,
            "matches": list(result.entries),
        }
        click.echo(json.dumps(payload, indent=2))
        return

    if not result.root_readable:
        click.echo(f"warning: not a readable directory: {result.root}", err=True)
    for path in result:
        click.echo(path)


def _parse_setting_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


@main.group("settings", invoke_without_command=True)
@click.pass_context
def settings_command(ctx: click.Context) -> None:
    """Print current settings."""
    if ctx.invoked_subcommand is not None:
        return
    for key, value in SettingsStore().load().setting_items():
        click.echo(f"{key} = {value}")


@settings_command.command("set")
@click.argument("key")
@click.argument("value")
def settings_set_command(key: str, value: str) -> None:
    """Set KEY (for example search.max_workers) to VALUE.

    VALUE is read as JSON when it parses, so ``true`` and ``8`` become a
    boolean and an integer; anything else is kept as a string.
    """
    try:
        updated = SettingsStore().update(key, _parse_setting_value(value))
    except KeyError as exc:
        raise click.ClickException(str(exc.args[0]))
    except ValidationError as exc:
        first = exc.errors()[0]
        raise click.ClickException(f"Invalid value for {key}: {first['msg']}")

    for item_key, item_value in updated.setting_items():
        if item_key == key:
            click.echo(f"{item_key} = {item_value}")


@main.command("settings-path")
def settings_path_command() -> None:
    """Print settings file path."""
    click.echo(str(settings_path()))


@main.command()
def about() -> None:
    """Show version and project summary."""
    payload = {
        "name": "treefind",
        "version": __version__,
        "description": "Find files and folders by name from the terminal",
    }
    click.echo(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main()
