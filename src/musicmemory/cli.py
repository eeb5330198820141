"""Typer-based CLI entry point."""

from __future__ import annotations

import logging
from functools import wraps
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .domain.library import MusicLibrary
from .domain.models import MediaKind
from .errors import LibraryError, MusicMemoryError, SettingsError
from .errors.handler import ErrorHandler, ErrorSeverity
from .events.bus import EventBus
from .gui.factories.viewmodel_factory import ViewModelFactory
from .gui.viewmodels.media_list_viewmodel import MediaListViewModel
from .gui.viewmodels.scheduling import ImmediateScheduler
from .io.library_json import load_library
from .sorting.handlers import registry_for
from .sorting.options import option_labels
from .utils.logging import ensure_console_logger, get_logger

app = typer.Typer(help="Play-count rankings for your music library")
console = Console()

LAST_SNAPSHOT_KEY = "library.last_snapshot_path"


def _handle_errors(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (LibraryError, SettingsError) as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc
        except MusicMemoryError as exc:
            typer.echo(f"Unexpected error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def _load_settings(path: Optional[Path], *, use_default: bool = False):
    if path is None and not use_default:
        return None
    from .settings.manager import SettingsManager

    manager = SettingsManager(path=path)
    manager.load()
    return manager


def _resolve_library_path(library_path: Optional[Path], settings) -> Path:
    """Return the library to open, falling back to the one used last time."""
    if library_path is not None:
        return library_path
    stored = settings.get(LAST_SNAPSHOT_KEY) if settings is not None else None
    if not stored:
        raise typer.BadParameter(
            "no library given and none remembered in settings", param_hint="LIBRARY_PATH"
        )
    path = Path(stored)
    if not path.is_file():
        raise typer.BadParameter(f"remembered library {path} no longer exists", param_hint="LIBRARY_PATH")
    return path


def _report(message: str, severity: ErrorSeverity) -> None:
    typer.echo(f"Error: {message}", err=True)


def _render(vm: MediaListViewModel, kind: MediaKind) -> None:
    option = vm.sort_option.value
    direction = "ascending" if vm.sort_ascending.value else "descending"
    table = Table(title=f"{kind.value.title()} by {option.label} ({direction})", expand=True)
    table.add_column("#", justify="right", style="bold magenta")
    table.add_column("Title")
    table.add_column("Subtitle", style="dim")
    table.add_column("Plays", justify="right")
    for item in vm.visible_items():
        rank = vm.rank_of(item) or 0
        table.add_row(f"#{rank}", item.list_title, item.list_subtitle, str(item.list_play_count))
    console.print(table)
    if vm.search_text.value:
        console.print(f"Found {vm.result_count} results")
    else:
        console.print(f"Showing {vm.result_count} of {vm.full_count}")


@app.command()
@_handle_errors
def top(
    kind: MediaKind = typer.Argument(..., help="Which collection to rank"),
    library_path: Optional[Path] = typer.Argument(
        None, exists=True, dir_okay=False, help="Library JSON snapshot; defaults to the last one opened"
    ),
    sort: Optional[str] = typer.Option(None, "--sort", "-s", help="Sort option key, e.g. play_count"),
    ascending: Optional[bool] = typer.Option(
        None, "--ascending/--descending", "-a/-d", help="Sort direction; defaults to the settings"
    ),
    search: Optional[str] = typer.Option(None, "--search", "-q", help="Filter titles and subtitles"),
    pages: int = typer.Option(0, "--pages", "-p", min=0, help="Extra batches to reveal"),
    include_unplayed: bool = typer.Option(False, "--include-unplayed", help="Keep items with zero plays"),
    settings_path: Optional[Path] = typer.Option(None, "--settings", help="Settings JSON to read defaults from"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log to stderr"),
) -> None:
    """Print the ranked list for KIND."""

    if verbose:
        ensure_console_logger(get_logger(), "musicmemory.cli", level=logging.DEBUG)

    settings = _load_settings(settings_path, use_default=library_path is None)
    library_path = _resolve_library_path(library_path, settings)
    hide_zero = not include_unplayed
    if settings is not None and not include_unplayed:
        hide_zero = bool(settings.get("library.hide_zero_play_counts", True))

    bus = EventBus()
    error_handler = ErrorHandler(bus)
    error_handler.register_ui_callback(_report)
    library = MusicLibrary(bus, hide_zero_play_counts=hide_zero)
    factory = ViewModelFactory(
        bus, ImmediateScheduler(), settings=settings, library=library, error_handler=error_handler
    )
    vm = factory.create_list_vm(kind)
    try:
        songs, playlists = load_library(library_path)
        library.load(songs, playlists)
        if settings is not None:
            settings.set(LAST_SNAPSHOT_KEY, library_path.resolve())

        if sort:
            try:
                vm.set_sort_option(vm.registry.option_type.from_key(sort))
            except ValueError as exc:
                raise typer.BadParameter(str(exc), param_hint="--sort") from exc
        if ascending is not None:
            vm.set_sort_ascending(ascending)
        for _ in range(pages):
            if not vm.load_more():
                break
        if search:
            vm.set_search_text(search)
        _render(vm, kind)
    finally:
        vm.dispose()


@app.command("sort-options")
def sort_options(kind: MediaKind = typer.Argument(..., help="Which collection")) -> None:
    """List the sort options available for KIND."""

    table = Table(title=f"Sort options for {kind.value}", expand=True)
    table.add_column("Key", style="bold")
    table.add_column("Label")
    for key, label in option_labels(registry_for(kind).option_type):
        table.add_row(key, label)
    console.print(table)


def main() -> None:  # pragma: no cover - console script hook
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
