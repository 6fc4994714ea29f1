import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from glimmer_complete.core.ports.watcher import FileWatcherPort
from glimmer_complete.core.project import Project
from glimmer_complete.models import ModuleKind
from glimmer_complete.scan import CachedFileSource
from glimmer_complete.watcher.watchfiles_adapter import WatchfilesWatcher, project_refresher

console = Console()


def _render_index(project: Project, kind: ModuleKind | None) -> None:
    descriptors = project.index.files if kind is None else project.index.of_type(kind)
    table = Table(show_lines=False)
    table.add_column("name")
    table.add_column("type")
    for descriptor in descriptors:
        table.add_row(descriptor.name, descriptor.type.value)
    console.print(table)
    console.print(f"({len(descriptors)} modules)")


def index(
    root: Annotated[Path, typer.Argument(help="Project root directory.")] = Path("."),
    type: Annotated[ModuleKind | None, typer.Option("--type", help="Only list modules of this type.")] = None,
    watch: Annotated[bool, typer.Option(help="Keep running and re-index when files change.")] = False,
) -> None:
    """List the modules of a project."""
    if not root.is_dir():
        console.print(f"[red]{root} is not a directory.[/red]", soft_wrap=True)
        raise typer.Exit(1)

    cache = CachedFileSource()
    project = Project(root.absolute(), cache)
    _render_index(project, type)
    if not watch:
        return

    refresh = project_refresher(project, cache)

    async def on_change(paths: set[Path]) -> None:
        await refresh(paths)
        _render_index(project, type)

    async def _run() -> None:
        watcher: FileWatcherPort = WatchfilesWatcher(project.root, on_change)
        await watcher.start()
        console.print(f"[green]Watching {watcher.directory} (Ctrl+C to stop)[/green]")
        try:
            await asyncio.Event().wait()
        finally:
            await watcher.stop()

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        console.print("Stopped.")
