from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from glimmer_complete.core.template_parser import TemplateSyntaxError
from glimmer_complete.models import Position
from glimmer_complete.session import CompletionSession, ProjectNotFoundError

console = Console()


def complete(
    file: Annotated[Path, typer.Argument(help="Template or script file to complete in.")],
    line: Annotated[int, typer.Option(help="Zero-based line of the cursor.")],
    column: Annotated[int, typer.Option(help="Zero-based UTF-16 column of the cursor.")],
    root: Annotated[Path | None, typer.Option(help="Project root; discovered from package.json when omitted.")] = None,
    json: Annotated[bool, typer.Option("--json", help="Print candidates as JSON.")] = False,
) -> None:
    """List completion candidates at a cursor position."""
    session = CompletionSession()
    try:
        candidates = session.complete(file, Position(line=line, column=column), root=root)
    except (ProjectNotFoundError, FileNotFoundError, TemplateSyntaxError) as exc:
        console.print(f"[red]{exc}[/red]", soft_wrap=True)
        raise typer.Exit(1) from exc

    if json:
        console.print_json(data=[candidate.model_dump(mode="json") for candidate in candidates])
        return

    table = Table(show_lines=False)
    for header in ("label", "kind", "detail"):
        table.add_column(header)
    for candidate in candidates:
        table.add_row(candidate.label, candidate.kind.name, candidate.detail)
    console.print(table)
    console.print(f"({len(candidates)} candidates)")


def classify(
    path: Annotated[Path, typer.Argument(help="File to classify.")],
    root: Annotated[Path | None, typer.Option(help="Project root; discovered from package.json when omitted.")] = None,
) -> None:
    """Show the logical module name and type of a project file."""
    session = CompletionSession()
    try:
        descriptor = session.classify(path, root=root)
    except ProjectNotFoundError as exc:
        console.print(f"[red]{exc}[/red]", soft_wrap=True)
        raise typer.Exit(1) from exc

    if descriptor is None:
        console.print(f"[yellow]{path} is not a recognised module.[/yellow]", soft_wrap=True)
        raise typer.Exit(1)
    console.print(f"[green]{descriptor.name}[/green] ({descriptor.type.value})")
