import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from glimmer_complete.cli.complete import classify, complete
from glimmer_complete.cli.index import index
from glimmer_complete.cli.serve import serve_app

app = typer.Typer(
    name="glimmer-complete",
    help="Glimmer Complete CLI: template completions for Ember projects.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output to stderr.")] = False,
) -> None:
    """Glimmer Complete CLI: template completions for Ember projects."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


app.command("complete")(complete)
app.command("classify")(classify)
app.command("index")(index)
app.add_typer(serve_app, name="serve")


def main() -> None:
    app()
