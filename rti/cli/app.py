from __future__ import annotations

import typer

from rti import __version__
from rti.cli.commands.inject import inject
from rti.cli.commands.list_cmd import list_runtimes
from rti.cli.commands.urls import urls


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="Download minimal runtime environments (Node.js, Bun, uv, ripgrep, Python).",
)


# Commands
app.command()(inject)
app.command("list")(list_runtimes)
app.command()(urls)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)


def main() -> None:
    app()
