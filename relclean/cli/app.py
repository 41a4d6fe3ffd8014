from __future__ import annotations

import typer

from relclean.cli.commands.cleanup import cleanup


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Single command: `relclean --tag ...` runs it directly.
app.command()(cleanup)


def main() -> None:
    app()
