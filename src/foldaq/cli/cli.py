"""CLI entrypoint: Typer app definition and command registration"""

from typing import Annotated

import typer

from foldaq.cli.commands import fold_cmd, preprocess_cmd, supports_cmd, version_callback


app = typer.Typer(name="foldaq", add_completion=False, help="Syntax to create foldable FAQ blocks in mdBook")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Annotated[bool, typer.Option("--version", callback=version_callback, is_eager=True, help="Show version and exit")] = False,
    ):
    """Without a sub-command, run as an mdBook preprocessor over stdin/stdout."""
    if ctx.invoked_subcommand is None:
        preprocess_cmd()


app.command(name="supports")(supports_cmd)
app.command(name="fold")(fold_cmd)
