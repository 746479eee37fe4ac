"""CLI entrypoint: Typer app definition and command registration"""

import logging
from typing import Annotated

import typer

from mdcontent.cli.commands import render_cmd, search_cmd


app = typer.Typer(name="mdcontent", no_args_is_help=True, help="Render and search Markdown documents")


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    ):
    """Render and search Markdown documents."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


app.command(name="render")(render_cmd)
app.command(name="search")(search_cmd)
