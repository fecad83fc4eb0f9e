# codeseek/cli/__init__.py
"""
Main codeseek CLI.

Available commands:
- index: Incrementally index a project
- search: Index, then run a retrieval query
- config show / config path: Inspect configuration
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from codeseek import __version__
from codeseek.cli.commands import config, index, search
from codeseek.cli.context import CLIContext

app = typer.Typer(
    help="codeseek - incremental codebase indexing for semantic search",
    no_args_is_help=True,
)

config_app = typer.Typer(help="Configuration commands")
app.add_typer(config_app, name="config")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"codeseek {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default: ~/.codeseek/config.yaml).",
    ),
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        help="Override the backend base URL.",
    ),
    token: Optional[str] = typer.Option(
        None,
        "--token",
        help="Override the backend token.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Debug logging.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    ctx.obj = CLIContext(
        config_path=config_path,
        base_url=base_url,
        token=token,
        verbose=verbose,
    )


app.command("index")(index.command)
app.command("search")(search.command)
config_app.command("show")(config.show)
config_app.command("path")(config.path)

__all__ = ["app"]
