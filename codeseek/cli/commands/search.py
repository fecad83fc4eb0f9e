# codeseek/cli/commands/search.py
"""
Search command: index, then ask the backend.

Usage:
    codeseek search . "where is the retry policy defined?"
"""

from __future__ import annotations

from pathlib import Path

import typer

from codeseek.cli.context import CLIContext
from codeseek.cli.ui import ui
from codeseek.core.exceptions import ConfigError, SearchError
from codeseek.logging.logger import get_logger
from codeseek.logging.tags import CLI, SEARCH
from codeseek.search.delegate import build_search_delegate

logger = get_logger(__name__)


def command(
    ctx: typer.Context,
    path: Path = typer.Argument(
        ...,
        help="Project root to search.",
    ),
    query: str = typer.Argument(
        ...,
        help="Natural-language description of the code you are looking for.",
    ),
) -> None:
    """
    Search a project's code.

    The project is re-indexed first, so results reflect the files on disk.
    """
    state: CLIContext = ctx.obj
    try:
        config = state.load_config()
    except ConfigError as e:
        ui.error(str(e))
        raise typer.Exit(1)

    logger.info(f"{CLI}{SEARCH} Searching {path}")
    delegate = build_search_delegate(config)

    try:
        with delegate.client, ui.spinner("Indexing and searching..."):
            answer = delegate.query(str(path), query)
    except SearchError as e:
        ui.error(str(e))
        raise typer.Exit(1)

    typer.echo(answer)
