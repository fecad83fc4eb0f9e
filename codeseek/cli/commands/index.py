# codeseek/cli/commands/index.py
"""
Index command: bring the backend up to date with a project.

Usage:
    codeseek index
    codeseek index ~/src/my-project
    codeseek index . --json
"""

from __future__ import annotations

import json
from pathlib import Path

import typer

from codeseek.cli.context import CLIContext
from codeseek.cli.ui import ui
from codeseek.core.exceptions import ConfigError
from codeseek.index.executor import IndexResult, IndexStatus, build_executor
from codeseek.logging.logger import get_logger
from codeseek.logging.tags import CLI, INDEX

logger = get_logger(__name__)


def command(
    ctx: typer.Context,
    path: Path = typer.Argument(
        Path("."),
        help="Project root to index.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the result as JSON.",
    ),
) -> None:
    """
    Index a project incrementally.

    Only blobs the backend has not seen yet are uploaded.
    """
    state: CLIContext = ctx.obj
    try:
        config = state.load_config()
    except ConfigError as e:
        ui.error(str(e))
        raise typer.Exit(1)

    logger.info(f"{CLI}{INDEX} Indexing {path}")
    executor = build_executor(config)

    with executor.client, ui.spinner(f"Indexing {path}..."):
        result = executor.run(str(path))

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _display_result(result)

    if result.status is IndexStatus.ERROR:
        raise typer.Exit(1)


def _display_result(result: IndexResult) -> None:
    if result.status is IndexStatus.ERROR:
        ui.error(result.message)
        return

    if result.status is IndexStatus.PARTIAL_SUCCESS:
        ui.warning(result.message)
    else:
        ui.success(result.message)

    if result.stats is not None:
        ui.table(
            ["Project", "Files", "Total", "Existing", "New"],
            [
                [
                    result.project_path or "",
                    str(result.stats.files_scanned),
                    str(result.stats.total_blobs),
                    str(result.stats.existing_blobs),
                    str(result.stats.new_blobs),
                ]
            ],
        )
