# codeseek/cli/ui/output.py
"""
Output methods for CLI display.

Messages are escaped before printing: paths, backend errors and
validation errors routinely contain square brackets.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from rich.markup import escape

from .console import CHECK, CROSS, WARN, Panel, Syntax, Table, console


class OutputMixin:
    """Mixin providing output methods for the UI class."""

    def header(self, title: str, subtitle: str = "") -> None:
        """Print a command header in a fitted box."""
        if subtitle:
            content = f"[bold]{escape(title)}[/bold]\n[dim]{escape(subtitle)}[/dim]"
        else:
            content = f"[bold]{escape(title)}[/bold]"
        console.print(Panel.fit(content, border_style="blue"))

    def success(self, msg: str) -> None:
        console.print(f"[green]{CHECK}[/green] {escape(msg)}")

    def error(self, msg: str) -> None:
        console.print(f"[red]{CROSS}[/red] {escape(msg)}")

    def warning(self, msg: str, detail: str = "") -> None:
        detail_str = f" [dim]({escape(detail)})[/dim]" if detail else ""
        console.print(f"[yellow]{WARN}[/yellow] {escape(msg)}{detail_str}")

    def info(self, msg: str) -> None:
        console.print(f"[dim]{escape(msg)}[/dim]")

    def table(self, headers: list[str], rows: list[list[str]], title: str = "") -> None:
        table = Table(title=title) if title else Table()
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*(escape(str(cell)) for cell in row))
        console.print(table)

    def syntax(self, code: str, language: str = "yaml") -> None:
        """Print syntax-highlighted code."""
        console.print(Syntax(code, language, theme="monokai", line_numbers=False))

    @contextmanager
    def spinner(self, message: str = "Working...") -> Iterator[None]:
        """
        Spinner for indeterminate work.

        Usage:
            with ui.spinner("Indexing..."):
                executor.run(path)
        """
        with console.status(escape(message), spinner="dots"):
            yield
