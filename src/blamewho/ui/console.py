"""Rich-powered console output for blamewho."""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console as RichConsole
from rich.table import Table

from blamewho.github.diff_parser import FileChange


class Console:
    """Terminal output for blamewho using Rich."""

    def __init__(self, stderr: bool = False) -> None:
        self.console = RichConsole(stderr=stderr)

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {message}")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]![/yellow] {message}")

    def show_reviewers(self, reviewers: Sequence[str]) -> None:
        """Display the suggested reviewers, best first."""
        if not reviewers:
            self.warning("No reviewers found")
            return

        table = Table(title="Suggested Reviewers", border_style="cyan")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Reviewer", style="bold")
        for i, name in enumerate(reviewers, 1):
            table.add_row(str(i), name)
        self.console.print(table)

    def show_file_changes(self, files: Sequence[FileChange]) -> None:
        """Display parsed diff files with their deleted lines."""
        table = Table(title="Changed Files", border_style="cyan")
        table.add_column("File", style="bold")
        table.add_column("Deleted", justify="right", style="cyan")
        table.add_column("Lines", style="dim")
        for change in files:
            lines = ", ".join(str(n) for n in change.deleted_lines[:10])
            if len(change.deleted_lines) > 10:
                lines += ", ..."
            table.add_row(change.path, str(len(change.deleted_lines)), lines)
        self.console.print(table)
