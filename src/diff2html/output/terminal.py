"""Rich terminal summary of parsed files, used by ``--dry-run``."""

from __future__ import annotations

from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from diff2html.git.models import DiffFile
from diff2html.output.utils import filename_diff, get_file_icon

_STATUS_STYLE = {
    "file-added": ("ADDED", "bold black on green"),
    "file-deleted": ("DELETED", "bold white on red"),
    "file-renamed": ("RENAMED", "bold white on blue"),
    "file-changed": ("CHANGED", "bold black on yellow"),
}


def _status_pill(file: DiffFile) -> Text:
    label, style = _STATUS_STYLE[get_file_icon(file)]
    return Text(f" {label} ", style=style)


def _notes(file: DiffFile) -> str:
    notes = []
    if file.is_binary:
        notes.append("binary")
    if file.is_too_big:
        notes.append("too big")
    if file.is_combined:
        notes.append("combined")
    if file.unchanged_percentage is not None:
        notes.append(f"{file.unchanged_percentage}% similar")
    return ", ".join(notes)


def render(files: List[DiffFile], console: Optional[Console] = None) -> None:
    """Print one row per file with its status and line counts."""
    console = console or Console(stderr=True)

    if not files:
        console.print("[bold yellow]No files found in the diff.[/bold yellow]")
        return

    table = Table(
        title=f"Files changed ({len(files)})",
        title_style="bold",
        border_style="dim",
    )
    table.add_column("Status", justify="center", width=11)
    table.add_column("File", style="magenta")
    table.add_column("Lang", style="cyan")
    table.add_column("+", justify="right", style="green")
    table.add_column("-", justify="right", style="red")
    table.add_column("Hunks", justify="right")
    table.add_column("Notes", style="dim")

    for file in files:
        table.add_row(
            _status_pill(file),
            filename_diff(file),
            file.language or "-",
            str(file.added_lines),
            str(file.deleted_lines),
            str(len(file.blocks)),
            _notes(file),
        )

    console.print(table)
    added = sum(f.added_lines for f in files)
    deleted = sum(f.deleted_lines for f in files)
    console.print(f"[dim]Total:[/dim] [green]+{added}[/green] [red]-{deleted}[/red]")
