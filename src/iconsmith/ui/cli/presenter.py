"""Console presentation helpers for the CLI."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path

from rich import box
from rich.table import Table

from .state import CLIState


_ARTIFACT_LABELS = {
    "svg": "SVG font",
    "ttf": "TrueType",
    "woff": "WOFF",
    "woff2": "WOFF2",
    "eot": "Embedded OpenType",
    "css": "Stylesheet",
    "html": "Preview",
}


def _format_path(path: Path) -> str:
    """Format a path relative to the current working directory for display."""
    resolved = path.resolve()
    try:
        return str(resolved.relative_to(Path.cwd()))
    except ValueError:
        return str(resolved)


def _size_details(path: Path) -> str:
    """Return a human-readable size for a file if it exists."""
    try:
        size = path.stat().st_size
    except OSError:
        return ""
    if size >= 1024 * 1024:
        return f"{size / (1024 * 1024):.2f} MiB"
    if size >= 1024:
        return f"{size / 1024:.1f} KiB"
    return f"{size} B"


def present_generation_summary(state: CLIState, written: Sequence[Path]) -> None:
    """Display a table of the files written by a generation run."""
    table = Table(box=box.SQUARE, header_style="bold cyan")
    table.add_column("Artifact", style="cyan")
    table.add_column("Location")
    table.add_column("Filesize", style="magenta", justify="right", no_wrap=True)
    for path in written:
        label = _ARTIFACT_LABELS.get(path.suffix.lstrip(".").lower(), path.suffix)
        table.add_row(label, _format_path(path), _size_details(path))
    state.console.print(table)


def present_codepoints(state: CLIState, codepoints: Mapping[str, int]) -> None:
    """List the codepoint assigned to every icon."""
    table = Table(box=box.SIMPLE, header_style="bold cyan")
    table.add_column("Icon", style="cyan")
    table.add_column("Codepoint", style="magenta")
    for name, codepoint in codepoints.items():
        table.add_row(name, f"U+{codepoint:04X}")
    state.console.print(table)


__all__ = ["present_codepoints", "present_generation_summary"]
