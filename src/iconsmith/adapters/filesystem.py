"""Filesystem adapters feeding icons in and writing generated assets out."""

from __future__ import annotations

from collections.abc import Callable, Iterable
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from iconsmith.core.config import IconSource
from iconsmith.core.exceptions import ConfigurationError


if TYPE_CHECKING:
    from iconsmith.api.service import GenerationResult


logger = logging.getLogger(__name__)

RenameCallback = Callable[[Path], str]


def default_rename(path: Path) -> str:
    """Derive the icon name from the file name without its extension."""
    return path.stem


def load_icon_sources(
    paths: Iterable[Path | str],
    *,
    rename: RenameCallback | None = None,
) -> list[IconSource]:
    """Read SVG files into icon sources, keeping the given order."""
    rename = rename or default_rename
    sources: list[IconSource] = []
    for entry in paths:
        path = Path(entry)
        try:
            markup = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigurationError(f"Unable to read icon '{path}': {exc}") from exc
        try:
            sources.append(IconSource(name=rename(path), markup=markup))
        except ValueError as exc:
            raise ConfigurationError(f"Invalid icon '{path}': {exc}") from exc
    logger.debug("Loaded %d icon sources", len(sources))
    return sources


def collect_icon_paths(inputs: Iterable[Path | str]) -> list[Path]:
    """Expand directories into their ``*.svg`` files, sorted by name."""
    paths: list[Path] = []
    for entry in inputs:
        path = Path(entry)
        if path.is_dir():
            paths.extend(sorted(path.glob("*.svg")))
        else:
            paths.append(path)
    return paths


def _write(path: Path, payload: bytes | str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(payload, str):
        path.write_text(payload, encoding="utf-8")
    else:
        path.write_bytes(payload)
    return path


def write_generation(
    result: GenerationResult,
    dest: Path | None = None,
    *,
    css_dest: Path | None = None,
    html_dest: Path | None = None,
) -> list[Path]:
    """Persist fonts, stylesheet and preview of a generation result.

    Fonts are written as ``{font_name}.{format}`` under ``dest`` (defaults to
    the destination of the request). The stylesheet and the preview land next
    to them unless explicit paths are given.
    """
    target = Path(dest) if dest is not None else result.dest
    written: list[Path] = []
    try:
        for format_id, payload in result.artifacts.items():
            written.append(_write(target / f"{result.font_name}.{format_id}", payload))
        if result.stylesheet is not None:
            css_path = css_dest or target / f"{result.font_name}.css"
            written.append(_write(css_path, result.stylesheet))
        if result.preview is not None:
            html_path = html_dest or target / f"{result.font_name}.html"
            written.append(_write(html_path, result.preview))
    except OSError as exc:
        raise ConfigurationError(f"Unable to write generated assets to '{target}': {exc}") from exc
    return written


__all__ = [
    "RenameCallback",
    "collect_icon_paths",
    "default_rename",
    "load_icon_sources",
    "write_generation",
]
