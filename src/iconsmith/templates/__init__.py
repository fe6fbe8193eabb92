"""Built-in jinja2 templates for SVG fonts, stylesheets and previews."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, Template, TemplateError

from iconsmith.core.exceptions import ConfigurationError


TEMPLATE_ROOT = Path(__file__).resolve().parent

SVG_FONT_TEMPLATE = "font.svg.jinja"
STYLESHEET_TEMPLATE = "stylesheet.css.jinja"
PREVIEW_TEMPLATE = "preview.html.jinja"


def codepoint_hex(value: int, upper: bool = False) -> str:
    """Format a codepoint as bare hexadecimal digits."""
    return f"{value:X}" if upper else f"{value:x}"


@lru_cache(maxsize=1)
def get_environment() -> Environment:
    """Return the shared environment used to render built-in templates."""
    environment = Environment(
        loader=FileSystemLoader(str(TEMPLATE_ROOT)),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    environment.filters.setdefault("codepoint_hex", codepoint_hex)
    return environment


def load_template(name: str, override: Path | None = None) -> Template:
    """Load a built-in template, or a user-provided replacement file."""
    environment = get_environment()
    if override is None:
        return environment.get_template(name)
    try:
        source = Path(override).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Unable to read template '{override}': {exc}") from exc
    try:
        return environment.from_string(source)
    except TemplateError as exc:
        raise ConfigurationError(f"Invalid template '{override}': {exc}") from exc


__all__ = [
    "PREVIEW_TEMPLATE",
    "STYLESHEET_TEMPLATE",
    "SVG_FONT_TEMPLATE",
    "TEMPLATE_ROOT",
    "codepoint_hex",
    "get_environment",
    "load_template",
]
