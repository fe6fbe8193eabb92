"""Stylesheet and preview rendering for generated icon fonts.

Identifier rule
: An icon name may only contain ASCII letters, digits, ``_`` and ``-``.
  The CSS class of an icon is ``class_prefix + name`` and must itself be a
  plain CSS identifier: an optional leading ``-`` followed by a letter or
  ``_``, then letters, digits, ``_`` or ``-``. The same rule applies to
  every icon, so ``3d`` is accepted with the default ``icon-`` prefix but
  rejected with an empty one.

Rendering is a pure function of a :class:`StylesheetContext`. Re-rendering
with other asset URLs only changes the URL occurrences.

URL overrides
: Overrides are keyed by format. Keys for formats that were not requested
  are ignored, and an empty URL keeps the derived one.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
import re
from typing import Any

from iconsmith.core.exceptions import ConfigurationError
from iconsmith.templates import (
    PREVIEW_TEMPLATE,
    STYLESHEET_TEMPLATE,
    codepoint_hex,
    load_template,
)


NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
IDENTIFIER_PATTERN = re.compile(r"^-?[A-Za-z_][A-Za-z0-9_-]*$")

DEFAULT_CLASS_PREFIX = "icon-"
DEFAULT_BASE_SELECTOR = ".icon"

_SRC_TEMPLATES = {
    "eot": 'url("{url}?#iefix") format("embedded-opentype")',
    "woff2": 'url("{url}") format("woff2")',
    "woff": 'url("{url}") format("woff")',
    "ttf": 'url("{url}") format("truetype")',
    "svg": 'url("{url}#{font_name}") format("svg")',
}


def validate_name(name: str, *, kind: str = "icon") -> str:
    """Ensure ``name`` is usable in file names, glyph names and selectors."""
    if not isinstance(name, str) or not NAME_PATTERN.match(name):
        raise ConfigurationError(
            f"Invalid {kind} name {name!r}: only ASCII letters, digits, '_' and '-' are allowed."
        )
    return name


def sanitize_identifier(name: str, prefix: str = "") -> str:
    """Return the CSS identifier ``prefix + name`` or raise ``ConfigurationError``."""
    validate_name(name)
    identifier = f"{prefix}{name}"
    if not IDENTIFIER_PATTERN.match(identifier):
        raise ConfigurationError(
            f"Icon name {name!r} does not form a valid CSS class with prefix {prefix!r}."
        )
    return identifier


def default_urls(
    font_name: str,
    formats: Iterable[str],
    *,
    base_url: str | None = None,
    fingerprint: str | None = None,
) -> dict[str, str]:
    """Return the relative asset URL of every format."""
    base = base_url.replace("\\", "/").rstrip("/") if base_url else ""
    urls: dict[str, str] = {}
    for format_id in formats:
        url = f"{font_name}.{format_id}"
        if base:
            url = f"{base}/{url}"
        if fingerprint:
            url = f"{url}?{fingerprint}"
        urls[format_id] = url
    return urls


def font_src(font_name: str, formats: Iterable[str], urls: Mapping[str, str]) -> list[str]:
    """Return the ``src`` entries of the ``@font-face`` rule, in request order."""
    return [
        _SRC_TEMPLATES[format_id].format(url=urls[format_id], font_name=font_name)
        for format_id in formats
        if format_id in _SRC_TEMPLATES
    ]


@dataclass(frozen=True, slots=True)
class StylesheetContext:
    """Everything needed to (re-)render the stylesheet and preview."""

    font_name: str
    formats: tuple[str, ...]
    codepoints: Mapping[str, int]
    urls: Mapping[str, str]
    class_prefix: str = DEFAULT_CLASS_PREFIX
    base_selector: str = DEFAULT_BASE_SELECTOR
    css_template: Path | None = None
    html_template: Path | None = None
    css_context: Mapping[str, Any] = field(default_factory=dict)
    html_context: Mapping[str, Any] = field(default_factory=dict)

    def resolve_urls(self, overrides: Mapping[str, str] | None = None) -> dict[str, str]:
        """Merge caller URLs over the defaults, ignoring unknown formats."""
        urls = {format_id: self.urls[format_id] for format_id in self.formats}
        for format_id, url in (overrides or {}).items():
            if format_id in urls and url:
                urls[format_id] = url
        return urls

    def icons(self) -> list[dict[str, Any]]:
        return [
            {
                "name": name,
                "class_name": sanitize_identifier(name, self.class_prefix),
                "codepoint": codepoint,
                "hex": codepoint_hex(codepoint),
            }
            for name, codepoint in self.codepoints.items()
        ]

    @property
    def base_class(self) -> str:
        selector = self.base_selector.strip()
        if selector.startswith(".") and IDENTIFIER_PATTERN.match(selector[1:]):
            return selector[1:]
        return ""


def _template_variables(
    context: StylesheetContext, urls: Mapping[str, str] | None
) -> dict[str, Any]:
    resolved = context.resolve_urls(urls)
    icons = context.icons()
    return {
        "font_name": context.font_name,
        "formats": list(context.formats),
        "urls": resolved,
        "src": font_src(context.font_name, context.formats, resolved),
        "eot_url": resolved.get("eot"),
        "base_selector": context.base_selector,
        "base_class": context.base_class,
        "class_prefix": context.class_prefix,
        "icons": icons,
        "codepoints": {icon["name"]: icon["hex"] for icon in icons},
    }


def render_stylesheet(
    context: StylesheetContext, urls: Mapping[str, str] | None = None
) -> str:
    """Render the CSS for ``context``, optionally overriding format URLs."""
    variables = _template_variables(context, urls)
    variables.update(context.css_context)
    return load_template(STYLESHEET_TEMPLATE, context.css_template).render(**variables)


def render_preview(
    context: StylesheetContext,
    urls: Mapping[str, str] | None = None,
    *,
    stylesheet_url: str | None = None,
) -> str:
    """Render the HTML preview page listing every icon."""
    variables = _template_variables(context, urls)
    variables["stylesheet_url"] = stylesheet_url
    variables["stylesheet"] = None if stylesheet_url else render_stylesheet(context, urls)
    variables.update(context.html_context)
    return load_template(PREVIEW_TEMPLATE, context.html_template).render(**variables)


__all__ = [
    "DEFAULT_BASE_SELECTOR",
    "DEFAULT_CLASS_PREFIX",
    "IDENTIFIER_PATTERN",
    "NAME_PATTERN",
    "StylesheetContext",
    "default_urls",
    "font_src",
    "render_preview",
    "render_stylesheet",
    "sanitize_identifier",
    "validate_name",
]
