"""Exception hierarchy for the icon font pipeline."""

from __future__ import annotations


class IconsmithError(RuntimeError):
    """Base exception for icon font generation failures."""


class ConfigurationError(IconsmithError):
    """Raised when the generation request is invalid or inconsistent."""


class GlyphParseError(IconsmithError):
    """Raised when an icon cannot be turned into a glyph outline."""

    def __init__(self, icon_name: str, reason: str) -> None:
        super().__init__(f"Unable to parse icon '{icon_name}': {reason}")
        self.icon_name = icon_name
        self.reason = reason


class TranscodingError(IconsmithError):
    """Raised when a font format cannot be derived from the SVG font."""

    def __init__(self, format_id: str, reason: str) -> None:
        super().__init__(f"Unable to build the '{format_id}' font: {reason}")
        self.format_id = format_id
        self.reason = reason


__all__ = [
    "ConfigurationError",
    "GlyphParseError",
    "IconsmithError",
    "TranscodingError",
]
