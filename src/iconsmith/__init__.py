"""Primary public API for iconsmith."""

from __future__ import annotations

from iconsmith.adapters import collect_icon_paths, load_icon_sources, write_generation
from iconsmith.api import GenerationResult, generate, load_config
from iconsmith.core.codepoints import DEFAULT_START_CODEPOINT, allocate_codepoints
from iconsmith.core.config import GenerationConfig, IconSource, TemplateOptions
from iconsmith.core.exceptions import (
    ConfigurationError,
    GlyphParseError,
    IconsmithError,
    TranscodingError,
)
from iconsmith.fonts import (
    SUPPORTED_FORMATS,
    FontOptions,
    VectorFontDocument,
    compose_font,
    transcode,
)
from iconsmith.stylesheet import StylesheetContext, render_preview, render_stylesheet
from iconsmith.version import get_version


__version__ = get_version()


__all__ = [
    "DEFAULT_START_CODEPOINT",
    "SUPPORTED_FORMATS",
    "ConfigurationError",
    "FontOptions",
    "GenerationConfig",
    "GenerationResult",
    "GlyphParseError",
    "IconSource",
    "IconsmithError",
    "StylesheetContext",
    "TemplateOptions",
    "TranscodingError",
    "VectorFontDocument",
    "__version__",
    "allocate_codepoints",
    "collect_icon_paths",
    "compose_font",
    "generate",
    "get_version",
    "load_config",
    "load_icon_sources",
    "render_preview",
    "render_stylesheet",
    "transcode",
    "write_generation",
]
