"""Font toolchain turning SVG icons into font containers.

Architecture
: `compose_font` normalises every icon into shared metrics and emits one
  self-describing SVG font document (`VectorFontDocument`).
: `TRANSCODERS` maps each supported format to a pure function of that
  document; `transcode` runs the requested ones and wraps failures in
  `TranscodingError`.
: `FontPipelineLogger` reports progress through the CLI console when one is
  active and degrades to plain output otherwise.
"""

from iconsmith.fonts.composer import GlyphOutline, VectorFontDocument, compose_font
from iconsmith.fonts.eot import build_eot
from iconsmith.fonts.logging import FontPipelineLogger
from iconsmith.fonts.metrics import FontMetrics, FontOptions
from iconsmith.fonts.transcoders import (
    SUPPORTED_FORMATS,
    TRANSCODERS,
    Transcoder,
    build_truetype,
    transcode,
)


__all__ = [
    "SUPPORTED_FORMATS",
    "TRANSCODERS",
    "FontMetrics",
    "FontOptions",
    "FontPipelineLogger",
    "GlyphOutline",
    "Transcoder",
    "VectorFontDocument",
    "build_eot",
    "build_truetype",
    "compose_font",
    "transcode",
]
