"""Compose individual SVG icons into a single SVG font document.

Every icon is drawn through fontTools' ``svgLib`` (paths, basic shapes and
element transforms), recorded once, then replayed into the shared metric
system: the icon box is scaled to the font height, flipped so the y axis
points up, and its bottom edge is placed on the descent line. The resulting
outlines are serialised as SVG path data and embedded in a self-describing
``<font>`` document that the format transcoders consume.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
import logging
import re
from typing import TYPE_CHECKING
import xml.etree.ElementTree as ET

from fontTools.misc.transform import Transform
from fontTools.pens.boundsPen import BoundsPen
from fontTools.pens.recordingPen import RecordingPen
from fontTools.pens.svgPathPen import SVGPathPen
from fontTools.pens.transformPen import TransformPen
from fontTools.svgLib.path import SVGPath

from iconsmith.core.exceptions import GlyphParseError
from iconsmith.fonts.metrics import FontMetrics, FontOptions
from iconsmith.templates import SVG_FONT_TEMPLATE, load_template


if TYPE_CHECKING:
    from iconsmith.core.config import IconSource


logger = logging.getLogger(__name__)

_LENGTH_PATTERN = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)\s*(px)?\s*$")


@dataclass(frozen=True, slots=True)
class GlyphOutline:
    """One glyph of the SVG font, expressed in font units (y axis up)."""

    name: str
    codepoint: int
    advance: int
    path: str


@dataclass(frozen=True, slots=True)
class VectorFontDocument:
    """Consolidated SVG font shared by every format transcoder."""

    font_name: str
    metrics: FontMetrics
    glyphs: tuple[GlyphOutline, ...]
    markup: str

    @property
    def codepoints(self) -> dict[str, int]:
        return {glyph.name: glyph.codepoint for glyph in self.glyphs}


def _local_name(tag: object) -> str:
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _parse_length(value: str | None) -> float | None:
    if value is None:
        return None
    match = _LENGTH_PATTERN.match(value)
    if match is None:
        return None
    return float(match.group(1))


def _icon_box(icon_name: str, root: ET.Element) -> tuple[float, float, float, float] | None:
    """Return ``(x, y, width, height)`` declared by the icon, if any."""
    view_box = root.get("viewBox")
    if view_box is not None:
        parts = view_box.replace(",", " ").split()
        try:
            x, y, width, height = (float(part) for part in parts)
        except ValueError as exc:
            raise GlyphParseError(icon_name, f"malformed viewBox '{view_box}'") from exc
        if width <= 0 or height <= 0:
            raise GlyphParseError(icon_name, f"empty viewBox '{view_box}'")
        return x, y, width, height

    width = _parse_length(root.get("width"))
    height = _parse_length(root.get("height"))
    if width and height and width > 0 and height > 0:
        return 0.0, 0.0, width, height
    return None


def _record_outline(icon: IconSource) -> tuple[RecordingPen, tuple[float, float, float, float]]:
    try:
        root = ET.fromstring(icon.markup)
    except ET.ParseError as exc:
        raise GlyphParseError(icon.name, f"invalid XML ({exc})") from exc
    if _local_name(root.tag) != "svg":
        raise GlyphParseError(icon.name, f"root element is <{_local_name(root.tag)}>, not <svg>")

    recording = RecordingPen()
    try:
        SVGPath.fromstring(icon.markup.encode("utf-8")).draw(recording)
    except Exception as exc:  # noqa: BLE001
        raise GlyphParseError(icon.name, f"invalid outline data ({exc})") from exc

    box = _icon_box(icon.name, root)
    if box is None:
        bounds_pen = BoundsPen(None)
        recording.replay(bounds_pen)
        if bounds_pen.bounds is None:
            raise GlyphParseError(icon.name, "no drawable content and no declared size")
        x_min, y_min, x_max, y_max = bounds_pen.bounds
        if x_max <= x_min or y_max <= y_min:
            raise GlyphParseError(icon.name, "outline has no area and no declared size")
        box = (x_min, y_min, x_max - x_min, y_max - y_min)
    return recording, box


def _number_formatter(digits: int):
    def _format(value: float) -> str:
        text = f"{value:.{digits}f}"
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return "0" if text in {"-0", ""} else text

    return _format


def compose_glyph(
    icon: IconSource,
    codepoint: int,
    metrics: FontMetrics,
    options: FontOptions,
) -> GlyphOutline:
    """Normalise one icon into the shared metrics and return its outline."""
    recording, (box_x, box_y, box_width, box_height) = _record_outline(icon)

    scale = metrics.units_per_em / box_height if options.normalize else 1.0
    advance = (
        metrics.units_per_em if options.fixed_width else max(0, round(box_width * scale))
    )
    offset_x = -box_x * scale
    offset_y = (box_y + box_height) * scale + metrics.descent

    if options.center_horizontally:
        bounds_pen = BoundsPen(None)
        recording.replay(
            TransformPen(bounds_pen, Transform(scale, 0, 0, -scale, offset_x, offset_y))
        )
        if bounds_pen.bounds is not None:
            x_min, _, x_max, _ = bounds_pen.bounds
            offset_x += (advance - (x_max - x_min)) / 2 - x_min
    elif options.fixed_width:
        offset_x += (advance - box_width * scale) / 2

    path_pen = SVGPathPen(None, ntos=_number_formatter(options.round))
    recording.replay(TransformPen(path_pen, Transform(scale, 0, 0, -scale, offset_x, offset_y)))
    return GlyphOutline(
        name=icon.name,
        codepoint=codepoint,
        advance=advance,
        path=path_pen.getCommands(),
    )


def compose_font(
    icons: Sequence[IconSource],
    codepoints: Mapping[str, int],
    *,
    font_name: str,
    options: FontOptions | None = None,
) -> VectorFontDocument:
    """Build the SVG font holding one glyph per icon.

    Glyphs keep the icon order. A single unparseable icon aborts the whole
    composition with :class:`GlyphParseError`.
    """
    options = options or FontOptions()
    metrics = options.metrics()
    glyphs = tuple(
        compose_glyph(icon, codepoints[icon.name], metrics, options) for icon in icons
    )
    markup = load_template(SVG_FONT_TEMPLATE).render(
        font_name=font_name,
        metrics=metrics,
        glyphs=glyphs,
    )
    logger.debug("Composed SVG font '%s' with %d glyphs", font_name, len(glyphs))
    return VectorFontDocument(
        font_name=font_name,
        metrics=metrics,
        glyphs=glyphs,
        markup=markup,
    )


__all__ = [
    "GlyphOutline",
    "VectorFontDocument",
    "compose_font",
    "compose_glyph",
]
