"""Format transcoders deriving font containers from the SVG font document.

``TRANSCODERS`` maps a format identifier to a callable turning a
:class:`VectorFontDocument` into bytes. Each transcoder reads only the
document markup. Formats built on top of TrueType (WOFF, WOFF2, EOT)
compile their own TrueType payload first.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
import io
import logging
import xml.etree.ElementTree as ET

from fontTools.fontBuilder import FontBuilder
from fontTools.misc.roundTools import otRound
from fontTools.pens.boundsPen import BoundsPen
from fontTools.pens.cu2quPen import Cu2QuPen
from fontTools.pens.recordingPen import RecordingPen
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.svgLib.path import parse_path
from fontTools.ttLib import TTFont

from iconsmith.core.exceptions import ConfigurationError, TranscodingError
from iconsmith.fonts.composer import VectorFontDocument
from iconsmith.fonts.eot import build_eot
from iconsmith.fonts.metrics import FontMetrics


logger = logging.getLogger(__name__)

Transcoder = Callable[[VectorFontDocument], bytes]

FONT_VERSION = "Version 1.0"
MAX_CONVERSION_ERROR = 1.0


def _local_name(tag: object) -> str:
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _find(element: ET.Element, name: str) -> ET.Element | None:
    for candidate in element.iter():
        if _local_name(candidate.tag) == name:
            return candidate
    return None


def read_svg_font(markup: str) -> tuple[str, FontMetrics, list[tuple[str, int, int, str]]]:
    """Parse an SVG font into its name, metrics and ``(name, codepoint, advance, d)``."""
    root = ET.fromstring(markup)
    font_el = _find(root, "font")
    if font_el is None:
        raise ValueError("no <font> element in the SVG document")
    face = _find(font_el, "font-face")
    if face is None:
        raise ValueError("no <font-face> element in the SVG document")

    units_per_em = int(float(face.get("units-per-em", "1000")))
    ascent = int(float(face.get("ascent", str(units_per_em))))
    descent = -abs(int(float(face.get("descent", "0"))))
    metrics = FontMetrics(units_per_em=units_per_em, ascent=ascent, descent=descent)
    family = face.get("font-family") or font_el.get("id") or "iconfont"
    default_advance = int(float(font_el.get("horiz-adv-x", str(units_per_em))))

    glyphs: list[tuple[str, int, int, str]] = []
    for glyph_el in font_el:
        if _local_name(glyph_el.tag) != "glyph":
            continue
        unicode_value = glyph_el.get("unicode") or ""
        if len(unicode_value) != 1:
            raise ValueError(f"glyph '{glyph_el.get('glyph-name')}' must map one character")
        glyphs.append(
            (
                glyph_el.get("glyph-name") or f"uni{ord(unicode_value):04X}",
                ord(unicode_value),
                int(float(glyph_el.get("horiz-adv-x", str(default_advance)))),
                glyph_el.get("d") or "",
            )
        )
    return family, metrics, glyphs


def _quadratic_glyph(path_data: str):
    recording = RecordingPen()
    if path_data.strip():
        parse_path(path_data, recording)

    bounds_pen = BoundsPen(None)
    recording.replay(bounds_pen)
    tt_pen = TTGlyphPen(None)
    recording.replay(Cu2QuPen(tt_pen, max_err=MAX_CONVERSION_ERROR, reverse_direction=True))
    lsb = otRound(bounds_pen.bounds[0]) if bounds_pen.bounds else 0
    return tt_pen.glyph(), lsb


def build_truetype(document: VectorFontDocument) -> TTFont:
    """Compile the SVG font document into an in-memory TrueType font."""
    family, metrics, entries = read_svg_font(document.markup)

    glyph_order = [".notdef"]
    glyphs = {".notdef": TTGlyphPen(None).glyph()}
    horizontal_metrics = {".notdef": (0, 0)}
    cmap: dict[int, str] = {}
    for name, codepoint, advance, path_data in entries:
        glyph, lsb = _quadratic_glyph(path_data)
        glyph_order.append(name)
        glyphs[name] = glyph
        horizontal_metrics[name] = (advance, lsb)
        cmap[codepoint] = name

    builder = FontBuilder(metrics.units_per_em, isTTF=True)
    builder.setupGlyphOrder(glyph_order)
    builder.setupCharacterMap(cmap)
    builder.setupGlyf(glyphs)
    builder.setupHorizontalMetrics(horizontal_metrics)
    builder.setupHorizontalHeader(ascent=metrics.ascent, descent=metrics.descent)
    builder.setupNameTable(
        {
            "familyName": family,
            "styleName": "Regular",
            "uniqueFontIdentifier": f"iconsmith:{family}",
            "fullName": family,
            "psName": family,
            "version": FONT_VERSION,
        }
    )
    builder.setupOS2(
        sTypoAscender=metrics.ascent,
        sTypoDescender=metrics.descent,
        sTypoLineGap=0,
        usWinAscent=metrics.ascent,
        usWinDescent=-metrics.descent,
    )
    builder.setupPost()
    builder.setupMaxp()
    return builder.font


def _serialize(font: TTFont, flavor: str | None = None) -> bytes:
    font.flavor = flavor
    buffer = io.BytesIO()
    font.save(buffer)
    return buffer.getvalue()


def svg_transcoder(document: VectorFontDocument) -> bytes:
    return document.markup.encode("utf-8")


def ttf_transcoder(document: VectorFontDocument) -> bytes:
    return _serialize(build_truetype(document))


def woff_transcoder(document: VectorFontDocument) -> bytes:
    return _serialize(TTFont(io.BytesIO(ttf_transcoder(document))), flavor="woff")


def woff2_transcoder(document: VectorFontDocument) -> bytes:
    return _serialize(TTFont(io.BytesIO(ttf_transcoder(document))), flavor="woff2")


def eot_transcoder(document: VectorFontDocument) -> bytes:
    return build_eot(ttf_transcoder(document))


TRANSCODERS: Mapping[str, Transcoder] = {
    "svg": svg_transcoder,
    "ttf": ttf_transcoder,
    "woff": woff_transcoder,
    "woff2": woff2_transcoder,
    "eot": eot_transcoder,
}

SUPPORTED_FORMATS: tuple[str, ...] = tuple(TRANSCODERS)


def transcode(
    document: VectorFontDocument,
    formats: Iterable[str],
    *,
    transcoders: Mapping[str, Transcoder] | None = None,
) -> dict[str, bytes]:
    """Run one transcoder per requested format and collect the payloads.

    The returned mapping follows the requested order. Any failure is fatal:
    it is raised as :class:`TranscodingError` and no partial result is
    returned.
    """
    table = TRANSCODERS if transcoders is None else transcoders
    requested = list(dict.fromkeys(formats))
    unknown = [format_id for format_id in requested if format_id not in table]
    if unknown:
        raise ConfigurationError(
            f"Unsupported font formats: {', '.join(unknown)} "
            f"(expected one of {', '.join(table)})."
        )

    artifacts: dict[str, bytes] = {}
    for format_id in requested:
        try:
            payload = table[format_id](document)
        except TranscodingError:
            raise
        except Exception as exc:  # noqa: BLE001 - wrap any transcoder failure
            reason = str(exc) or type(exc).__name__
            raise TranscodingError(format_id, reason) from exc
        if not payload:
            raise TranscodingError(format_id, "transcoder produced an empty payload")
        artifacts[format_id] = bytes(payload)
        logger.debug("Built %s font (%d bytes)", format_id, len(payload))
    return artifacts


__all__ = [
    "SUPPORTED_FORMATS",
    "TRANSCODERS",
    "Transcoder",
    "build_truetype",
    "read_svg_font",
    "transcode",
]
