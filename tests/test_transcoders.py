import io
from pathlib import Path
import struct

from fontTools.ttLib import TTFont
import pytest

from iconsmith.core.config import IconSource
from iconsmith.core.exceptions import ConfigurationError, TranscodingError
from iconsmith.fonts.composer import VectorFontDocument, compose_font
from iconsmith.fonts.eot import EOT_MAGIC, EOT_VERSION
from iconsmith.fonts.transcoders import (
    SUPPORTED_FORMATS,
    read_svg_font,
    transcode,
)


ICONS = Path(__file__).parent / "data" / "icons"


@pytest.fixture
def document() -> VectorFontDocument:
    icons = [
        IconSource(name=name, markup=(ICONS / f"{name}.svg").read_text(encoding="utf-8"))
        for name in ("home", "close")
    ]
    return compose_font(icons, {"home": 0xF101, "close": 0xF102}, font_name="icons")


def test_supported_formats() -> None:
    assert set(SUPPORTED_FORMATS) == {"svg", "ttf", "woff", "woff2", "eot"}


def test_svg_font_is_the_composed_markup(document: VectorFontDocument) -> None:
    artifacts = transcode(document, ["svg"])

    assert artifacts["svg"] == document.markup.encode("utf-8")


def test_svg_font_can_be_read_back(document: VectorFontDocument) -> None:
    family, metrics, glyphs = read_svg_font(document.markup)

    assert family == "icons"
    assert metrics == document.metrics
    assert [(name, codepoint) for name, codepoint, _, _ in glyphs] == [
        ("home", 0xF101),
        ("close", 0xF102),
    ]


def test_truetype_font_maps_every_icon(document: VectorFontDocument) -> None:
    payload = transcode(document, ["ttf"])["ttf"]

    assert payload[:4] == b"\x00\x01\x00\x00"
    font = TTFont(io.BytesIO(payload))
    assert font.getBestCmap() == {0xF101: "home", 0xF102: "close"}
    assert font["head"].unitsPerEm == 1000
    assert font["hmtx"]["home"][0] == 1000
    assert font["name"].getDebugName(1) == "icons"
    assert font["glyf"]["home"].numberOfContours == 1


@pytest.mark.parametrize(("format_id", "signature"), [("woff", b"wOFF"), ("woff2", b"wOF2")])
def test_web_fonts_are_compressed_truetype(
    document: VectorFontDocument, format_id: str, signature: bytes
) -> None:
    payload = transcode(document, [format_id])[format_id]

    assert payload[:4] == signature
    font = TTFont(io.BytesIO(payload))
    assert font.flavor == format_id
    assert font.getBestCmap() == {0xF101: "home", 0xF102: "close"}


def test_eot_wraps_truetype_data(document: VectorFontDocument) -> None:
    payload = transcode(document, ["eot"])["eot"]

    total_size, data_size, version = struct.unpack_from("<LLL", payload, 0)
    assert total_size == len(payload)
    assert version == EOT_VERSION
    assert struct.unpack_from("<H", payload, 34)[0] == EOT_MAGIC
    assert "icons".encode("utf-16-le") in payload
    font = TTFont(io.BytesIO(payload[-data_size:]))
    assert font.getBestCmap() == {0xF101: "home", 0xF102: "close"}


def test_formats_keep_request_order_without_duplicates(
    document: VectorFontDocument,
) -> None:
    artifacts = transcode(document, ["woff2", "svg", "woff2"])

    assert list(artifacts) == ["woff2", "svg"]


def test_unknown_format_is_a_configuration_error(document: VectorFontDocument) -> None:
    with pytest.raises(ConfigurationError, match="otf"):
        transcode(document, ["svg", "otf"])


def test_transcoder_failure_is_wrapped(document: VectorFontDocument) -> None:
    def broken(_document: VectorFontDocument) -> bytes:
        raise ValueError("boom")

    with pytest.raises(TranscodingError, match="boom") as excinfo:
        transcode(document, ["svg", "ttf"], transcoders={"svg": broken, "ttf": broken})

    assert excinfo.value.format_id == "svg"
    assert isinstance(excinfo.value.__cause__, ValueError)


def test_empty_payload_is_rejected(document: VectorFontDocument) -> None:
    with pytest.raises(TranscodingError, match="empty payload"):
        transcode(document, ["svg"], transcoders={"svg": lambda _document: b""})
