"""Embedded OpenType (EOT) wrapping of TrueType payloads.

Only the uncompressed, unencrypted layout (version ``0x00020001``) is
produced: a little-endian header describing the font, followed by the
TrueType data verbatim.
"""

from __future__ import annotations

import io
import struct

from fontTools.ttLib import TTFont


EOT_VERSION = 0x00020001
EOT_MAGIC = 0x504C
DEFAULT_CHARSET = 1

_PANOSE_FIELDS = (
    "bFamilyType",
    "bSerifStyle",
    "bWeight",
    "bProportion",
    "bContrast",
    "bStrokeVariation",
    "bArmStyle",
    "bLetterForm",
    "bMidline",
    "bXHeight",
)


def _name(font: TTFont, name_id: int) -> bytes:
    record = font["name"].getName(name_id, 3, 1, 0x409)
    text = record.toUnicode() if record is not None else ""
    return text.encode("utf-16-le")


def _sized(payload: bytes) -> bytes:
    return struct.pack("<HH", 0, len(payload)) + payload


def build_eot(ttf: bytes) -> bytes:
    """Wrap a TrueType font into an EOT container."""
    font = TTFont(io.BytesIO(ttf))
    os2 = font["OS/2"]
    head = font["head"]

    panose = bytes(getattr(os2.panose, field, 0) for field in _PANOSE_FIELDS)
    header = bytearray()
    header += struct.pack("<LL", EOT_VERSION, 0)  # version, flags
    header += panose
    header += struct.pack(
        "<BBLHH",
        DEFAULT_CHARSET,
        1 if os2.fsSelection & 0x01 else 0,
        os2.usWeightClass,
        os2.fsType,
        EOT_MAGIC,
    )
    header += struct.pack(
        "<4L",
        os2.ulUnicodeRange1,
        os2.ulUnicodeRange2,
        os2.ulUnicodeRange3,
        os2.ulUnicodeRange4,
    )
    header += struct.pack(
        "<2L",
        getattr(os2, "ulCodePageRange1", 0),
        getattr(os2, "ulCodePageRange2", 0),
    )
    header += struct.pack("<L", head.checkSumAdjustment)
    header += struct.pack("<4L", 0, 0, 0, 0)
    for name_id in (1, 2, 5, 4):  # family, style, version, full name
        header += _sized(_name(font, name_id))
    header += _sized(b"")  # root string

    total = 8 + len(header) + len(ttf)
    return struct.pack("<LL", total, len(ttf)) + bytes(header) + ttf


__all__ = ["EOT_MAGIC", "EOT_VERSION", "build_eot"]
