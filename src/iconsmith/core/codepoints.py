"""Deterministic private-use codepoint allocation."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
import logging
from typing import TYPE_CHECKING

from iconsmith.core.exceptions import ConfigurationError


if TYPE_CHECKING:
    from iconsmith.core.config import IconSource


logger = logging.getLogger(__name__)

DEFAULT_START_CODEPOINT = 0xF101
MIN_CODEPOINT = 0x20
MAX_CODEPOINT = 0x10FFFF

CodepointAssignment = dict[str, int]


def _is_xml_char(value: int) -> bool:
    """Return whether ``value`` may appear as an XML 1.0 character reference."""
    return not (0xD800 <= value <= 0xDFFF or value in (0xFFFE, 0xFFFF))


def _check_range(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"Codepoint for '{name}' must be an integer, got {value!r}.")
    if not MIN_CODEPOINT <= value <= MAX_CODEPOINT:
        raise ConfigurationError(
            f"Codepoint {value:#x} for '{name}' is outside the usable Unicode range."
        )
    if not _is_xml_char(value):
        raise ConfigurationError(
            f"Codepoint {value:#x} for '{name}' is a surrogate or a noncharacter."
        )
    return value


def _explicit_codepoints(
    icons: Sequence[IconSource], explicit: Mapping[str, int] | None
) -> dict[str, int]:
    known = {icon.name for icon in icons}
    unknown = sorted(set(explicit or {}) - known)
    if unknown:
        raise ConfigurationError(
            "Codepoints were requested for unknown icons: " + ", ".join(unknown)
        )

    resolved: dict[str, int] = {}
    owners: dict[int, str] = {}
    for icon in icons:
        value = (explicit or {}).get(icon.name, icon.codepoint)
        if value is None:
            continue
        value = _check_range(icon.name, value)
        owner = owners.get(value)
        if owner is not None and owner != icon.name:
            raise ConfigurationError(
                f"Icons '{owner}' and '{icon.name}' both request codepoint {value:#x}."
            )
        owners[value] = icon.name
        resolved[icon.name] = value
    return resolved


def allocate_codepoints(
    icons: Sequence[IconSource],
    explicit: Mapping[str, int] | None = None,
    start: int = DEFAULT_START_CODEPOINT,
) -> CodepointAssignment:
    """Assign a unique codepoint to every icon, in source order.

    Explicit codepoints (from ``explicit`` first, then ``IconSource.codepoint``)
    are honoured exactly and never move the cursor. Every other icon receives
    the first value at or after the cursor that no icon has claimed, after
    which the cursor advances by one.
    """
    cursor = _check_range("start", start)
    fixed = _explicit_codepoints(icons, explicit)
    claimed = set(fixed.values())

    assignment: CodepointAssignment = {}
    for icon in icons:
        if icon.name in fixed:
            assignment[icon.name] = fixed[icon.name]
            continue
        while cursor in claimed or not _is_xml_char(cursor):
            cursor += 1
        if cursor > MAX_CODEPOINT:
            raise ConfigurationError("Ran out of codepoints while assigning icons.")
        assignment[icon.name] = cursor
        claimed.add(cursor)
        cursor += 1

    logger.debug("Assigned %d codepoints starting at %#x", len(assignment), start)
    return assignment


__all__ = [
    "DEFAULT_START_CODEPOINT",
    "MAX_CODEPOINT",
    "MIN_CODEPOINT",
    "CodepointAssignment",
    "allocate_codepoints",
]
