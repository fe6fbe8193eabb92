"""Implementation of the ``iconsmith generate`` command."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer

from iconsmith.adapters.filesystem import (
    collect_icon_paths,
    load_icon_sources,
    write_generation,
)
from iconsmith.api.service import generate as generate_font
from iconsmith.core.config import DEFAULT_FONT_NAME, DEFAULT_FORMATS
from iconsmith.core.exceptions import IconsmithError
from iconsmith.fonts.logging import FontPipelineLogger
from iconsmith.stylesheet import DEFAULT_BASE_SELECTOR, DEFAULT_CLASS_PREFIX

from .._options import (
    BaseSelectorOption,
    CenterOption,
    ClassPrefixOption,
    CodepointOption,
    CssTemplateOption,
    DebugOption,
    DescentOption,
    DestOption,
    FixedWidthOption,
    FontHeightOption,
    FontNameOption,
    FontsUrlOption,
    FormatOption,
    HtmlOption,
    HtmlTemplateOption,
    IconPathsArgument,
    NoCssOption,
    NoNormalizeOption,
    StartCodepointOption,
    VerboseOption,
    VersionOption,
)
from ..presenter import present_codepoints, present_generation_summary
from ..state import emit_error, set_cli_state


def parse_codepoint(value: str) -> int:
    """Parse ``F101``, ``0xF101`` or ``U+F101`` into an integer."""
    text = value.strip()
    lowered = text.lower()
    if lowered.startswith(("u+", "0x")):
        text = text[2:]
    try:
        return int(text, 16)
    except ValueError as exc:
        raise typer.BadParameter(f"'{value}' is not a hexadecimal codepoint.") from exc


def parse_codepoint_assignments(entries: list[str] | None) -> dict[str, int]:
    """Parse ``name=HEX`` pairs supplied through ``--codepoint``."""
    assignments: dict[str, int] = {}
    for entry in entries or []:
        name, separator, raw = entry.partition("=")
        if not separator or not name.strip() or not raw.strip():
            raise typer.BadParameter(
                f"'{entry}' must look like 'name=HEX'.", param_hint="--codepoint"
            )
        assignments[name.strip()] = parse_codepoint(raw)
    return assignments


def generate(
    ctx: typer.Context,
    inputs: IconPathsArgument = None,
    dest: DestOption = None,
    font_name: FontNameOption = DEFAULT_FONT_NAME,
    formats: FormatOption = None,
    start_codepoint: StartCodepointOption = None,
    codepoints: CodepointOption = None,
    font_height: FontHeightOption = None,
    descent: DescentOption = None,
    no_normalize: NoNormalizeOption = False,
    center: CenterOption = False,
    fixed_width: FixedWidthOption = False,
    no_css: NoCssOption = False,
    html: HtmlOption = False,
    fonts_url: FontsUrlOption = None,
    class_prefix: ClassPrefixOption = DEFAULT_CLASS_PREFIX,
    base_selector: BaseSelectorOption = DEFAULT_BASE_SELECTOR,
    css_template: CssTemplateOption = None,
    html_template: HtmlTemplateOption = None,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
    version: VersionOption = False,
) -> None:
    """Merge SVG icons into an icon font with its stylesheet."""
    state = set_cli_state(ctx=ctx, verbosity=verbose, debug=debug)

    if not inputs:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=1)
    if dest is None:
        emit_error("A destination directory is required (use --dest).")
        raise typer.Exit(code=1)

    font: dict[str, Any] = {
        "normalize": not no_normalize,
        "center_horizontally": center,
        "fixed_width": fixed_width,
    }
    if font_height is not None:
        font["font_height"] = font_height
    if descent is not None:
        font["descent"] = descent

    logger = FontPipelineLogger()
    try:
        icon_paths = collect_icon_paths(inputs)
        if not icon_paths:
            emit_error("No SVG icons found in the given inputs.")
            raise typer.Exit(code=1)
        options: dict[str, Any] = {
            "font_name": font_name,
            "icons": load_icon_sources(icon_paths),
            "dest": Path(dest),
            "formats": list(formats) if formats else list(DEFAULT_FORMATS),
            "codepoints": parse_codepoint_assignments(codepoints),
            "css": not no_css,
            "html": html,
            "css_fonts_url": fonts_url,
            "css_template": css_template,
            "html_template": html_template,
            "template_options": {
                "class_prefix": class_prefix,
                "base_selector": base_selector,
            },
            "font": font,
        }
        if start_codepoint is not None:
            options["start_codepoint"] = parse_codepoint(start_codepoint)

        logger.debug("Generating '%s' from %d icons.", font_name, len(icon_paths))
        result = generate_font(options, logger=logger)
        written = write_generation(result)
    except IconsmithError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    if state.verbosity >= 1:
        present_codepoints(state, result.codepoints)
    present_generation_summary(state, written)


__all__ = ["generate", "parse_codepoint", "parse_codepoint_assignments"]
