"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


INPUTS_PANEL = "Input Handling"
FONT_PANEL = "Font"
STYLESHEET_PANEL = "Stylesheet"
OUTPUT_PANEL = "Output"
DIAGNOSTICS_PANEL = "Diagnostics"

IconPathsArgument = Annotated[
    list[Path] | None,
    typer.Argument(
        metavar="ICON...",
        help="SVG icon files, or directories whose *.svg files are used in name order.",
        exists=True,
        file_okay=True,
        dir_okay=True,
        readable=True,
        resolve_path=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

DestOption = Annotated[
    Path | None,
    typer.Option(
        "--dest",
        "-d",
        help="Directory receiving the generated fonts, stylesheet and preview.",
        file_okay=False,
        dir_okay=True,
        rich_help_panel=OUTPUT_PANEL,
    ),
]

FontNameOption = Annotated[
    str,
    typer.Option(
        "--name",
        "-n",
        help="Font family name, also used as the base name of every output file.",
        rich_help_panel=FONT_PANEL,
    ),
]

FormatOption = Annotated[
    list[str] | None,
    typer.Option(
        "--format",
        "-f",
        help="Font format to produce (svg, ttf, woff, woff2, eot). Repeat for several.",
        rich_help_panel=FONT_PANEL,
    ),
]

StartCodepointOption = Annotated[
    str | None,
    typer.Option(
        "--start-codepoint",
        help="First codepoint for automatic assignment, in hexadecimal (e.g. F101).",
        rich_help_panel=FONT_PANEL,
    ),
]

CodepointOption = Annotated[
    list[str] | None,
    typer.Option(
        "--codepoint",
        "-c",
        help="Explicit codepoint as 'name=HEX'. Repeat for several icons.",
        rich_help_panel=FONT_PANEL,
    ),
]

FontHeightOption = Annotated[
    int | None,
    typer.Option("--font-height", min=1, help="Units per em.", rich_help_panel=FONT_PANEL),
]

DescentOption = Annotated[
    int | None,
    typer.Option(
        "--descent", min=0, help="Distance below the baseline.", rich_help_panel=FONT_PANEL
    ),
]

NoNormalizeOption = Annotated[
    bool,
    typer.Option(
        "--no-normalize",
        help="Keep icon units instead of scaling every icon to the font height.",
        rich_help_panel=FONT_PANEL,
    ),
]

CenterOption = Annotated[
    bool,
    typer.Option(
        "--center",
        help="Center each outline horizontally within its advance.",
        rich_help_panel=FONT_PANEL,
    ),
]

FixedWidthOption = Annotated[
    bool,
    typer.Option(
        "--fixed-width",
        help="Give every glyph an advance equal to the font height.",
        rich_help_panel=FONT_PANEL,
    ),
]

NoCssOption = Annotated[
    bool,
    typer.Option("--no-css", help="Skip the stylesheet.", rich_help_panel=STYLESHEET_PANEL),
]

HtmlOption = Annotated[
    bool,
    typer.Option(
        "--html", help="Also render an HTML preview page.", rich_help_panel=STYLESHEET_PANEL
    ),
]

FontsUrlOption = Annotated[
    str | None,
    typer.Option(
        "--fonts-url",
        help="Base URL of the font files as referenced from the stylesheet.",
        rich_help_panel=STYLESHEET_PANEL,
    ),
]

ClassPrefixOption = Annotated[
    str,
    typer.Option(
        "--class-prefix",
        help="Prefix of the per-icon CSS classes.",
        rich_help_panel=STYLESHEET_PANEL,
    ),
]

BaseSelectorOption = Annotated[
    str,
    typer.Option(
        "--base-selector",
        help="Selector receiving the shared font declarations.",
        rich_help_panel=STYLESHEET_PANEL,
    ),
]

CssTemplateOption = Annotated[
    Path | None,
    typer.Option(
        "--css-template",
        help="Replacement jinja2 template for the stylesheet.",
        exists=True,
        dir_okay=False,
        rich_help_panel=STYLESHEET_PANEL,
    ),
]

HtmlTemplateOption = Annotated[
    Path | None,
    typer.Option(
        "--html-template",
        help="Replacement jinja2 template for the preview page.",
        exists=True,
        dir_okay=False,
        rich_help_panel=STYLESHEET_PANEL,
    ),
]

VerboseOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Show full tracebacks when an unexpected error occurs.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]


def _show_version(value: bool) -> None:
    if value:
        from iconsmith.version import get_version

        typer.echo(f"iconsmith {get_version()}")
        raise typer.Exit()


VersionOption = Annotated[
    bool,
    typer.Option(
        "--version",
        help="Show the installed version and exit.",
        is_eager=True,
        callback=_show_version,
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]
