"""Configuration models for icon font generation.

IconSource

`name` (`str`)
: Identifier of the icon. It names the glyph and the CSS class, and must be
  unique within a request.

`markup` (`str`)
: Raw SVG markup of the icon.

`codepoint` (`int | None`)
: Codepoint requested by the icon itself. An entry in
  `GenerationConfig.codepoints` takes precedence.

TemplateOptions

`class_prefix` (`str`)
: Prefix prepended to every icon name to form its CSS class (`icon-`).

`base_selector` (`str`)
: Selector receiving the shared font declarations (`.icon`).

GenerationConfig

`font_name` (`str`)
: Family name of the font and base name of every generated file.

`icons` (`list[IconSource]`)
: Icons to assemble, in order. The order drives automatic codepoint
  assignment and the order of the stylesheet rules.

`dest` (`Path`)
: Destination directory handed over to the storage adapter. It is only
  checked for presence here; creating it is up to the caller.

`formats` (`list[str]`)
: Font formats to produce, among `svg`, `ttf`, `woff`, `woff2` and `eot`.
  Duplicates are dropped and the order is kept for the `@font-face` rule.

`codepoints` (`dict[str, int]`)
: Explicit codepoints keyed by icon name.

`start_codepoint` (`int`)
: First value used for automatic assignment (`0xF101`).

`css` / `html` (`bool`)
: Render the stylesheet (on by default) and the HTML preview (off).

`css_fonts_url` (`str | None`)
: Base URL prepended to the font file names inside the stylesheet.

`urls` (`dict[str, str]`)
: Per-format URL overrides used instead of the derived ones. Empty values
  keep the derived URL.

`css_template` / `html_template` (`Path | None`)
: Replacement jinja2 templates for the stylesheet and the preview.

`css_context` / `html_context` (`dict[str, Any]`)
: Extra variables passed to those templates.

`template_options` (`TemplateOptions`)
: Selector settings shared by the stylesheet and the preview.

`font` (`FontOptions`)
: Glyph normalisation: `font_height`, `descent`, `normalize`,
  `center_horizontally`, `fixed_width` and `round`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    FilePath,
    field_validator,
    model_validator,
)

from iconsmith.core.codepoints import (
    DEFAULT_START_CODEPOINT,
    MAX_CODEPOINT,
    MIN_CODEPOINT,
)
from iconsmith.fonts.metrics import FontOptions
from iconsmith.stylesheet import (
    DEFAULT_BASE_SELECTOR,
    DEFAULT_CLASS_PREFIX,
    NAME_PATTERN,
)


DEFAULT_FONT_NAME = "iconfont"
DEFAULT_FORMATS = ("eot", "woff", "woff2")


class IconSource(BaseModel):
    """One named SVG icon to merge into the font."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1)
    markup: str
    codepoint: int | None = Field(default=None, ge=MIN_CODEPOINT, le=MAX_CODEPOINT)

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        if not NAME_PATTERN.match(value):
            raise ValueError(
                f"icon name {value!r} may only contain ASCII letters, digits, '_' and '-'"
            )
        return value


class TemplateOptions(BaseModel):
    """Selector settings used by the stylesheet and preview templates."""

    model_config = ConfigDict(extra="forbid")

    class_prefix: str = DEFAULT_CLASS_PREFIX
    base_selector: str = Field(default=DEFAULT_BASE_SELECTOR, min_length=1)


class GenerationConfig(BaseModel):
    """Validated request for a single icon font generation."""

    model_config = ConfigDict(extra="forbid")

    font_name: str = DEFAULT_FONT_NAME
    icons: list[IconSource] = Field(min_length=1)
    dest: Path
    formats: list[str] = Field(default_factory=lambda: list(DEFAULT_FORMATS), min_length=1)
    codepoints: dict[str, int] = Field(default_factory=dict)
    start_codepoint: int = Field(
        default=DEFAULT_START_CODEPOINT, ge=MIN_CODEPOINT, le=MAX_CODEPOINT
    )
    css: bool = True
    html: bool = False
    css_fonts_url: str | None = None
    urls: dict[str, str] = Field(default_factory=dict)
    css_template: FilePath | None = None
    html_template: FilePath | None = None
    css_context: dict[str, Any] = Field(default_factory=dict)
    html_context: dict[str, Any] = Field(default_factory=dict)
    template_options: TemplateOptions = Field(default_factory=TemplateOptions)
    font: FontOptions = Field(default_factory=FontOptions)

    @field_validator("font_name")
    @classmethod
    def check_font_name(cls, value: str) -> str:
        if not NAME_PATTERN.match(value):
            raise ValueError(
                f"font name {value!r} may only contain ASCII letters, digits, '_' and '-'"
            )
        return value

    @field_validator("dest", mode="before")
    @classmethod
    def check_dest(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError("a destination is required")
        return value

    @field_validator("formats")
    @classmethod
    def check_formats(cls, value: list[str]) -> list[str]:
        from iconsmith.fonts.transcoders import TRANSCODERS

        formats = list(dict.fromkeys(item.strip().lower() for item in value))
        unknown = [item for item in formats if item not in TRANSCODERS]
        if unknown:
            raise ValueError(
                f"unsupported formats {', '.join(unknown)}; "
                f"expected any of {', '.join(TRANSCODERS)}"
            )
        return formats

    @model_validator(mode="after")
    def check_icon_names(self) -> GenerationConfig:
        """Reject duplicated icon names."""
        seen: set[str] = set()
        duplicates: list[str] = []
        for icon in self.icons:
            if icon.name in seen:
                duplicates.append(icon.name)
            seen.add(icon.name)
        if duplicates:
            raise ValueError(f"duplicated icon names: {', '.join(sorted(set(duplicates)))}")
        return self


__all__ = [
    "DEFAULT_FONT_NAME",
    "DEFAULT_FORMATS",
    "GenerationConfig",
    "IconSource",
    "TemplateOptions",
]
