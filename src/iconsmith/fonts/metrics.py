"""Shared font metrics and the options that derive them."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, model_validator


DEFAULT_FONT_HEIGHT = 1000
DEFAULT_DESCENT = 0
DEFAULT_ROUND = 2


@dataclass(frozen=True, slots=True)
class FontMetrics:
    """Vertical metrics shared by every glyph of a font.

    ``descent`` follows the font convention and is zero or negative, so that
    ``ascent - descent == units_per_em``.
    """

    units_per_em: int
    ascent: int
    descent: int


class FontOptions(BaseModel):
    """Glyph normalisation settings applied while composing the SVG font."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    font_height: int = Field(default=DEFAULT_FONT_HEIGHT, gt=0)
    descent: int = Field(default=DEFAULT_DESCENT, ge=0)
    normalize: bool = True
    center_horizontally: bool = False
    fixed_width: bool = False
    round: int = Field(default=DEFAULT_ROUND, ge=0, le=6)

    @model_validator(mode="after")
    def check_descent(self) -> FontOptions:
        """Keep the baseline inside the em square."""
        if self.descent >= self.font_height:
            raise ValueError("descent must be smaller than font_height")
        return self

    def metrics(self) -> FontMetrics:
        """Return the metrics implied by the font height and descent."""
        return FontMetrics(
            units_per_em=self.font_height,
            ascent=self.font_height - self.descent,
            descent=-self.descent,
        )


__all__ = [
    "DEFAULT_DESCENT",
    "DEFAULT_FONT_HEIGHT",
    "DEFAULT_ROUND",
    "FontMetrics",
    "FontOptions",
]
