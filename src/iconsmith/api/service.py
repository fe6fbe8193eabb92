"""Icon font generation service.

`generate` validates a request, then runs codepoint allocation, SVG font
composition and format transcoding, in that order, before rendering the
stylesheet and the optional preview. Nothing is written to disk: the
returned `GenerationResult` carries every payload, and its
`render_stylesheet` method re-renders the CSS with other asset URLs
without assembling the font again.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import hashlib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from iconsmith.core.codepoints import allocate_codepoints
from iconsmith.core.config import GenerationConfig
from iconsmith.core.exceptions import ConfigurationError
from iconsmith.fonts.composer import VectorFontDocument, compose_font
from iconsmith.fonts.logging import FontPipelineLogger
from iconsmith.fonts.transcoders import Transcoder, transcode
from iconsmith.stylesheet import (
    StylesheetContext,
    default_urls,
    render_preview,
    render_stylesheet,
    sanitize_identifier,
)


@dataclass(slots=True)
class GenerationResult:
    """In-memory outcome of a generation request."""

    font_name: str
    dest: Path
    artifacts: dict[str, bytes]
    codepoints: dict[str, int]
    context: StylesheetContext
    document: VectorFontDocument
    stylesheet: str | None = None
    preview: str | None = None

    @property
    def formats(self) -> list[str]:
        return list(self.artifacts)

    def render_stylesheet(self, urls: Mapping[str, str] | None = None) -> str:
        """Render the stylesheet again, overriding some or all format URLs."""
        return render_stylesheet(self.context, urls)

    def render_preview(
        self,
        urls: Mapping[str, str] | None = None,
        *,
        stylesheet_url: str | None = None,
    ) -> str:
        """Render the HTML preview page again."""
        return render_preview(self.context, urls, stylesheet_url=stylesheet_url)


def _format_validation_error(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = error.get("msg", "invalid value")
        problems.append(f"{location}: {message}" if location else message)
    return "Invalid generation config: " + "; ".join(problems)


def load_config(config: GenerationConfig | Mapping[str, Any]) -> GenerationConfig:
    """Validate raw options into a :class:`GenerationConfig`."""
    if isinstance(config, GenerationConfig):
        return config
    try:
        return GenerationConfig.model_validate(config)
    except ValidationError as exc:
        raise ConfigurationError(_format_validation_error(exc)) from exc


def fingerprint(artifacts: Mapping[str, bytes]) -> str:
    """Return a short digest of the payloads, used to bust caches in URLs."""
    digest = hashlib.sha256()
    for payload in artifacts.values():
        digest.update(payload)
    return digest.hexdigest()[:12]


def generate(
    config: GenerationConfig | Mapping[str, Any],
    *,
    logger: FontPipelineLogger | None = None,
    transcoders: Mapping[str, Transcoder] | None = None,
) -> GenerationResult:
    """Build the icon font described by ``config``.

    Raises :class:`ConfigurationError` before any composition work when the
    request is invalid, :class:`GlyphParseError` when an icon cannot be
    parsed and :class:`TranscodingError` when a format fails. No partial
    result is ever returned.
    """
    settings = load_config(config)
    logger = logger or FontPipelineLogger()
    prefix = settings.template_options.class_prefix
    if settings.css or settings.html:
        for icon in settings.icons:
            sanitize_identifier(icon.name, prefix)

    codepoints = allocate_codepoints(
        settings.icons, settings.codepoints, settings.start_codepoint
    )
    logger.debug("Assigned %d codepoints.", len(codepoints))

    document = compose_font(
        settings.icons,
        codepoints,
        font_name=settings.font_name,
        options=settings.font,
    )
    logger.debug("Composed SVG font '%s'.", settings.font_name)

    artifacts = transcode(document, settings.formats, transcoders=transcoders)
    logger.debug("Built fonts: %s.", ", ".join(artifacts))

    urls = default_urls(
        settings.font_name,
        settings.formats,
        base_url=settings.css_fonts_url,
        fingerprint=fingerprint(artifacts),
    )
    urls.update(
        (key, value) for key, value in settings.urls.items() if key in urls and value
    )
    context = StylesheetContext(
        font_name=settings.font_name,
        formats=tuple(settings.formats),
        codepoints=dict(codepoints),
        urls=urls,
        class_prefix=prefix,
        base_selector=settings.template_options.base_selector,
        css_template=settings.css_template,
        html_template=settings.html_template,
        css_context=dict(settings.css_context),
        html_context=dict(settings.html_context),
    )
    stylesheet = render_stylesheet(context) if settings.css else None
    preview = render_preview(context) if settings.html else None

    return GenerationResult(
        font_name=settings.font_name,
        dest=settings.dest,
        artifacts=artifacts,
        codepoints=dict(codepoints),
        context=context,
        document=document,
        stylesheet=stylesheet,
        preview=preview,
    )


__all__ = [
    "GenerationResult",
    "fingerprint",
    "generate",
    "load_config",
]
