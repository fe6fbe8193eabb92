from pathlib import Path
from typing import Any
import xml.etree.ElementTree as ET

import pytest

from iconsmith import (
    ConfigurationError,
    GenerationConfig,
    GlyphParseError,
    TranscodingError,
    generate,
    load_icon_sources,
)
from iconsmith.api.service import fingerprint, load_config


ICONS = Path(__file__).parent / "data" / "icons"


def _options(tmp_path: Path, **overrides: Any) -> dict[str, Any]:
    options: dict[str, Any] = {
        "font_name": "iconfont",
        "icons": load_icon_sources([ICONS / "close.svg", ICONS / "home.svg"]),
        "dest": tmp_path / "out",
    }
    options.update(overrides)
    return options


def test_generate_builds_every_requested_format(tmp_path: Path) -> None:
    result = generate(
        _options(tmp_path, formats=["svg", "ttf", "woff", "woff2", "eot"], font_name="glyphs")
    )

    assert result.formats == ["svg", "ttf", "woff", "woff2", "eot"]
    assert all(result.artifacts.values())
    assert result.font_name == "glyphs"
    assert result.dest == tmp_path / "out"
    assert result.codepoints == {"close": 0xF101, "home": 0xF102}
    assert result.document.codepoints == result.codepoints
    assert result.stylesheet is not None
    assert result.preview is None
    assert not (tmp_path / "out").exists()


def test_default_formats() -> None:
    assert GenerationConfig(icons=[{"name": "a", "markup": "<svg/>"}], dest="out").formats == [
        "eot",
        "woff",
        "woff2",
    ]


def test_codepoints_and_start_codepoint(tmp_path: Path) -> None:
    result = generate(
        _options(
            tmp_path,
            formats=["svg"],
            codepoints={"close": 0xFF},
            start_codepoint=0x40,
        )
    )

    svg = result.artifacts["svg"].decode("utf-8")
    assert result.codepoints == {"close": 0xFF, "home": 0x40}
    assert 'unicode="&#xFF;"' in svg
    assert 'unicode="&#x40;"' in svg


def test_generation_is_deterministic(tmp_path: Path) -> None:
    first = generate(_options(tmp_path, formats=["svg"]))
    second = generate(_options(tmp_path, formats=["svg"]))

    assert first.codepoints == second.codepoints
    assert first.artifacts == second.artifacts
    assert first.stylesheet == second.stylesheet


def test_html_preview_is_opt_in(tmp_path: Path) -> None:
    result = generate(_options(tmp_path, formats=["woff"], html=True))

    assert result.preview is not None
    assert "icon-home" in result.preview
    assert "icon-close" in result.preview


def test_stylesheet_can_be_disabled(tmp_path: Path) -> None:
    result = generate(_options(tmp_path, formats=["woff"], css=False))

    assert result.stylesheet is None


def test_stylesheet_urls_carry_the_fingerprint(tmp_path: Path) -> None:
    result = generate(_options(tmp_path, formats=["woff2", "woff"], css_fonts_url="/fonts/"))

    digest = fingerprint(result.artifacts)
    assert len(digest) == 12
    assert f'url("/fonts/iconfont.woff2?{digest}") format("woff2")' in result.stylesheet
    assert f'url("/fonts/iconfont.woff?{digest}") format("woff")' in result.stylesheet


def test_configured_urls_replace_derived_ones(tmp_path: Path) -> None:
    urls = {"woff": "/static/x.woff", "woff2": "", "svg": "nope"}
    result = generate(_options(tmp_path, formats=["woff2", "woff"], urls=urls))

    digest = fingerprint(result.artifacts)
    assert 'url("/static/x.woff") format("woff")' in result.stylesheet
    assert f'url("iconfont.woff2?{digest}") format("woff2")' in result.stylesheet
    assert "nope" not in result.stylesheet
    assert result.render_stylesheet() == result.stylesheet


def test_render_stylesheet_with_other_urls(tmp_path: Path) -> None:
    result = generate(_options(tmp_path, formats=["woff", "eot"]))
    default_url = result.context.urls["woff"]

    updated = result.render_stylesheet({"woff": "https://cdn.example.com/f.woff"})

    assert "https://cdn.example.com/f.woff" in updated
    assert updated.replace("https://cdn.example.com/f.woff", default_url) == result.stylesheet


def test_preview_can_be_rendered_after_generation(tmp_path: Path) -> None:
    result = generate(_options(tmp_path, formats=["woff"]))

    html = result.render_preview(stylesheet_url="iconfont.css")

    assert 'href="iconfont.css"' in html


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"dest": None}, "dest"),
        ({"dest": "  "}, "dest"),
        ({"icons": []}, "icons"),
        ({"formats": []}, "formats"),
        ({"formats": ["otf"]}, "unsupported formats otf"),
        ({"font_name": "my font"}, "font_name"),
        ({"unknown": True}, "unknown"),
        ({"start_codepoint": 0x10}, "start_codepoint"),
        ({"start_codepoint": 0x110000}, "start_codepoint"),
    ],
)
def test_invalid_requests_are_rejected(
    tmp_path: Path, overrides: dict[str, Any], message: str
) -> None:
    with pytest.raises(ConfigurationError, match=message):
        generate(_options(tmp_path, **overrides))


def test_missing_dest_is_rejected() -> None:
    options = {"icons": [{"name": "a", "markup": "<svg/>"}]}

    with pytest.raises(ConfigurationError, match="dest"):
        load_config(options)


def test_duplicate_icon_names_are_rejected(tmp_path: Path) -> None:
    icons = load_icon_sources([ICONS / "home.svg", ICONS / "home.svg"])

    with pytest.raises(ConfigurationError, match="duplicated icon names: home"):
        generate(_options(tmp_path, icons=icons))


def test_invalid_css_class_is_rejected_only_when_rendering(tmp_path: Path) -> None:
    icons = [{"name": "3d", "markup": (ICONS / "home.svg").read_text(encoding="utf-8")}]
    options = _options(tmp_path, icons=icons, formats=["svg"], template_options={"class_prefix": ""})

    with pytest.raises(ConfigurationError, match="valid CSS class"):
        generate(options)

    result = generate({**options, "css": False})
    assert result.codepoints == {"3d": 0xF101}


def test_unparseable_icon_aborts_generation(tmp_path: Path) -> None:
    icons = [{"name": "broken", "markup": "<svg"}]

    with pytest.raises(GlyphParseError) as excinfo:
        generate(_options(tmp_path, icons=icons))

    assert excinfo.value.icon_name == "broken"


def test_transcoder_failure_aborts_generation(tmp_path: Path) -> None:
    def broken(_document: object) -> bytes:
        raise RuntimeError("encoder crashed")

    with pytest.raises(TranscodingError, match="encoder crashed"):
        generate(_options(tmp_path, formats=["svg"]), transcoders={"svg": broken})


def test_font_options_are_forwarded(tmp_path: Path) -> None:
    result = generate(
        _options(tmp_path, formats=["svg"], font={"font_height": 512, "descent": 64})
    )

    assert result.document.metrics.units_per_em == 512
    assert result.document.metrics.descent == -64


def test_svg_font_stays_valid_around_noncharacters(tmp_path: Path) -> None:
    result = generate(_options(tmp_path, formats=["svg", "ttf"], start_codepoint=0xFFFD))

    root = ET.fromstring(result.artifacts["svg"])
    unicodes = [
        element.get("unicode") for element in root.iter() if element.tag.endswith("glyph")
    ]
    assert result.codepoints == {"close": 0xFFFD, "home": 0x10000}
    assert [ord(value) for value in unicodes if value] == [0xFFFD, 0x10000]


def test_noncharacter_codepoints_are_rejected(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="noncharacter"):
        generate(_options(tmp_path, formats=["svg"], codepoints={"close": 0xFFFF}))
