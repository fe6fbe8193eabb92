from pathlib import Path
import shutil

import pytest

from iconsmith.adapters.filesystem import (
    collect_icon_paths,
    load_icon_sources,
    write_generation,
)
from iconsmith.api.service import generate
from iconsmith.core.exceptions import ConfigurationError


ICONS = Path(__file__).parent / "data" / "icons"


def test_directories_expand_to_sorted_svg_files(tmp_path: Path) -> None:
    (tmp_path / "notes.txt").write_text("not an icon", encoding="utf-8")
    shutil.copy(ICONS / "home.svg", tmp_path / "b.svg")
    shutil.copy(ICONS / "close.svg", tmp_path / "a.svg")

    paths = collect_icon_paths([tmp_path, ICONS / "dot.svg"])

    assert paths == [tmp_path / "a.svg", tmp_path / "b.svg", ICONS / "dot.svg"]


def test_icon_names_come_from_file_stems() -> None:
    sources = load_icon_sources([ICONS / "home.svg", ICONS / "close.svg"])

    assert [source.name for source in sources] == ["home", "close"]
    assert sources[0].markup.startswith("<?xml")


def test_rename_callback_overrides_names() -> None:
    sources = load_icon_sources([ICONS / "home.svg"], rename=lambda path: f"x-{path.stem}")

    assert sources[0].name == "x-home"


def test_missing_icon_file_is_reported(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Unable to read icon"):
        load_icon_sources([tmp_path / "missing.svg"])


def test_invalid_icon_name_is_reported(tmp_path: Path) -> None:
    target = tmp_path / "two words.svg"
    shutil.copy(ICONS / "home.svg", target)

    with pytest.raises(ConfigurationError, match="Invalid icon"):
        load_icon_sources([target])


def test_write_generation_persists_every_asset(tmp_path: Path) -> None:
    dest = tmp_path / "nested" / "out"
    result = generate(
        {
            "font_name": "glyphs",
            "icons": load_icon_sources([ICONS / "home.svg"]),
            "dest": dest,
            "formats": ["svg", "woff"],
            "html": True,
        }
    )

    written = write_generation(result)

    assert written == [
        dest / "glyphs.svg",
        dest / "glyphs.woff",
        dest / "glyphs.css",
        dest / "glyphs.html",
    ]
    assert (dest / "glyphs.woff").read_bytes() == result.artifacts["woff"]
    assert (dest / "glyphs.css").read_text(encoding="utf-8") == result.stylesheet


def test_stylesheet_destination_can_be_overridden(tmp_path: Path) -> None:
    result = generate(
        {
            "icons": load_icon_sources([ICONS / "home.svg"]),
            "dest": tmp_path / "fonts",
            "formats": ["svg"],
        }
    )

    written = write_generation(result, css_dest=tmp_path / "css" / "icons.css")

    assert written == [tmp_path / "fonts" / "iconfont.svg", tmp_path / "css" / "icons.css"]


def test_unwritable_destination_is_reported(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    result = generate(
        {
            "icons": load_icon_sources([ICONS / "home.svg"]),
            "dest": blocker,
            "formats": ["svg"],
        }
    )

    with pytest.raises(ConfigurationError, match="Unable to write"):
        write_generation(result)
