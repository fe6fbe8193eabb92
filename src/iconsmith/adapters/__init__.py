"""Adapters connecting the pipeline to the filesystem."""

from iconsmith.adapters.filesystem import (
    collect_icon_paths,
    load_icon_sources,
    write_generation,
)


__all__ = ["collect_icon_paths", "load_icon_sources", "write_generation"]
