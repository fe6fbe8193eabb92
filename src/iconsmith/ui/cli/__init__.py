"""Public CLI exports for iconsmith."""

from __future__ import annotations

from .app import app, main
from .commands import generate
from .state import debug_enabled, emit_error, get_cli_state


__all__ = [
    "app",
    "debug_enabled",
    "emit_error",
    "generate",
    "get_cli_state",
    "main",
]
