"""Small logging helpers that integrate with the iconsmith CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import typer


def _resolve_state() -> object | None:
    from iconsmith.ui.cli.state import get_cli_state

    try:
        return get_cli_state(create=False)
    except RuntimeError:
        return None


@dataclass(slots=True)
class FontPipelineLogger:
    """Light wrapper around the CLI state with graceful degradation."""

    verbose: bool = False
    _state: object | None = None

    def __post_init__(self) -> None:
        self._state = _resolve_state()
        if not self.verbose and self._state is not None:
            self.verbose = getattr(self._state, "verbosity", 0) >= 1

    def _render_message(self, message: str, args: tuple[Any, ...]) -> str:
        if args:
            try:
                message = message % args
            except (TypeError, ValueError):
                message = " ".join([message, *(str(arg) for arg in args)])
        return message

    def info(self, message: str, *args: Any) -> None:
        message = self._render_message(message, args)
        if self._state is not None:
            self._state.console.log(message)
            return
        typer.echo(message)

    def debug(self, message: str, *args: Any) -> None:
        """Emit a debug/verbose message when verbose mode is enabled."""
        if not self.verbose:
            return
        self.info(message, *args)


__all__ = ["FontPipelineLogger"]
