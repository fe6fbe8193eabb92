"""Typer application wiring for the iconsmith CLI."""

from __future__ import annotations

import typer

from iconsmith.ui.cli.commands.generate import generate

from .state import debug_enabled, emit_error, get_cli_state


app = typer.Typer(
    help="Merge SVG icons into an icon font, its stylesheet and a preview page.",
    context_settings={"help_option_names": ["--help"]},
)
app.command()(generate)


def _print_traceback(exc: BaseException) -> None:
    from rich.traceback import Traceback

    state = get_cli_state()
    state.err_console.print(
        Traceback.from_exception(
            type(exc), exc, exc.__traceback__, show_locals=state.verbosity >= 2
        )
    )


def main() -> None:
    """Console script entry point."""
    try:
        app()
    except (typer.Exit, SystemExit):
        raise
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Interrupted.")
        raise typer.Exit(code=130) from exc
    except Exception as exc:  # pragma: no cover - unexpected failures
        if debug_enabled():
            _print_traceback(exc)
        else:
            emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc


__all__ = ["app", "main"]
