"""Diagnostic sink bridging the invoker with CLI rendering utilities."""

from __future__ import annotations

from xsltsmith.core.diagnostics import format_exit_status

from .state import CLIState, emit_error, get_cli_state


class CliEmitter:
    """Report failed evaluations using the rich-enabled CLI helpers."""

    def __init__(self, state: CLIState | None = None) -> None:
        self._state = state or get_cli_state()

    def notify_evaluation_error(self, exit_status: int | None, diagnostic_text: str) -> None:
        emit_error(f"XSLT evaluation failed (exit status {format_exit_status(exit_status)})")
        detail = diagnostic_text.rstrip()
        if detail:
            self._state.err_console.print(detail, markup=False, highlight=False)


__all__ = ["CliEmitter"]
