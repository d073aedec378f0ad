"""Diagnostic abstractions used to surface evaluation failures to hosts."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Protocol, runtime_checkable


logger = logging.getLogger(__name__)


@runtime_checkable
class DiagnosticSink(Protocol):
    """Receiver for failed evaluations."""

    def notify_evaluation_error(self, exit_status: int | None, diagnostic_text: str) -> None: ...


def format_exit_status(exit_status: int | None) -> str:
    """Render an exit status, using ``unknown`` for the missing sentinel."""
    return "unknown" if exit_status is None else str(exit_status)


def format_evaluation_error(exit_status: int | None, diagnostic_text: str) -> str:
    """Build the one-line summary plus captured output shown to users."""
    message = f"XSLT evaluation failed (exit status {format_exit_status(exit_status)})"
    detail = diagnostic_text.rstrip()
    return f"{message}:\n{detail}" if detail else message


class NullEmitter:
    """Sink that ignores every failure."""

    def notify_evaluation_error(self, exit_status: int | None, diagnostic_text: str) -> None:
        return


class LoggingEmitter:
    """Sink that forwards failures to the standard logging module."""

    def notify_evaluation_error(self, exit_status: int | None, diagnostic_text: str) -> None:
        logger.error(format_evaluation_error(exit_status, diagnostic_text))


@dataclass(slots=True)
class EvaluationError:
    """A failure captured by :class:`RecordingSink`."""

    exit_status: int | None
    diagnostic_text: str


@dataclass(slots=True)
class RecordingSink:
    """Sink keeping every reported failure in memory, optionally forwarding it."""

    forward: DiagnosticSink | None = None
    errors: list[EvaluationError] = field(default_factory=list)

    def notify_evaluation_error(self, exit_status: int | None, diagnostic_text: str) -> None:
        self.errors.append(EvaluationError(exit_status, diagnostic_text))
        if self.forward is not None:
            self.forward.notify_evaluation_error(exit_status, diagnostic_text)

    @property
    def last(self) -> EvaluationError | None:
        return self.errors[-1] if self.errors else None

    def clear(self) -> None:
        self.errors.clear()


__all__ = [
    "DiagnosticSink",
    "EvaluationError",
    "LoggingEmitter",
    "NullEmitter",
    "RecordingSink",
    "format_evaluation_error",
    "format_exit_status",
]
