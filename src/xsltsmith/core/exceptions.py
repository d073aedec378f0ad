"""Exception hierarchy for XSLT engine invocations."""

from __future__ import annotations

from collections.abc import Sequence


class XsltInvocationError(RuntimeError):
    """Base exception for failed stylesheet evaluations."""

    def __init__(self, message: str = "", *, argv: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.argv: tuple[str, ...] = tuple(argv)


class EngineNotFoundError(XsltInvocationError):
    """Raised when no supported XSLT processor can be located."""


class TempFileError(XsltInvocationError):
    """Raised when the stylesheet or document cannot be written to disk."""


class ProcessSpawnError(XsltInvocationError):
    """Raised when the XSLT processor was found but could not be launched."""


class NonZeroExitError(XsltInvocationError):
    """Raised when the XSLT processor reports a failing exit status."""

    def __init__(
        self, exit_status: int | None, diagnostic_text: str, *, argv: Sequence[str] = ()
    ) -> None:
        self.exit_status = exit_status
        self.diagnostic_text = diagnostic_text
        status = "unknown" if exit_status is None else str(exit_status)
        message = f"XSLT processor failed with exit code {status}"
        detail = diagnostic_text.strip()
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, argv=argv)


__all__ = [
    "EngineNotFoundError",
    "NonZeroExitError",
    "ProcessSpawnError",
    "TempFileError",
    "XsltInvocationError",
]
