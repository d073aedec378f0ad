"""Value objects exchanged between hosts, the invoker, and engine adapters."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


UNKNOWN_EXIT_STATUS: int | None = None
INPUT_VARIABLE = "input"


class EngineChoice(Enum):
    """Supported XSLT processors, in probing priority order."""

    SAXON = "saxon"
    XSLTPROC = "xsltproc"
    UNCONFIGURED = "unconfigured"

    @classmethod
    def probe_order(cls) -> tuple[EngineChoice, ...]:
        return (cls.SAXON, cls.XSLTPROC)

    @property
    def executable_name(self) -> str | None:
        """Command name searched on PATH, or None when unconfigured."""
        if self is EngineChoice.UNCONFIGURED:
            return None
        return self.value


@dataclass(frozen=True, slots=True)
class ParameterBinding:
    """A stylesheet parameter passed to the engine as ``name=value``."""

    name: str
    value: str

    def serialise(self) -> str:
        if not self.name:
            return ""
        return f"{self.name}={self.value}"


@dataclass(frozen=True, slots=True)
class InvocationRequest:
    """Stylesheet, input document, and parameters for a single evaluation."""

    stylesheet_text: str
    document_text: str = ""
    parameters: tuple[ParameterBinding, ...] = field(default_factory=tuple)

    @classmethod
    def from_variables(
        cls,
        stylesheet_text: str,
        variables: Mapping[str, Any] | Iterable[tuple[str, Any]] | None,
    ) -> InvocationRequest:
        """Build a request from raw host variables.

        The variable named ``input`` supplies the document text and is never
        forwarded to the engine as a parameter.
        """
        from .parameters import bindings_from_variables, split_input

        bindings = bindings_from_variables(variables or ())
        document_text, parameters = split_input(bindings)
        return cls(
            stylesheet_text=stylesheet_text,
            document_text=document_text or "",
            parameters=parameters,
        )


@dataclass(frozen=True, slots=True)
class ResolvedEngine:
    """Outcome of engine discovery."""

    choice: EngineChoice
    executable: str | None = None

    @property
    def configured(self) -> bool:
        return self.choice is not EngineChoice.UNCONFIGURED and bool(self.executable)


@dataclass(frozen=True, slots=True)
class InvocationSuccess:
    """Engine exited cleanly; ``output_text`` holds the combined output."""

    output_text: str
    argv: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class InvocationFailure:
    """Evaluation failed; ``exit_status`` is None when it could not be obtained."""

    exit_status: int | None
    diagnostic_text: str
    error_kind: str = "non-zero-exit"
    argv: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return False


InvocationResult = InvocationSuccess | InvocationFailure


__all__ = [
    "INPUT_VARIABLE",
    "UNKNOWN_EXIT_STATUS",
    "EngineChoice",
    "InvocationFailure",
    "InvocationRequest",
    "InvocationResult",
    "InvocationSuccess",
    "ParameterBinding",
    "ResolvedEngine",
]
