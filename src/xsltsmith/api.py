"""Convenience entry points for hosts embedding stylesheet blocks."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from xsltsmith.core.diagnostics import DiagnosticSink
from xsltsmith.core.models import InvocationRequest, InvocationResult, InvocationSuccess
from xsltsmith.core.parameters import bindings_from_variables
from xsltsmith.core.tempfiles import TempFileAllocator
from xsltsmith.invoker import Invoker


Variables = Mapping[str, Any] | Iterable[tuple[str, Any]]


def evaluate_block(
    stylesheet: str,
    variables: Variables | None = None,
    *,
    sink: DiagnosticSink | None = None,
    temp_files: TempFileAllocator | None = None,
) -> str | None:
    """Evaluate a stylesheet block the way a literate document host does.

    ``variables`` is the host's variable table for the block; the entry named
    ``input`` holds the source document. Returns the processor output, or
    ``None`` once the failure has been reported to ``sink``.
    """
    request = InvocationRequest.from_variables(stylesheet, variables)
    result = Invoker(sink=sink, temp_files=temp_files).invoke(request)
    if isinstance(result, InvocationSuccess):
        return result.output_text
    return None


def run(
    stylesheet: str,
    document: str,
    parameters: Variables | None = None,
    *,
    sink: DiagnosticSink | None = None,
) -> InvocationResult:
    """Apply ``stylesheet`` to ``document`` and return the classified result."""
    request = InvocationRequest(
        stylesheet_text=stylesheet,
        document_text=document,
        parameters=bindings_from_variables(parameters or ()),
    )
    return Invoker(sink=sink).invoke(request)


def transform(stylesheet: str, document: str, parameters: Variables | None = None) -> str:
    """Apply ``stylesheet`` to ``document``, raising on any failure."""
    request = InvocationRequest(
        stylesheet_text=stylesheet,
        document_text=document,
        parameters=bindings_from_variables(parameters or ()),
    )
    return Invoker().invoke_or_raise(request)


__all__ = ["Variables", "evaluate_block", "run", "transform"]
