"""Apply a stylesheet file to a document from the command line."""

from __future__ import annotations

from pathlib import Path

import typer

from xsltsmith.core.config import InvokerSettings, get_settings
from xsltsmith.core.models import InvocationRequest, InvocationSuccess, ParameterBinding
from xsltsmith.invoker import Invoker

from ..diagnostics import CliEmitter
from ..state import get_cli_state


def parse_parameter(raw: str) -> ParameterBinding:
    """Split a ``NAME=VALUE`` option into a binding."""
    name, separator, value = raw.partition("=")
    name = name.strip()
    if not separator or not name:
        raise typer.BadParameter(f"expected NAME=VALUE, got '{raw}'", param_hint="--param")
    return ParameterBinding(name=name, value=value)


def _read_document(document: Path | None) -> str:
    if document is None or str(document) == "-":
        return typer.get_text_stream("stdin").read()
    try:
        return document.read_text(encoding="utf-8")
    except OSError as exc:
        raise typer.BadParameter(f"cannot read '{document}': {exc}", param_hint="DOCUMENT") from exc


def run(
    stylesheet: Path = typer.Argument(
        ...,
        help="XSLT stylesheet to apply.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    document: Path | None = typer.Argument(
        None,
        help="XML input document. Reads standard input when omitted or '-'.",
    ),
    param: list[str] = typer.Option(
        [],
        "--param",
        "-p",
        metavar="NAME=VALUE",
        help="Stylesheet parameter; repeat for several parameters.",
    ),
    engine: str | None = typer.Option(
        None,
        "--engine",
        "-e",
        help="Processor command (saxon or xsltproc). Probed on PATH by default.",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the result to this file instead of standard output.",
        dir_okay=False,
    ),
    keep_temp: bool | None = typer.Option(
        None,
        "--keep-temp/--no-keep-temp",
        help="Leave the temporary stylesheet and document files on disk.",
    ),
) -> None:
    """Apply STYLESHEET to DOCUMENT with the installed XSLT processor."""
    state = get_cli_state()
    bindings = tuple(parse_parameter(raw) for raw in param)
    request = InvocationRequest(
        stylesheet_text=stylesheet.read_text(encoding="utf-8"),
        document_text=_read_document(document),
        parameters=bindings,
    )

    overrides: dict[str, object] = {}
    if keep_temp is not None:
        overrides["keep_temp_files"] = keep_temp
    if engine:
        overrides["engine_command"] = engine
    settings = InvokerSettings.model_validate({**get_settings().model_dump(), **overrides})

    sink = CliEmitter(state)
    result = Invoker(settings=settings, sink=sink).invoke(request)
    if not isinstance(result, InvocationSuccess):
        status = result.exit_status
        raise typer.Exit(code=status if status is not None and status > 0 else 1)

    if output is not None:
        output.write_text(result.output_text, encoding="utf-8")
        if state.verbosity >= 1:
            state.console.log(f"Wrote {output}")
        return
    typer.echo(result.output_text, nl=False)


__all__ = ["parse_parameter", "run"]
