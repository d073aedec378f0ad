"""Apply an XSLT stylesheet block through whichever processor is installed."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
import logging
from pathlib import Path

from xsltsmith.adapters.engines import EngineRunner, build_argv, get_default_runner
from xsltsmith.core.config import InvokerSettings, get_settings
from xsltsmith.core.diagnostics import DiagnosticSink, LoggingEmitter
from xsltsmith.core.documents import strip_directive_lines
from xsltsmith.core.exceptions import (
    EngineNotFoundError,
    NonZeroExitError,
    ProcessSpawnError,
    TempFileError,
)
from xsltsmith.core.models import (
    UNKNOWN_EXIT_STATUS,
    InvocationFailure,
    InvocationRequest,
    InvocationResult,
    InvocationSuccess,
    ResolvedEngine,
)
from xsltsmith.core.parameters import parameter_arguments
from xsltsmith.core.tempfiles import ScopedTempFiles, TempFileAllocator, write_text


logger = logging.getLogger(__name__)

STYLESHEET_PREFIX = "xslt-"
DOCUMENT_PREFIX = "xml-"


class Invoker:
    """Run one stylesheet evaluation per call and classify the outcome.

    Every collaborator is optional: by default the process-wide settings and
    engine runner are used, temporary files live in a private directory for
    the duration of the call, and failures are reported through logging.
    A host supplying its own ``temp_files`` allocator owns their cleanup.
    """

    def __init__(
        self,
        *,
        settings: InvokerSettings | None = None,
        runner: EngineRunner | None = None,
        temp_files: TempFileAllocator | None = None,
        sink: DiagnosticSink | None = None,
    ) -> None:
        self._settings = settings
        self.runner = runner if runner is not None else get_default_runner()
        self.temp_files = temp_files
        self.sink: DiagnosticSink = sink if sink is not None else LoggingEmitter()

    @property
    def settings(self) -> InvokerSettings:
        return self._settings if self._settings is not None else get_settings()

    def prepare_document(self, request: InvocationRequest) -> str:
        """Return the document text with host directive lines removed."""
        return strip_directive_lines(request.document_text, self.settings.directive_marker)

    def resolve_engine(self) -> ResolvedEngine:
        """Return the engine for this invocation, raising when none is usable."""
        engine = self.runner.resolve(self.settings.engine_command)
        if not engine.configured:
            raise EngineNotFoundError(
                "No XSLT processor found on PATH: install saxon or xsltproc, "
                "or configure an engine command."
            )
        return engine

    def invoke(self, request: InvocationRequest) -> InvocationResult:
        """Evaluate ``request``; failures are reported to the sink, never raised."""
        try:
            output, argv = self._execute(request)
        except NonZeroExitError as exc:
            return self._fail(exc.exit_status, exc.diagnostic_text, "non-zero-exit", exc.argv)
        except ProcessSpawnError as exc:
            return self._fail(UNKNOWN_EXIT_STATUS, str(exc), "spawn-failure", exc.argv)
        except EngineNotFoundError as exc:
            return self._fail(UNKNOWN_EXIT_STATUS, str(exc), "engine-not-found", exc.argv)
        except TempFileError as exc:
            return self._fail(UNKNOWN_EXIT_STATUS, str(exc), "temp-file-failure", exc.argv)
        return InvocationSuccess(output_text=output, argv=argv)

    def invoke_or_raise(self, request: InvocationRequest) -> str:
        """Evaluate ``request`` and return the output, raising on failure."""
        output, _argv = self._execute(request)
        return output

    # --------------------------------------------------------------------- helpers

    def _execute(self, request: InvocationRequest) -> tuple[str, tuple[str, ...]]:
        document_text = self.prepare_document(request)
        parameters = parameter_arguments(request.parameters)
        engine = self.resolve_engine()
        settings = self.settings

        with self._temp_scope(settings) as allocator:
            stylesheet_path, document_path = _write_inputs(
                allocator, request.stylesheet_text, document_text, settings.encoding
            )
            argv = tuple(build_argv(engine, parameters, stylesheet_path, document_path))
            completed = self.runner.run(argv, encoding=settings.encoding)

        output = completed.stdout or ""
        returncode = completed.returncode
        if isinstance(returncode, int) and returncode == 0:
            logger.debug("XSLT processor succeeded (%d characters)", len(output))
            return output, argv

        exit_status = returncode if isinstance(returncode, int) else UNKNOWN_EXIT_STATUS
        raise NonZeroExitError(exit_status, output, argv=argv)

    @contextmanager
    def _temp_scope(self, settings: InvokerSettings) -> Iterator[TempFileAllocator]:
        if self.temp_files is not None:
            yield self.temp_files
            return
        with ScopedTempFiles(settings.temp_dir, keep=settings.keep_temp_files) as scope:
            yield scope

    def _fail(
        self,
        exit_status: int | None,
        diagnostic_text: str,
        error_kind: str,
        argv: tuple[str, ...],
    ) -> InvocationFailure:
        self.sink.notify_evaluation_error(exit_status, diagnostic_text)
        return InvocationFailure(
            exit_status=exit_status,
            diagnostic_text=diagnostic_text,
            error_kind=error_kind,
            argv=argv,
        )


def _write_inputs(
    allocator: TempFileAllocator, stylesheet_text: str, document_text: str, encoding: str
) -> tuple[Path, Path]:
    try:
        stylesheet_path = write_text(
            allocator.allocate(STYLESHEET_PREFIX, ".xsl"), stylesheet_text, encoding=encoding
        )
        document_path = write_text(
            allocator.allocate(DOCUMENT_PREFIX, ".xml"), document_text, encoding=encoding
        )
    except (OSError, LookupError, UnicodeError) as exc:
        raise TempFileError(f"Could not write XSLT input files: {exc}") from exc
    return stylesheet_path, document_path


__all__ = [
    "DOCUMENT_PREFIX",
    "STYLESHEET_PREFIX",
    "Invoker",
]
