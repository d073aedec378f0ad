"""Apply embedded XSLT stylesheets through an installed saxon or xsltproc."""

from __future__ import annotations

from xsltsmith.adapters.engines import (
    EngineRunner,
    get_engine_command,
    resolve_engine,
    set_engine_command,
)
from xsltsmith.api import evaluate_block, run, transform
from xsltsmith.core.config import (
    InvokerSettings,
    configure_settings,
    get_settings,
    set_settings,
    settings_context,
)
from xsltsmith.core.diagnostics import (
    DiagnosticSink,
    LoggingEmitter,
    NullEmitter,
    RecordingSink,
)
from xsltsmith.core.documents import strip_directive_lines
from xsltsmith.core.exceptions import (
    EngineNotFoundError,
    NonZeroExitError,
    ProcessSpawnError,
    TempFileError,
    XsltInvocationError,
)
from xsltsmith.core.models import (
    UNKNOWN_EXIT_STATUS,
    EngineChoice,
    InvocationFailure,
    InvocationRequest,
    InvocationResult,
    InvocationSuccess,
    ParameterBinding,
)
from xsltsmith.core.parameters import format_value
from xsltsmith.core.tempfiles import ScopedTempFiles, TempFileAllocator
from xsltsmith.invoker import Invoker
from xsltsmith.version import get_version


__version__ = get_version()

__all__ = [
    "UNKNOWN_EXIT_STATUS",
    "DiagnosticSink",
    "EngineChoice",
    "EngineNotFoundError",
    "EngineRunner",
    "InvocationFailure",
    "InvocationRequest",
    "InvocationResult",
    "InvocationSuccess",
    "Invoker",
    "InvokerSettings",
    "LoggingEmitter",
    "NonZeroExitError",
    "NullEmitter",
    "ParameterBinding",
    "ProcessSpawnError",
    "RecordingSink",
    "ScopedTempFiles",
    "TempFileAllocator",
    "TempFileError",
    "XsltInvocationError",
    "__version__",
    "configure_settings",
    "evaluate_block",
    "format_value",
    "get_engine_command",
    "get_settings",
    "resolve_engine",
    "run",
    "set_engine_command",
    "set_settings",
    "settings_context",
    "strip_directive_lines",
    "transform",
]
