"""Process-wide settings for the XSLT invoker.

InvokerSettings

`engine_command` (`str | None`)
: Command used to run the XSLT processor. Must name `saxon` or `xsltproc`
  (or a path to one of them). When omitted, the processor is discovered on
  `PATH`, trying `saxon` before `xsltproc`. Environment: `XSLTSMITH_ENGINE`.

`directive_marker` (`str`)
: Prefix identifying host directive lines that are removed from the input
  document before it is handed to the processor. Environment:
  `XSLTSMITH_DIRECTIVE_MARKER`.

`temp_dir` (`Path | None`)
: Parent directory for the per-invocation temporary files. Defaults to the
  system temporary directory. Environment: `XSLTSMITH_TMPDIR`.

`keep_temp_files` (`bool`)
: Leave the stylesheet and document files on disk after the call, which helps
  when reproducing an engine failure by hand. Environment:
  `XSLTSMITH_KEEP_TEMP`.

`encoding` (`str`)
: Encoding used to write the temporary files and decode engine output.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
import os
from pathlib import Path
from threading import RLock
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .documents import DEFAULT_DIRECTIVE_MARKER


_ENV_FIELDS: dict[str, str] = {
    "engine_command": "XSLTSMITH_ENGINE",
    "directive_marker": "XSLTSMITH_DIRECTIVE_MARKER",
    "temp_dir": "XSLTSMITH_TMPDIR",
    "keep_temp_files": "XSLTSMITH_KEEP_TEMP",
}

_SETTINGS: InvokerSettings | None = None
_LOCK: RLock = RLock()


class InvokerSettings(BaseModel):
    """Configuration shared by every invocation in the process."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    engine_command: str | None = Field(default=None, description="XSLT processor command")
    directive_marker: str = Field(default=DEFAULT_DIRECTIVE_MARKER)
    temp_dir: Path | None = None
    keep_temp_files: bool = False
    encoding: str = "utf-8"

    @field_validator("engine_command", mode="before")
    @classmethod
    def _blank_command_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value.strip() if isinstance(value, str) else value

    @classmethod
    def from_environment(cls, environ: Mapping[str, str] | None = None) -> InvokerSettings:
        """Resolve settings from ``XSLTSMITH_*`` environment variables."""
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for name, variable in _ENV_FIELDS.items():
            raw = env.get(variable)
            if raw is not None:
                values[name] = raw
        return cls(**values)


def configure_settings(**overrides: Any) -> InvokerSettings:
    """Replace the global settings with environment values plus ``overrides``."""
    base = InvokerSettings.from_environment()
    if not overrides:
        return set_settings(base)
    return set_settings(InvokerSettings.model_validate({**base.model_dump(), **overrides}))


def get_settings() -> InvokerSettings:
    """Return the lazily resolved settings singleton."""
    global _SETTINGS
    with _LOCK:
        if _SETTINGS is None:
            _SETTINGS = InvokerSettings.from_environment()
        return _SETTINGS


def set_settings(settings: InvokerSettings) -> InvokerSettings:
    """Replace the current settings singleton and return it."""
    global _SETTINGS
    with _LOCK:
        _SETTINGS = settings
        return _SETTINGS


def reset_settings() -> None:
    """Forget the resolved settings so the next access re-reads the environment."""
    global _SETTINGS
    with _LOCK:
        _SETTINGS = None


@contextmanager
def settings_context(**overrides: Any) -> Iterator[InvokerSettings]:
    """Temporarily override the current global settings."""
    global _SETTINGS
    with _LOCK:
        previous = _SETTINGS
        base = get_settings()
        current = set_settings(
            InvokerSettings.model_validate({**base.model_dump(), **overrides})
        )
    try:
        yield current
    finally:
        with _LOCK:
            _SETTINGS = previous


__all__ = [
    "InvokerSettings",
    "configure_settings",
    "get_settings",
    "reset_settings",
    "set_settings",
    "settings_context",
]
