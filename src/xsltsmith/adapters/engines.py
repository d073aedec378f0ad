"""Discovery and invocation of external XSLT processors."""

from __future__ import annotations

from collections.abc import Sequence
import logging
from pathlib import Path, PurePath
import shutil
import subprocess
from threading import RLock

from xsltsmith.core.exceptions import EngineNotFoundError, ProcessSpawnError
from xsltsmith.core.models import EngineChoice, ResolvedEngine


logger = logging.getLogger(__name__)

_WINDOWS_SUFFIXES = (".exe", ".bat", ".cmd", ".com")
_UNCONFIGURED = ResolvedEngine(choice=EngineChoice.UNCONFIGURED, executable=None)


def engine_for_command(command: str) -> EngineChoice:
    """Map a command or path to the engine whose argument convention it follows."""
    stem = PurePath(command.strip()).name.lower()
    for suffix in _WINDOWS_SUFFIXES:
        if stem.endswith(suffix):
            stem = stem[: -len(suffix)]
            break
    for choice in EngineChoice.probe_order():
        if stem == choice.value:
            return choice
    return EngineChoice.UNCONFIGURED


def _normalise_command(command: str | None) -> str | None:
    if command is None:
        return None
    return command.strip() or None


def _which(name: str) -> str | None:
    try:
        return shutil.which(name)
    except (AssertionError, OSError, ValueError):
        return None


def probe_engine(
    candidates: Sequence[EngineChoice] = EngineChoice.probe_order(),
) -> ResolvedEngine:
    """Return the first supported processor found on PATH."""
    for choice in candidates:
        name = choice.executable_name
        if name is None:
            continue
        executable = _which(name)
        if executable:
            return ResolvedEngine(choice=choice, executable=executable)
    return _UNCONFIGURED


def available_engines() -> list[ResolvedEngine]:
    """Return every supported processor currently on PATH, in priority order."""
    found: list[ResolvedEngine] = []
    for choice in EngineChoice.probe_order():
        executable = _which(choice.value)
        if executable:
            found.append(ResolvedEngine(choice=choice, executable=executable))
    return found


def build_argv(
    engine: ResolvedEngine,
    parameter_args: Sequence[str],
    stylesheet_path: Path | str,
    document_path: Path | str,
) -> list[str]:
    """Construct the argument vector for ``engine``.

    Saxon takes the source document before the stylesheet; xsltproc expects
    the reverse. Swapping them yields wrong output rather than an error.
    """
    if not engine.configured:
        raise EngineNotFoundError(
            "No XSLT processor found: install saxon or xsltproc, or configure an engine command."
        )
    assert engine.executable is not None
    parameters = [argument for argument in parameter_args if argument]
    if engine.choice is EngineChoice.SAXON:
        return [engine.executable, *parameters, str(document_path), str(stylesheet_path)]
    if engine.choice is EngineChoice.XSLTPROC:
        return [engine.executable, *parameters, str(stylesheet_path), str(document_path)]
    raise EngineNotFoundError(f"Unsupported XSLT processor '{engine.choice.value}'.")


class EngineRunner:
    """Resolve the XSLT processor once and run it with argument vectors."""

    def __init__(self, command: str | None = None) -> None:
        self._explicit_command = _normalise_command(command)
        self._cache: dict[str | None, ResolvedEngine] = {}
        self._lock = RLock()

    @property
    def command(self) -> str | None:
        return self._explicit_command

    @command.setter
    def command(self, value: str | None) -> None:
        with self._lock:
            self._explicit_command = _normalise_command(value)
            self._cache.clear()

    def reset(self) -> None:
        """Clear cached executable lookup results."""
        with self._lock:
            self._cache.clear()

    def is_available(self) -> bool:
        """Return True when a supported processor can be located."""
        try:
            return self.resolve().configured
        except EngineNotFoundError:
            return False

    def resolve(self, command: str | None = None) -> ResolvedEngine:
        """Return the engine to use, looking it up only on first use.

        The runner's own command, set through :func:`set_engine_command`,
        takes precedence over ``command``, the configured default. Without
        either, PATH is probed for saxon, then xsltproc. Failed lookups are
        not memoised so a processor installed later is picked up.
        """
        key = self._explicit_command or _normalise_command(command)
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                return cached
            resolved = self._resolve_command(key) if key else probe_engine()
            if resolved.configured:
                logger.info(
                    "Using %s XSLT processor at %s", resolved.choice.value, resolved.executable
                )
                self._cache[key] = resolved
            else:
                logger.debug("No XSLT processor found on PATH")
            return resolved

    def run(
        self, argv: Sequence[str], *, encoding: str = "utf-8"
    ) -> subprocess.CompletedProcess[str]:
        """Execute ``argv`` without a shell, merging stderr into stdout."""
        logger.debug("Running XSLT processor: %s", " ".join(argv))
        try:
            return subprocess.run(
                list(argv),
                check=False,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding=encoding,
                errors="replace",
            )
        except FileNotFoundError as exc:
            self.reset()
            raise ProcessSpawnError(
                f"XSLT processor '{argv[0]}' could not be located.", argv=argv
            ) from exc
        except OSError as exc:
            self.reset()
            raise ProcessSpawnError(
                f"Failed to invoke XSLT processor '{argv[0]}': {exc}", argv=argv
            ) from exc

    def _resolve_command(self, command: str) -> ResolvedEngine:
        choice = engine_for_command(command)
        if choice is EngineChoice.UNCONFIGURED:
            raise EngineNotFoundError(
                f"Unsupported XSLT processor command '{command}': expected saxon or xsltproc."
            )
        candidate = Path(command).expanduser()
        if candidate.parent != Path("."):
            if candidate.exists():
                return ResolvedEngine(choice=choice, executable=str(candidate))
            raise EngineNotFoundError(f"XSLT processor '{command}' does not exist.")
        executable = _which(command)
        if executable is None:
            raise EngineNotFoundError(f"XSLT processor '{command}' was not found on PATH.")
        return ResolvedEngine(choice=choice, executable=executable)


_default_runner = EngineRunner()


def get_default_runner() -> EngineRunner:
    return _default_runner


def resolve_engine() -> ResolvedEngine:
    """Resolve the process-wide engine through the shared runner."""
    return _default_runner.resolve()


def get_engine_command() -> str | None:
    """Return the explicitly configured engine command, if any."""
    return _default_runner.command


def set_engine_command(command: str | None) -> None:
    """Override engine discovery for the whole process; ``None`` restores probing."""
    _default_runner.command = command


__all__ = [
    "EngineRunner",
    "available_engines",
    "build_argv",
    "engine_for_command",
    "get_default_runner",
    "get_engine_command",
    "probe_engine",
    "resolve_engine",
    "set_engine_command",
]
