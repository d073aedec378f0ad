"""Scoped temporary files backing a single engine invocation."""

from __future__ import annotations

import logging
import os
from pathlib import Path
import shutil
import tempfile
from types import TracebackType
from typing import Protocol, runtime_checkable


logger = logging.getLogger(__name__)


@runtime_checkable
class TempFileAllocator(Protocol):
    """Facility returning fresh writable paths that live for the current call."""

    def allocate(self, prefix: str, suffix: str = "") -> Path: ...


class ScopedTempFiles:
    """Allocate uniquely named files inside a private temporary directory.

    The directory is created on first allocation and removed by ``close``
    unless ``keep`` is set, in which case the files are left for inspection.
    """

    def __init__(self, base_dir: str | Path | None = None, *, keep: bool = False) -> None:
        self._base_dir = Path(base_dir).expanduser() if base_dir is not None else None
        self.keep = keep
        self._root: Path | None = None
        self._allocated: list[Path] = []

    @property
    def root(self) -> Path | None:
        return self._root

    @property
    def allocated(self) -> tuple[Path, ...]:
        return tuple(self._allocated)

    def allocate(self, prefix: str, suffix: str = "") -> Path:
        """Create an empty file and return its path."""
        root = self._ensure_root()
        fd, name = tempfile.mkstemp(prefix=prefix, suffix=suffix, dir=root)
        os.close(fd)
        path = Path(name)
        self._allocated.append(path)
        return path

    def close(self) -> None:
        """Release the scope, removing the backing directory."""
        if self._root is None:
            return
        if self.keep:
            logger.debug("Keeping temporary files under %s", self._root)
        else:
            shutil.rmtree(self._root, ignore_errors=True)
        self._root = None
        self._allocated.clear()

    def _ensure_root(self) -> Path:
        if self._root is None:
            if self._base_dir is not None:
                self._base_dir.mkdir(parents=True, exist_ok=True)
            self._root = Path(tempfile.mkdtemp(prefix="xsltsmith-", dir=self._base_dir))
        return self._root

    def __enter__(self) -> ScopedTempFiles:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def write_text(path: Path, text: str, *, encoding: str = "utf-8") -> Path:
    """Write ``text`` verbatim, without newline translation."""
    with path.open("w", encoding=encoding, newline="") as handle:
        handle.write(text)
    return path


__all__ = ["ScopedTempFiles", "TempFileAllocator", "write_text"]
