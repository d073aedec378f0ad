from __future__ import annotations

from collections.abc import Iterator
import logging

import pytest

from xsltsmith.adapters import engines as engines_mod
from xsltsmith.core import config as config_mod


_ENV_VARS = (
    "XSLTSMITH_ENGINE",
    "XSLTSMITH_DIRECTIVE_MARKER",
    "XSLTSMITH_TMPDIR",
    "XSLTSMITH_KEEP_TEMP",
)


@pytest.fixture(autouse=True)
def _isolated_state(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    config_mod.reset_settings()
    engines_mod.set_engine_command(None)
    yield
    config_mod.reset_settings()
    engines_mod.set_engine_command(None)
    package_logger = logging.getLogger("xsltsmith")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
