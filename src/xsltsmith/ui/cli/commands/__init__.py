"""Typer commands exposed by the xsltsmith CLI."""

from __future__ import annotations

from .engines import engines
from .run import run


__all__ = ["engines", "run"]
