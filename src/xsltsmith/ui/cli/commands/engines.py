"""List the XSLT processors visible to xsltsmith."""

from __future__ import annotations

from rich import box
from rich.table import Table

from xsltsmith.adapters.engines import available_engines, get_default_runner
from xsltsmith.core.config import get_settings
from xsltsmith.core.exceptions import EngineNotFoundError
from xsltsmith.core.models import EngineChoice

from ..state import emit_error, get_cli_state


def engines() -> None:
    """Show supported processors, where they live, and which one is used."""
    console = get_cli_state().console
    found = {engine.choice: engine.executable for engine in available_engines()}

    selected: EngineChoice | None = None
    try:
        resolved = get_default_runner().resolve(get_settings().engine_command)
    except EngineNotFoundError as exc:
        emit_error(str(exc), exception=exc)
    else:
        if resolved.configured:
            selected = resolved.choice
            found[resolved.choice] = resolved.executable

    table = Table(
        title="XSLT Processors",
        box=box.SQUARE,
        header_style="bold cyan",
    )
    table.add_column("Engine", style="magenta")
    table.add_column("Location")
    table.add_column("Selected", justify="center", style="green")

    for choice in EngineChoice.probe_order():
        table.add_row(
            choice.value,
            found.get(choice) or "-",
            "yes" if choice is selected else "",
        )
    console.print(table)

    if selected is None:
        console.print("No XSLT processor available: install saxon or xsltproc.")


__all__ = ["engines"]
