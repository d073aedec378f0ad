"""Conversion of host variables into engine parameter arguments.

Hosts hand over arbitrary values; everything reaching the engine is text.
The stringification contract is deliberately small:

- ``str`` values pass through untouched;
- booleans become ``true`` / ``false``;
- integers and floats use their decimal ``str`` form;
- ``None`` becomes the empty string;
- paths are rendered in POSIX form;
- lists, tuples and sets are formatted element-wise and joined by spaces.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from pathlib import PurePath
from typing import Any

from .models import INPUT_VARIABLE, ParameterBinding


def format_value(value: Any) -> str:
    """Render a host value as the text handed to the engine."""
    match value:
        case None:
            return ""
        case str():
            return value
        case bool():
            return "true" if value else "false"
        case int() | float():
            return str(value)
        case PurePath():
            return value.as_posix()
        case list() | tuple() | set() | frozenset():
            return " ".join(format_value(item) for item in value)
        case _:
            return str(value)


def bindings_from_variables(
    variables: Mapping[str, Any] | Iterable[tuple[str, Any]],
) -> tuple[ParameterBinding, ...]:
    """Turn host variables into ordered parameter bindings."""
    items = variables.items() if isinstance(variables, Mapping) else variables
    return tuple(
        ParameterBinding(name=str(name), value=format_value(value)) for name, value in items
    )


def split_input(
    bindings: Iterable[ParameterBinding],
) -> tuple[str | None, tuple[ParameterBinding, ...]]:
    """Separate the ``input`` document from the real stylesheet parameters.

    When several bindings are named ``input`` the last one wins.
    """
    document: str | None = None
    parameters: list[ParameterBinding] = []
    for binding in bindings:
        if binding.name == INPUT_VARIABLE:
            document = binding.value
            continue
        parameters.append(binding)
    return document, tuple(parameters)


def parameter_arguments(bindings: Sequence[ParameterBinding]) -> list[str]:
    """Serialise bindings to ``name=value`` arguments, preserving order."""
    arguments = [
        binding.serialise() for binding in bindings if binding.name != INPUT_VARIABLE
    ]
    return [argument for argument in arguments if argument]


__all__ = [
    "bindings_from_variables",
    "format_value",
    "parameter_arguments",
    "split_input",
]
