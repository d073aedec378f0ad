"""Preparation of host-supplied document text before it reaches the engine."""

from __future__ import annotations


DEFAULT_DIRECTIVE_MARKER = "#+"


def is_directive_line(line: str, marker: str = DEFAULT_DIRECTIVE_MARKER) -> bool:
    """Return True when ``line`` is a host block directive."""
    if not marker:
        return False
    return line.lstrip(" \t").startswith(marker)


def strip_directive_lines(text: str, marker: str = DEFAULT_DIRECTIVE_MARKER) -> str:
    """Drop host directive lines so the remaining text is plain XML."""
    if not marker or not text:
        return text
    lines = text.splitlines(keepends=True)
    return "".join(line for line in lines if not is_directive_line(line, marker))


__all__ = ["DEFAULT_DIRECTIVE_MARKER", "is_directive_line", "strip_directive_lines"]
