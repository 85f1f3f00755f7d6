"""Default line diff built on difflib."""

from __future__ import annotations

import difflib
from itertools import islice
from typing import Optional, Protocol

from ..config import DiffOptions


class DiffAlgorithm(Protocol):
    def __call__(self, old_text: str, new_text: str, options: DiffOptions) -> str: ...


def _split_lines(text: str) -> list[str]:
    # Only "\n" separates lines; a "\r" before it stays part of the line.
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def unified_diff(old_text: str, new_text: str, options: Optional[DiffOptions] = None) -> str:
    """Return unified diff hunks between two texts, without file headers."""
    options = options or DiffOptions()
    diff = difflib.unified_diff(
        _split_lines(old_text),
        _split_lines(new_text),
        n=options.context_lines,
        lineterm="",
    )
    hunks = list(islice(diff, 2, None))
    if not hunks:
        return ""
    return "\n".join(hunks) + "\n"


__all__ = ["DiffAlgorithm", "unified_diff"]
