"""Expand LSP snippet syntax into the literal text it would insert."""

from __future__ import annotations

import re
from typing import Protocol

_INT_RE = re.compile(r"\d+")
_VAR_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
# Deeper openers are kept as literal text.
_MAX_NESTING = 64


class SnippetExpander(Protocol):
    def __call__(self, text: str) -> str: ...


class _SnippetParser:
    """Recursive-descent reader for the LSP snippet grammar.

    Tab stops and unset variables expand to nothing, placeholders and variable
    defaults to their (recursively expanded) text, choices to their first
    option. Anything that is not valid snippet syntax is kept verbatim.

    The outcome of every ``$`` is remembered by offset, so an unterminated
    opener is read once no matter how many enclosing placeholders retry it.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self._depth = 0
        self._expanded: dict[int, tuple[str, int]] = {}

    def parse(self) -> str:
        return self._any(stop="")

    def _peek(self, offset: int = 0) -> str:
        index = self.pos + offset
        return self.text[index] if index < len(self.text) else ""

    def _escapes(self, allowed: str) -> bool:
        following = self._peek(1)
        return bool(following) and following in allowed

    def _any(self, stop: str) -> str:
        out: list[str] = []
        while self.pos < len(self.text):
            char = self.text[self.pos]
            if stop and char in stop:
                break
            if char == "\\" and self._escapes("$}\\"):
                out.append(self._peek(1))
                self.pos += 2
            elif char == "$":
                out.append(self._dollar())
            else:
                out.append(char)
                self.pos += 1
        return "".join(out)

    def _dollar(self) -> str:
        start = self.pos
        cached = self._expanded.get(start)
        if cached is not None:
            text, self.pos = cached
            return text
        if self._depth >= _MAX_NESTING:
            self.pos = start + 1
            return "$"
        self._depth += 1
        try:
            text = self._expand_dollar(start)
        finally:
            self._depth -= 1
        self._expanded[start] = (text, self.pos)
        return text

    def _expand_dollar(self, start: int) -> str:
        self.pos += 1
        match = _INT_RE.match(self.text, self.pos) or _VAR_RE.match(self.text, self.pos)
        if match:
            self.pos = match.end()
            return ""
        if self._peek() != "{":
            return "$"
        self.pos += 1
        match = _INT_RE.match(self.text, self.pos)
        is_tabstop = match is not None
        if not match:
            match = _VAR_RE.match(self.text, self.pos)
        if not match:
            self.pos = start + 1
            return "$"
        self.pos = match.end()
        marker = self._peek()
        if marker == "}":
            self.pos += 1
            return ""
        if marker == ":":
            self.pos += 1
            inner = self._any(stop="}")
            if self._peek() == "}":
                self.pos += 1
                return inner
        elif marker == "|" and is_tabstop:
            choice = self._choice()
            if choice is not None:
                return choice
        elif marker == "/" and not is_tabstop:
            # variable transforms cannot be evaluated without a variable value
            closing = self.text.find("}", self.pos)
            if closing != -1:
                self.pos = closing + 1
                return ""
        self.pos = start + 1
        return "$"

    def _choice(self) -> str | None:
        self.pos += 1
        options: list[str] = []
        current: list[str] = []
        while self.pos < len(self.text):
            char = self.text[self.pos]
            if char == "\\" and self._escapes(",|\\$}"):
                current.append(self._peek(1))
                self.pos += 2
            elif char == ",":
                options.append("".join(current))
                current = []
                self.pos += 1
            elif char == "|" and self._peek(1) == "}":
                options.append("".join(current))
                self.pos += 2
                return options[0]
            else:
                current.append(char)
                self.pos += 1
        return None


def expand_snippet(text: str) -> str:
    """Return ``text`` with snippet placeholders replaced by literal text."""
    if "$" not in text and "\\" not in text:
        return text
    return _SnippetParser(text).parse()


__all__ = ["SnippetExpander", "expand_snippet"]
