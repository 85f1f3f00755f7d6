"""Typed LSP messages consumed by the edit applier and diff renderer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Union


@dataclass(frozen=True, slots=True, order=True)
class Position:
    line: int
    character: int


@dataclass(frozen=True, slots=True)
class Range:
    start: Position
    end: Position

    def normalized(self) -> "Range":
        """Return the range with start and end swapped if they are reversed."""
        if self.start > self.end:
            return Range(start=self.end, end=self.start)
        return self


class InsertTextFormat(IntEnum):
    PLAIN = 1
    SNIPPET = 2


@dataclass(frozen=True, slots=True)
class TextEdit:
    range: Range
    new_text: str
    insert_text_format: Optional[InsertTextFormat] = None


@dataclass(frozen=True, slots=True)
class TextDocumentEdit:
    uri: str
    edits: tuple[TextEdit, ...]
    version: Optional[int] = None


@dataclass(frozen=True, slots=True)
class RenameFile:
    old_uri: str
    new_uri: str
    kind: str = "rename"


@dataclass(frozen=True, slots=True)
class CreateFile:
    uri: str
    kind: str = "create"


@dataclass(frozen=True, slots=True)
class DeleteFile:
    uri: str
    kind: str = "delete"


@dataclass(frozen=True, slots=True)
class UnknownChange:
    """Resource operation of a kind this package does not render."""

    kind: str


DocumentChange = Union[TextDocumentEdit, RenameFile, CreateFile, DeleteFile, UnknownChange]


@dataclass(frozen=True, slots=True)
class OrderedChanges:
    """WorkspaceEdit given as ``documentChanges``; order is significant."""

    changes: tuple[DocumentChange, ...]


@dataclass(frozen=True, slots=True)
class UnorderedEdits:
    """WorkspaceEdit given as a ``changes`` mapping of URI to edits."""

    edits: dict[str, tuple[TextEdit, ...]]


WorkspaceEdit = Union[OrderedChanges, UnorderedEdits]


__all__ = [
    "CreateFile",
    "DeleteFile",
    "DocumentChange",
    "InsertTextFormat",
    "OrderedChanges",
    "Position",
    "Range",
    "RenameFile",
    "TextDocumentEdit",
    "TextEdit",
    "UnknownChange",
    "UnorderedEdits",
    "WorkspaceEdit",
]
