"""In-memory document store."""

from __future__ import annotations

from typing import Hashable, Mapping, Optional, Sequence

from .base import DocumentStore, line_ending_for


class MemoryDocumentStore(DocumentStore):
    """Serve documents from a mapping of id to lines.

    Unknown documents load as a single empty line, like an empty buffer.
    """

    def __init__(
        self,
        documents: Mapping[Hashable, Sequence[str]],
        fileformats: Optional[Mapping[Hashable, str]] = None,
        *,
        default_fileformat: str = "unix",
    ) -> None:
        self.documents = dict(documents)
        self.fileformats = dict(fileformats or {})
        self.default_fileformat = default_fileformat

    def load_lines(self, document_id: Hashable) -> list[str]:
        return list(self.documents.get(document_id, [""]))

    def line_ending(self, document_id: Hashable) -> str:
        return line_ending_for(self.fileformats.get(document_id, self.default_fileformat))


__all__ = ["MemoryDocumentStore"]
