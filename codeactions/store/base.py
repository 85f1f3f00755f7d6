"""Document storage interface consumed by the diff renderer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Hashable

from ..errors import InvalidLineEndingModeError

LINE_ENDINGS: dict[str, str] = {
    "unix": "\n",
    "dos": "\r\n",
    "mac": "\r",
}


def line_ending_for(fileformat: str) -> str:
    """Map a file format name to its line terminator."""
    try:
        return LINE_ENDINGS[fileformat]
    except KeyError:
        raise InvalidLineEndingModeError(fileformat) from None


class DocumentStore(ABC):
    """Source of document lines and line endings, keyed by document id."""

    @abstractmethod
    def load_lines(self, document_id: Hashable) -> list[str]:
        """Return a fresh list holding every line of the document."""

    @abstractmethod
    def line_ending(self, document_id: Hashable) -> str:
        """Return the document's line terminator."""


__all__ = ["DocumentStore", "LINE_ENDINGS", "line_ending_for"]
