"""Document store backed by files on disk."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..edits.encoding import decode_line
from ..logging import get_logger
from .base import DocumentStore, line_ending_for

LOGGER = get_logger(__name__)


def detect_fileformat(text: str) -> str:
    """Guess the file format from the line terminators present in text."""
    if "\r\n" in text:
        return "dos"
    if "\r" in text and "\n" not in text:
        return "mac"
    return "unix"


class FileDocumentStore(DocumentStore):
    """Load documents from the filesystem.

    ``fileformat`` forces a format for every document instead of detecting it.
    Missing files load as a single empty line.
    """

    def __init__(self, fileformat: Optional[str] = None) -> None:
        self.fileformat = fileformat
        self._cache: dict[Path, str] = {}

    def _read(self, document_id: Path) -> str:
        path = Path(document_id)
        cached = self._cache.get(path)
        if cached is not None:
            return cached
        try:
            text = decode_line(path.read_bytes())
        except FileNotFoundError:
            LOGGER.debug("Document %s does not exist; treating it as empty", path)
            text = ""
        self._cache[path] = text
        return text

    def _fileformat(self, document_id: Path) -> str:
        if self.fileformat is not None:
            return self.fileformat
        return detect_fileformat(self._read(document_id))

    def load_lines(self, document_id: Path) -> list[str]:
        text = self._read(document_id)
        if not text:
            return [""]
        eol = line_ending_for(self._fileformat(document_id))
        if text.endswith(eol):
            text = text[: -len(eol)]
        return text.split(eol)

    def line_ending(self, document_id: Path) -> str:
        return line_ending_for(self._fileformat(document_id))


__all__ = ["FileDocumentStore", "detect_fileformat"]
