"""Render text edits and workspace edits as a git-style diff transcript."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Hashable, Iterable, Optional, Sequence

from ..config import DiffOptions
from ..edits.applier import apply_text_edits
from ..edits.snippets import SnippetExpander, expand_snippet as default_expand_snippet
from ..logging import get_logger
from ..lsp.messages import (
    CreateFile,
    DeleteFile,
    OrderedChanges,
    RenameFile,
    TextDocumentEdit,
    TextEdit,
    UnknownChange,
    UnorderedEdits,
    WorkspaceEdit,
)
from ..paths import format_path, uri_to_path
from ..store.base import DocumentStore
from .algorithm import DiffAlgorithm, unified_diff

LOGGER = get_logger(__name__)

HEADER = "diff --code-actions a/{old} b/{new}"


def diff_document(
    text_edits: Iterable[TextEdit],
    original_lines: Sequence[str],
    line_ending: str,
    offset_encoding: Optional[str] = None,
    *,
    options: Optional[DiffOptions] = None,
    diff_algorithm: DiffAlgorithm = unified_diff,
    expand_snippet: Optional[SnippetExpander] = default_expand_snippet,
) -> str:
    """Diff a document against itself with ``text_edits`` applied.

    ``original_lines`` is copied, never mutated. Both texts get a trailing
    newline before diffing so the last line compares like every other line.
    """
    old_text = line_ending.join(original_lines)
    lines = list(original_lines)
    apply_text_edits(text_edits, lines, offset_encoding, expand_snippet=expand_snippet)
    new_text = line_ending.join(lines)
    return diff_algorithm(old_text + "\n", new_text + "\n", options or DiffOptions())


@dataclass(slots=True)
class DiffRenderer:
    """Produce diff transcripts for edits addressed to documents in ``store``."""

    store: DocumentStore
    offset_encoding: Optional[str] = None
    options: DiffOptions = field(default_factory=DiffOptions)
    diff_algorithm: DiffAlgorithm = unified_diff
    expand_snippet: Optional[SnippetExpander] = default_expand_snippet
    resolve_document_id: Callable[[str], Hashable] = uri_to_path
    resolve_path: Callable[[str], Path] = uri_to_path
    root: Optional[Path] = None

    def _path(self, uri: str) -> str:
        return format_path(self.resolve_path(uri), self.root)

    def diff_text_edits(self, text_edits: Iterable[TextEdit], document_id: Hashable) -> str:
        lines = self.store.load_lines(document_id)
        line_ending = self.store.line_ending(document_id)
        return diff_document(
            text_edits,
            lines,
            line_ending,
            self.offset_encoding,
            options=self.options,
            diff_algorithm=self.diff_algorithm,
            expand_snippet=self.expand_snippet,
        )

    def diff_text_document_edit(self, change: TextDocumentEdit) -> str:
        return self.diff_text_edits(change.edits, self.resolve_document_id(change.uri))

    def _edit_block(self, uri: str, text_edits: Iterable[TextEdit]) -> str:
        path = self._path(uri)
        body = self.diff_text_edits(text_edits, self.resolve_document_id(uri)).strip()
        return "\n".join(
            [
                HEADER.format(old=path, new=path),
                f"--- a/{path}",
                f"+++ b/{path}",
                body,
                "",
                "",
            ]
        )

    def _ordered(self, workspace_edit: OrderedChanges) -> str:
        parts: list[str] = []
        for change in workspace_edit.changes:
            if isinstance(change, RenameFile):
                old_path = self._path(change.old_uri)
                new_path = self._path(change.new_uri)
                parts.append(HEADER.format(old=old_path, new=new_path) + "\n")
                parts.append(f"rename from {old_path}\n")
                parts.append(f"rename to {new_path}\n")
                parts.append("\n")
            elif isinstance(change, CreateFile):
                path = self._path(change.uri)
                parts.append(HEADER.format(old=path, new=path) + "\n")
                parts.append("new file\n")
                parts.append("\n")
            elif isinstance(change, DeleteFile):
                path = self._path(change.uri)
                parts.append(HEADER.format(old=path, new=path) + "\n")
                parts.append(f"--- a/{path}\n")
                parts.append("+++ /dev/null\n")
                parts.append("\n")
            elif isinstance(change, UnknownChange):
                LOGGER.debug("Skipping unsupported document change kind %r", change.kind)
            else:
                parts.append(self._edit_block(change.uri, change.edits))
        return "".join(parts)

    def _unordered(self, workspace_edit: UnorderedEdits) -> str:
        return "".join(self._edit_block(uri, text_edits) for uri, text_edits in workspace_edit.edits.items())

    def diff_workspace_edit(self, workspace_edit: WorkspaceEdit) -> str:
        """Render every change of ``workspace_edit`` as one transcript."""
        if isinstance(workspace_edit, OrderedChanges):
            return self._ordered(workspace_edit)
        return self._unordered(workspace_edit)


__all__ = ["DiffRenderer", "diff_document"]
