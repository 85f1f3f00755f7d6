"""Apply LSP text edits to a list of document lines."""

from __future__ import annotations

import re
from dataclasses import replace
from typing import Iterable, MutableSequence, Optional

from ..logging import get_logger
from ..lsp.messages import InsertTextFormat, TextEdit
from .encoding import decode_line, encode_line, resolve_column
from .snippets import SnippetExpander, expand_snippet as default_expand_snippet

LOGGER = get_logger(__name__)

_LINE_BREAK_RE = re.compile(r"\r\n?")


def _normalize_range(text_edit: TextEdit) -> TextEdit:
    normalized = text_edit.range.normalized()
    if normalized is text_edit.range:
        return text_edit
    return replace(text_edit, range=normalized)


def _sort_key(entry: tuple[int, TextEdit]) -> tuple[int, int, int]:
    index, text_edit = entry
    start = text_edit.range.start
    return (start.line, start.character, index)


def _line_bytes(lines: MutableSequence[str], row: int) -> bytes:
    return encode_line(lines[row]) if row < len(lines) else b""


def apply_text_edits(
    text_edits: Iterable[TextEdit],
    lines: MutableSequence[str],
    offset_encoding: Optional[str] = None,
    *,
    expand_snippet: Optional[SnippetExpander] = default_expand_snippet,
) -> None:
    """Apply ``text_edits`` to ``lines`` in place.

    Reversed ranges are swapped first. Edits are then applied bottom-up
    (start line, then start character, then input order, all descending) so
    an applied edit never shifts the rows of an edit still pending. Edits
    are expected not to overlap; edits sharing a start position keep their
    input order in the result.
    """
    indexed = [(index, _normalize_range(text_edit)) for index, text_edit in enumerate(text_edits)]
    indexed.sort(key=_sort_key, reverse=True)
    LOGGER.debug("Applying %d text edit(s) to %d line(s)", len(indexed), len(lines))

    for _, text_edit in indexed:
        start = text_edit.range.start
        end = text_edit.range.end
        new_text = _LINE_BREAK_RE.sub("\n", text_edit.new_text)

        start_col = resolve_column(lines, start, offset_encoding)
        end_col = resolve_column(lines, end, offset_encoding)
        before = _line_bytes(lines, start.line)[:start_col]
        after = _line_bytes(lines, end.line)[end_col:]

        replacement = new_text.split("\n")
        if text_edit.insert_text_format == InsertTextFormat.SNIPPET and expand_snippet is not None:
            replacement = [expand_snippet(part) for part in replacement]

        encoded = [encode_line(part) for part in replacement]
        encoded[0] = before + encoded[0]
        encoded[-1] = encoded[-1] + after

        del lines[start.line : end.line + 1]
        lines[start.line : start.line] = [decode_line(part) for part in encoded]


__all__ = ["apply_text_edits"]
