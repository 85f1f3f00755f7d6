"""Parse decoded LSP JSON payloads into typed messages."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import orjson

from ..errors import PayloadError
from .messages import (
    CreateFile,
    DeleteFile,
    DocumentChange,
    InsertTextFormat,
    OrderedChanges,
    Position,
    Range,
    RenameFile,
    TextDocumentEdit,
    TextEdit,
    UnknownChange,
    UnorderedEdits,
    WorkspaceEdit,
)


def _require_mapping(value: object, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise PayloadError(f"{what} must be an object, got {type(value).__name__}")
    return value


def _require_uri(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise PayloadError(f"Missing '{key}' in {dict(data)!r}")
    return value


def _require_uint(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise PayloadError(f"Position field '{key}' must be a non-negative integer, got {value!r}")
    return value


def parse_position(data: object) -> Position:
    mapping = _require_mapping(data, "Position")
    return Position(line=_require_uint(mapping, "line"), character=_require_uint(mapping, "character"))


def parse_range(data: object) -> Range:
    mapping = _require_mapping(data, "Range")
    return Range(start=parse_position(mapping.get("start")), end=parse_position(mapping.get("end")))


def parse_text_edit(data: object) -> TextEdit:
    """Parse a TextEdit; AnnotatedTextEdit's ``annotationId`` is ignored."""
    mapping = _require_mapping(data, "TextEdit")
    new_text = mapping.get("newText")
    if not isinstance(new_text, str):
        raise PayloadError(f"TextEdit is missing 'newText': {dict(mapping)!r}")
    raw_format = mapping.get("insertTextFormat")
    insert_text_format = None
    if raw_format is not None:
        try:
            insert_text_format = InsertTextFormat(raw_format)
        except ValueError as error:
            raise PayloadError(f"Unknown insertTextFormat {raw_format!r}") from error
    return TextEdit(
        range=parse_range(mapping.get("range")),
        new_text=new_text,
        insert_text_format=insert_text_format,
    )


def parse_text_edits(data: object) -> tuple[TextEdit, ...]:
    if not isinstance(data, list):
        raise PayloadError(f"Expected a list of TextEdits, got {type(data).__name__}")
    return tuple(parse_text_edit(item) for item in data)


def parse_document_change(data: object) -> DocumentChange:
    mapping = _require_mapping(data, "DocumentChange")
    kind = mapping.get("kind")
    if kind == "rename":
        return RenameFile(old_uri=_require_uri(mapping, "oldUri"), new_uri=_require_uri(mapping, "newUri"))
    if kind == "create":
        return CreateFile(uri=_require_uri(mapping, "uri"))
    if kind == "delete":
        return DeleteFile(uri=_require_uri(mapping, "uri"))
    if kind:
        return UnknownChange(kind=str(kind))
    document = _require_mapping(mapping.get("textDocument"), "textDocument")
    version = document.get("version")
    return TextDocumentEdit(
        uri=_require_uri(document, "uri"),
        edits=parse_text_edits(mapping.get("edits")),
        version=version if isinstance(version, int) else None,
    )


def parse_workspace_edit(data: object) -> WorkspaceEdit:
    """Parse a WorkspaceEdit, or the ``edit`` member of a CodeAction.

    ``documentChanges`` wins over ``changes`` when both are present.
    """
    mapping = _require_mapping(data, "WorkspaceEdit")
    if "edit" in mapping and "documentChanges" not in mapping and "changes" not in mapping:
        mapping = _require_mapping(mapping["edit"], "CodeAction.edit")

    document_changes = mapping.get("documentChanges")
    if document_changes is not None:
        if not isinstance(document_changes, list):
            raise PayloadError("'documentChanges' must be a list")
        return OrderedChanges(changes=tuple(parse_document_change(item) for item in document_changes))

    changes = _require_mapping(mapping.get("changes") or {}, "changes")
    edits: dict[str, tuple[TextEdit, ...]] = {}
    for uri, items in changes.items():
        edits[str(uri)] = parse_text_edits(items)
    return UnorderedEdits(edits=edits)


def load_payload(path: Path) -> Any:
    """Read and decode a JSON payload file."""
    try:
        return orjson.loads(path.read_bytes())
    except orjson.JSONDecodeError as error:
        raise PayloadError(f"Failed to parse {path}: {error}") from error


__all__ = [
    "load_payload",
    "parse_document_change",
    "parse_position",
    "parse_range",
    "parse_text_edit",
    "parse_text_edits",
    "parse_workspace_edit",
]
