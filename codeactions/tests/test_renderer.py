"""Tests for diff transcripts."""

from __future__ import annotations

import re
from pathlib import Path

import pytest

from codeactions.config import DiffOptions
from codeactions.diff.algorithm import unified_diff
from codeactions.diff.renderer import DiffRenderer, diff_document
from codeactions.edits.applier import apply_text_edits
from codeactions.errors import InvalidLineEndingModeError
from codeactions.lsp.messages import (
    CreateFile,
    DeleteFile,
    OrderedChanges,
    Position,
    Range,
    RenameFile,
    TextDocumentEdit,
    TextEdit,
    UnknownChange,
    UnorderedEdits,
)
from codeactions.store.memory import MemoryDocumentStore

ROOT = Path("/work")


def _edit(start: tuple[int, int], end: tuple[int, int], new_text: str) -> TextEdit:
    return TextEdit(range=Range(start=Position(*start), end=Position(*end)), new_text=new_text)


def _uri(relative: str) -> str:
    return f"file://{ROOT}/{relative}"


@pytest.fixture()
def store() -> MemoryDocumentStore:
    return MemoryDocumentStore(
        {
            ROOT / "a.txt": ["hello world"],
            ROOT / "src" / "b.txt": ["abc", "def"],
            ROOT / "dos.txt": ["one", "two"],
        },
        {ROOT / "dos.txt": "dos"},
    )


@pytest.fixture()
def renderer(store: MemoryDocumentStore) -> DiffRenderer:
    return DiffRenderer(store=store, offset_encoding="utf-16", root=ROOT)


def test_diff_document_hunk() -> None:
    result = diff_document([_edit((0, 6), (0, 11), "there")], ["hello world"], "\n", "utf-16")
    assert result == "@@ -1 +1 @@\n-hello world\n+hello there\n"


def test_diff_document_passes_joined_texts_to_algorithm() -> None:
    calls: list[tuple[str, str, DiffOptions]] = []

    def recording_diff(old_text: str, new_text: str, options: DiffOptions) -> str:
        calls.append((old_text, new_text, options))
        return "opaque output"

    original = ["a", "b"]
    options = DiffOptions(context_lines=1)
    result = diff_document(
        [_edit((1, 0), (1, 1), "c")],
        original,
        "\r\n",
        options=options,
        diff_algorithm=recording_diff,
    )
    assert result == "opaque output"
    assert calls == [("a\r\nb\n", "a\r\nc\n", options)]
    assert original == ["a", "b"]


def test_diff_document_without_changes_is_empty() -> None:
    assert diff_document([_edit((0, 1), (0, 1), "")], ["same"], "\n") == ""


def test_context_lines_option() -> None:
    lines = [f"l{index}" for index in range(10)]
    result = diff_document(
        [_edit((4, 0), (4, 2), "X")],
        lines,
        "\n",
        options=DiffOptions(context_lines=1),
    )
    assert result == "@@ -4,3 +4,3 @@\n l3\n-l4\n+X\n l5\n"


def test_unified_diff_keeps_carriage_returns() -> None:
    assert unified_diff("a\r\nb\n", "a\r\nc\n") == "@@ -1,2 +1,2 @@\n a\r\n-b\n+c\n"


def test_create_renders_header_only(renderer: DiffRenderer) -> None:
    output = renderer.diff_workspace_edit(OrderedChanges(changes=(CreateFile(uri=_uri("new.txt")),)))
    assert output == "diff --code-actions a/new.txt b/new.txt\nnew file\n\n"


def test_rename_renders_paths(renderer: DiffRenderer) -> None:
    change = RenameFile(old_uri=_uri("old.txt"), new_uri=_uri("src/new.txt"))
    output = renderer.diff_workspace_edit(OrderedChanges(changes=(change,)))
    assert output == (
        "diff --code-actions a/old.txt b/src/new.txt\n"
        "rename from old.txt\n"
        "rename to src/new.txt\n"
        "\n"
    )


def test_delete_renders_dev_null(renderer: DiffRenderer) -> None:
    output = renderer.diff_workspace_edit(OrderedChanges(changes=(DeleteFile(uri=_uri("gone.txt")),)))
    assert output == "diff --code-actions a/gone.txt b/gone.txt\n--- a/gone.txt\n+++ /dev/null\n\n"


def test_unknown_kind_renders_nothing(renderer: DiffRenderer) -> None:
    assert renderer.diff_workspace_edit(OrderedChanges(changes=(UnknownChange(kind="unknown-op"),))) == ""


def test_text_document_edit(renderer: DiffRenderer) -> None:
    change = TextDocumentEdit(uri=_uri("a.txt"), edits=(_edit((0, 6), (0, 11), "there"),))
    output = renderer.diff_workspace_edit(OrderedChanges(changes=(change,)))
    assert output == (
        "diff --code-actions a/a.txt b/a.txt\n"
        "--- a/a.txt\n"
        "+++ b/a.txt\n"
        "@@ -1 +1 @@\n"
        "-hello world\n"
        "+hello there\n"
        "\n"
    )


def test_ordered_changes_keep_their_order(renderer: DiffRenderer) -> None:
    changes = (
        CreateFile(uri=_uri("z.txt")),
        UnknownChange(kind="unknown-op"),
        TextDocumentEdit(uri=_uri("src/b.txt"), edits=(_edit((0, 0), (0, 3), "X"), _edit((1, 0), (1, 3), "Y"))),
        DeleteFile(uri=_uri("a.txt")),
    )
    output = renderer.diff_workspace_edit(OrderedChanges(changes=changes))
    headers = [line for line in output.splitlines() if line.startswith("diff --code-actions")]
    assert headers == [
        "diff --code-actions a/z.txt b/z.txt",
        "diff --code-actions a/src/b.txt b/src/b.txt",
        "diff --code-actions a/a.txt b/a.txt",
    ]
    assert "-abc\n-def\n+X\n+Y\n\n" in output


def test_unordered_edits_render_every_document(renderer: DiffRenderer) -> None:
    workspace_edit = UnorderedEdits(
        edits={
            _uri("a.txt"): (_edit((0, 0), (0, 5), "HELLO"),),
            _uri("src/b.txt"): (_edit((1, 0), (1, 0), ">"),),
        }
    )
    output = renderer.diff_workspace_edit(workspace_edit)
    assert (
        "diff --code-actions a/a.txt b/a.txt\n--- a/a.txt\n+++ b/a.txt\n"
        "@@ -1 +1 @@\n-hello world\n+HELLO world\n\n"
    ) in output
    assert "diff --code-actions a/src/b.txt b/src/b.txt\n" in output
    assert "-def\n+>def\n\n" in output


def test_unchanged_document_renders_empty_body(renderer: DiffRenderer) -> None:
    output = renderer.diff_workspace_edit(UnorderedEdits(edits={_uri("a.txt"): ()}))
    assert output == "diff --code-actions a/a.txt b/a.txt\n--- a/a.txt\n+++ b/a.txt\n\n\n"


def test_document_line_ending_is_used(renderer: DiffRenderer) -> None:
    output = renderer.diff_text_edits([_edit((1, 0), (1, 3), "2")], ROOT / "dos.txt")
    assert output == "@@ -1,2 +1,2 @@\n one\r\n-two\n+2\n"


def test_paths_outside_root_stay_absolute(renderer: DiffRenderer) -> None:
    output = renderer.diff_workspace_edit(OrderedChanges(changes=(CreateFile(uri="file:///elsewhere/x.txt"),)))
    assert output.startswith("diff --code-actions a//elsewhere/x.txt b//elsewhere/x.txt\n")


def test_invalid_line_ending_mode_propagates() -> None:
    broken = MemoryDocumentStore({ROOT / "a.txt": ["x"]}, {ROOT / "a.txt": "amiga"})
    renderer = DiffRenderer(store=broken, root=ROOT)
    with pytest.raises(InvalidLineEndingModeError):
        renderer.diff_workspace_edit(UnorderedEdits(edits={_uri("a.txt"): (_edit((0, 0), (0, 1), "y"),)}))


def test_store_lines_are_not_mutated(store: MemoryDocumentStore, renderer: DiffRenderer) -> None:
    renderer.diff_text_edits([_edit((0, 0), (0, 5), "bye")], ROOT / "a.txt")
    assert store.load_lines(ROOT / "a.txt") == ["hello world"]


def test_diff_text_document_edit(renderer: DiffRenderer) -> None:
    change = TextDocumentEdit(uri=_uri("src/b.txt"), edits=(_edit((0, 3), (1, 0), "\n"),), version=2)
    assert renderer.diff_text_document_edit(change) == ""


def test_custom_uri_schemes() -> None:
    store = MemoryDocumentStore({"untitled:Untitled-1": ["draft"]})
    renderer = DiffRenderer(
        store=store,
        resolve_document_id=lambda uri: uri,
        resolve_path=lambda uri: Path(uri.partition(":")[2]),
        root=ROOT,
    )
    output = renderer.diff_workspace_edit(UnorderedEdits(edits={"untitled:Untitled-1": (_edit((0, 0), (0, 5), "final"),)}))
    assert output == (
        "diff --code-actions a/Untitled-1 b/Untitled-1\n"
        "--- a/Untitled-1\n"
        "+++ b/Untitled-1\n"
        "@@ -1 +1 @@\n"
        "-draft\n"
        "+final\n"
        "\n"
    )


_HUNK_RE = re.compile(r"@@ -(\d+)(?:,(\d+))? \+\d+(?:,\d+)? @@")


def _patch(old_text: str, diff: str) -> str:
    """Apply unified hunks to ``old_text``, splitting lines on ``\\n`` only."""
    old_lines = old_text.split("\n")[:-1]
    patched: list[str] = []
    cursor = 0
    for line in diff.split("\n")[:-1]:
        match = _HUNK_RE.fullmatch(line)
        if match:
            start = int(match.group(1))
            count = 1 if match.group(2) is None else int(match.group(2))
            hunk_start = start - 1 if count else start
            patched.extend(old_lines[cursor:hunk_start])
            cursor = hunk_start
        elif line[0] == "+":
            patched.append(line[1:])
        else:
            assert old_lines[cursor] == line[1:]
            if line[0] == " ":
                patched.append(line[1:])
            cursor += 1
    patched.extend(old_lines[cursor:])
    return "\n".join(patched) + "\n"


@pytest.mark.parametrize("line_ending", ["\n", "\r\n", "\r"])
@pytest.mark.parametrize("reverse", [False, True])
def test_diff_reproduces_edited_document(line_ending: str, reverse: bool) -> None:
    original = [f"line {index} \U0001F600 é" for index in range(20)]
    edits = [
        _edit((0, 0), (0, 0), "head\n"),
        _edit((1, 0), (1, 4), "LINE"),
        _edit((10, 2), (11, 1), "x\ny\nz"),
        _edit((18, 5), (18, 0), ""),
        _edit((19, 8), (19, 12), ""),
    ]
    if reverse:
        edits.reverse()
    lines = list(original)
    apply_text_edits(edits, lines, "utf-16")
    old_text = line_ending.join(original)
    new_text = line_ending.join(lines)

    diff = diff_document(edits, original, line_ending, "utf-16", options=DiffOptions(context_lines=1))

    assert _patch(old_text + "\n", diff) == new_text + "\n"
    if line_ending != "\r":
        assert diff.count("@@ -") == 3
