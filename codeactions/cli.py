"""Command-line interface for code-actions-diff."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.syntax import Syntax

from .config import CodeActionsConfig
from .diff.renderer import DiffRenderer
from .edits.applier import apply_text_edits
from .errors import CodeActionsError
from .logging import configure_logging, get_logger
from .lsp.payload import load_payload, parse_text_edits, parse_workspace_edit
from .store.filesystem import FileDocumentStore

app = typer.Typer(help="Preview LSP code action edits as diffs.")
LOGGER = get_logger(__name__)

CONFIG_FILE = "codeactions.yaml"


@app.callback()
def main() -> None:
    """code-actions-diff CLI root."""
    return None


def _load_yaml_config(root: Path) -> dict[str, object]:
    config_path = root / CONFIG_FILE
    if not config_path.exists():
        return {}
    try:
        with config_path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as error:
        raise typer.BadParameter(f"Failed to parse {config_path}: {error}") from error
    if not isinstance(data, dict):
        raise typer.BadParameter(f"{CONFIG_FILE} must contain a mapping")
    return data


def _merge_config(root: Path, cli_options: dict[str, object]) -> CodeActionsConfig:
    file_overrides = _load_yaml_config(root)
    merged: dict[str, object] = {**file_overrides}
    context_lines = cli_options.pop("context_lines", None)
    for key, value in cli_options.items():
        if value is not None:
            merged[key] = value
    if context_lines is not None:
        diff_section = merged.get("diff")
        diff_options = dict(diff_section) if isinstance(diff_section, dict) else {}
        diff_options["context_lines"] = context_lines
        merged["diff"] = diff_options
    try:
        return CodeActionsConfig(**merged)
    except ValidationError as error:
        raise typer.BadParameter(str(error)) from error


def _emit(text: str, *, color: bool) -> None:
    if color and text:
        Console().print(Syntax(text, "diff", theme="ansi_dark", background_color="default", word_wrap=True))
        return
    typer.echo(text, nl=False)


def _resolve_config(
    root: Optional[Path],
    *,
    encoding: Optional[str],
    context: Optional[int],
    fileformat: Optional[str],
    color: Optional[bool],
    log_level: Optional[str],
) -> CodeActionsConfig:
    root_path = (root or Path.cwd()).resolve()
    cli_options: dict[str, object] = {
        "root": str(root_path),
        "offset_encoding": encoding,
        "context_lines": context,
        "fileformat": fileformat,
        "color": color,
        "log_level": log_level,
    }
    config = _merge_config(root_path, cli_options)
    configure_logging(config.log_level)
    return config


@app.command("diff")
def diff(
    edit: Path = typer.Option(..., exists=True, file_okay=True, dir_okay=False, help="JSON WorkspaceEdit or CodeAction."),
    root: Optional[Path] = typer.Option(None, exists=True, dir_okay=True, file_okay=False, help="Directory paths are shown relative to."),
    encoding: Optional[str] = typer.Option(None, help="Offset encoding of positions: utf-8, utf-16 or utf-32."),
    context: Optional[int] = typer.Option(None, min=0, help="Context lines around each hunk."),
    fileformat: Optional[str] = typer.Option(None, help="Force a file format (unix, dos, mac) instead of detecting it."),
    color: Optional[bool] = typer.Option(None, "--color/--no-color", help="Highlight the diff output."),
    log_level: Optional[str] = typer.Option(None, help="Log level."),
) -> None:
    """Print the diff a workspace edit would make to files on disk."""
    config = _resolve_config(
        root,
        encoding=encoding,
        context=context,
        fileformat=fileformat,
        color=color,
        log_level=log_level,
    )
    renderer = DiffRenderer(
        store=FileDocumentStore(fileformat=config.fileformat),
        offset_encoding=config.offset_encoding,
        options=config.diff,
        root=Path(config.root),
    )
    try:
        workspace_edit = parse_workspace_edit(load_payload(edit))
        transcript = renderer.diff_workspace_edit(workspace_edit)
    except CodeActionsError as error:
        LOGGER.error("%s", error)
        raise typer.Exit(code=1) from error
    _emit(transcript, color=config.color)


@app.command("apply")
def apply(
    edits: Path = typer.Option(..., exists=True, file_okay=True, dir_okay=False, help="JSON list of TextEdits."),
    file: Path = typer.Option(..., dir_okay=False, help="Document the edits target."),
    root: Optional[Path] = typer.Option(None, exists=True, dir_okay=True, file_okay=False, help="Directory holding codeactions.yaml."),
    encoding: Optional[str] = typer.Option(None, help="Offset encoding of positions: utf-8, utf-16 or utf-32."),
    fileformat: Optional[str] = typer.Option(None, help="Force a file format (unix, dos, mac) instead of detecting it."),
    log_level: Optional[str] = typer.Option(None, help="Log level."),
) -> None:
    """Print a document with text edits applied. The file is left untouched."""
    config = _resolve_config(
        root,
        encoding=encoding,
        context=None,
        fileformat=fileformat,
        color=False,
        log_level=log_level,
    )
    store = FileDocumentStore(fileformat=config.fileformat)
    document_id = file.resolve()
    try:
        text_edits = parse_text_edits(load_payload(edits))
        lines = store.load_lines(document_id)
        line_ending = store.line_ending(document_id)
    except CodeActionsError as error:
        LOGGER.error("%s", error)
        raise typer.Exit(code=1) from error
    apply_text_edits(text_edits, lines, config.offset_encoding)
    typer.echo(line_ending.join(lines) + line_ending, nl=False)


__all__ = ["app"]
