"""Path helper utilities."""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlparse
from urllib.request import url2pathname

from .errors import PayloadError


def uri_to_path(uri: str) -> Path:
    """Resolve a ``file://`` URI to a local path."""
    parsed = urlparse(uri)
    if parsed.scheme != "file":
        raise PayloadError(f"Unsupported document URI: {uri!r}")
    return Path(url2pathname(parsed.path))


def format_path(path: str | Path, root: Path | None = None) -> str:
    """Render path relative to root, falling back to the full path outside it."""
    target = Path(path)
    base = root if root is not None else Path.cwd()
    try:
        relative = target.relative_to(base)
    except ValueError:
        return target.as_posix()
    return relative.as_posix()


__all__ = ["format_path", "uri_to_path"]
