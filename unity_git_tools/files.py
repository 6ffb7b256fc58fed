"""Filesystem primitives.  Every OSError surfaces as IOFailure."""

from __future__ import annotations

import locale
from pathlib import Path

from .errors import EncodeFailure, IOFailure


def ensure_directory(path: Path) -> None:
    """Create *path* and its parents; no-op when it already exists."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise IOFailure(path, exc) from exc


def write_text(path: Path, content: str, encoding: str | None = "utf-8") -> None:
    """Create or overwrite *path* with *content*, byte for byte.

    ``encoding=None`` uses the platform default.  Newlines are written
    as given.  Content is encoded before the file is opened, so an
    unencodable character leaves the existing file as it was.  Not
    atomic: an OS failure mid-write leaves the file undefined.
    """
    encoding = encoding or locale.getpreferredencoding(False)
    try:
        data = content.encode(encoding)
    except UnicodeEncodeError as exc:
        raise EncodeFailure(path, encoding, exc) from exc
    try:
        path.write_bytes(data)
    except OSError as exc:
        raise IOFailure(path, exc) from exc


def create_empty_marker(path: Path) -> None:
    """Create a zero-byte file at *path*.

    Truncates an existing file; callers that must leave an existing
    marker alone check for it first.
    """
    try:
        with open(path, "wb"):
            pass
    except OSError as exc:
        raise IOFailure(path, exc) from exc
