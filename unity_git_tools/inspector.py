"""Detect whether a project root is a git repository."""

from __future__ import annotations

from pathlib import Path

from .errors import GitAbsent


def has_git(root: Path) -> bool:
    """True when *root* contains a ``.git`` directory.

    Access errors count as absent.  A ``.git`` *file* (worktrees,
    submodules) does not qualify.
    """
    try:
        return (Path(root) / ".git").is_dir()
    except OSError:
        return False


def require_git(root: Path) -> None:
    """Raise :class:`GitAbsent` unless *root* has a ``.git`` directory."""
    if not has_git(root):
        raise GitAbsent(Path(root))
