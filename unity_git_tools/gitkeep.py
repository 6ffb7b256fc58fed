"""GitkeepTool — create the Plugins/Editor/.gitkeep marker for JetBrains Rider."""

from __future__ import annotations

from typing import Any

from .core import RepoTool, ToolContext, logger
from .files import create_empty_marker, ensure_directory
from .inspector import require_git

MARKER_NAME = ".gitkeep"


class GitkeepTool(RepoTool):
    name = "gitkeep"
    help = "Create Plugins/Editor/.gitkeep so git tracks the empty folder"

    def execute(self, ctx: ToolContext, args: dict[str, Any]) -> None:
        require_git(ctx.project_root)

        marker_dir = ctx.path("marker_dir")
        marker = marker_dir / MARKER_NAME
        if marker.exists():
            logger.info(f"Already present: {marker}")
            return

        ensure_directory(marker_dir)
        create_empty_marker(marker)
        logger.info(f"Created {marker}")
