"""StatusTool — report git, ignore file, marker and editor-settings state."""

from __future__ import annotations

from typing import Any

from .core import RepoTool, ToolContext, logger
from .editor_settings import read_editor_settings
from .errors import GitAbsent, GitSetupError
from .gitkeep import MARKER_NAME
from .inspector import has_git


class StatusTool(RepoTool):
    name = "status"
    help = "Show whether the project has .git and what is already set up"

    def execute(self, ctx: ToolContext, args: dict[str, Any]) -> None:
        git_present = has_git(ctx.project_root)
        logger.info(f"Git for this project: {'enabled' if git_present else 'not created'}")

        gitignore = ctx.path("gitignore_path")
        if gitignore.is_file():
            logger.info(f".gitignore: {gitignore}")
        else:
            logger.warning(f".gitignore file was not found ({gitignore})")

        marker = ctx.path("marker_dir") / MARKER_NAME
        logger.info(f"{MARKER_NAME}: {'present' if marker.is_file() else 'missing'} ({marker})")

        try:
            state = read_editor_settings(ctx.path("project_settings_dir"))
        except GitSetupError as exc:
            logger.info(f"Editor settings: unavailable ({exc})")
        else:
            logger.info(
                f"Editor settings: version control = {state.version_control_mode or '(unset)'}, "
                f"serialization = {state.serialization_label}"
            )

        if not git_present:
            raise GitAbsent(ctx.project_root)
