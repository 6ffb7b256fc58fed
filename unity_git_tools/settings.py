"""SettingsTool — show or enable visible .meta files and force-text serialization."""

from __future__ import annotations

from typing import Any

import click

from .core import RepoTool, ToolContext, logger
from .editor_settings import apply_editor_settings, read_editor_settings
from .inspector import require_git


class SettingsTool(RepoTool):
    name = "settings"
    help = "Show or enable the Unity editor settings for .meta management"

    def setup(self, cmd: click.Command) -> click.Command:
        return click.option(
            "--apply", is_flag=True,
            help="Set version control to 'Visible Meta Files' and serialization to 'Force Text'",
        )(cmd)

    def default_args(self, tokens: dict[str, str]) -> dict[str, Any]:
        return {"apply": False}

    def execute(self, ctx: ToolContext, args: dict[str, Any]) -> None:
        settings_dir = ctx.path("project_settings_dir")
        state = read_editor_settings(settings_dir)
        logger.info(f"Version control: {state.version_control_mode or '(unset)'}")
        logger.info(f"Asset serialization: {state.serialization_label}")

        if not args.get("apply"):
            if not state.is_configured:
                logger.warning("Not configured for git. Run with --apply to fix.")
            return

        require_git(ctx.project_root)
        changed = apply_editor_settings(settings_dir)
        if not changed:
            logger.info("Editor settings already enable .meta management.")
            return
        for path in changed:
            logger.info(f"Updated {path}")
        logger.info("Reopen the project in Unity (or reimport) to pick up the new settings.")
