"""ContextTool — display resolved path tokens."""

from __future__ import annotations

import json
from typing import Any

import click

from .core import CONFIG_FILENAME, RepoTool, ToolContext, logger


class ContextTool(RepoTool):
    name = "context"
    help = "Display resolved paths (project root, .gitignore, marker dir, etc.)"

    def setup(self, cmd: click.Command) -> click.Command:
        cmd = click.option("--json", "as_json", is_flag=True, help="Output as JSON")(cmd)
        return cmd

    def default_args(self, tokens: dict[str, str]) -> dict[str, Any]:
        return {"as_json": False}

    def execute(self, ctx: ToolContext, args: dict[str, Any]) -> None:
        tokens = dict(sorted(ctx.tokens.items()))
        config_file = ctx.project_root / CONFIG_FILENAME

        if args.get("as_json"):
            click.echo(json.dumps(tokens, indent=2))
            return

        logger.info(f"config: {config_file if config_file.exists() else '(none)'}")
        for key, value in tokens.items():
            logger.info(f"{key}: {value}")
