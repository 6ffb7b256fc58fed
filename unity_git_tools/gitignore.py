"""GitignoreTool — overwrite .gitignore with the Unity template plus snippets."""

from __future__ import annotations

import codecs
from typing import Any

import click

from .compose import available_snippets, compose, load_custom_snippets, select_snippets
from .core import RepoTool, ToolContext, logger
from .errors import ConfigError
from .fetch import DEFAULT_TIMEOUT, UNITY_GITIGNORE_URL, fetch_template
from .files import write_text
from .inspector import require_git


class GitignoreTool(RepoTool):
    name = "gitignore"
    help = "Overwrite .gitignore with the Unity ignore list and selected snippets"

    def setup(self, cmd: click.Command) -> click.Command:
        cmd = click.option(
            "--snippet", "snippet", multiple=True, metavar="NAME",
            help="Append this snippet (repeatable). Default: each snippet's configured default.",
        )(cmd)
        cmd = click.option("--dry-run", is_flag=True, help="Print the result instead of writing it")(cmd)
        cmd = click.option("--list-snippets", is_flag=True, help="List available snippets and exit")(cmd)
        cmd = click.option("--url", "template_url", default=None, help="Template URL to download")(cmd)
        return cmd

    def default_args(self, tokens: dict[str, str]) -> dict[str, Any]:
        return {
            "template_url": UNITY_GITIGNORE_URL,
            "timeout": DEFAULT_TIMEOUT,
            "encoding": "utf-8",
            "newline": "\n",
            "custom_snippets": [],
            "snippet": (),
            "dry_run": False,
            "list_snippets": False,
        }

    def execute(self, ctx: ToolContext, args: dict[str, Any]) -> None:
        try:
            snippets = available_snippets(load_custom_snippets(args.get("custom_snippets")))
        except ValueError as exc:
            raise ConfigError(f"Invalid gitignore config: {exc}") from exc

        if args.get("list_snippets"):
            for s in snippets:
                mark = "x" if s.enabled else " "
                click.echo(f"[{mark}] {s.name:<12} {s.title}")
            return

        encoding = args.get("encoding")
        if encoding is not None:
            try:
                codecs.lookup(encoding)
            except (LookupError, TypeError) as exc:
                raise ConfigError(f"Unknown encoding: {encoding}") from exc

        try:
            timeout = float(args["timeout"])
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"timeout must be a number of seconds, got {args['timeout']!r}") from exc
        if not timeout > 0:
            raise ConfigError(f"timeout must be positive, got {timeout}")

        newline = args.get("newline") or "\n"
        if not isinstance(newline, str):
            raise ConfigError(f"newline must be a string, got {newline!r}")

        require_git(ctx.project_root)
        selected = select_snippets(snippets, args.get("snippet") or ())

        url = args["template_url"]
        if not isinstance(url, str):
            raise ConfigError(f"template_url must be a string, got {url!r}")
        logger.info(f"Downloading {url}")
        template = fetch_template(url, timeout=timeout)

        content = compose(template, selected, newline=newline)
        enabled = [s.name for s in selected if s.enabled]

        if args.get("dry_run"):
            click.echo(content, nl=False)
            return

        target = ctx.path("gitignore_path")
        write_text(target, content, encoding=encoding)
        logger.info(
            f"Wrote {target} ({len(content)} chars, snippets: {', '.join(enabled) or 'none'})"
        )
