"""Entry point: main(), click group, tool discovery, error-to-exit-code mapping."""

from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
from pathlib import Path
from typing import Any

import click

from .core import (
    RepoTool,
    ToolContext,
    load_config,
    logger,
    register_tool,
    resolve_tokens,
)
from .errors import ConfigError, GitSetupError

# Modules that never define commands.
_NON_TOOL_MODULES = ("cli", "core", "errors")

# ── Tool Discovery ───────────────────────────────────────────────────


def _discover_tools_from_path(
    namespace_path: list[str],
    package_name: str,
) -> list[RepoTool]:
    """Discover RepoTool subclasses from the package's modules."""
    tools: list[RepoTool] = []
    for module_info in pkgutil.iter_modules(namespace_path):
        name = module_info.name
        if name.startswith("_") or name in _NON_TOOL_MODULES:
            continue
        try:
            module = importlib.import_module(f"{package_name}.{name}")
        except ImportError as exc:
            logger.debug(f"Could not import {package_name}.{name}: {exc}")
            continue

        for _, cls in inspect.getmembers(module, inspect.isclass):
            if cls is RepoTool or not issubclass(cls, RepoTool):
                continue
            if cls.__module__ != module.__name__:
                continue
            tool = cls()
            if not tool.name:
                logger.warning(f"Skipping tool '{cls.__name__}' with empty name")
                continue
            tools.append(tool)
    return sorted(tools, key=lambda t: t.name)


# ── Click Command Builder ────────────────────────────────────────────


def _build_tool_context(project_root: str | Path, tool_name: str) -> ToolContext:
    """Load config and resolve tokens for one command invocation."""
    try:
        config = load_config(project_root)
        tokens = resolve_tokens(project_root, config)
    except (TypeError, KeyError, ValueError) as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read configuration: {exc}") from exc
    tool_config = config.get(tool_name, {})
    if not isinstance(tool_config, dict):
        tool_config = {}
    return ToolContext(
        project_root=Path(project_root),
        tokens=tokens,
        config=config,
        tool_config=tool_config,
    )


def _merge_args(tool: RepoTool, context: ToolContext, kwargs: dict[str, Any]) -> dict[str, Any]:
    """Merge: defaults < tool_config < CLI kwargs.

    ``None`` and empty repeatable options count as "not given".
    """
    args: dict[str, Any] = {**tool.default_args(context.tokens)}
    args.update(context.tool_config)
    for k, v in kwargs.items():
        if v is None or v == ():
            continue
        if v is False and k in context.tool_config:
            continue
        args[k] = v
    return args


def _make_tool_command(tool: RepoTool) -> click.Command:
    """Build a click command for a tool."""

    @click.pass_context
    def callback(ctx: click.Context, **kwargs: Any) -> None:
        project_root = ctx.obj["project_root"]
        try:
            context = _build_tool_context(project_root, tool.name)
            args = _merge_args(tool, context, kwargs)
            tool.execute(context, args)
        except GitSetupError as exc:
            logger.error(str(exc))
            ctx.exit(exc.exit_code)

    cmd = click.Command(
        name=tool.name,
        help=tool.help,
        callback=callback,
    )

    return tool.setup(cmd)


# ── Main CLI Group ───────────────────────────────────────────────────


def _build_cli(project_root: str | None = None) -> click.Group:
    """Build the top-level click group with all discovered tools."""

    @click.group(context_settings={"help_option_names": ["-h", "--help"]})
    @click.option(
        "--project-root",
        type=click.Path(exists=True, file_okay=False),
        default=project_root,
        help="Unity project root (default: current directory)",
    )
    @click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
    @click.pass_context
    def cli(ctx: click.Context, project_root: str | None, verbose: bool) -> None:
        ctx.ensure_object(dict)
        if verbose:
            logger.setLevel(logging.DEBUG)
        ctx.obj["project_root"] = Path(project_root) if project_root else Path.cwd()

    import unity_git_tools as pkg

    for tool in _discover_tools_from_path(list(pkg.__path__), pkg.__name__):
        register_tool(tool)
        cli.add_command(_make_tool_command(tool))

    return cli


def main() -> None:
    """CLI entry point for the ``unity-git`` console script."""
    from colorama import init as colorama_init
    colorama_init()

    cli = _build_cli()
    cli(prog_name="unity-git", standalone_mode=True)


if __name__ == "__main__":
    main()
