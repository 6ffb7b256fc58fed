"""Core framework: RepoTool base, path tokens, config loading, logging."""

from __future__ import annotations

import dataclasses
import logging
import string
from pathlib import Path
from typing import Any

import click
import yaml
from colorama import Fore, Style

CONFIG_FILENAME = "unity-git.yaml"


# ── Logging ──────────────────────────────────────────────────────────


def _level_color(levelno: int) -> str:
    if levelno >= logging.ERROR:
        return Fore.RED
    if levelno >= logging.WARNING:
        return Fore.YELLOW
    return Fore.CYAN


class ToolFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        color = _level_color(record.levelno)
        message = record.getMessage()
        return f"{color}[{record.levelname.lower()}]{Style.RESET_ALL} {message}"


logger = logging.getLogger("unity_git_tools")
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(ToolFormatter())
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False


# ── Token System ─────────────────────────────────────────────────────


class TokenFormatter(string.Formatter):
    """Format string subclass with circular-reference detection.

    Tokens can reference other tokens: ``{marker_dir}`` may expand
    to ``{project_root}/Plugins/Editor``.  This formatter recursively
    resolves until stable, but raises on cycles.
    """

    MAX_DEPTH = 10

    def __init__(self, tokens: dict[str, str]) -> None:
        self._tokens = tokens

    def resolve(self, template: str) -> str:
        seen: set[str] = set()
        result = template
        for _ in range(self.MAX_DEPTH):
            try:
                expanded = result.format_map(self._tokens)
            except KeyError as exc:
                missing = exc.args[0] if exc.args else "unknown"
                raise KeyError(f"Missing token: {missing}") from exc
            if expanded == result:
                return expanded
            if expanded in seen:
                raise ValueError(f"Circular token reference: {expanded}")
            seen.add(expanded)
            result = expanded
        raise ValueError(f"Token expansion exceeded {self.MAX_DEPTH} iterations")


def _fwd(p: str | Path) -> str:
    """Normalize path to forward slashes."""
    return Path(p).as_posix()


# Path layout of a Unity project, relative to its root.
DEFAULT_TOKENS: dict[str, str] = {
    "gitignore_path": "{project_root}/.gitignore",
    "marker_dir": "{project_root}/Plugins/Editor",
    "project_settings_dir": "{project_root}/ProjectSettings",
}


def resolve_tokens(project_root: str | Path, config: dict[str, Any]) -> dict[str, str]:
    """Build the full token dictionary.

    Merge order (later wins):
      1. Default Unity layout tokens
      2. Variable tokens from the ``tokens`` config section
      3. ``project_root`` itself, which config cannot override
    """
    tokens: dict[str, str] = dict(DEFAULT_TOKENS)

    section = config.get("tokens", {})
    if not isinstance(section, dict):
        raise TypeError("'tokens' must be a mapping of name to path template.")
    for key, value in section.items():
        tokens[str(key)] = str(value)

    tokens["project_root"] = _fwd(project_root)

    formatter = TokenFormatter(tokens)
    resolved: dict[str, str] = {}
    for key, value in tokens.items():
        resolved[key] = formatter.resolve(value) if "{" in value else value
    return resolved


def resolve_path(root: Path, template: str, tokens: dict[str, str]) -> Path:
    """Resolve a path template using tokens."""
    formatter = TokenFormatter(tokens)
    path = Path(formatter.resolve(template))
    if not path.is_absolute():
        path = root / path
    return path


# ── Config Loading ───────────────────────────────────────────────────


def load_config(project_root: str | Path) -> dict[str, Any]:
    """Load unity-git.yaml from the project root."""
    config_path = Path(project_root) / CONFIG_FILENAME
    if not config_path.exists():
        return {}
    data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TypeError(f"{CONFIG_FILENAME} must contain a top-level mapping.")
    return data


# ── ToolContext ───────────────────────────────────────────────────────


@dataclasses.dataclass(frozen=True)
class ToolContext:
    """Immutable context passed to every tool execution."""

    project_root: Path
    tokens: dict[str, str]
    config: dict[str, Any]
    tool_config: dict[str, Any]

    def path(self, token: str) -> Path:
        """Return the resolved path stored under *token*."""
        return resolve_path(self.project_root, self.tokens[token], self.tokens)


# ── RepoTool Base ────────────────────────────────────────────────────


class RepoTool:
    """Base class for all unity-git commands.

    Subclasses set ``name`` and ``help``, then implement ``setup()`` to
    add click options and ``execute()`` to run the tool.
    """

    name: str = ""
    help: str = ""

    def setup(self, cmd: click.Command) -> click.Command:
        """Add click options/arguments to the command. Return the command."""
        return cmd

    def default_args(self, tokens: dict[str, str]) -> dict[str, Any]:
        """Return default args dict before config/CLI merge."""
        return {}

    def execute(self, ctx: ToolContext, args: dict[str, Any]) -> None:
        """Execute the tool with context and tool-specific args."""
        raise NotImplementedError


# ── Tool Registry ────────────────────────────────────────────────────

_TOOL_REGISTRY: dict[str, RepoTool] = {}


def register_tool(tool: RepoTool) -> None:
    """Add a tool to the global registry."""
    _TOOL_REGISTRY[tool.name] = tool


def get_tool(name: str) -> RepoTool | None:
    """Look up a registered tool by name."""
    return _TOOL_REGISTRY.get(name)


def invoke_tool(
    name: str,
    project_root: Path,
    config: dict[str, Any] | None = None,
    extra_args: dict[str, Any] | None = None,
) -> None:
    """Invoke a registered tool programmatically, bypassing click."""
    tool = get_tool(name)
    if tool is None:
        raise KeyError(f"Tool '{name}' is not registered.")

    config = config or {}
    tool_config = config.get(name, {})
    if not isinstance(tool_config, dict):
        tool_config = {}

    tokens = resolve_tokens(project_root, config)
    ctx = ToolContext(
        project_root=Path(project_root),
        tokens=tokens,
        config=config,
        tool_config=tool_config,
    )

    args: dict[str, Any] = {**tool.default_args(tokens)}
    args.update(tool_config)
    if extra_args:
        args.update(extra_args)

    tool.execute(ctx, args)
