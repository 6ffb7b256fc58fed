"""Shared fixtures for unity-git tests."""

from __future__ import annotations

import io
import logging
import textwrap
from pathlib import Path
from typing import Any

import pytest

from unity_git_tools import core
from unity_git_tools.core import ToolContext, resolve_tokens

EDITOR_SETTINGS_ASSET = """\
%YAML 1.1
%TAG !u! tag:unity3d.com,2011:
--- !u!159 &1
EditorSettings:
  m_ObjectHideFlags: 0
  serializedVersion: 11
  m_ExternalVersionControlSupport: Hidden Meta Files
  m_SerializationMode: 1
  m_LineEndingsForNewScripts: 0
"""


@pytest.fixture(autouse=True)
def reset_tool_registry():
    """Save and restore _TOOL_REGISTRY around each test."""
    saved = core._TOOL_REGISTRY.copy()
    yield
    core._TOOL_REGISTRY.clear()
    core._TOOL_REGISTRY.update(saved)


@pytest.fixture(autouse=True)
def reset_log_level():
    """--verbose lowers the package logger level; undo it after each test."""
    level = core.logger.level
    yield
    core.logger.setLevel(level)


@pytest.fixture
def make_project(tmp_path: Path):
    """Factory that creates a temp Unity project root.

    Usage::

        root = make_project(git=True, config_yaml=\"\"\"
            gitignore:
                timeout: 5
        \"\"\")
    """
    _counter = 0

    def _make(
        git: bool = True,
        config_yaml: str | None = None,
        editor_settings: str | None = EDITOR_SETTINGS_ASSET,
    ) -> Path:
        nonlocal _counter
        root = tmp_path / f"project_{_counter}"
        root.mkdir()
        _counter += 1

        if git:
            (root / ".git").mkdir()

        if config_yaml is not None:
            (root / core.CONFIG_FILENAME).write_text(
                textwrap.dedent(config_yaml), encoding="utf-8",
            )

        if editor_settings is not None:
            settings_dir = root / "ProjectSettings"
            settings_dir.mkdir()
            (settings_dir / "EditorSettings.asset").write_text(editor_settings, encoding="utf-8")

        return root

    return _make


@pytest.fixture
def make_tool_context(tmp_path: Path):
    """Factory to build a ToolContext for unit-testing tools directly.

    Usage::

        ctx = make_tool_context(project_root=root)
        tool.execute(ctx, args)
    """

    def _make(
        config: dict[str, Any] | None = None,
        tool_config: dict[str, Any] | None = None,
        project_root: Path | None = None,
    ) -> ToolContext:
        root = project_root or tmp_path / "project"
        root.mkdir(exist_ok=True)

        cfg = config or {}
        return ToolContext(
            project_root=root,
            tokens=resolve_tokens(root, cfg),
            config=cfg,
            tool_config=tool_config or {},
        )

    return _make


@pytest.fixture
def capture_logs():
    """Capture unity_git_tools logger output into a StringIO buffer.

    The logger has propagate=False and its own StreamHandler that points
    at the original sys.stderr fd, so capsys/capfd/caplog cannot see it.
    """
    buf = io.StringIO()
    handler = logging.StreamHandler(buf)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger = logging.getLogger("unity_git_tools")
    logger.addHandler(handler)
    yield buf
    logger.removeHandler(handler)
