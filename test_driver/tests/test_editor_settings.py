"""Tests for unity_git_tools.editor_settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from unity_git_tools.editor_settings import (
    FORCE_TEXT,
    VISIBLE_META_FILES,
    apply_editor_settings,
    read_editor_settings,
)
from unity_git_tools.errors import IOFailure, SettingsFormatError


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

VERSION_CONTROL_ASSET = """\
%YAML 1.1
%TAG !u! tag:unity3d.com,2011:
--- !u!890905787 &1
VersionControlSettings:
  m_ObjectHideFlags: 0
  m_Mode: Hidden Meta Files
  m_CollabEditorSettings:
    inProgressEnabled: 1
"""


@pytest.fixture
def settings_dir(tmp_path: Path) -> Path:
    d = tmp_path / "ProjectSettings"
    d.mkdir()
    (d / "EditorSettings.asset").write_text(EDITOR_SETTINGS_ASSET, encoding="utf-8")
    return d


class TestReadEditorSettings:
    def test_legacy_layout(self, settings_dir: Path):
        state = read_editor_settings(settings_dir)
        assert state.version_control_mode == "Hidden Meta Files"
        assert state.serialization_mode == "1"
        assert state.serialization_label == "Force Binary"
        assert not state.is_configured

    def test_version_control_asset_wins(self, settings_dir: Path):
        (settings_dir / "VersionControlSettings.asset").write_text(
            VERSION_CONTROL_ASSET.replace("Hidden", "Visible"), encoding="utf-8",
        )
        state = read_editor_settings(settings_dir)
        assert state.version_control_mode == VISIBLE_META_FILES

    def test_missing_key_is_none(self, settings_dir: Path):
        text = EDITOR_SETTINGS_ASSET.replace("  m_SerializationMode: 1\n", "")
        (settings_dir / "EditorSettings.asset").write_text(text, encoding="utf-8")
        state = read_editor_settings(settings_dir)
        assert state.serialization_mode is None
        assert state.serialization_label == "(unset)"

    def test_missing_asset(self, tmp_path: Path):
        with pytest.raises(IOFailure):
            read_editor_settings(tmp_path)


class TestApplyEditorSettings:
    def test_legacy_layout(self, settings_dir: Path):
        changed = apply_editor_settings(settings_dir)
        assert changed == [settings_dir / "EditorSettings.asset"]

        text = (settings_dir / "EditorSettings.asset").read_text(encoding="utf-8")
        assert "  m_ExternalVersionControlSupport: Visible Meta Files\n" in text
        assert "  m_SerializationMode: 2\n" in text
        # Everything else is untouched.
        assert text.startswith("%YAML 1.1\n%TAG !u! tag:unity3d.com,2011:\n--- !u!159 &1\n")
        assert "  m_LineEndingsForNewScripts: 0\n" in text

        state = read_editor_settings(settings_dir)
        assert state.is_configured
        assert state.serialization_mode == FORCE_TEXT

    def test_split_layout(self, settings_dir: Path):
        vcs = settings_dir / "VersionControlSettings.asset"
        vcs.write_text(VERSION_CONTROL_ASSET, encoding="utf-8")

        changed = apply_editor_settings(settings_dir)

        assert set(changed) == {settings_dir / "EditorSettings.asset", vcs}
        assert "  m_Mode: Visible Meta Files\n" in vcs.read_text(encoding="utf-8")
        assert read_editor_settings(settings_dir).is_configured

    def test_already_configured_writes_nothing(self, settings_dir: Path):
        apply_editor_settings(settings_dir)
        assert apply_editor_settings(settings_dir) == []

    def test_preserves_crlf(self, settings_dir: Path):
        asset = settings_dir / "EditorSettings.asset"
        asset.write_bytes(EDITOR_SETTINGS_ASSET.replace("\n", "\r\n").encode("utf-8"))

        apply_editor_settings(settings_dir)

        raw = asset.read_bytes()
        assert b"  m_SerializationMode: 2\r\n" in raw
        assert b"\n" not in raw.replace(b"\r\n", b"")

    def test_missing_key_raises_before_writing(self, settings_dir: Path):
        asset = settings_dir / "EditorSettings.asset"
        text = EDITOR_SETTINGS_ASSET.replace("  m_ExternalVersionControlSupport: Hidden Meta Files\n", "")
        asset.write_text(text, encoding="utf-8")

        with pytest.raises(SettingsFormatError, match="m_ExternalVersionControlSupport"):
            apply_editor_settings(settings_dir)
        assert asset.read_text(encoding="utf-8") == text


class TestBinaryAsset:
    BINARY = b"\x00\x00\x01\x10\xff\xfe\x80binary"

    def test_read_reports_binary(self, settings_dir: Path):
        (settings_dir / "EditorSettings.asset").write_bytes(self.BINARY)
        with pytest.raises(SettingsFormatError, match="binary asset") as excinfo:
            read_editor_settings(settings_dir)
        assert excinfo.value.exit_code == 2

    def test_apply_leaves_binary_untouched(self, settings_dir: Path):
        asset = settings_dir / "EditorSettings.asset"
        asset.write_bytes(self.BINARY)
        with pytest.raises(SettingsFormatError):
            apply_editor_settings(settings_dir)
        assert asset.read_bytes() == self.BINARY
