"""Read and flip the Unity editor settings a git-tracked project needs.

Git-friendly Unity projects want ``.meta`` files visible to version
control and assets serialized as text.  Both live in YAML assets under
``ProjectSettings/``::

    EditorSettings.asset          m_ExternalVersionControlSupport: Visible Meta Files
                                  m_SerializationMode: 2
    VersionControlSettings.asset  m_Mode: Visible Meta Files   (Unity 2020+)

Unity writes these files with custom ``!u!`` tags that ``yaml.safe_load``
rejects, so keys are edited in place line by line, leaving every other
byte (including CRLF line endings) untouched.
"""

from __future__ import annotations

import dataclasses
import re
from pathlib import Path

from .errors import IOFailure, SettingsFormatError

EDITOR_SETTINGS = "EditorSettings.asset"
VERSION_CONTROL_SETTINGS = "VersionControlSettings.asset"

VISIBLE_META_FILES = "Visible Meta Files"
FORCE_TEXT = "2"

_SERIALIZATION_NAMES = {"0": "Mixed", "1": "Force Binary", "2": "Force Text"}


@dataclasses.dataclass(frozen=True)
class EditorSettingsState:
    version_control_mode: str | None
    serialization_mode: str | None

    @property
    def is_configured(self) -> bool:
        return (
            self.version_control_mode == VISIBLE_META_FILES
            and self.serialization_mode == FORCE_TEXT
        )

    @property
    def serialization_label(self) -> str:
        if self.serialization_mode is None:
            return "(unset)"
        return _SERIALIZATION_NAMES.get(self.serialization_mode, self.serialization_mode)


def _key_pattern(key: str) -> re.Pattern[str]:
    return re.compile(rf"^(?P<prefix>[ \t]*{re.escape(key)}:)[ \t]*(?P<value>[^\r\n]*)", re.MULTILINE)


def _read(path: Path) -> str:
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise IOFailure(path, exc) from exc
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise SettingsFormatError(
            path, "binary asset; switch Asset Serialization to Force Text in Unity first",
        ) from exc


def _get(text: str, key: str) -> str | None:
    match = _key_pattern(key).search(text)
    return match.group("value").strip() if match else None


def _set(text: str, key: str, value: str, path: Path) -> str:
    pattern = _key_pattern(key)
    if not pattern.search(text):
        raise SettingsFormatError(path, f"no '{key}' entry; is it a Unity settings asset?")
    return pattern.sub(lambda m: f"{m.group('prefix')} {value}", text, count=1)


def _version_control_source(settings_dir: Path) -> tuple[Path, str]:
    """Return the asset and key that hold the version-control mode."""
    vcs = settings_dir / VERSION_CONTROL_SETTINGS
    if vcs.is_file():
        return vcs, "m_Mode"
    return settings_dir / EDITOR_SETTINGS, "m_ExternalVersionControlSupport"


def read_editor_settings(settings_dir: Path) -> EditorSettingsState:
    """Read the current version-control and serialization modes."""
    editor_text = _read(settings_dir / EDITOR_SETTINGS)
    vcs_path, vcs_key = _version_control_source(settings_dir)
    vcs_text = editor_text if vcs_path.name == EDITOR_SETTINGS else _read(vcs_path)
    return EditorSettingsState(
        version_control_mode=_get(vcs_text, vcs_key),
        serialization_mode=_get(editor_text, "m_SerializationMode"),
    )


def apply_editor_settings(settings_dir: Path) -> list[Path]:
    """Switch to visible meta files and force-text serialization.

    Returns the asset files that were rewritten; empty when both
    settings were already in place.
    """
    editor_path = settings_dir / EDITOR_SETTINGS
    vcs_path, vcs_key = _version_control_source(settings_dir)

    edits: dict[Path, list[tuple[str, str]]] = {editor_path: [("m_SerializationMode", FORCE_TEXT)]}
    edits.setdefault(vcs_path, []).append((vcs_key, VISIBLE_META_FILES))

    # Validate and render everything before the first write.
    pending: dict[Path, str] = {}
    for path, changes in edits.items():
        original = _read(path)
        updated = original
        for key, value in changes:
            updated = _set(updated, key, value, path)
        if updated != original:
            pending[path] = updated

    for path, text in pending.items():
        try:
            path.write_bytes(text.encode("utf-8"))
        except OSError as exc:
            raise IOFailure(path, exc) from exc

    return list(pending)
