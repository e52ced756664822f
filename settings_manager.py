"""Persistence utilities for Script Editor settings."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from models import EditorSettings


_log = logging.getLogger(__name__)


def _read_json_object(path: Path) -> Dict[str, Any]:
    """Read a JSON object, moving a corrupt file aside and returning {}."""
    if not path.exists():
        return {}

    try:
        raw_data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(raw_data, dict):
            raise ValueError("Settings file has invalid structure")
        return raw_data
    except (OSError, ValueError) as exc:
        # Corrupt or unreadable file; fall back to defaults but keep backup for inspection.
        _log.warning("Ignoring unreadable settings file %s: %s", path, exc)
        backup_path = path.with_suffix(".bak")
        try:
            path.replace(backup_path)
        except OSError:
            pass
        return {}


def _write_json_object(path: Path, data: Dict[str, Any]) -> None:
    """Persist atomically to disk."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(".tmp")
    payload = json.dumps(data, indent=2, ensure_ascii=False)
    tmp_path.write_text(payload, encoding="utf-8")
    tmp_path.replace(path)


def default_settings_path() -> Path:
    package_root = Path(__file__).resolve().parent
    return package_root / "editor.config.json"


class SettingsManager:
    """Handles loading and saving editor settings to disk."""

    def __init__(self, storage_path: Optional[Path] = None) -> None:
        self._storage_path = storage_path or default_settings_path()

    @property
    def storage_path(self) -> Path:
        """Absolute path to the settings file."""
        return self._storage_path

    def load(self) -> EditorSettings:
        """Load settings from disk, returning defaults if the file is missing or corrupt."""
        raw_data = _read_json_object(self.storage_path)
        try:
            return EditorSettings.from_dict(raw_data)
        except (TypeError, ValueError) as exc:
            _log.warning("Invalid settings in %s: %s", self.storage_path, exc)
            return EditorSettings()

    def save(self, settings: EditorSettings) -> None:
        """Merge settings into the file, keeping keys owned by other components."""
        data = _read_json_object(self.storage_path)
        data.update(settings.to_dict())
        _write_json_object(self.storage_path, data)


class JsonKeyValueStore:
    """
    Async key-value access over the same JSON file.

    The editor treats the store as a remote collaborator, so the interface is
    awaitable even though this implementation does blocking file I/O.
    """

    def __init__(self, storage_path: Optional[Path] = None) -> None:
        self._storage_path = storage_path or default_settings_path()

    @property
    def storage_path(self) -> Path:
        return self._storage_path

    async def get(self, key: str) -> Any:
        return _read_json_object(self.storage_path).get(key)

    async def set(self, key: str, value: Any) -> None:
        data = _read_json_object(self.storage_path)
        data[key] = value
        _write_json_object(self.storage_path, data)
