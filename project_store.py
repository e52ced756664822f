"""Loading and saving script projects (tasks and their graphs) as JSON files."""

from __future__ import annotations

import json
import logging
import uuid
from pathlib import Path
from typing import Optional

from models import ScriptProject


_log = logging.getLogger(__name__)


class ProjectStore:
    """Reads and writes one script project file."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def load(self) -> Optional[ScriptProject]:
        """Return the project, or None if the file is missing or unreadable."""
        if not self._path.exists():
            return None

        try:
            raw_data = json.loads(self._path.read_text(encoding="utf-8"))
            if not isinstance(raw_data, dict):
                raise ValueError("Project file has invalid structure")
        except (OSError, ValueError) as exc:
            _log.error("Failed to read project %s: %s", self._path, exc)
            return None

        project = ScriptProject.from_dict(raw_data)
        if not project.id:
            project.id = uuid.uuid4().hex
        return project

    def save(self, project: ScriptProject) -> None:
        """Persist the project atomically to disk."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(".tmp")
        payload = json.dumps(project.to_dict(), indent=2, ensure_ascii=False)
        tmp_path.write_text(payload, encoding="utf-8")
        tmp_path.replace(self._path)
        _log.info("Saved project %s (%d tasks)", project.name, len(project.tasks))
