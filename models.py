"""
Application models for the Script Editor.
Each class follows the Single Responsibility Principle (SRP).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from script_editor.console_log import DEFAULT_MAX_LOGS
from script_editor.graph_model import Task
from script_editor.theme import (
    APP_THEME_KEY,
    DEFAULT_APP_THEME,
    DEFAULT_EDITOR_THEME,
    DEFAULT_ROUTE_KEY,
    EDITOR_THEME_KEY,
)


@dataclass
class EditorSettings:
    """Persisted editor preferences."""

    editor_theme: str = DEFAULT_EDITOR_THEME
    app_theme: str = DEFAULT_APP_THEME
    max_logs: int = DEFAULT_MAX_LOGS
    default_route: str = "/"
    last_task_id: Optional[str] = None

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.max_logs < 1:
            raise ValueError("Console capacity must be at least 1")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize settings to primitive types for JSON storage."""
        return {
            EDITOR_THEME_KEY: self.editor_theme,
            APP_THEME_KEY: self.app_theme,
            "maxLogs": self.max_logs,
            DEFAULT_ROUTE_KEY: self.default_route,
            "lastTaskId": self.last_task_id,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "EditorSettings":
        """Create settings instance from JSON dictionary."""
        last_task = data.get("lastTaskId")
        return EditorSettings(
            editor_theme=str(data.get(EDITOR_THEME_KEY, DEFAULT_EDITOR_THEME) or DEFAULT_EDITOR_THEME),
            app_theme=str(data.get(APP_THEME_KEY, DEFAULT_APP_THEME) or DEFAULT_APP_THEME),
            max_logs=max(1, int(data.get("maxLogs", DEFAULT_MAX_LOGS) or DEFAULT_MAX_LOGS)),
            default_route=str(data.get(DEFAULT_ROUTE_KEY, "/") or "/"),
            last_task_id=str(last_task) if last_task not in (None, "") else None,
        )


@dataclass
class ScriptProject:
    """A script: a named collection of tasks as stored on disk."""

    id: str
    name: str = "Untitled Script"
    description: str = ""
    tasks: List[Task] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "tasks": [task.to_dict() for task in self.tasks],
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "ScriptProject":
        tasks_data = data.get("tasks", []) or []
        tasks: List[Task] = []
        if isinstance(tasks_data, list):
            for raw in tasks_data:
                if isinstance(raw, dict):
                    tasks.append(Task.from_dict(raw))

        return ScriptProject(
            id=str(data.get("id", "")),
            name=str(data.get("name", "Untitled Script")),
            description=str(data.get("description", "") or ""),
            tasks=tasks,
        )
