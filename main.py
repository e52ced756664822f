"""
Command line entry point for the Script Editor.

Usage:
    python main.py project.json [NODE_TYPE ...]

Opens (or creates) the project, appends each NODE_TYPE (or template key) to
the task that was active last time, saves the project, remembers the active
task in the editor settings and prints the tasks and console output.
"""

from __future__ import annotations

import asyncio
import logging
import sys
import uuid
from pathlib import Path
from typing import List

from models import ScriptProject
from project_store import ProjectStore
from script_editor import ScriptEditor
from script_editor.graph_model import Task
from settings_manager import SettingsManager


def _describe(task: Task) -> str:
    flag = " (hidden)" if task.hidden else ""
    return f"- {task.name}{flag}: {len(task.nodes)} nodes, {len(task.edges)} edges"


async def run(project_path: Path, node_types: List[str]) -> int:
    settings_manager = SettingsManager()
    settings = settings_manager.load()
    store = ProjectStore(project_path)
    project = store.load() or ScriptProject(id=uuid.uuid4().hex, name=project_path.stem)

    editor = await ScriptEditor.open(project.tasks, max_logs=settings.max_logs)
    if settings.last_task_id:
        last = editor.tasks.find_task(settings.last_task_id)
        if last is not None:
            editor.tasks.select_task(last)

    for node_type in node_types:
        editor.add_node(node_type)

    editor.tasks.flush()
    project.tasks = editor.tasks.tasks
    store.save(project)
    settings.last_task_id = editor.tasks.current_task.id
    settings_manager.save(settings)

    print(f"Script: {project.name}")
    for task in project.tasks:
        print(_describe(task))
    print()
    for entry in editor.console.entries:
        print(entry)
    return 0


def main() -> int:
    if len(sys.argv) < 2:
        print("Provide path to a project JSON file.")
        return 2
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    return asyncio.run(run(Path(sys.argv[1]), sys.argv[2:]))


if __name__ == "__main__":
    raise SystemExit(main())
